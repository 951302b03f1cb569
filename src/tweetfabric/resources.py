# tweetfabric/resources.py
"""Resource clients: the public façade over the requesters.

Each method accepts either the operation's parameter object or whatever the
caller has at hand (an id, an identifier, a screen name, a DTO, a `Tweet` or
`User`) and builds the parameter object from it. The parameter-object path is
the single place where validation and execution happen.

Results are converted into domain objects here, never in the requesters.
"""

from typing import TYPE_CHECKING, Any, TypeVar

from .config import TweetMode
from .dto import IdsCursorQueryResultDTO, TweetDTO
from .entities import Tweet, User
from .exceptions import TwitterOperationError
from .factories import TweetFactory, UserFactory
from .iterators import TwitterIteratorProxy
from .log_config import logger
from .parameters import (
    DestroyRetweetParameters,
    DestroyTweetParameters,
    GetFavoriteTweetsParameters,
    GetFollowerIdsParameters,
    GetFriendIdsParameters,
    GetRetweeterIdsParameters,
    GetRetweetsParameters,
    GetTweetParameters,
    GetTweetsParameters,
    GetUserParameters,
    GetUsersParameters,
    PublishRetweetParameters,
    PublishTweetParameters,
    TwitterParameters,
)
from .types import TwitterResult

if TYPE_CHECKING:
    from .requesters import TweetsRequester, UsersRequester
    from .session import TwitterClient

ParametersT = TypeVar("ParametersT", bound=TwitterParameters)


def _as_parameters(value: Any, parameters_type: type[ParametersT]) -> ParametersT:
    """Return `value` if it already is a `parameters_type`, otherwise wrap it."""
    if isinstance(value, parameters_type):
        return value
    return parameters_type(value)


class BaseResourceClient:
    """Base class for the resource clients.

    Attributes:
        _client: The `TwitterClient` whose executor, settings and transport the
            resource client uses.
    """

    def __init__(self, client: "TwitterClient"):
        self._client = client
        logger.debug(f"{self.__class__.__name__} initialized")

    @property
    def client(self) -> "TwitterClient":
        return self._client

    @property
    def tweet_mode(self) -> TweetMode:
        return self._client.settings.tweet_mode

    @staticmethod
    def _require_result(result: TwitterResult, operation: str) -> Any:
        """Return the parsed payload of a read, raising if there is none."""
        if result.data_transfer_object is None:
            raise TwitterOperationError(
                f"{operation} returned no result (status {result.status_code})",
                response=result.response,
            )
        return result.data_transfer_object


class TweetsClient(BaseResourceClient):
    """Operations on tweets, retweets and favorites."""

    @property
    def _requester(self) -> "TweetsRequester":
        return self._client.request_executor.tweets

    # --- Tweets ---

    async def get_tweet(self, tweet: Any) -> Tweet:
        """Fetch a single tweet.

        Args:
            tweet: `GetTweetParameters`, a tweet id, a `TweetIdentifier`, a
                `TweetDTO` or a `Tweet`.

        Raises:
            TwitterArgumentError: If no positive tweet id was given.
            NotFoundError: If the tweet does not exist.
            TwitterOperationError: If Twitter returned no tweet.
        """
        parameters = _as_parameters(tweet, GetTweetParameters)
        result = await self._requester.get_tweet(parameters)
        tweet_dto = self._require_result(result, "get_tweet")
        return TweetFactory.generate_tweet_from_dto(
            tweet_dto, self.tweet_mode, self._client
        )

    async def get_tweets(self, tweets: Any) -> list[Tweet]:
        """Fetch several tweets in one call. Unknown ids are silently omitted."""
        parameters = _as_parameters(tweets, GetTweetsParameters)
        result = await self._requester.get_tweets(parameters)
        tweet_dtos = self._require_result(result, "get_tweets")
        return TweetFactory.generate_tweets_from_dtos(
            tweet_dtos, self.tweet_mode, self._client
        )

    async def publish_tweet(self, text: str | PublishTweetParameters) -> Tweet:
        parameters = _as_parameters(text, PublishTweetParameters)
        result = await self._requester.publish_tweet(parameters)
        tweet_dto = self._require_result(result, "publish_tweet")
        logger.info(f"Published tweet {tweet_dto.id}")
        return TweetFactory.generate_tweet_from_dto(
            tweet_dto, self.tweet_mode, self._client
        )

    async def destroy_tweet(self, tweet: Any) -> bool:
        """Delete a tweet.

        Returns True when Twitter accepted the deletion, False when it answered
        with an error status. When `tweet` is a `Tweet` or a `TweetDTO`, its
        `is_tweet_destroyed` flag is set on success and left untouched otherwise.
        """
        if isinstance(tweet, Tweet):
            return await self.destroy_tweet(tweet.tweet_dto)

        parameters = _as_parameters(tweet, DestroyTweetParameters)
        result = await self._requester.destroy_tweet(parameters)
        destroyed = result.is_success_status_code

        if destroyed and isinstance(tweet, TweetDTO):
            tweet.is_tweet_destroyed = True

        if destroyed:
            logger.info(f"Destroyed tweet {parameters.tweet}")
        else:
            logger.warning(
                f"Twitter refused to destroy tweet {parameters.tweet} "
                f"(status {result.status_code})"
            )
        return destroyed

    # --- Retweets ---

    async def get_retweets(self, tweet: Any) -> list[Tweet]:
        parameters = _as_parameters(tweet, GetRetweetsParameters)
        result = await self._requester.get_retweets(parameters)
        tweet_dtos = self._require_result(result, "get_retweets")
        return TweetFactory.generate_tweets_from_dtos(
            tweet_dtos, self.tweet_mode, self._client
        )

    async def publish_retweet(self, tweet: Any) -> Tweet:
        parameters = _as_parameters(tweet, PublishRetweetParameters)
        result = await self._requester.publish_retweet(parameters)
        tweet_dto = self._require_result(result, "publish_retweet")
        return TweetFactory.generate_tweet_from_dto(
            tweet_dto, self.tweet_mode, self._client
        )

    async def destroy_retweet(self, retweet: Any) -> bool:
        """Undo a retweet. Returns True when Twitter accepted the call."""
        parameters = _as_parameters(retweet, DestroyRetweetParameters)
        result = await self._requester.destroy_retweet(parameters)
        return result.is_success_status_code

    def get_retweeter_ids_iterator(
        self, tweet: Any
    ) -> TwitterIteratorProxy[list[int], str]:
        """Iterate over the ids of the users who retweeted a tweet.

        Each page holds up to `page_size` ids.

        Raises:
            TwitterArgumentError: If no positive tweet id was given.
            TwitterArgumentLimitError: If `page_size` exceeds
                ``TWEETS_GET_RETWEETER_IDS_MAX_PAGE_SIZE``.
        """
        parameters = _as_parameters(tweet, GetRetweeterIdsParameters)
        iterator = self._requester.get_retweeter_ids(parameters)
        return TwitterIteratorProxy(iterator, _ids_of_page)

    # --- Favorites ---

    def get_favorite_tweets_iterator(
        self, user: Any
    ) -> TwitterIteratorProxy[list[Tweet], int]:
        """Iterate over the tweets a user has liked, newest first.

        Args:
            user: `GetFavoriteTweetsParameters`, a user id, a screen name, a
                `UserIdentifier`, a `UserDTO` or a `User`.
        """
        parameters = _as_parameters(user, GetFavoriteTweetsParameters)
        iterator = self._requester.get_favorite_tweets(parameters)
        tweet_mode = self.tweet_mode
        client = self._client

        def to_tweets(result: TwitterResult) -> list[Tweet]:
            return TweetFactory.generate_tweets_from_dtos(
                result.data_transfer_object, tweet_mode, client
            )

        return TwitterIteratorProxy(iterator, to_tweets)


class UsersClient(BaseResourceClient):
    """Operations on users and their follow graph."""

    @property
    def _requester(self) -> "UsersRequester":
        return self._client.request_executor.users

    async def get_user(self, user: Any) -> User:
        parameters = _as_parameters(user, GetUserParameters)
        result = await self._requester.get_user(parameters)
        user_dto = self._require_result(result, "get_user")
        return UserFactory.generate_user_from_dto(user_dto, self._client)

    async def get_users(self, users: Any) -> list[User]:
        parameters = _as_parameters(users, GetUsersParameters)
        result = await self._requester.get_users(parameters)
        user_dtos = self._require_result(result, "get_users")
        return UserFactory.generate_users_from_dtos(user_dtos, self._client)

    def get_follower_ids_iterator(
        self, user: Any
    ) -> TwitterIteratorProxy[list[int], str]:
        parameters = _as_parameters(user, GetFollowerIdsParameters)
        iterator = self._requester.get_follower_ids(parameters)
        return TwitterIteratorProxy(iterator, _ids_of_page)

    def get_friend_ids_iterator(
        self, user: Any
    ) -> TwitterIteratorProxy[list[int], str]:
        parameters = _as_parameters(user, GetFriendIdsParameters)
        iterator = self._requester.get_friend_ids(parameters)
        return TwitterIteratorProxy(iterator, _ids_of_page)


def _ids_of_page(result: TwitterResult) -> list[int]:
    dto = result.data_transfer_object
    if isinstance(dto, IdsCursorQueryResultDTO):
        return list(dto.ids)
    return []
