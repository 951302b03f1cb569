# tweetfabric/requesters.py
"""Requesters: validate, build, send.

A requester method validates its parameter object with the client's
`ParametersValidator`, builds the request and hands it to the transport. Point
operations return the `TwitterResult` envelope; paged operations return a
`TwitterPageIterator` whose pages are envelopes. Requesters never convert
payloads into domain objects; the façades in `tweetfabric.resources` do.

Requesters are bound to a `TwitterClient` with `initialize(client)`; using one
before that raises `UninitializedSessionError`.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING

from . import endpoints
from .config import TweetMode
from .exceptions import UninitializedSessionError
from .iterators import TwitterPageIterator
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
from .types import TwitterRequest, TwitterResult

if TYPE_CHECKING:
    from .session import TwitterClient


class BaseRequester:
    """Shared plumbing of every requester."""

    def __init__(self) -> None:
        self._client: "TwitterClient | None" = None

    def initialize(self, client: "TwitterClient") -> None:
        self._client = client
        logger.debug(f"{type(self).__name__} bound to client {id(client)}")

    @property
    def client(self) -> "TwitterClient":
        if self._client is None:
            raise UninitializedSessionError(type(self).__name__)
        return self._client

    @property
    def _tweet_mode(self) -> TweetMode:
        return self.client.settings.tweet_mode

    def _validate(self, parameters: TwitterParameters) -> None:
        self.client.parameters_validator.validate(parameters)

    async def _send(self, request: TwitterRequest) -> TwitterResult:
        return await self.client.api_client.send(request)

    async def _execute(
        self, parameters: TwitterParameters, request: Callable[[], TwitterRequest]
    ) -> TwitterResult:
        self._validate(parameters)
        return await self._send(request())

    def _cursor_iterator(
        self,
        parameters: TwitterParameters,
        build_request: Callable[[str | None], TwitterRequest],
    ) -> TwitterPageIterator[TwitterResult, str]:
        """Open an iterator over an endpoint paginated by `next_cursor`.

        The iterator completes when the response carries no cursor or the
        cursor ``0``.
        """
        self._validate(parameters)
        unwrapper = self.client.api_client.response_unwrapper

        async def get_next_page(cursor: str | None) -> TwitterResult:
            return await self._send(build_request(cursor))

        def get_next_cursor(result: TwitterResult) -> str | None:
            return unwrapper.get_next_page_token(result.content)

        def is_completed(result: TwitterResult) -> bool:
            return unwrapper.get_next_page_token(result.content) is None

        return TwitterPageIterator(
            getattr(parameters, "cursor", None),
            get_next_page,
            get_next_cursor,
            is_completed,
        )


class TweetsRequester(BaseRequester):
    """Requests against the statuses/* and favorites/* endpoints."""

    async def get_tweet(self, parameters: GetTweetParameters) -> TwitterResult:
        return await self._execute(
            parameters, lambda: endpoints.get_tweet_request(parameters, self._tweet_mode)
        )

    async def get_tweets(self, parameters: GetTweetsParameters) -> TwitterResult:
        return await self._execute(
            parameters,
            lambda: endpoints.get_tweets_request(parameters, self._tweet_mode),
        )

    async def publish_tweet(self, parameters: PublishTweetParameters) -> TwitterResult:
        return await self._execute(
            parameters,
            lambda: endpoints.publish_tweet_request(parameters, self._tweet_mode),
        )

    async def destroy_tweet(self, parameters: DestroyTweetParameters) -> TwitterResult:
        return await self._execute(
            parameters,
            lambda: endpoints.destroy_tweet_request(parameters, self._tweet_mode),
        )

    async def get_retweets(self, parameters: GetRetweetsParameters) -> TwitterResult:
        return await self._execute(
            parameters,
            lambda: endpoints.get_retweets_request(parameters, self._tweet_mode),
        )

    async def publish_retweet(
        self, parameters: PublishRetweetParameters
    ) -> TwitterResult:
        return await self._execute(
            parameters,
            lambda: endpoints.publish_retweet_request(parameters, self._tweet_mode),
        )

    async def destroy_retweet(
        self, parameters: DestroyRetweetParameters
    ) -> TwitterResult:
        return await self._execute(
            parameters,
            lambda: endpoints.destroy_retweet_request(parameters, self._tweet_mode),
        )

    def get_retweeter_ids(
        self, parameters: GetRetweeterIdsParameters
    ) -> TwitterPageIterator[TwitterResult, str]:
        return self._cursor_iterator(
            parameters,
            lambda cursor: endpoints.get_retweeter_ids_request(parameters, cursor),
        )

    def get_favorite_tweets(
        self, parameters: GetFavoriteTweetsParameters
    ) -> TwitterPageIterator[TwitterResult, int]:
        """Open an iterator over favorites/list, paginated by ``max_id``.

        Each request asks for tweets older than the oldest tweet seen so far.
        The iterator completes on the first empty page.
        """
        self._validate(parameters)
        unwrapper = self.client.api_client.response_unwrapper
        tweet_mode = self._tweet_mode

        async def get_next_page(max_id: int | None) -> TwitterResult:
            return await self._send(
                endpoints.get_favorite_tweets_request(parameters, max_id, tweet_mode)
            )

        def tweet_ids(result: TwitterResult) -> list[int]:
            return [
                int(item["id"])
                for item in unwrapper.unwrap_results(result.content)
                if isinstance(item, dict) and item.get("id") is not None
            ]

        def get_next_cursor(result: TwitterResult) -> int | None:
            ids = tweet_ids(result)
            return min(ids) - 1 if ids else None

        def is_completed(result: TwitterResult) -> bool:
            return not tweet_ids(result)

        return TwitterPageIterator(
            parameters.max_id, get_next_page, get_next_cursor, is_completed
        )


class UsersRequester(BaseRequester):
    """Requests against the users/*, followers/* and friends/* endpoints."""

    async def get_user(self, parameters: GetUserParameters) -> TwitterResult:
        return await self._execute(
            parameters, lambda: endpoints.get_user_request(parameters)
        )

    async def get_users(self, parameters: GetUsersParameters) -> TwitterResult:
        return await self._execute(
            parameters, lambda: endpoints.get_users_request(parameters)
        )

    def get_follower_ids(
        self, parameters: GetFollowerIdsParameters
    ) -> TwitterPageIterator[TwitterResult, str]:
        return self._cursor_iterator(
            parameters,
            lambda cursor: endpoints.get_follower_ids_request(parameters, cursor),
        )

    def get_friend_ids(
        self, parameters: GetFriendIdsParameters
    ) -> TwitterPageIterator[TwitterResult, str]:
        return self._cursor_iterator(
            parameters,
            lambda cursor: endpoints.get_friend_ids_request(parameters, cursor),
        )
