# tweetfabric/entities.py
"""Domain objects returned by the resource clients.

`Tweet` and `User` wrap a DTO together with the `TwitterClient` that fetched
it, so follow-up operations (destroying a tweet, listing a user's followers)
can be issued from the object itself.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any

from .config import TweetMode
from .dto import TweetDTO, UserDTO

if TYPE_CHECKING:
    from .iterators import TwitterIteratorProxy
    from .session import TwitterClient


class User:
    """A Twitter user."""

    def __init__(self, user_dto: UserDTO, client: "TwitterClient | None" = None):
        self._user_dto = user_dto
        self._client = client

    @property
    def user_dto(self) -> UserDTO:
        return self._user_dto

    @property
    def client(self) -> "TwitterClient | None":
        return self._client

    @property
    def id(self) -> int:
        return self._user_dto.id

    @property
    def id_str(self) -> str:
        return self._user_dto.id_str or str(self._user_dto.id)

    @property
    def screen_name(self) -> str | None:
        return self._user_dto.screen_name

    @property
    def name(self) -> str | None:
        return self._user_dto.name

    @property
    def description(self) -> str | None:
        return self._user_dto.description

    @property
    def created_at(self) -> datetime | None:
        return self._user_dto.created_at

    @property
    def followers_count(self) -> int:
        return self._user_dto.followers_count

    @property
    def friends_count(self) -> int:
        return self._user_dto.friends_count

    def get_follower_ids_iterator(self) -> "TwitterIteratorProxy[list[int], str]":
        return self._require_client().users.get_follower_ids_iterator(self)

    def get_friend_ids_iterator(self) -> "TwitterIteratorProxy[list[int], str]":
        return self._require_client().users.get_friend_ids_iterator(self)

    def get_favorite_tweets_iterator(
        self,
    ) -> "TwitterIteratorProxy[list[Tweet], int]":
        return self._require_client().tweets.get_favorite_tweets_iterator(self)

    def _require_client(self) -> "TwitterClient":
        if self._client is None:
            raise ValueError(f"{self!r} is not attached to a TwitterClient")
        return self._client

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, User) and other.id == self.id

    def __hash__(self) -> int:
        return hash(("user", self.id))

    def __repr__(self) -> str:
        return f"User(id={self.id}, screen_name={self.screen_name!r})"


class Tweet:
    """A tweet.

    `text` honours the tweet mode the tweet was fetched with: in extended mode
    it is the untruncated `full_text`.
    """

    def __init__(
        self,
        tweet_dto: TweetDTO,
        tweet_mode: TweetMode | None = None,
        client: "TwitterClient | None" = None,
    ):
        self._tweet_dto = tweet_dto
        self._tweet_mode = tweet_mode
        self._client = client

    @property
    def tweet_dto(self) -> TweetDTO:
        return self._tweet_dto

    @property
    def tweet_mode(self) -> TweetMode | None:
        return self._tweet_mode

    @property
    def client(self) -> "TwitterClient | None":
        return self._client

    @property
    def id(self) -> int:
        return self._tweet_dto.id

    @property
    def id_str(self) -> str:
        return self._tweet_dto.id_str or str(self._tweet_dto.id)

    @property
    def text(self) -> str | None:
        if self._tweet_mode == TweetMode.EXTENDED and self._tweet_dto.full_text:
            return self._tweet_dto.full_text
        return self._tweet_dto.text or self._tweet_dto.full_text

    @property
    def full_text(self) -> str | None:
        return self._tweet_dto.full_text or self._tweet_dto.text

    @property
    def created_at(self) -> datetime | None:
        return self._tweet_dto.created_at

    @property
    def created_by(self) -> User | None:
        if self._tweet_dto.user is None:
            return None
        return User(self._tweet_dto.user, self._client)

    @property
    def favorite_count(self) -> int | None:
        return self._tweet_dto.favorite_count

    @property
    def retweet_count(self) -> int:
        return self._tweet_dto.retweet_count

    @property
    def is_retweet(self) -> bool:
        return self._tweet_dto.retweeted_status is not None

    @property
    def retweeted_tweet(self) -> "Tweet | None":
        if self._tweet_dto.retweeted_status is None:
            return None
        return Tweet(self._tweet_dto.retweeted_status, self._tweet_mode, self._client)

    @property
    def is_tweet_destroyed(self) -> bool:
        return self._tweet_dto.is_tweet_destroyed

    async def destroy(self) -> bool:
        """Delete this tweet; marks it destroyed when the API accepts the call."""
        return await self._require_client().tweets.destroy_tweet(self)

    async def publish_retweet(self) -> "Tweet":
        return await self._require_client().tweets.publish_retweet(self)

    async def destroy_retweet(self) -> bool:
        return await self._require_client().tweets.destroy_retweet(self)

    async def get_retweets(self) -> list["Tweet"]:
        return await self._require_client().tweets.get_retweets(self)

    def get_retweeter_ids_iterator(self) -> "TwitterIteratorProxy[list[int], str]":
        return self._require_client().tweets.get_retweeter_ids_iterator(self)

    def _require_client(self) -> "TwitterClient":
        if self._client is None:
            raise ValueError(f"{self!r} is not attached to a TwitterClient")
        return self._client

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Tweet) and other.id == self.id

    def __hash__(self) -> int:
        return hash(("tweet", self.id))

    def __repr__(self) -> str:
        return f"Tweet(id={self.id}, text={self.text!r})"
