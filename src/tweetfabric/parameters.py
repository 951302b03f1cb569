# tweetfabric/parameters.py
"""Parameter objects, one per Twitter operation.

Each object accepts its identifying value positionally in whatever form the
caller holds it (a bare id, an identifier, a DTO, a `Tweet`/`User`, a screen
name) and normalizes it to `TweetIdentifier`/`UserIdentifier`. Presence and
limits are checked later by `tweetfabric.validators`, never here.
"""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import DEFAULT_LIMITS, TweetMode
from .identifiers import (
    TweetIdentifier,
    UserIdentifier,
    to_tweet_identifier,
    to_user_identifier,
)


def _as_list(value: Any) -> Any:
    if value is None or isinstance(value, list):
        return value
    if isinstance(value, tuple | set | frozenset):
        return list(value)
    return [value]


class TwitterParameters(BaseModel):
    """Base class of every parameter object.

    Attributes:
        custom_query_parameters: Extra query string pairs appended verbatim to
            the request, for API options the library does not model.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    positional_field: ClassVar[str | None] = None

    custom_query_parameters: dict[str, Any] = Field(default_factory=dict)

    def __init__(self, identifier: Any = None, /, **data: Any):
        if identifier is not None:
            if self.positional_field is None:
                raise TypeError(
                    f"{type(self).__name__} does not accept a positional argument"
                )
            data[self.positional_field] = identifier
        super().__init__(**data)

    def add_custom_query_parameter(self, name: str, value: Any) -> None:
        self.custom_query_parameters[name] = value


# --- Tweets ---


class TweetTargetParameters(TwitterParameters):
    """Parameters of an operation acting on a single tweet."""

    positional_field: ClassVar[str | None] = "tweet"

    tweet: TweetIdentifier | None = None

    @field_validator("tweet", mode="before")
    @classmethod
    def coerce_tweet(cls, value: Any) -> Any:
        return to_tweet_identifier(value)


class GetTweetParameters(TweetTargetParameters):
    include_entities: bool | None = None
    include_my_retweet: bool | None = None
    include_ext_alt_text: bool | None = None
    trim_user: bool | None = None
    tweet_mode: TweetMode | None = None


class GetTweetsParameters(TwitterParameters):
    """Parameters of GET statuses/lookup."""

    positional_field: ClassVar[str | None] = "tweets"

    tweets: list[TweetIdentifier | None] | None = None
    include_entities: bool | None = None
    include_ext_alt_text: bool | None = None
    trim_user: bool | None = None
    tweet_mode: TweetMode | None = None

    @field_validator("tweets", mode="before")
    @classmethod
    def coerce_tweets(cls, value: Any) -> Any:
        value = _as_list(value)
        if value is None:
            return None
        return [to_tweet_identifier(item) for item in value]


class PublishTweetParameters(TwitterParameters):
    """Parameters of POST statuses/update."""

    positional_field: ClassVar[str | None] = "text"

    text: str | None = None
    in_reply_to_tweet: TweetIdentifier | None = None
    auto_populate_reply_metadata: bool | None = None
    exclude_reply_user_ids: list[int] | None = None
    attachment_url: str | None = None
    media_ids: list[int] = Field(default_factory=list)
    possibly_sensitive: bool | None = None
    place_id: str | None = None
    display_coordinates: bool | None = None
    trim_user: bool | None = None
    tweet_mode: TweetMode | None = None

    @field_validator("in_reply_to_tweet", mode="before")
    @classmethod
    def coerce_in_reply_to_tweet(cls, value: Any) -> Any:
        return to_tweet_identifier(value)


class DestroyTweetParameters(TweetTargetParameters):
    trim_user: bool | None = None
    tweet_mode: TweetMode | None = None


class GetRetweetsParameters(TweetTargetParameters):
    """Parameters of GET statuses/retweets/:id (a single, bounded page)."""

    page_size: int | None = DEFAULT_LIMITS.TWEETS_GET_RETWEETS_MAX_SIZE
    trim_user: bool | None = None
    tweet_mode: TweetMode | None = None


class PublishRetweetParameters(TweetTargetParameters):
    trim_user: bool | None = None
    tweet_mode: TweetMode | None = None


class DestroyRetweetParameters(TweetTargetParameters):
    trim_user: bool | None = None
    tweet_mode: TweetMode | None = None


class GetRetweeterIdsParameters(TweetTargetParameters):
    """Parameters of GET statuses/retweeters/ids (cursor paginated)."""

    page_size: int | None = DEFAULT_LIMITS.TWEETS_GET_RETWEETER_IDS_MAX_PAGE_SIZE
    cursor: str | None = None


class GetFavoriteTweetsParameters(TwitterParameters):
    """Parameters of GET favorites/list (max_id paginated).

    `max_id` is the caller's starting point; iteration continues below it.
    """

    positional_field: ClassVar[str | None] = "user"

    user: UserIdentifier | None = None
    page_size: int | None = DEFAULT_LIMITS.TWEETS_GET_FAVORITE_TWEETS_MAX_SIZE
    since_id: int | None = None
    max_id: int | None = None
    include_entities: bool | None = None
    tweet_mode: TweetMode | None = None

    @field_validator("user", mode="before")
    @classmethod
    def coerce_user(cls, value: Any) -> Any:
        return to_user_identifier(value)


# --- Users ---


class UserTargetParameters(TwitterParameters):
    """Parameters of an operation acting on a single user."""

    positional_field: ClassVar[str | None] = "user"

    user: UserIdentifier | None = None

    @field_validator("user", mode="before")
    @classmethod
    def coerce_user(cls, value: Any) -> Any:
        return to_user_identifier(value)


class GetUserParameters(UserTargetParameters):
    include_entities: bool | None = None
    skip_status: bool | None = None


class GetUsersParameters(TwitterParameters):
    """Parameters of GET users/lookup."""

    positional_field: ClassVar[str | None] = "users"

    users: list[UserIdentifier | None] | None = None
    include_entities: bool | None = None

    @field_validator("users", mode="before")
    @classmethod
    def coerce_users(cls, value: Any) -> Any:
        value = _as_list(value)
        if value is None:
            return None
        return [to_user_identifier(item) for item in value]


class GetFollowerIdsParameters(UserTargetParameters):
    page_size: int | None = DEFAULT_LIMITS.USERS_GET_FOLLOWER_IDS_PAGE_MAX_SIZE
    cursor: str | None = None


class GetFriendIdsParameters(UserTargetParameters):
    page_size: int | None = DEFAULT_LIMITS.USERS_GET_FRIEND_IDS_PAGE_MAX_SIZE
    cursor: str | None = None
