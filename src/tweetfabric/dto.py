# tweetfabric/dto.py
"""Pydantic data transfer objects mirroring Twitter v1.1 payloads.

Only the fields the library reads are declared; everything else the API sends
is kept as extra attributes so nothing is lost when a DTO is re-serialized.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

TWITTER_DATE_FORMAT = "%a %b %d %H:%M:%S %z %Y"


def _parse_twitter_date(value: Any) -> Any:
    # "Wed Oct 10 20:19:24 +0000 2018"; anything else goes to pydantic as-is
    if isinstance(value, str):
        try:
            return datetime.strptime(value, TWITTER_DATE_FORMAT)
        except ValueError:
            return value
    return value


class UserDTO(BaseModel):
    """A Twitter user object."""

    model_config = ConfigDict(extra="allow")

    id: int
    id_str: str | None = None
    screen_name: str | None = None
    name: str | None = None
    description: str | None = None
    location: str | None = None
    created_at: datetime | None = None
    followers_count: int = 0
    friends_count: int = 0
    favourites_count: int = 0
    statuses_count: int = 0
    protected: bool = False
    verified: bool = False

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_created_at(cls, value: Any) -> Any:
        return _parse_twitter_date(value)


class TweetDTO(BaseModel):
    """A Twitter status object.

    `is_tweet_destroyed` is not part of the payload; it is set by the client
    after a successful destroy call.
    """

    model_config = ConfigDict(extra="allow")

    id: int
    id_str: str | None = None
    text: str | None = None
    full_text: str | None = None
    created_at: datetime | None = None
    user: UserDTO | None = None
    in_reply_to_status_id: int | None = None
    in_reply_to_user_id: int | None = None
    favorite_count: int | None = 0
    retweet_count: int = 0
    favorited: bool | None = None
    retweeted: bool | None = None
    lang: str | None = None
    retweeted_status: "TweetDTO | None" = None
    quoted_status: "TweetDTO | None" = None
    is_tweet_destroyed: bool = Field(default=False, exclude=True)

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_created_at(cls, value: Any) -> Any:
        return _parse_twitter_date(value)


class IdsCursorQueryResultDTO(BaseModel):
    """One page of a cursored id listing (followers/ids, statuses/retweeters/ids)."""

    model_config = ConfigDict(extra="allow")

    ids: list[int] = Field(default_factory=list)
    next_cursor: int = 0
    next_cursor_str: str | None = None
    previous_cursor: int = 0
    previous_cursor_str: str | None = None
