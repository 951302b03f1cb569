# tweetfabric/config.py
from enum import Enum
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .types import PostRequestHook, PreRequestHook

DEFAULT_USER_AGENT = "tweetfabric/0.1.0"


class TweetMode(str, Enum):
    """Shape of tweet payloads requested from Twitter.

    `EXTENDED` asks for `full_text` (up to 280 characters), `COMPAT` for the
    legacy truncated `text` field.
    """

    EXTENDED = "extended"
    COMPAT = "compat"


class TwitterLimits(BaseModel):
    """Server-imposed ceilings enforced client-side before a request is sent.

    Field names double as the symbolic limit names reported by
    `TwitterArgumentLimitError.limit_name`. Instances are frozen: a client's
    limits never change while requests are in flight.
    """

    model_config = ConfigDict(frozen=True)

    TWEETS_GET_FAVORITE_TWEETS_MAX_SIZE: int = Field(
        default=200, description="Maximum page size of GET favorites/list"
    )
    TWEETS_GET_RETWEETS_MAX_SIZE: int = Field(
        default=100, description="Maximum count of GET statuses/retweets/:id"
    )
    TWEETS_GET_RETWEETER_IDS_MAX_PAGE_SIZE: int = Field(
        default=100, description="Maximum page size of GET statuses/retweeters/ids"
    )
    USERS_GET_FOLLOWER_IDS_PAGE_MAX_SIZE: int = Field(
        default=5000, description="Maximum page size of GET followers/ids"
    )
    USERS_GET_FRIEND_IDS_PAGE_MAX_SIZE: int = Field(
        default=5000, description="Maximum page size of GET friends/ids"
    )


DEFAULT_LIMITS = TwitterLimits()


class TwitterSettings(BaseSettings):
    """
    Manages user-configurable settings for the Twitter client, loaded from
    environment variables (prefixed with 'TWEETFABRIC_') or a .env file.

    Nested limits can be overridden with a double underscore, e.g.
    ``TWEETFABRIC_LIMITS__TWEETS_GET_RETWEETS_MAX_SIZE=50``.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "secrets.env"),
        env_file_encoding="utf-8",
        env_prefix="TWEETFABRIC_",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
        arbitrary_types_allowed=True,
    )

    # --- Client Behavior Settings ---
    request_timeout: float = Field(
        default=30.0, description="Default request timeout in seconds"
    )
    max_retries: int = Field(
        default=3, description="Maximum number of retries for failed requests"
    )
    backoff_factor: float = Field(
        default=0.5, description="Backoff factor for retries (seconds)"
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User-Agent header for requests",
    )

    # --- Rate Limiting Settings ---
    enable_rate_limiting: bool = Field(
        default=True, description="Wait for the rate limit window to reset when it runs low"
    )
    rate_limit_buffer_percentage: float = Field(
        default=0.1,
        description="Buffer percentage to consider rate limit approaching (e.g., 0.1 for 10%)",
    )
    rate_limit_retry_after_default: int = Field(
        default=60,
        description="Default wait time in seconds if no reset header is present on 429",
    )

    # --- Twitter Settings ---
    tweet_mode: TweetMode = Field(
        default=TweetMode.EXTENDED,
        description="Tweet payload shape requested from the API and used by Tweet.text",
    )
    limits: TwitterLimits = Field(
        default_factory=TwitterLimits,
        description="Per-endpoint ceilings checked before requests are sent",
    )
    bearer_token: str | None = Field(
        default=None, description="OAuth2 application-only bearer token"
    )

    # --- Hook Settings ---
    pre_request_hooks: list[PreRequestHook] = Field(
        default_factory=list,
        description="List of hooks to call before a request is made.",
    )
    post_request_hooks: list[PostRequestHook] = Field(
        default_factory=list,
        description="List of hooks to call after a response is received and parsed.",
    )


@lru_cache
def get_settings() -> TwitterSettings:
    """
    Provides access to the client settings.

    Settings are loaded from environment variables or .env/secrets.env files.
    The instance is cached for performance.

    Returns:
        TwitterSettings: The settings instance.
    """
    return TwitterSettings()
