"""Twitter v1.1 endpoint paths and the request builders that use them.

Builders turn an already-validated parameter object into a `TwitterRequest`.
They do not validate; `tweetfabric.validators` has done that before they run.
"""

from typing import Any

from .config import TweetMode
from .dto import IdsCursorQueryResultDTO, TweetDTO, UserDTO
from .exceptions import TwitterArgumentError
from .identifiers import TweetIdentifier, UserIdentifier
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
from .types import TwitterRequest

TWITTER_API_BASE_URL = "https://api.twitter.com/1.1/"

# --- Tweets ---
STATUSES_SHOW = "statuses/show.json"
STATUSES_LOOKUP = "statuses/lookup.json"
STATUSES_UPDATE = "statuses/update.json"
STATUSES_DESTROY = "statuses/destroy/{id}.json"
STATUSES_RETWEETS = "statuses/retweets/{id}.json"
STATUSES_RETWEET = "statuses/retweet/{id}.json"
STATUSES_UNRETWEET = "statuses/unretweet/{id}.json"
STATUSES_RETWEETERS_IDS = "statuses/retweeters/ids.json"
FAVORITES_LIST = "favorites/list.json"

# --- Users ---
USERS_SHOW = "users/show.json"
USERS_LOOKUP = "users/lookup.json"
FOLLOWERS_IDS = "followers/ids.json"
FRIENDS_IDS = "friends/ids.json"


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


def _build_query(parameters: TwitterParameters, **values: Any) -> dict[str, Any]:
    """Drop unset values, format booleans and append custom query parameters."""
    query: dict[str, Any] = {}
    for name, value in values.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = _format_bool(value)
        elif isinstance(value, TweetMode):
            value = value.value
        query[name] = value
    for name, value in parameters.custom_query_parameters.items():
        query[name] = _format_bool(value) if isinstance(value, bool) else value
    return query


def _user_query(user: UserIdentifier) -> dict[str, Any]:
    if user.id is not None:
        return {"user_id": user.id}
    return {"screen_name": user.screen_name}


def _users_query(users: list[UserIdentifier | None]) -> dict[str, Any]:
    ids = [str(user.id) for user in users if user is not None and user.id is not None]
    names = [
        user.screen_name
        for user in users
        if user is not None and user.id is None and user.screen_name
    ]
    query: dict[str, Any] = {}
    if ids:
        query["user_id"] = ",".join(ids)
    if names:
        query["screen_name"] = ",".join(names)
    return query


def _tweet_id(tweet: TweetIdentifier | None) -> int:
    if tweet is None or tweet.id is None:
        raise TwitterArgumentError("parameters.tweet")
    return tweet.id


def _required_user(user: UserIdentifier | None) -> UserIdentifier:
    if user is None:
        raise TwitterArgumentError("parameters.user")
    return user


def _tweet_mode(parameters: Any, default: TweetMode | None) -> TweetMode | None:
    return getattr(parameters, "tweet_mode", None) or default


# --- Tweets ---


def get_tweet_request(
    parameters: GetTweetParameters, tweet_mode: TweetMode | None = None
) -> TwitterRequest:
    return TwitterRequest(
        method="GET",
        url=STATUSES_SHOW,
        params=_build_query(
            parameters,
            id=_tweet_id(parameters.tweet),
            include_entities=parameters.include_entities,
            include_my_retweet=parameters.include_my_retweet,
            include_ext_alt_text=parameters.include_ext_alt_text,
            trim_user=parameters.trim_user,
            tweet_mode=_tweet_mode(parameters, tweet_mode),
        ),
        expected_model=TweetDTO,
    )


def get_tweets_request(
    parameters: GetTweetsParameters, tweet_mode: TweetMode | None = None
) -> TwitterRequest:
    ids = ",".join(
        str(tweet.id) for tweet in parameters.tweets or [] if tweet is not None
    )
    return TwitterRequest(
        method="GET",
        url=STATUSES_LOOKUP,
        params=_build_query(
            parameters,
            id=ids,
            include_entities=parameters.include_entities,
            include_ext_alt_text=parameters.include_ext_alt_text,
            trim_user=parameters.trim_user,
            tweet_mode=_tweet_mode(parameters, tweet_mode),
        ),
        expected_model=list[TweetDTO],
    )


def publish_tweet_request(
    parameters: PublishTweetParameters, tweet_mode: TweetMode | None = None
) -> TwitterRequest:
    in_reply_to = parameters.in_reply_to_tweet
    return TwitterRequest(
        method="POST",
        url=STATUSES_UPDATE,
        params=_build_query(
            parameters,
            status=parameters.text,
            in_reply_to_status_id=in_reply_to.id if in_reply_to else None,
            auto_populate_reply_metadata=parameters.auto_populate_reply_metadata,
            exclude_reply_user_ids=(
                ",".join(str(i) for i in parameters.exclude_reply_user_ids)
                if parameters.exclude_reply_user_ids
                else None
            ),
            attachment_url=parameters.attachment_url,
            media_ids=(
                ",".join(str(i) for i in parameters.media_ids)
                if parameters.media_ids
                else None
            ),
            possibly_sensitive=parameters.possibly_sensitive,
            place_id=parameters.place_id,
            display_coordinates=parameters.display_coordinates,
            trim_user=parameters.trim_user,
            tweet_mode=_tweet_mode(parameters, tweet_mode),
        ),
        expected_model=TweetDTO,
    )


def destroy_tweet_request(
    parameters: DestroyTweetParameters, tweet_mode: TweetMode | None = None
) -> TwitterRequest:
    return TwitterRequest(
        method="POST",
        url=STATUSES_DESTROY.format(id=_tweet_id(parameters.tweet)),
        params=_build_query(
            parameters,
            trim_user=parameters.trim_user,
            tweet_mode=_tweet_mode(parameters, tweet_mode),
        ),
        expected_model=TweetDTO,
        raise_for_status=False,
    )


def get_retweets_request(
    parameters: GetRetweetsParameters, tweet_mode: TweetMode | None = None
) -> TwitterRequest:
    return TwitterRequest(
        method="GET",
        url=STATUSES_RETWEETS.format(id=_tweet_id(parameters.tweet)),
        params=_build_query(
            parameters,
            count=parameters.page_size,
            trim_user=parameters.trim_user,
            tweet_mode=_tweet_mode(parameters, tweet_mode),
        ),
        expected_model=list[TweetDTO],
    )


def publish_retweet_request(
    parameters: PublishRetweetParameters, tweet_mode: TweetMode | None = None
) -> TwitterRequest:
    return TwitterRequest(
        method="POST",
        url=STATUSES_RETWEET.format(id=_tweet_id(parameters.tweet)),
        params=_build_query(
            parameters,
            trim_user=parameters.trim_user,
            tweet_mode=_tweet_mode(parameters, tweet_mode),
        ),
        expected_model=TweetDTO,
    )


def destroy_retweet_request(
    parameters: DestroyRetweetParameters, tweet_mode: TweetMode | None = None
) -> TwitterRequest:
    return TwitterRequest(
        method="POST",
        url=STATUSES_UNRETWEET.format(id=_tweet_id(parameters.tweet)),
        params=_build_query(
            parameters,
            trim_user=parameters.trim_user,
            tweet_mode=_tweet_mode(parameters, tweet_mode),
        ),
        expected_model=TweetDTO,
        raise_for_status=False,
    )


def get_retweeter_ids_request(
    parameters: GetRetweeterIdsParameters, cursor: str | None = None
) -> TwitterRequest:
    return TwitterRequest(
        method="GET",
        url=STATUSES_RETWEETERS_IDS,
        params=_build_query(
            parameters,
            id=_tweet_id(parameters.tweet),
            count=parameters.page_size,
            cursor=cursor,
            stringify_ids=True,
        ),
        expected_model=IdsCursorQueryResultDTO,
    )


def get_favorite_tweets_request(
    parameters: GetFavoriteTweetsParameters,
    max_id: int | None = None,
    tweet_mode: TweetMode | None = None,
) -> TwitterRequest:
    return TwitterRequest(
        method="GET",
        url=FAVORITES_LIST,
        params=_build_query(
            parameters,
            **_user_query(_required_user(parameters.user)),
            count=parameters.page_size,
            since_id=parameters.since_id,
            max_id=max_id,
            include_entities=parameters.include_entities,
            tweet_mode=_tweet_mode(parameters, tweet_mode),
        ),
        expected_model=list[TweetDTO],
    )


# --- Users ---


def get_user_request(parameters: GetUserParameters) -> TwitterRequest:
    return TwitterRequest(
        method="GET",
        url=USERS_SHOW,
        params=_build_query(
            parameters,
            **_user_query(_required_user(parameters.user)),
            include_entities=parameters.include_entities,
            skip_status=parameters.skip_status,
        ),
        expected_model=UserDTO,
    )


def get_users_request(parameters: GetUsersParameters) -> TwitterRequest:
    return TwitterRequest(
        method="GET",
        url=USERS_LOOKUP,
        params=_build_query(
            parameters,
            **_users_query(parameters.users or []),
            include_entities=parameters.include_entities,
        ),
        expected_model=list[UserDTO],
    )


def get_follower_ids_request(
    parameters: GetFollowerIdsParameters, cursor: str | None = None
) -> TwitterRequest:
    return TwitterRequest(
        method="GET",
        url=FOLLOWERS_IDS,
        params=_build_query(
            parameters,
            **_user_query(_required_user(parameters.user)),
            count=parameters.page_size,
            cursor=cursor,
            stringify_ids=True,
        ),
        expected_model=IdsCursorQueryResultDTO,
    )


def get_friend_ids_request(
    parameters: GetFriendIdsParameters, cursor: str | None = None
) -> TwitterRequest:
    return TwitterRequest(
        method="GET",
        url=FRIENDS_IDS,
        params=_build_query(
            parameters,
            **_user_query(_required_user(parameters.user)),
            count=parameters.page_size,
            cursor=cursor,
            stringify_ids=True,
        ),
        expected_model=IdsCursorQueryResultDTO,
    )
