"""tweetfabric: an asynchronous client for the Twitter v1.1 REST API.

The package is organised around two pieces: typed parameter objects that are
validated client-side before any request leaves the process, and a shared
cursor iterator that drives every paginated endpoint.
"""

__version__ = "0.1.0"

from . import exceptions, log_config
from .auth import AuthStrategy, BearerTokenAuth, NoAuth
from .config import TweetMode, TwitterLimits, TwitterSettings, get_settings
from .entities import Tweet, User
from .identifiers import TweetIdentifier, UserIdentifier
from .iterators import TwitterIteratorPage, TwitterIteratorProxy, TwitterPageIterator
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
)
from .session import TwitterClient

__all__ = [
    "__version__",
    "exceptions",
    "log_config",
    "AuthStrategy",
    "BearerTokenAuth",
    "NoAuth",
    "TweetMode",
    "TwitterLimits",
    "TwitterSettings",
    "get_settings",
    "Tweet",
    "User",
    "TweetIdentifier",
    "UserIdentifier",
    "TwitterIteratorPage",
    "TwitterIteratorProxy",
    "TwitterPageIterator",
    "DestroyRetweetParameters",
    "DestroyTweetParameters",
    "GetFavoriteTweetsParameters",
    "GetFollowerIdsParameters",
    "GetFriendIdsParameters",
    "GetRetweeterIdsParameters",
    "GetRetweetsParameters",
    "GetTweetParameters",
    "GetTweetsParameters",
    "GetUserParameters",
    "GetUsersParameters",
    "PublishRetweetParameters",
    "PublishTweetParameters",
    "TwitterClient",
]
