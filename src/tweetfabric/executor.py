# tweetfabric/executor.py
"""Groups the per-resource requesters and binds them to a client."""

from typing import TYPE_CHECKING

from .log_config import logger
from .requesters import TweetsRequester, UsersRequester

if TYPE_CHECKING:
    from .session import TwitterClient


class RequestExecutor:
    """Holds one requester per resource.

    The executor and its requesters are unusable until `initialize(client)` has
    been called; requester methods raise `UninitializedSessionError` before that.
    """

    def __init__(
        self,
        tweets_requester: TweetsRequester | None = None,
        users_requester: UsersRequester | None = None,
    ):
        self._tweets = tweets_requester or TweetsRequester()
        self._users = users_requester or UsersRequester()
        self._client: "TwitterClient | None" = None

    def initialize(self, client: "TwitterClient") -> None:
        """Bind every requester to `client`."""
        self._client = client
        for requester in (self._tweets, self._users):
            requester.initialize(client)
        logger.debug("RequestExecutor initialized")

    @property
    def is_initialized(self) -> bool:
        return self._client is not None

    @property
    def tweets(self) -> TweetsRequester:
        return self._tweets

    @property
    def users(self) -> UsersRequester:
        return self._users
