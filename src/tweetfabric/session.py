"""Main user-facing client class for the Twitter v1.1 API."""

from typing import Self

import httpx

from .auth import AuthStrategy, BearerTokenAuth, NoAuth
from .client import TwitterApiClient
from .config import TwitterSettings, get_settings
from .endpoints import TWITTER_API_BASE_URL
from .executor import RequestExecutor
from .log_config import configure_logging, logger
from .resources import TweetsClient, UsersClient
from .validators import ParametersValidator

configure_logging()


class TwitterClient:
    """High-level entry point of tweetfabric.

    The client owns the transport, the parameter validator and the request
    executor, and binds the latter two to itself once they are all built.
    Resource clients are reached through `tweets` and `users`.

    Example:
    ```python
    async with TwitterClient(bearer_token="...") as client:
        tweet = await client.tweets.get_tweet(20)
        async for page in client.users.get_follower_ids_iterator("jack"):
            print(page.content)
    ```

    Attributes:
        tweets (TweetsClient): Tweets, retweets and favorites.
        users (UsersClient): Users and their follower/friend ids.
    """

    def __init__(
        self,
        settings: TwitterSettings | None = None,
        auth_strategy: AuthStrategy | None = None,
        *,
        bearer_token: str | None = None,
        timeout: float | None = None,
        api_client: TwitterApiClient | None = None,
        http_client: httpx.AsyncClient | None = None,
        base_url: str = TWITTER_API_BASE_URL,
        parameters_validator: ParametersValidator | None = None,
        request_executor: RequestExecutor | None = None,
    ):
        """Initializes the client and binds its components.

        Args:
            settings: Client settings. Defaults to `get_settings()`.
            auth_strategy: Strategy used to sign requests. If None, a
                `BearerTokenAuth` is built from `bearer_token` or
                ``settings.bearer_token``; without a token requests are unsigned.
            bearer_token: Application-only bearer token.
            timeout: Overrides ``settings.request_timeout`` for this client.
            api_client: A pre-built transport. `auth_strategy`, `http_client`
                and `base_url` are ignored when it is given.
            http_client: A pre-configured `httpx.AsyncClient` for the transport.
            base_url: Base URL of the API.
            parameters_validator: Validator to bind instead of the default one.
            request_executor: Executor to bind instead of the default one.
        """
        settings = settings or get_settings()
        if timeout is not None:
            logger.debug(f"Overriding request timeout for this client to: {timeout}s")
            settings = settings.model_copy(update={"request_timeout": timeout})
        self._settings = settings

        if api_client is None:
            api_client = TwitterApiClient(
                settings=settings,
                auth_strategy=auth_strategy or self._default_auth_strategy(bearer_token),
                base_url=base_url,
                http_client=http_client,
            )
        self._api_client = api_client

        self._parameters_validator = parameters_validator or ParametersValidator()
        self._request_executor = request_executor or RequestExecutor()
        self._parameters_validator.initialize(self)
        self._request_executor.initialize(self)

        self._tweets = TweetsClient(self)
        self._users = UsersClient(self)
        logger.info(f"TwitterClient initialized for API: {api_client.base_url}")

    def _default_auth_strategy(self, bearer_token: str | None) -> AuthStrategy:
        token = bearer_token or self._settings.bearer_token
        if token:
            return BearerTokenAuth(token)
        logger.warning("No bearer token configured, requests will not be signed.")
        return NoAuth()

    @property
    def settings(self) -> TwitterSettings:
        return self._settings

    @property
    def api_client(self) -> TwitterApiClient:
        return self._api_client

    @property
    def parameters_validator(self) -> ParametersValidator:
        return self._parameters_validator

    @property
    def request_executor(self) -> RequestExecutor:
        return self._request_executor

    @property
    def tweets(self) -> TweetsClient:
        """Access the TweetsClient."""
        return self._tweets

    @property
    def users(self) -> UsersClient:
        """Access the UsersClient."""
        return self._users

    async def close(self) -> None:
        """Closes the underlying HTTP client session."""
        await self._api_client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
