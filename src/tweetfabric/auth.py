from typing import Protocol

import httpx

from .exceptions import ConfigurationError
from .log_config import logger


class AuthStrategy(Protocol):
    """Protocol defining the interface for request signing strategies.

    Concrete implementations add credentials (headers, signatures) to an
    outgoing request. Acquiring those credentials is outside the library.
    """

    async def async_authenticate(self, request: httpx.Request) -> None:
        """
        Asynchronously modifies the request to add authentication information.

        Args:
            request: The httpx.Request object to modify.

        Raises:
            AuthError: If authentication fails.
        """
        ...

    async def async_close(self) -> None:
        """
        Asynchronously closes any underlying resources used by the auth strategy.
        This method should be idempotent.
        """
        ...


class NoAuth:
    """Implements the AuthStrategy protocol for unauthenticated requests.

    This strategy makes no modifications to the outgoing request.
    """

    async def async_authenticate(self, request: httpx.Request) -> None:
        """Does nothing as no authentication is needed."""
        logger.trace("Using NoAuth strategy, no authentication applied.")

    async def async_close(self) -> None:
        """No resources to close for NoAuth, this method is a no-op."""


class BearerTokenAuth:
    """Implements AuthStrategy using an OAuth2 application-only bearer token.

    The token is added to the `Authorization` header of every request.

    Attributes:
        _token: The bearer token.
    """

    def __init__(self, token: str | None):
        """Initializes BearerTokenAuth with the provided token.

        Args:
            token: The application-only bearer token.

        Raises:
            ConfigurationError: If the token is None or empty.
        """
        if not token:
            raise ConfigurationError("BearerTokenAuth requires a non-empty 'token'.")
        self._token: str = token
        logger.debug("BearerTokenAuth initialized.")

    async def async_authenticate(self, request: httpx.Request) -> None:
        """Adds the 'Authorization: Bearer <token>' header to the request."""
        logger.trace("Authenticating request using BearerTokenAuth.")
        request.headers["Authorization"] = f"Bearer {self._token}"

    async def async_close(self) -> None:
        """No resources to close for BearerTokenAuth, this method is a no-op."""
