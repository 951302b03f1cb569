"""Custom exception classes for the tweetfabric library.

Errors fall into three families so callers can tell them apart:

* programmer errors raised before any request is sent (`ValidationError`
  and its subclasses, `UninitializedSessionError`),
* environment errors raised by the transport (`APIError`, `TimeoutError`,
  `NetworkError`, `TweetfabricRequestError`),
* business errors where Twitter answered but did not do what was asked
  (`TwitterOperationError`).
"""

from typing import Any

import httpx


class TweetfabricError(Exception):
    """Base exception class for all tweetfabric errors."""

    def __init__(
        self,
        message: str,
        *,
        response: httpx.Response | None = None,
        request: httpx.Request | None = None,
    ):
        """Initializes the base exception.

        Args:
            message: The error message.
            response: Optional httpx.Response object associated with the error.
            request: Optional httpx.Request object associated with the error.
        """
        super().__init__(message)
        self.message = message
        self.response = response
        self.request = request

    def __str__(self) -> str:
        if self.response is not None:
            url_info = getattr(getattr(self.response, "_request", None), "url", "N/A")
            return (
                f"{self.message} (Status: {self.response.status_code}, URL: {url_info})"
            )
        if isinstance(self.request, httpx.Request):
            return f"{self.message} (URL: {self.request.url})"
        return self.message


class APIError(TweetfabricError):
    """Represents a generic error returned by the Twitter API (non-specific 4xx/5xx)."""


class NotFoundError(APIError):
    """Represents a resource not found error (404 Not Found)."""


class RateLimitError(APIError):
    """Represents hitting the API rate limit (429 Too Many Requests)."""


class TwitterOperationError(APIError):
    """Twitter answered successfully but the response carries no usable result.

    Raised by read operations that expect a populated payload.
    """


class ValidationError(TweetfabricError):
    """Represents a client-side validation error raised before sending a request."""


class TwitterArgumentError(ValidationError):
    """A mandatory parameter is missing or malformed.

    Attributes:
        parameter_name: Dotted name of the offending field, e.g. ``parameters.tweet.id``.
    """

    def __init__(self, parameter_name: str, message: str | None = None):
        super().__init__(message or f"{parameter_name} is required and must be valid.")
        self.parameter_name = parameter_name


class TwitterArgumentLimitError(ValidationError):
    """A numeric parameter exceeds the ceiling configured in `TwitterLimits`.

    Attributes:
        parameter_name: Dotted name of the offending field.
        value: The value supplied by the caller.
        limit_name: Symbolic name of the ceiling (a `TwitterLimits` field).
        description: Human-readable subject of the limit, e.g. "page size".
        limit: The ceiling value in effect when validation failed.
    """

    def __init__(
        self,
        parameter_name: str,
        value: Any,
        limit_name: str,
        description: str,
        limit: int | None = None,
    ):
        ceiling = f" ({limit})" if limit is not None else ""
        super().__init__(
            f"{parameter_name}={value} exceeds the maximum {description} "
            f"allowed by {limit_name}{ceiling}."
        )
        self.parameter_name = parameter_name
        self.value = value
        self.limit_name = limit_name
        self.description = description
        self.limit = limit


class UninitializedSessionError(TweetfabricError, RuntimeError):
    """A validator or requester was used before being bound to a `TwitterClient`.

    This is a programming error; it is never retried or recovered from.
    """

    def __init__(self, component: str):
        super().__init__(
            f"{component} has not been initialized with a TwitterClient. "
            "Call initialize(client) before using it."
        )
        self.component = component


class TimeoutError(TweetfabricError):
    """Represents a request timeout error."""

    def __init__(self, message: str, *, request: httpx.Request | None = None):
        super().__init__(message, request=request, response=None)


class NetworkError(TweetfabricError):
    """Represents a network connection error (DNS failure, connection refused, ...)."""

    def __init__(self, message: str, *, request: httpx.Request | None = None):
        super().__init__(message, request=request, response=None)


class ConfigurationError(TweetfabricError):
    """Represents an error in the library's configuration."""

    def __init__(self, message: str):
        super().__init__(message, response=None)


class AuthError(TweetfabricError):
    """Raised when applying credentials to a request fails."""


class TweetfabricRequestError(TweetfabricError):
    """Represents an error during the HTTP request process itself.

    Covers httpx request errors that are neither timeouts nor network errors.
    """
