"""HTTP transport for the Twitter API.

This module provides `TwitterApiClient`, the only component that talks to the
network. It applies the authentication strategy, honours Twitter's rate-limit
headers, retries transient failures, maps HTTP failures onto the tweetfabric
exception hierarchy and parses response bodies into data transfer objects.
Everything above it (requesters, iterators, façades) sees a `TwitterResult`
or an exception, never raw httpx errors.
"""

import asyncio
import ssl
import time
from datetime import UTC, datetime as dt
from email.utils import parsedate_to_datetime
from http import HTTPStatus
from typing import Any, Self

import certifi
import httpx
import tenacity
from pydantic import TypeAdapter
from tenacity import (
    AsyncRetrying,
    stop_after_attempt,
    wait_exponential,
)

from .auth import AuthStrategy, NoAuth
from .config import TwitterSettings
from .endpoints import TWITTER_API_BASE_URL
from .exceptions import (
    APIError,
    AuthError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    TimeoutError,
    TweetfabricError,
    TweetfabricRequestError,
)
from .log_config import logger
from .models import ResponseUnwrapper
from .types import TwitterRequest, TwitterResult
from .unwrapper import TwitterV11Unwrapper


class TwitterApiClient:
    """Asynchronous HTTP transport for the Twitter API.

    Key features:
    - Automatic retries with exponential backoff for timeouts, network errors,
      429 and 5xx responses
    - Rate limit tracking from `X-Rate-Limit-*` headers, with an optional wait
      before requests once the remaining budget runs low
    - Pluggable authentication strategies
    - Pre/post request hooks
    - Parsing of response bodies into the request's expected model

    Attributes:
        _settings: Configuration settings for the client.
        _response_unwrapper: Reads results and cursors out of response payloads.
        _base_url: The base URL for API requests.
        _retryable_status_codes: HTTP status codes that trigger a retry.
        _auth_strategy: Authentication strategy instance.
        _http_client: The underlying httpx.AsyncClient for making requests.
        _should_close_client: Flag indicating if this instance owns the _http_client.
        _rate_limit_limit: Last observed rate limit capacity.
        _rate_limit_remaining: Last observed remaining requests in the current window.
        _rate_limit_reset_timestamp: Timestamp for when the rate limit window resets.
        _rate_limit_lock: Lock for synchronizing access to rate limit state.
    """

    DEFAULT_RETRYABLE_STATUS_CODES: frozenset[int] = frozenset(
        [429, 500, 502, 503, 504]
    )
    """Default set of HTTP status codes considered retryable."""

    def __init__(
        self,
        settings: TwitterSettings,
        response_unwrapper: ResponseUnwrapper | None = None,
        auth_strategy: AuthStrategy | None = None,
        *,
        base_url: str = TWITTER_API_BASE_URL,
        http_client: httpx.AsyncClient | None = None,
        retryable_status_codes: frozenset[int] = DEFAULT_RETRYABLE_STATUS_CODES,
    ):
        """Initialize the TwitterApiClient.

        Args:
            settings: Configuration settings for the client behavior.
            response_unwrapper: Reader for response payload shapes. Defaults to
                the Twitter v1.1 unwrapper.
            auth_strategy: Optional authentication strategy. If None, uses NoAuth.
            base_url: The base URL for API requests.
            http_client: Optional pre-configured httpx.AsyncClient instance.
            retryable_status_codes: Set of HTTP status codes to retry on.
        """
        self._settings = settings
        self._response_unwrapper: ResponseUnwrapper = (
            response_unwrapper or TwitterV11Unwrapper()
        )
        self._base_url: str = base_url.rstrip("/")
        self._retryable_status_codes: frozenset[int] = retryable_status_codes

        self._auth_strategy: AuthStrategy = auth_strategy or NoAuth()
        logger.info(
            f"Using authentication strategy: {type(self._auth_strategy).__name__}"
        )

        self._should_close_client = http_client is None
        self._http_client = http_client or self._create_default_http_client()

        self._rate_limit_limit: int | None = None
        self._rate_limit_remaining: int | None = None
        self._rate_limit_reset_timestamp: float | None = None  # Unix timestamp
        self._rate_limit_lock = asyncio.Lock()

        logger.debug("TwitterApiClient initialized.")

    @property
    def response_unwrapper(self) -> ResponseUnwrapper:
        return self._response_unwrapper

    @property
    def base_url(self) -> str:
        return self._base_url

    def _create_default_http_client(self) -> httpx.AsyncClient:
        """Create a default httpx.AsyncClient with configured settings."""
        try:
            ssl_context = ssl.create_default_context(cafile=certifi.where())
            verify_ssl: ssl.SSLContext | bool = ssl_context
            logger.debug("Using certifi SSL context.")
        except Exception:
            verify_ssl = True
            logger.warning(
                "certifi not found or failed to load. Using default SSL verification."
            )

        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._settings.request_timeout,
            verify=verify_ssl,
            headers={"User-Agent": self._settings.user_agent},
        )

    async def _parse_rate_limit_headers(self, response: httpx.Response) -> float | None:
        """Parse rate limit headers from the response and update client state.

        Returns:
            float | None: Seconds to wait before retrying, if the response says so.
        """
        retry_after_seconds: float | None = None
        async with self._rate_limit_lock:
            try:
                limit_str = response.headers.get("X-Rate-Limit-Limit")
                if limit_str and limit_str.isdigit():
                    self._rate_limit_limit = int(limit_str)
                    logger.debug(f"Parsed X-Rate-Limit-Limit: {self._rate_limit_limit}")

                remaining_str = response.headers.get("X-Rate-Limit-Remaining")
                if remaining_str and remaining_str.isdigit():
                    self._rate_limit_remaining = int(remaining_str)
                    logger.debug(
                        f"Parsed X-Rate-Limit-Remaining: {self._rate_limit_remaining}"
                    )

                reset_str = response.headers.get("X-Rate-Limit-Reset")
                if reset_str and reset_str.isdigit():
                    self._rate_limit_reset_timestamp = float(reset_str)
                    logger.debug(
                        f"Parsed X-Rate-Limit-Reset: {self._rate_limit_reset_timestamp}"
                    )
                    if response.status_code == HTTPStatus.TOO_MANY_REQUESTS:
                        retry_after_seconds = max(
                            0.0, self._rate_limit_reset_timestamp - time.time()
                        )

                retry_after_header = response.headers.get("Retry-After")
                if retry_after_header:
                    if retry_after_header.isdigit():
                        retry_after_seconds = float(retry_after_header)
                        logger.debug(
                            f"Parsed Retry-After (seconds): {retry_after_seconds}"
                        )
                    else:
                        try:
                            retry_dt_obj = parsedate_to_datetime(retry_after_header)
                            if (
                                retry_dt_obj.tzinfo is None
                                or retry_dt_obj.tzinfo.utcoffset(retry_dt_obj) is None
                            ):
                                retry_dt_obj = retry_dt_obj.replace(tzinfo=UTC)
                            delta = retry_dt_obj - dt.now(UTC)
                            retry_after_seconds = max(0, delta.total_seconds())
                            logger.debug(
                                f"Parsed Retry-After (HTTP date): {retry_after_header}, "
                                f"calculated seconds: {retry_after_seconds}"
                            )
                        except Exception as e:
                            logger.warning(
                                f"Could not parse Retry-After HTTP date '{retry_after_header}': {e}"
                            )
            except Exception as e:
                logger.exception(f"Error parsing rate limit headers: {e}")
        return retry_after_seconds

    async def _wait_for_rate_limit(self) -> None:
        """Sleep until the rate limit window resets if the budget is nearly spent."""
        async with self._rate_limit_lock:
            if (
                self._rate_limit_remaining is None
                or self._rate_limit_limit is None
                or self._rate_limit_limit <= 0
            ):
                return

            buffer_threshold = (
                self._rate_limit_limit * self._settings.rate_limit_buffer_percentage
            )
            if self._rate_limit_remaining > buffer_threshold:
                return

            wait_time: float = 0
            if self._rate_limit_reset_timestamp is not None:
                wait_time = self._rate_limit_reset_timestamp - time.time()
            elif self._rate_limit_remaining == 0:
                wait_time = self._settings.rate_limit_retry_after_default

        if wait_time > 0:
            logger.info(
                f"Rate limit approaching/reached. "
                f"Remaining: {self._rate_limit_remaining}/{self._rate_limit_limit}. "
                f"Waiting for {wait_time:.2f}s until reset."
            )
            await asyncio.sleep(wait_time)

    def _parse_body(
        self, response: httpx.Response, request_data: TwitterRequest
    ) -> tuple[Any | None, Any | None]:
        """Decode the JSON body and validate it against the expected model."""
        if not response.content:
            return None, None
        try:
            content = response.json()
        except ValueError:
            logger.warning(f"Response body of {request_data.url} is not JSON.")
            return None, None

        if request_data.expected_model is None or not response.is_success:
            return content, None

        try:
            dto = TypeAdapter(request_data.expected_model).validate_python(content)
        except Exception as e:
            logger.warning(
                f"Response model validation failed for {request_data.url}: {e}. "
                "Data transfer object will be None."
            )
            dto = None
        return content, dto

    async def _execute_single_request(
        self, request_data: TwitterRequest, attempt: int = 1
    ) -> TwitterResult:
        """Execute a single HTTP request attempt, run hooks, and parse the body.

        Raises:
            RateLimitError: If API rate limit is exceeded (429 status).
            NotFoundError: On 404 when the request raises for status.
            APIError: For other HTTP error responses (4xx/5xx).
            TimeoutError: If the request times out.
            NetworkError: For network-related errors.
            TweetfabricError: For other unexpected errors.
        """
        hook_params: dict[str, Any] | None = (
            dict(request_data.params) if request_data.params is not None else None
        )
        hook_headers: httpx.Headers = httpx.Headers(request_data.headers)

        if self._settings.pre_request_hooks:
            logger.debug(
                f"Executing {len(self._settings.pre_request_hooks)} pre-request hooks "
                f"for {request_data.method} {request_data.url}"
            )
            full_url = request_data.full_url(self._base_url)
            for hook in self._settings.pre_request_hooks:
                try:
                    hook(
                        request_data.method,
                        full_url,
                        hook_params,
                        hook_headers,
                    )
                except Exception as e:
                    logger.error(
                        f"Error executing pre-request hook {getattr(hook, '__name__', str(hook))}: {e}"
                    )

            request_data = request_data.model_copy(
                update={
                    "params": hook_params,
                    "headers": {k: v for k, v in hook_headers.items()},
                }
            )

        request = request_data.build_request(self._base_url)

        if "User-Agent" not in request.headers or not request.headers["User-Agent"]:
            request.headers["User-Agent"] = self._settings.user_agent

        response: httpx.Response | None = None
        try:
            logger.debug(f"Sending request: {request.method} {request.url}")
            logger.trace(f"Request Headers: {request.headers}")

            response = await self._http_client.send(request)
            retry_after = await self._parse_rate_limit_headers(response)

            logger.debug(f"Received response: {response.status_code} for {request.url}")
            logger.trace(f"Response Headers: {response.headers}")

            status_code = response.status_code
            if status_code == HTTPStatus.TOO_MANY_REQUESTS:
                if self._settings.enable_rate_limiting:
                    wait_duration = (
                        retry_after
                        if retry_after is not None
                        else self._settings.rate_limit_retry_after_default
                    )
                    logger.info(
                        f"Rate limit hit (429). Waiting for {wait_duration:.2f}s."
                    )
                    await asyncio.sleep(wait_duration)
                raise RateLimitError(
                    "API rate limit exceeded.", response=response, request=request
                )
            if status_code >= HTTPStatus.BAD_REQUEST and (
                request_data.raise_for_status
                or status_code in self._retryable_status_codes
            ):
                if status_code == HTTPStatus.NOT_FOUND:
                    raise NotFoundError(
                        "Resource not found.", response=response, request=request
                    )
                raise APIError(
                    f"API request failed with status {status_code}",
                    response=response,
                    request=request,
                )

            content, dto = self._parse_body(response, request_data)
            result = TwitterResult(
                response=response,
                content=content,
                data_transfer_object=dto,
                request=request_data,
            )

            if self._settings.post_request_hooks:
                logger.debug(
                    f"Executing {len(self._settings.post_request_hooks)} post-request hooks "
                    f"for {request.method} {request.url}"
                )
                for hook in self._settings.post_request_hooks:
                    try:
                        hook(response, dto, attempt)
                    except Exception as e:
                        logger.error(
                            f"Error executing post-request hook {getattr(hook, '__name__', str(hook))}: {e}"
                        )

            return result

        except httpx.TimeoutException as e:
            logger.error(f"Request timed out: {request.url}")
            raise TimeoutError("Request timed out", request=request) from e
        except httpx.NetworkError as e:
            logger.error(f"Network error occurred for {request.url}: {e}")
            raise NetworkError(
                f"Network error for {request.url}: {e}", request=request
            ) from e
        except httpx.RequestError as e:
            logger.error(f"HTTP request error for {request.url}: {e}")
            raise TweetfabricRequestError(
                f"HTTP request error for {request.url}: {e}", request=request
            ) from e
        except TweetfabricError:
            raise
        except Exception as e:
            logger.exception(
                f"Unexpected error during single request execution to {request.url}: {e}"
            )
            raise TweetfabricError(
                f"An unexpected error occurred during request execution: {e}",
                request=request,
            ) from e

    def _should_retry_request(self, retry_state: tenacity.RetryCallState) -> bool:
        """Predicate for tenacity: should we retry this request?"""
        outcome = retry_state.outcome
        if not outcome or not outcome.failed:
            return False

        exc = outcome.exception()
        request = getattr(exc, "request", None)
        url = str(getattr(request, "url", "N/A")) if request else "N/A"

        if isinstance(exc, TimeoutError | NetworkError | RateLimitError):
            logger.warning(f"Retrying due to {type(exc).__name__} for {url}")
            return True

        if isinstance(exc, APIError) and exc.response is not None:
            status_code = exc.response.status_code
            if status_code in self._retryable_status_codes:
                logger.warning(f"Retrying due to status code {status_code} for {url}")
                return True

        return False

    async def _before_retry_sleep(self, retry_state: tenacity.RetryCallState) -> None:
        """Log details before tenacity sleeps between retries."""
        if not retry_state.outcome:
            return

        exc = retry_state.outcome.exception()
        sleep_time = (
            getattr(retry_state.next_action, "sleep", 0)
            if retry_state.next_action
            else 0
        )
        logger.info(
            f"Retrying request in {sleep_time:.2f} seconds "
            f"after {retry_state.attempt_number} attempt(s) due to: {type(exc).__name__} - {exc}"
        )

    async def send(self, request_data: TwitterRequest) -> TwitterResult:
        """Send a request with retries for transient errors.

        Args:
            request_data: The request to send. Relative URLs are resolved
                against the client's base URL.

        Returns:
            TwitterResult: The response envelope, with the body parsed into
                `request_data.expected_model` when one is given.

        Raises:
            AuthError: If the authentication strategy fails.
            RateLimitError, NotFoundError, APIError, TimeoutError, NetworkError,
            TweetfabricRequestError: After all retries are exhausted.
        """
        if self._settings.enable_rate_limiting:
            await self._wait_for_rate_limit()

        try:
            temp_request_for_auth = request_data.build_request(self._base_url)
            await self._auth_strategy.async_authenticate(temp_request_for_auth)
            request_data = request_data.model_copy(
                update={"headers": dict(temp_request_for_auth.headers)}
            )
        except AuthError as e:
            logger.error(f"Authentication failed before request: {e}")
            raise
        except Exception as e:
            logger.exception(f"Unexpected error during pre-request authentication: {e}")
            raise AuthError(f"Unexpected authentication error: {e}") from e

        retry_strategy = AsyncRetrying(
            stop=stop_after_attempt(self._settings.max_retries + 1),
            wait=wait_exponential(multiplier=self._settings.backoff_factor),
            retry=self._should_retry_request,
            reraise=True,
            before_sleep=self._before_retry_sleep,
        )

        try:
            async for attempt in retry_strategy:
                with attempt:
                    result = await self._execute_single_request(
                        request_data, attempt.retry_state.attempt_number
                    )
        except Exception as e:
            logger.error(f"Request failed after retries: {e}")
            raise
        return result

    async def aclose(self) -> None:
        """Close the underlying HTTP client and the auth strategy."""
        if (
            self._should_close_client
            and self._http_client
            and not self._http_client.is_closed
        ):
            await self._http_client.aclose()
            logger.info(f"TwitterApiClient internal HTTP client closed. Client ID: {id(self)}.")
        await self._auth_strategy.async_close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        await self.aclose()
