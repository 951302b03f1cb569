# tweetfabric/types.py
"""Core type definitions and data structures for tweetfabric.

This module defines the request description handed to the transport, the
result envelope it returns, and type aliases for request hooks.
"""

from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, Field

DTOType = TypeVar("DTOType")


class TwitterRequest(BaseModel):
    """Encapsulates everything the transport needs to issue one HTTP call.

    `url` is either absolute or relative to the client's base URL.
    `expected_model` is any type pydantic can validate against (a model class,
    ``list[TweetDTO]``, ...); the parsed value lands in
    `TwitterResult.data_transfer_object`. Requests built with
    ``raise_for_status=False`` hand non-retryable 4xx responses back to the
    caller instead of raising.
    """

    method: str
    url: str
    params: Mapping[str, Any] | None = None
    json_data: Any | None = None
    data: Mapping[str, Any] | None = None
    headers: dict[str, str] = Field(default_factory=dict)
    expected_model: Any | None = None
    raise_for_status: bool = True

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    def full_url(self, base_url: str = "") -> str:
        """Resolve `url` against `base_url` unless it is already absolute."""
        if base_url and not self.url.startswith(("http://", "https://")):
            return f"{base_url.rstrip('/')}/{self.url.lstrip('/')}"
        return self.url

    def build_request(self, base_url: str = "") -> httpx.Request:
        """Builds an httpx.Request object from the stored data."""
        return httpx.Request(
            method=self.method,
            url=self.full_url(base_url),
            params=self.params,
            json=self.json_data,
            data=self.data,
            headers=self.headers,
        )


class TwitterResult(BaseModel, Generic[DTOType]):
    """Envelope pairing a raw response with its deserialized payload.

    Attributes:
        response: The raw `httpx.Response`.
        content: The decoded JSON body, or None if the body was empty or not JSON.
        data_transfer_object: `content` parsed into the request's expected model,
            or None when no model was requested or parsing failed.
        request: The request description that produced this result.
    """

    response: httpx.Response
    content: Any | None = None
    data_transfer_object: DTOType | None = None
    request: TwitterRequest | None = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def is_success_status_code(self) -> bool:
        return self.response.is_success


PreRequestHook = Callable[[str, str, dict[str, Any] | None, httpx.Headers], None]
"""Type alias for a pre-request hook.

Args:
    method (str): The HTTP method of the request (e.g., "GET", "POST").
    url (str): The full URL of the request.
    params (dict[str, Any] | None): A mutable dictionary of query parameters.
        Hooks can modify this dictionary in place.
    headers (httpx.Headers): A mutable `httpx.Headers` object.
Return:
    None: Hooks are expected to modify arguments in-place or perform side effects.
"""

PostRequestHook = Callable[[httpx.Response, Any, int], None]
"""Type alias for a post-request hook.

Args:
    response (httpx.Response): The raw `httpx.Response` object.
    parsed_model (Any): The parsed data transfer object, or None.
    attempts (int): The attempt number that produced this response.
Return:
    None: Hooks are expected to perform side effects.
"""
