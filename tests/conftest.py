"""Shared fixtures for the tweetfabric test suite."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from pydantic import TypeAdapter

from tweetfabric.client import TwitterApiClient
from tweetfabric.config import TweetMode, TwitterSettings
from tweetfabric.endpoints import TWITTER_API_BASE_URL
from tweetfabric.session import TwitterClient
from tweetfabric.types import TwitterRequest, TwitterResult
from tweetfabric.unwrapper import TwitterV11Unwrapper


def build_result(
    request: TwitterRequest, payload: Any, status_code: int = 200
) -> TwitterResult:
    """Build the envelope the transport would return for `payload`."""
    httpx_request = request.build_request(TWITTER_API_BASE_URL)
    if payload is None:
        response = httpx.Response(status_code, request=httpx_request)
    else:
        response = httpx.Response(status_code, json=payload, request=httpx_request)

    dto = None
    if response.is_success and payload is not None and request.expected_model:
        dto = TypeAdapter(request.expected_model).validate_python(payload)
    return TwitterResult(
        response=response, content=payload, data_transfer_object=dto, request=request
    )


@pytest.fixture
def settings():
    """Settings with retries and rate-limit waits switched off."""
    return TwitterSettings(
        max_retries=0,
        backoff_factor=0,
        enable_rate_limiting=False,
        tweet_mode=TweetMode.EXTENDED,
    )


@pytest.fixture
def mock_api_client():
    """A transport double whose `send` is an AsyncMock."""
    api_client = MagicMock(spec=TwitterApiClient)
    api_client.send = AsyncMock()
    api_client.aclose = AsyncMock()
    api_client.response_unwrapper = TwitterV11Unwrapper()
    api_client.base_url = TWITTER_API_BASE_URL.rstrip("/")
    return api_client


@pytest.fixture
def twitter_client(settings, mock_api_client):
    """A fully bound TwitterClient over the transport double."""
    return TwitterClient(settings=settings, api_client=mock_api_client)


@pytest.fixture
def queue_responses(mock_api_client):
    """Queue payloads for the transport double, one per `send` call.

    Each item is either a payload (answered with 200) or a
    ``(status_code, payload)`` tuple.
    """

    def queue(*responses: Any) -> AsyncMock:
        pending = list(responses)

        async def send(request: TwitterRequest) -> TwitterResult:
            item = pending.pop(0)
            status_code, payload = item if isinstance(item, tuple) else (200, item)
            return build_result(request, payload, status_code)

        mock_api_client.send.side_effect = send
        return mock_api_client.send

    return queue


@pytest.fixture
def tweet_payload():
    return {
        "id": 42,
        "id_str": "42",
        "text": "hi",
        "full_text": "hi",
        "created_at": "Wed Oct 10 20:19:24 +0000 2018",
        "user": {"id": 7, "id_str": "7", "screen_name": "jack", "name": "Jack"},
        "retweet_count": 3,
        "favorite_count": 5,
    }
