from typing import Any

import pytest

from tweetfabric.dto import IdsCursorQueryResultDTO, TweetDTO, UserDTO
from tweetfabric.models import ResponseUnwrapper
from tweetfabric.unwrapper import TwitterV11Unwrapper


@pytest.fixture
def unwrapper() -> TwitterV11Unwrapper:
    return TwitterV11Unwrapper()


def test_unwrapper_satisfies_protocol(unwrapper: TwitterV11Unwrapper):
    assert isinstance(unwrapper, ResponseUnwrapper)


def test_protocol_needs_only_results_and_cursor():
    class IdsOnlyUnwrapper:
        def unwrap_results(self, response_json: Any) -> list[Any]:
            return response_json["ids"]

        def get_next_page_token(self, response_json: Any) -> str | None:
            return None

    assert isinstance(IdsOnlyUnwrapper(), ResponseUnwrapper)


def test_unwrap_results_shapes(unwrapper: TwitterV11Unwrapper):
    assert unwrapper.unwrap_results([{"id": 1}, {"id": 2}]) == [{"id": 1}, {"id": 2}]
    assert unwrapper.unwrap_results({"ids": [1, 2], "next_cursor": 0}) == [1, 2]
    assert unwrapper.unwrap_results({"users": [{"id": 3}]}) == [{"id": 3}]
    assert unwrapper.unwrap_results({"id": 42}) == [{"id": 42}]
    assert unwrapper.unwrap_results({"ids": None}) == []
    assert unwrapper.unwrap_results(None) == []


@pytest.mark.parametrize("payload", ["text", 42, {"ids": "1,2"}])
def test_unwrap_results_rejects_unexpected_shapes(
    unwrapper: TwitterV11Unwrapper, payload: Any
):
    with pytest.raises(ValueError):
        unwrapper.unwrap_results(payload)


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"next_cursor": 1374004777531007833, "next_cursor_str": "1374004777531007833"}, "1374004777531007833"),
        ({"next_cursor": 99}, "99"),
        ({"next_cursor": 0, "next_cursor_str": "0"}, None),
        ({"next_cursor_str": ""}, None),
        ({"ids": []}, None),
        ([{"id": 1}], None),
        (None, None),
    ],
)
def test_get_next_page_token(unwrapper: TwitterV11Unwrapper, payload, expected):
    assert unwrapper.get_next_page_token(payload) == expected


def test_tweet_dto_parses_twitter_dates_and_keeps_extra_fields():
    dto = TweetDTO.model_validate(
        {
            "id": 1,
            "created_at": "Wed Oct 10 20:19:24 +0000 2018",
            "entities": {"hashtags": []},
            "user": {"id": 2, "created_at": "Mon Jan 01 00:00:00 +0000 2007"},
        }
    )

    assert dto.created_at.year == 2018
    assert dto.created_at.utcoffset().total_seconds() == 0
    assert dto.user.created_at.year == 2007
    assert dto.model_dump()["entities"] == {"hashtags": []}


def test_nested_retweet_is_parsed():
    dto = TweetDTO.model_validate(
        {"id": 2, "retweeted_status": {"id": 1, "quoted_status": {"id": 0}}}
    )
    assert dto.retweeted_status.id == 1
    assert dto.retweeted_status.quoted_status.id == 0


def test_ids_cursor_dto_defaults():
    dto = IdsCursorQueryResultDTO.model_validate({"ids": [1, 2]})
    assert dto.ids == [1, 2]
    assert dto.next_cursor == 0
    assert dto.next_cursor_str is None


def test_user_dto_requires_id():
    with pytest.raises(ValueError):
        UserDTO.model_validate({"screen_name": "jack"})
