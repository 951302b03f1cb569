# tweetfabric/unwrapper.py
"""Twitter v1.1 implementation of the ResponseUnwrapper protocol."""

from typing import Any

from .models import ResponseUnwrapper

END_OF_STREAM_CURSORS = frozenset({"", "0"})


class TwitterV11Unwrapper(ResponseUnwrapper):
    """Reads the three payload shapes returned by Twitter v1.1.

    * a single object (``statuses/show``, ``users/show``),
    * a bare array (``statuses/lookup``, ``favorites/list``),
    * a cursored envelope (``followers/ids``, ``statuses/retweeters/ids``),
      whose items live under ``ids`` or ``users`` and whose continuation is
      ``next_cursor_str``. A cursor of ``0`` marks the last page.
    """

    def unwrap_results(self, response_json: Any) -> list[Any]:
        if response_json is None:
            return []
        if isinstance(response_json, list):
            return response_json
        if not isinstance(response_json, dict):
            raise ValueError(
                f"Response JSON must be a list or dictionary, got {type(response_json)}"
            )

        for key in ("ids", "users", "statuses"):
            if key in response_json:
                results = response_json[key]
                if results is None:
                    return []
                if not isinstance(results, list):
                    raise ValueError(
                        f"Expected '{key}' to be a list, got {type(results)}"
                    )
                return results

        return [response_json]

    def get_next_page_token(self, response_json: Any) -> str | None:
        if not isinstance(response_json, dict):
            return None

        cursor = response_json.get("next_cursor_str")
        if cursor is None:
            cursor = response_json.get("next_cursor")
        if cursor is None:
            return None

        cursor_str = str(cursor).strip()
        if cursor_str in END_OF_STREAM_CURSORS:
            return None
        return cursor_str
