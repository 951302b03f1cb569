# tweetfabric/models.py
"""Core protocols for reading Twitter response payloads.

The `ResponseUnwrapper` protocol isolates knowledge of how an API version
shapes its JSON (bare arrays, cursored id envelopes, ...) from the requesters
and iterators, which only ask for "the results" and "the next cursor".
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ResponseUnwrapper(Protocol):
    """Protocol for unwrapping API-specific response structures.

    Example:
        A cursored v1.1 response such as GET followers/ids:
        ```json
        {
            "ids": [657693, 183709371],
            "next_cursor": 1374004777531007833,
            "next_cursor_str": "1374004777531007833",
            "previous_cursor": 0,
            "previous_cursor_str": "0"
        }
        ```
    """

    def unwrap_results(self, response_json: Any) -> list[Any]:
        """Extract the list of result items from an API response.

        Args:
            response_json: The decoded JSON body.

        Returns:
            list[Any]: The result items (objects or bare ids).

        Raises:
            ValueError: If the response format is unexpected.
        """
        ...

    def get_next_page_token(self, response_json: Any) -> str | None:
        """Extract the cursor of the next page.

        Returns:
            str | None: The cursor to send with the next request, or None when
                the server signalled that no further page exists.
        """
        ...
