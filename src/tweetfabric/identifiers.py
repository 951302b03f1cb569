# tweetfabric/identifiers.py
"""Identifier objects and the coercions that turn caller input into them.

The coercions never reject a missing or non-positive id; that is reported by
the parameter validators so that callers get one consistent error type.
"""

from typing import Any

from pydantic import BaseModel


class TweetIdentifier(BaseModel):
    """Identifies a tweet by its numeric id."""

    id: int | None = None

    @property
    def id_str(self) -> str | None:
        return str(self.id) if self.id is not None else None

    def __str__(self) -> str:
        return self.id_str or "<no id>"


class UserIdentifier(BaseModel):
    """Identifies a user by numeric id or by screen name.

    When both are present the id wins.
    """

    id: int | None = None
    screen_name: str | None = None

    def __str__(self) -> str:
        if self.id is not None:
            return str(self.id)
        if self.screen_name:
            return f"@{self.screen_name}"
        return "<no id>"


def to_tweet_identifier(value: Any) -> Any:
    """Coerce an id, identifier, DTO or `Tweet` into a `TweetIdentifier`.

    Values that cannot be recognised are returned unchanged so that pydantic
    reports them.
    """
    if value is None or isinstance(value, TweetIdentifier):
        return value
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return TweetIdentifier(id=value)
    if isinstance(value, str) and value.strip().isdigit():
        return TweetIdentifier(id=int(value.strip()))
    if isinstance(value, dict):
        return TweetIdentifier(id=value.get("id"))
    if hasattr(value, "id") and not isinstance(value, str):
        return TweetIdentifier(id=getattr(value, "id"))
    return value


def to_user_identifier(value: Any) -> Any:
    """Coerce an id, screen name, identifier, DTO or `User` into a `UserIdentifier`.

    A textual handle may carry a leading ``@``.
    """
    if value is None or isinstance(value, UserIdentifier):
        return value
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return UserIdentifier(id=value)
    if isinstance(value, str):
        return UserIdentifier(screen_name=value.strip().lstrip("@"))
    if isinstance(value, dict):
        return UserIdentifier(id=value.get("id"), screen_name=value.get("screen_name"))
    if hasattr(value, "id") or hasattr(value, "screen_name"):
        return UserIdentifier(
            id=getattr(value, "id", None),
            screen_name=getattr(value, "screen_name", None),
        )
    return value
