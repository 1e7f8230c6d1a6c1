"""
Clip Field Values

Each class wraps one raw input value and can only be constructed from a valid
one. Invalid input raises a ClipValidationError subclass naming the field, so
a NewClip or UpdateClip built from these values is valid by construction.

Instances are immutable and compare by value. The wrapped value is read
through `value` (or `into_inner()`), never assigned.
"""

import hmac
import uuid
from datetime import datetime, timezone
from typing import Any, Optional, Union

from clipbin.core.exceptions import (
    InvalidContentError,
    InvalidExpirationError,
    InvalidPasswordError,
    InvalidTitleError,
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class FieldValue:
    __slots__ = ("_value",)

    def __init__(self, value: Any):
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def value(self):
        return self._value

    def into_inner(self):
        return self._value

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._value == other._value

    def __hash__(self):
        return hash((type(self).__name__, self._value))

    def __repr__(self):
        return f"{type(self).__name__}({self._value!r})"


class Content(FieldValue):
    """Clip body. Must contain something other than whitespace."""

    __slots__ = ()

    def __init__(self, value: str):
        if not isinstance(value, str) or not value.strip():
            raise InvalidContentError("content cannot be empty")
        super().__init__(value)

    def __str__(self):
        return self._value


class Title(FieldValue):
    """
    Optional clip title.

    None and "" both mean "no title". A whitespace-only title is a title.
    """

    __slots__ = ()

    def __init__(self, value: Optional[str] = None):
        if value is not None and not isinstance(value, str):
            raise InvalidTitleError(f"expected text, got {type(value).__name__}")
        super().__init__(value or None)


class Expires(FieldValue):
    """
    Optional expiration timestamp, always held in UTC.

    Accepts a datetime or ISO-8601 text. Empty text means the clip never
    expires. Naive datetimes are read as UTC.
    """

    __slots__ = ()

    def __init__(self, value: Union[datetime, str, None] = None):
        if isinstance(value, str):
            value = self._parse(value)
        elif value is not None and not isinstance(value, datetime):
            raise InvalidExpirationError(f"expected a date, got {type(value).__name__}")
        super().__init__(as_utc(value) if value is not None else None)

    @staticmethod
    def _parse(text: str) -> Optional[datetime]:
        text = text.strip()
        if not text:
            return None
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            raise InvalidExpirationError(f"'{text}' is not a valid date")

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self._value is None:
            return False
        return self._value <= (now or utc_now())


class Password(FieldValue):
    """
    Optional clip password.

    Any text with a non-whitespace character sets a password. None, "" and
    whitespace-only text mean the clip is not protected.
    """

    __slots__ = ()

    def __init__(self, value: Optional[str] = None):
        if value is not None and not isinstance(value, str):
            raise InvalidPasswordError(f"expected text, got {type(value).__name__}")
        if value is not None and not value.strip():
            value = None
        super().__init__(value)

    def has_password(self) -> bool:
        return self._value is not None

    def matches(self, other: Optional[str]) -> bool:
        """Constant-time comparison against a stored password."""
        if self._value is None or other is None:
            return False
        return hmac.compare_digest(self._value.encode(), other.encode())

    def __repr__(self):
        return f"Password({'***' if self._value else None})"


class ClipId(FieldValue):
    """Internal clip identifier, distinct from the public shortcode."""

    __slots__ = ()

    def __init__(self, value: str):
        super().__init__(str(uuid.UUID(str(value))))

    @classmethod
    def new(cls) -> "ClipId":
        return cls(uuid.uuid4())

    def __str__(self):
        return self._value
