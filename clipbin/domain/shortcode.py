"""
Shortcode Generation and Parsing

A shortcode is the public, human-shareable address of a clip. It is separate
from the internal clip_id so that ids never leak into links.

Design Decisions:
- Base62 encoding: Uses [0-9a-zA-Z] for maximum URL compatibility
- Random, not counter-based: generation needs no database round trip
- Fixed length: codes are left-padded so every code has the same length
- Uniqueness: enforced by the UNIQUE constraint on clips.shortcode, not here

Parsing is permissive: any non-empty string is a well-formed shortcode. The
database lookup is the real existence check.
"""

import secrets
from typing import Optional

from clipbin.core.exceptions import InvalidShortCodeError
from clipbin.core.setting import settings
from clipbin.domain.fields import FieldValue


BASE62_CHARS = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
BASE62_LENGTH = len(BASE62_CHARS)


def encode_base62(number: int, min_length: int = 7) -> str:
    """
    Encode a number to base62 string with fixed length.

    Args:
        number: The number to convert
        min_length: Minimum length of the code (default: 7)

    Returns:
        Base62 encoded string, padded to min_length

    Example:
        encode_base62(0) -> "0000000"
        encode_base62(62) -> "0000010"
    """
    if number < 0:
        raise ValueError(f"Cannot encode negative number: {number}")

    digits = []
    while number > 0:
        number, remainder = divmod(number, BASE62_LENGTH)
        digits.append(BASE62_CHARS[remainder])

    code = "".join(reversed(digits))
    return code.rjust(min_length, BASE62_CHARS[0])


class ShortCode(FieldValue):
    """Validated shortcode. Construct from external input or `generate()`."""

    __slots__ = ()

    def __init__(self, value: str):
        if not isinstance(value, str) or not value.strip():
            raise InvalidShortCodeError("shortcode cannot be empty")
        super().__init__(value.strip())

    @classmethod
    def generate(cls, length: Optional[int] = None) -> "ShortCode":
        """
        Generate a random fixed-length base62 shortcode.

        Pure function of the system's CSPRNG; performs no I/O.
        """
        length = length or settings.SHORTCODE_LENGTH
        number = secrets.randbelow(BASE62_LENGTH ** length)
        return cls(encode_base62(number, min_length=length))

    def as_str(self) -> str:
        return self._value

    def __str__(self):
        return self._value
