"""
Domain Models

Request records passed from the service layer to the persistence layer, and
the Clip / ApiKey records handed back. All of them are frozen pydantic
models built fresh for each call.

- NewClip: validated fields plus a freshly generated clip_id and shortcode
- UpdateClip: target shortcode plus the new editable fields
- GetClip: shortcode plus an optional password attempt
- Clip: the full persisted row, only built by the repositories
- ApiKey: opaque credential bytes
"""

import base64
import binascii
import secrets
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from clipbin.core.exceptions import InvalidApiKeyError
from clipbin.domain.fields import (
    ClipId,
    Content,
    Expires,
    Password,
    Title,
    as_utc,
    utc_now,
)
from clipbin.domain.shortcode import ShortCode

API_KEY_BYTES = 16


class _Request(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class NewClip(_Request):
    content: Content
    title: Title = Field(default_factory=Title)
    expires: Expires = Field(default_factory=Expires)
    password: Password = Field(default_factory=Password)
    clip_id: ClipId = Field(default_factory=ClipId.new)
    shortcode: ShortCode = Field(default_factory=ShortCode.generate)
    posted: datetime = Field(default_factory=utc_now)


class UpdateClip(_Request):
    shortcode: ShortCode
    content: Content
    title: Title = Field(default_factory=Title)
    expires: Expires = Field(default_factory=Expires)
    password: Password = Field(default_factory=Password)


class GetClip(_Request):
    shortcode: ShortCode
    password: Password = Field(default_factory=Password)

    @classmethod
    def from_shortcode(cls, shortcode: Union[ShortCode, str]) -> "GetClip":
        if not isinstance(shortcode, ShortCode):
            shortcode = ShortCode(shortcode)
        return cls(shortcode=shortcode)


class Clip(BaseModel):
    """A stored clip, as read back from the database."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    clip_id: str
    shortcode: str
    content: str
    title: Optional[str] = None
    posted: datetime
    expires: Optional[datetime] = None
    password: Optional[str] = None
    hits: int = Field(default=0, ge=0)

    @field_validator("posted", "expires")
    @classmethod
    def _utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # SQLite hands datetimes back without tzinfo
        return as_utc(value) if value is not None else None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return Expires(self.expires).is_expired(now)

    def has_password(self) -> bool:
        return self.password is not None


class ApiKey:
    """Opaque API credential. Shown to users as URL-safe base64."""

    __slots__ = ("_key",)

    def __init__(self, key: bytes):
        if not isinstance(key, (bytes, bytearray)) or not key:
            raise InvalidApiKeyError("api key must be non-empty bytes")
        self._key = bytes(key)

    @classmethod
    def generate(cls) -> "ApiKey":
        return cls(secrets.token_bytes(API_KEY_BYTES))

    @classmethod
    def from_base64(cls, text: str) -> "ApiKey":
        try:
            return cls(base64.urlsafe_b64decode(text.encode("ascii")))
        except (binascii.Error, UnicodeEncodeError, ValueError):
            raise InvalidApiKeyError("api key is not valid base64")

    def into_inner(self) -> bytes:
        return self._key

    def to_base64(self) -> str:
        return base64.urlsafe_b64encode(self._key).decode("ascii")

    def __eq__(self, other):
        if not isinstance(other, ApiKey):
            return NotImplemented
        return secrets.compare_digest(self._key, other._key)

    def __hash__(self):
        return hash(self._key)

    def __repr__(self):
        return "ApiKey(***)"


class RevocationStatus(str, Enum):
    REVOKED = "revoked"
    NOT_FOUND = "not_found"
