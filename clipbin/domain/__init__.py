"""
Domain layer: validated field values and the records built from them.

Nothing in this package performs I/O.
"""

from clipbin.domain.fields import ClipId, Content, Expires, Password, Title
from clipbin.domain.models import (
    ApiKey,
    Clip,
    GetClip,
    NewClip,
    RevocationStatus,
    UpdateClip,
)
from clipbin.domain.shortcode import ShortCode

__all__ = [
    "ApiKey",
    "Clip",
    "ClipId",
    "Content",
    "Expires",
    "GetClip",
    "NewClip",
    "Password",
    "RevocationStatus",
    "ShortCode",
    "Title",
    "UpdateClip",
]
