"""
API Request and Response Schemas

Pydantic models for the HTTP layer. Request models only describe the wire
shape; the field rules (non-empty content, parseable expiry, ...) are
enforced when the endpoint turns them into domain values.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from clipbin.domain.models import Clip


class NewClipRequest(BaseModel):
    """Request model for creating a clip."""
    content: str = Field(..., description="Clip text")
    title: Optional[str] = Field(None, description="Optional title")
    expires: Optional[str] = Field(None, description="Optional ISO-8601 expiry timestamp")
    password: Optional[str] = Field(None, description="Optional password protecting the clip")


class UpdateClipRequest(NewClipRequest):
    """Request model for updating a clip."""
    shortcode: str = Field(..., description="Shortcode of the clip to update")


class ClipPasswordRequest(BaseModel):
    """Request model for viewing a password protected clip."""
    password: Optional[str] = None


class ClipResponse(BaseModel):
    """Response model for a clip. The password itself is never returned."""
    shortcode: str
    url: str
    content: str
    title: Optional[str]
    posted: datetime
    expires: Optional[datetime]
    password_protected: bool
    hits: int

    @classmethod
    def from_clip(cls, clip: Clip, base_url: str) -> "ClipResponse":
        return cls(
            shortcode=clip.shortcode,
            url=f"{base_url}/clip/{clip.shortcode}",
            content=clip.content,
            title=clip.title,
            posted=clip.posted,
            expires=clip.expires,
            password_protected=clip.has_password(),
            hits=clip.hits,
        )


class ApiKeyResponse(BaseModel):
    api_key: str


class RevocationResponse(BaseModel):
    status: str
