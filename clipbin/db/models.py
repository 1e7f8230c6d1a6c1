"""
Database Models for the Clip Service

This module defines the SQLModel database schemas for:
- ClipRecord: Stores clip content, access settings and view counts
- ApiKeyRecord: Stores issued API keys

Design Decisions:
- clip_id (UUID text) is the primary key; shortcode is the public lookup key
- Unique index on shortcode for fast lookups (most common operation)
- hits lives on the clip row so it can be bumped with a single UPDATE
- Datetimes are stored in UTC
"""

from datetime import datetime, timezone
from typing import Optional

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import String, DateTime, Integer, Text, LargeBinary


class ClipRecord(SQLModel, table=True):
    """
    Main table storing clips.

    Fields:
    - clip_id: Internal identifier, never shown in links
    - shortcode: Unique public code used to address the clip
    - content: Clip body (never empty)
    - title: Optional title
    - posted: Creation timestamp
    - expires: Optional expiry timestamp, checked when the clip is read
    - password: Optional password, NULL when the clip is not protected
    - hits: Number of successful reads
    """
    __tablename__ = "clips"

    clip_id: str = Field(sa_column=Column(String(36), primary_key=True))
    shortcode: str = Field(
        sa_column=Column(String(64), nullable=False, unique=True, index=True)
    )
    content: str = Field(sa_column=Column(Text, nullable=False))
    title: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    posted: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True)
    )
    expires: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True)
    )
    password: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    hits: int = Field(default=0, sa_column=Column(Integer, nullable=False, default=0))


class ApiKeyRecord(SQLModel, table=True):
    """
    Issued API keys.

    Keys are opaque bytes generated by the service; a key is valid while its
    row exists and revoked by deleting the row.
    """
    __tablename__ = "api_keys"

    api_key: bytes = Field(sa_column=Column(LargeBinary, primary_key=True))
