"""
Clip and API Key Repositories

The only code that talks to the database. Each repository is handed the
session factory (the handle on the engine's connection pool) and opens a
short-lived session per operation.

Design Decisions:
- One statement per write: insert, update, delta-increment and delete are
  each a single atomic statement, so a cancelled request never leaves a
  half-written row
- Read after write: new_clip and update_clip commit, then re-read the row by
  shortcode in a fresh session so callers always see committed state
- Hit counting is a database-level "hits = hits + n", never read-modify-write
- SQLAlchemy errors are logged and re-raised as DatabaseError with a generic
  message; the original exception is kept on `original_error`
"""

import logging
from typing import Union

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from clipbin.core.exceptions import DatabaseError, NotFoundError
from clipbin.db.models import ApiKeyRecord, ClipRecord
from clipbin.domain.models import (
    ApiKey,
    Clip,
    GetClip,
    NewClip,
    RevocationStatus,
    UpdateClip,
)
from clipbin.domain.shortcode import ShortCode

logger = logging.getLogger(__name__)


def _database_error(message: str, error: Exception) -> DatabaseError:
    logger.error(f"{message}: {error}", exc_info=True)
    return DatabaseError(message, original_error=error)


class ClipRepository:
    """Data access for clips."""

    def __init__(self, session_maker: async_sessionmaker):
        self.session_maker = session_maker

    async def get_clip(self, request: Union[GetClip, ShortCode]) -> Clip:
        """
        Fetch a clip by shortcode.

        Args:
            request: GetClip or bare ShortCode (the password is not checked here)

        Returns:
            The stored Clip

        Raises:
            NotFoundError: If no clip has this shortcode
            DatabaseError: If the query fails
        """
        shortcode = request.shortcode if isinstance(request, GetClip) else request
        statement = select(ClipRecord).where(ClipRecord.shortcode == shortcode.as_str())
        try:
            async with self.session_maker() as session:
                result = await session.execute(statement)
                record = result.scalar_one_or_none()
                if record is None:
                    raise NotFoundError(shortcode.as_str())
                return Clip.model_validate(record)
        except SQLAlchemyError as e:
            raise _database_error(f"Failed to read clip '{shortcode}'", e) from e

    async def new_clip(self, request: NewClip) -> Clip:
        """
        Insert a new clip and return it as stored.

        Raises:
            DatabaseError: If the insert fails, including a duplicate shortcode
            NotFoundError: If the clip cannot be read back
        """
        record = ClipRecord(
            clip_id=str(request.clip_id),
            shortcode=request.shortcode.as_str(),
            content=request.content.into_inner(),
            title=request.title.into_inner(),
            posted=request.posted,
            expires=request.expires.into_inner(),
            password=request.password.into_inner(),
            hits=0,
        )
        try:
            async with self.session_maker() as session:
                session.add(record)
                await session.commit()
        except SQLAlchemyError as e:
            raise _database_error(f"Failed to create clip '{request.shortcode}'", e) from e

        logger.info(f"Created clip {request.shortcode}")
        return await self.get_clip(request.shortcode)

    async def update_clip(self, request: UpdateClip) -> Clip:
        """
        Replace the editable fields of a clip and return it as stored.

        shortcode, clip_id, posted and hits are never written here.

        Raises:
            NotFoundError: If no clip has this shortcode
            DatabaseError: If the update fails
        """
        statement = (
            update(ClipRecord)
            .where(ClipRecord.shortcode == request.shortcode.as_str())
            .values(
                content=request.content.into_inner(),
                title=request.title.into_inner(),
                expires=request.expires.into_inner(),
                password=request.password.into_inner(),
            )
        )
        try:
            async with self.session_maker() as session:
                await session.execute(statement)
                await session.commit()
        except SQLAlchemyError as e:
            raise _database_error(f"Failed to update clip '{request.shortcode}'", e) from e

        return await self.get_clip(request.shortcode)

    async def increase_hit_count(self, shortcode: ShortCode, hits: int = 1) -> None:
        """
        Add `hits` to the clip's view counter atomically.

        Silently does nothing if the shortcode doesn't exist.
        """
        if hits < 0:
            raise ValueError(f"Hit count increment must be non-negative, got {hits}")

        statement = (
            update(ClipRecord)
            .where(ClipRecord.shortcode == shortcode.as_str())
            .values(hits=ClipRecord.hits + hits)
        )
        try:
            async with self.session_maker() as session:
                await session.execute(statement)
                await session.commit()
        except SQLAlchemyError as e:
            raise _database_error(f"Failed to increase hit count for '{shortcode}'", e) from e


class ApiKeyRepository:
    """Data access for API keys."""

    def __init__(self, session_maker: async_sessionmaker):
        self.session_maker = session_maker

    async def save_api_key(self, api_key: ApiKey) -> ApiKey:
        """
        Store an API key.

        Raises:
            DatabaseError: If the key already exists or the insert fails
        """
        try:
            async with self.session_maker() as session:
                session.add(ApiKeyRecord(api_key=api_key.into_inner()))
                await session.commit()
        except SQLAlchemyError as e:
            raise _database_error("Failed to save api key", e) from e
        return api_key

    async def revoke_api_key(self, api_key: ApiKey) -> RevocationStatus:
        """Delete an API key; reports NOT_FOUND when no row was deleted."""
        statement = delete(ApiKeyRecord).where(ApiKeyRecord.api_key == api_key.into_inner())
        try:
            async with self.session_maker() as session:
                result = await session.execute(statement)
                deleted = result.rowcount
                await session.commit()
        except SQLAlchemyError as e:
            raise _database_error("Failed to revoke api key", e) from e

        if deleted == 0:
            return RevocationStatus.NOT_FOUND
        return RevocationStatus.REVOKED

    async def api_key_is_valid(self, api_key: ApiKey) -> bool:
        statement = (
            select(func.count())
            .select_from(ApiKeyRecord)
            .where(ApiKeyRecord.api_key == api_key.into_inner())
        )
        try:
            async with self.session_maker() as session:
                result = await session.execute(statement)
                return result.scalar_one() > 0
        except SQLAlchemyError as e:
            raise _database_error("Failed to check api key", e) from e
