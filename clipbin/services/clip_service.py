"""
Clip Service

This service handles the user-facing clip operations:
- Creating clips from validated requests
- Reading clips with expiry and password checks
- Updating the editable fields of a clip

Design Decisions:
- Field validation already happened when the request was built, so no
  extra checks are needed before writing
- Expired clips read as not found and are not counted as views
- Password protected clips never leave this layer without a matching password
- The hit counter is bumped after a successful read on a best-effort basis:
  a failed increment is logged and the read still succeeds
"""

import logging

from clipbin.core.exceptions import DatabaseError, NotFoundError, PermissionDeniedError
from clipbin.db.repository import ClipRepository
from clipbin.domain.models import Clip, GetClip, NewClip, UpdateClip

logger = logging.getLogger(__name__)


class ClipService:
    """
    Business logic for clips.

    Wraps a ClipRepository; holds no state of its own, so one instance can
    serve concurrent requests.
    """

    def __init__(self, clips: ClipRepository):
        self.clips = clips

    async def new_clip(self, request: NewClip) -> Clip:
        return await self.clips.new_clip(request)

    async def get_clip(self, request: GetClip) -> Clip:
        """
        Fetch a clip for viewing and count the view.

        Args:
            request: Shortcode plus the password attempt, if any

        Returns:
            The clip, with hits including this view

        Raises:
            NotFoundError: If the clip does not exist or has expired
            PermissionDeniedError: If the clip is protected and the password is missing or wrong
            DatabaseError: If the clip cannot be read
        """
        clip = await self.clips.get_clip(request)

        if clip.is_expired():
            logger.info(f"Clip {clip.shortcode} has expired")
            raise NotFoundError(clip.shortcode)

        if clip.has_password() and not request.password.matches(clip.password):
            raise PermissionDeniedError(clip.shortcode)

        try:
            await self.clips.increase_hit_count(request.shortcode, 1)
        except DatabaseError as e:
            logger.error(
                f"Failed to increment hit count for {clip.shortcode}: {str(e)}",
                exc_info=True
            )
            return clip

        return clip.model_copy(update={"hits": clip.hits + 1})

    async def update_clip(self, request: UpdateClip) -> Clip:
        return await self.clips.update_clip(request)
