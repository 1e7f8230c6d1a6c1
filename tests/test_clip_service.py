"""
Test Clip and API Key Services
"""

from datetime import datetime, timedelta, timezone

import pytest

from clipbin.core.exceptions import DatabaseError, NotFoundError, PermissionDeniedError
from clipbin.domain.fields import Content, Expires, Password
from clipbin.domain.models import GetClip, NewClip, RevocationStatus, UpdateClip
from clipbin.domain.shortcode import ShortCode
from clipbin.services.clip_service import ClipService


@pytest.mark.asyncio
async def test_hits_scenario(clip_service):
    """Create a clip, then view it twice; each view is counted"""
    created = await clip_service.new_clip(NewClip(content=Content("hello world")))
    assert created.hits == 0

    first = await clip_service.get_clip(GetClip.from_shortcode(created.shortcode))
    assert first.content == "hello world"
    assert first.hits == 1

    second = await clip_service.get_clip(GetClip.from_shortcode(created.shortcode))
    assert second.hits == 2


@pytest.mark.asyncio
async def test_get_nonexistent_clip(clip_service):
    with pytest.raises(NotFoundError):
        await clip_service.get_clip(GetClip.from_shortcode("missing"))


@pytest.mark.asyncio
async def test_password_protected_clip(clip_service, clip_repository):
    created = await clip_service.new_clip(
        NewClip(content=Content("top secret"), password=Password("secret"))
    )
    shortcode = ShortCode(created.shortcode)

    with pytest.raises(PermissionDeniedError):
        await clip_service.get_clip(GetClip(shortcode=shortcode))

    with pytest.raises(PermissionDeniedError):
        await clip_service.get_clip(GetClip(shortcode=shortcode, password=Password("wrong")))

    clip = await clip_service.get_clip(GetClip(shortcode=shortcode, password=Password("secret")))
    assert clip.content == "top secret"

    # Only the successful read was counted
    stored = await clip_repository.get_clip(shortcode)
    assert stored.hits == 1


@pytest.mark.asyncio
async def test_expired_clip_reads_as_not_found(clip_service, clip_repository):
    past = datetime.now(timezone.utc) - timedelta(minutes=5)
    created = await clip_service.new_clip(
        NewClip(content=Content("old news"), expires=Expires(past))
    )

    with pytest.raises(NotFoundError):
        await clip_service.get_clip(GetClip.from_shortcode(created.shortcode))

    stored = await clip_repository.get_clip(ShortCode(created.shortcode))
    assert stored.hits == 0


@pytest.mark.asyncio
async def test_expired_protected_clip_reads_as_not_found(clip_service):
    past = datetime.now(timezone.utc) - timedelta(minutes=5)
    created = await clip_service.new_clip(NewClip(
        content=Content("old secret"),
        expires=Expires(past),
        password=Password("secret"),
    ))

    with pytest.raises(NotFoundError):
        await clip_service.get_clip(GetClip.from_shortcode(created.shortcode))


@pytest.mark.asyncio
async def test_clip_with_future_expiry_is_readable(clip_service):
    future = datetime.now(timezone.utc) + timedelta(days=1)
    created = await clip_service.new_clip(
        NewClip(content=Content("fresh"), expires=Expires(future))
    )

    clip = await clip_service.get_clip(GetClip.from_shortcode(created.shortcode))
    assert clip.content == "fresh"


@pytest.mark.asyncio
async def test_failed_hit_increment_does_not_fail_read(clip_repository):
    created = await clip_repository.new_clip(NewClip(content=Content("hello")))

    class FailingIncrementRepository:
        def __init__(self):
            self.get_clip = clip_repository.get_clip

        async def increase_hit_count(self, shortcode, hits=1):
            raise DatabaseError("connection lost")

    service = ClipService(FailingIncrementRepository())
    clip = await service.get_clip(GetClip.from_shortcode(created.shortcode))

    assert clip.content == "hello"
    assert clip.hits == 0


@pytest.mark.asyncio
async def test_update_clip(clip_service):
    created = await clip_service.new_clip(NewClip(content=Content("draft")))

    updated = await clip_service.update_clip(UpdateClip(
        shortcode=ShortCode(created.shortcode),
        content=Content("final"),
    ))

    assert updated.content == "final"
    assert updated.shortcode == created.shortcode


@pytest.mark.asyncio
async def test_api_key_lifecycle(api_key_service):
    api_key = await api_key_service.generate_api_key()

    assert await api_key_service.api_key_is_valid(api_key)
    assert await api_key_service.revoke_api_key(api_key) is RevocationStatus.REVOKED
    assert not await api_key_service.api_key_is_valid(api_key)
    assert await api_key_service.revoke_api_key(api_key) is RevocationStatus.NOT_FOUND
