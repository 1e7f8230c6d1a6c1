"""
FastAPI Endpoints for the Clip Service

This module defines all REST API endpoints with minimal logic.
Endpoints only handle:
- Turning request bodies into validated domain values
- API key checks for programmatic writes
- Error handling and HTTP responses
- Delegating to service layer

Error mapping:
- ClipValidationError -> 400
- PermissionDeniedError -> 401 (password required)
- NotFoundError -> 404
- anything else -> 500 with a generic message
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import async_sessionmaker

from clipbin.api.schemas import (
    ApiKeyResponse,
    ClipPasswordRequest,
    ClipResponse,
    NewClipRequest,
    RevocationResponse,
    UpdateClipRequest,
)
from clipbin.core.exceptions import (
    ClipValidationError,
    InvalidApiKeyError,
    NotFoundError,
    PermissionDeniedError,
)
from clipbin.core.setting import settings
from clipbin.db.repository import ApiKeyRepository, ClipRepository
from clipbin.db.session import get_session_maker
from clipbin.domain.fields import Content, Expires, Password, Title
from clipbin.domain.models import ApiKey, GetClip, NewClip, RevocationStatus, UpdateClip
from clipbin.domain.shortcode import ShortCode
from clipbin.services.api_key_service import ApiKeyService
from clipbin.services.clip_service import ClipService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_clip_service(session_maker: async_sessionmaker = Depends(get_session_maker)) -> ClipService:
    return ClipService(ClipRepository(session_maker))


def get_api_key_service(session_maker: async_sessionmaker = Depends(get_session_maker)) -> ApiKeyService:
    return ApiKeyService(ApiKeyRepository(session_maker))


async def require_api_key(
    request: Request,
    api_key_service: ApiKeyService = Depends(get_api_key_service),
) -> ApiKey:
    """Reject the request unless it carries a valid API key header."""
    raw_key = request.headers.get(settings.API_KEY_HEADER)
    if not raw_key:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="API key required")

    try:
        api_key = ApiKey.from_base64(raw_key)
        is_valid = await api_key_service.api_key_is_valid(api_key)
    except InvalidApiKeyError:
        is_valid = False
    except Exception as e:
        raise to_http_error(e) from e

    if not is_valid:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")
    return api_key


def to_http_error(error: Exception) -> HTTPException:
    """Translate a service error into the HTTP response the client sees."""
    if isinstance(error, ClipValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, PermissionDeniedError):
        return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Password required")
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Clip not found")

    logger.error(f"Unhandled error: {error}", exc_info=error)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="A server error occurred. Please try again."
    )


async def _create_clip(body: NewClipRequest, clip_service: ClipService) -> ClipResponse:
    try:
        new_clip = NewClip(
            content=Content(body.content),
            title=Title(body.title),
            expires=Expires(body.expires),
            password=Password(body.password),
        )
        clip = await clip_service.new_clip(new_clip)
    except Exception as e:
        raise to_http_error(e) from e
    return ClipResponse.from_clip(clip, settings.BASE_URL)


async def _view_clip(
    shortcode: str,
    password: Optional[str],
    clip_service: ClipService,
) -> ClipResponse:
    try:
        request = GetClip(shortcode=ShortCode(shortcode), password=Password(password))
        clip = await clip_service.get_clip(request)
    except Exception as e:
        raise to_http_error(e) from e
    return ClipResponse.from_clip(clip, settings.BASE_URL)


@router.post(
    "/clip",
    response_model=ClipResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a clip",
)
async def add_clip(
    body: NewClipRequest,
    clip_service: ClipService = Depends(get_clip_service),
) -> ClipResponse:
    return await _create_clip(body, clip_service)


@router.get(
    "/clip/{shortcode}",
    response_model=ClipResponse,
    summary="View a clip",
    description="Password protected clips take the password in the X-Clip-Password header",
)
async def get_clip(
    shortcode: str,
    x_clip_password: Optional[str] = Header(None),
    clip_service: ClipService = Depends(get_clip_service),
) -> ClipResponse:
    return await _view_clip(shortcode, x_clip_password, clip_service)


@router.post(
    "/clip/{shortcode}",
    response_model=ClipResponse,
    summary="View a password protected clip",
)
async def submit_clip_password(
    shortcode: str,
    body: ClipPasswordRequest,
    clip_service: ClipService = Depends(get_clip_service),
) -> ClipResponse:
    return await _view_clip(shortcode, body.password, clip_service)


@router.post(
    "/api/clip",
    response_model=ClipResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a clip (API key required)",
)
async def api_new_clip(
    body: NewClipRequest,
    _api_key: ApiKey = Depends(require_api_key),
    clip_service: ClipService = Depends(get_clip_service),
) -> ClipResponse:
    return await _create_clip(body, clip_service)


@router.put(
    "/api/clip",
    response_model=ClipResponse,
    summary="Update a clip (API key required)",
)
async def api_update_clip(
    body: UpdateClipRequest,
    _api_key: ApiKey = Depends(require_api_key),
    clip_service: ClipService = Depends(get_clip_service),
) -> ClipResponse:
    try:
        update_clip = UpdateClip(
            shortcode=ShortCode(body.shortcode),
            content=Content(body.content),
            title=Title(body.title),
            expires=Expires(body.expires),
            password=Password(body.password),
        )
        clip = await clip_service.update_clip(update_clip)
    except Exception as e:
        raise to_http_error(e) from e
    return ClipResponse.from_clip(clip, settings.BASE_URL)


@router.get(
    "/api/clip/{shortcode}",
    response_model=ClipResponse,
    summary="View a clip through the API",
)
async def api_get_clip(
    shortcode: str,
    x_clip_password: Optional[str] = Header(None),
    clip_service: ClipService = Depends(get_clip_service),
) -> ClipResponse:
    return await _view_clip(shortcode, x_clip_password, clip_service)


@router.get(
    "/api/key",
    response_model=ApiKeyResponse,
    summary="Issue a new API key",
)
async def new_api_key(
    api_key_service: ApiKeyService = Depends(get_api_key_service),
) -> ApiKeyResponse:
    try:
        api_key = await api_key_service.generate_api_key()
    except Exception as e:
        raise to_http_error(e) from e
    return ApiKeyResponse(api_key=api_key.to_base64())


@router.delete(
    "/api/key/{api_key}",
    response_model=RevocationResponse,
    summary="Revoke an API key",
)
async def revoke_api_key(
    api_key: str,
    api_key_service: ApiKeyService = Depends(get_api_key_service),
) -> RevocationResponse:
    try:
        revocation = await api_key_service.revoke_api_key(ApiKey.from_base64(api_key))
    except InvalidApiKeyError:
        revocation = RevocationStatus.NOT_FOUND
    except Exception as e:
        raise to_http_error(e) from e

    if revocation is RevocationStatus.NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="API key not found")
    return RevocationResponse(status=revocation.value)
