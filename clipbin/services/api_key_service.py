"""
API Key Service

Issues, checks and revokes the API keys that gate programmatic writes.
Thin pass-through to ApiKeyRepository; key generation is the only logic here.
"""

import logging

from clipbin.db.repository import ApiKeyRepository
from clipbin.domain.models import ApiKey, RevocationStatus

logger = logging.getLogger(__name__)


class ApiKeyService:
    """Service for managing API keys."""

    def __init__(self, keys: ApiKeyRepository):
        self.keys = keys

    async def generate_api_key(self) -> ApiKey:
        """Create a new random key and store it."""
        api_key = await self.keys.save_api_key(ApiKey.generate())
        logger.info("Issued new api key")
        return api_key

    async def api_key_is_valid(self, api_key: ApiKey) -> bool:
        return await self.keys.api_key_is_valid(api_key)

    async def revoke_api_key(self, api_key: ApiKey) -> RevocationStatus:
        status = await self.keys.revoke_api_key(api_key)
        logger.info(f"Api key revocation: {status.value}")
        return status
