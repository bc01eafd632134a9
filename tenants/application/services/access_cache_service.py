"""
Access status cache service.

Caches tenant access verdicts for the request-path middleware.
"""
import logging
import math
import uuid
from datetime import datetime
from typing import Callable, Optional

from django.utils import timezone

from core.infrastructure.cache import CachePort, cache_adapter
from core.metrics import cache_hits_total, cache_misses_total
from tenants.application.dto.access_dto import AccessStatusDTO

logger = logging.getLogger(__name__)

# Cache TTL (in seconds)
CACHE_TTL_ACCESS_STATUS = 60

CACHE_KEY_LABEL = "tenant:access"


class AccessStatusCacheService:
    """Service for caching tenant access verdicts."""

    def __init__(
        self,
        cache: CachePort = cache_adapter,
        ttl: int = CACHE_TTL_ACCESS_STATUS,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self.cache = cache
        self.ttl = ttl
        self.clock = clock

    @staticmethod
    def _access_status_key(tenant_id: uuid.UUID) -> str:
        """Generate cache key for a tenant's access status."""
        return f"{CACHE_KEY_LABEL}:{tenant_id}"

    async def get(self, tenant_id: uuid.UUID) -> Optional[AccessStatusDTO]:
        """
        Get a cached access verdict.

        Args:
            tenant_id: Tenant UUID

        Returns:
            Cached AccessStatusDTO or None
        """
        cached = await self.cache.get(self._access_status_key(tenant_id))
        if not cached:
            cache_misses_total.labels(cache_key=CACHE_KEY_LABEL).inc()
            return None

        try:
            status = AccessStatusDTO(**cached)
        except TypeError as e:
            logger.warning("Discarding malformed cached access status for %s: %s", tenant_id, e)
            return None
        cache_hits_total.labels(cache_key=CACHE_KEY_LABEL).inc()
        return status

    async def set(self, status: AccessStatusDTO) -> None:
        """
        Cache an access verdict.

        Denied verdicts are not cached so that an activation is
        picked up on the next request. The entry never outlives the
        verdict: its timeout is capped at ``valid_until``.

        Args:
            status: AccessStatusDTO to cache
        """
        if not status.is_valid:
            return
        timeout = self.ttl
        if status.valid_until is not None:
            remaining = math.ceil((status.valid_until - self.clock()).total_seconds())
            if remaining <= 0:
                return
            timeout = min(timeout, remaining)
        await self.cache.set(self._access_status_key(status.tenant_id), status.to_dict(), timeout=timeout)

    async def invalidate(self, tenant_id: uuid.UUID) -> None:
        """Drop the cached verdict for a tenant."""
        await self.cache.delete(self._access_status_key(tenant_id))
        logger.debug("Invalidated access status cache for tenant %s", tenant_id)
