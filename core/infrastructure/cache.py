"""
Cache port and Django cache adapter.

The port keeps application services independent of the cache backend;
the adapter runs Django's cache framework (Redis in production,
LocMem in tests) off the event loop.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from asgiref.sync import sync_to_async
from django.core.cache import cache

logger = logging.getLogger(__name__)


class CachePort(ABC):
    """Abstract cache port."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """
        Get a value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        """
        Set a value in cache.

        Args:
            key: Cache key
            value: Value to cache
            timeout: Timeout in seconds (None for the backend default)
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """
        Delete a value from cache.

        Args:
            key: Cache key
        """
        pass


class DjangoCacheAdapter(CachePort):
    """
    CachePort over Django's cache framework.

    Cache failures degrade to misses; they are logged and never raised.
    """

    async def get(self, key: str) -> Optional[Any]:
        try:
            return await sync_to_async(cache.get)(key)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error getting %s from cache: %s", key, e, exc_info=True)
            return None

    async def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        try:
            if timeout is None:
                await sync_to_async(cache.set)(key, value)
            else:
                await sync_to_async(cache.set)(key, value, timeout=timeout)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error setting %s in cache: %s", key, e, exc_info=True)

    async def delete(self, key: str) -> None:
        try:
            await sync_to_async(cache.delete)(key)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error deleting %s from cache: %s", key, e, exc_info=True)


# Global cache instance
cache_adapter = DjangoCacheAdapter()
