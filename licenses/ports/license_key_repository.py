"""
LicenseKey repository port (interface).

This defines the contract for license key persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional
import uuid

from core.domain.value_objects import LicenseKeyStatus
from licenses.domain.license_key import LicenseKey


@dataclass(frozen=True)
class LicenseKeyStatistics:
    """Aggregate counts over the license key store."""

    total: int = 0
    total_days: int = 0
    by_status: Dict[str, int] = field(default_factory=dict)


class LicenseKeyRepository(ABC):
    """
    Abstract repository for LicenseKey entities.

    Key codes are unique across the store for its whole lifetime;
    keys are revoked, never deleted.
    """

    @abstractmethod
    async def save_batch(self, license_keys: List[LicenseKey]) -> List[LicenseKey]:
        """
        Insert several new keys atomically.

        Args:
            license_keys: New LicenseKey entities

        Returns:
            Saved entities

        Raises:
            StorageError: If any insert fails; nothing is persisted
        """
        pass

    @abstractmethod
    async def find_by_id(self, license_key_id: uuid.UUID) -> Optional[LicenseKey]:
        """
        Find a license key by ID.

        Args:
            license_key_id: License key UUID

        Returns:
            LicenseKey entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_code(self, key_code: str) -> Optional[LicenseKey]:
        """
        Find a license key by its display code.

        Args:
            key_code: Normalized key, ``PREFIX-XXXXX-XXXXX``

        Returns:
            LicenseKey entity or None if not found
        """
        pass

    @abstractmethod
    async def code_exists(self, key_code: str) -> bool:
        """Check whether a key code has ever been issued."""
        pass

    @abstractmethod
    async def claim(self, license_key_id: uuid.UUID, tenant_id: uuid.UUID, now: datetime) -> bool:
        """
        Mark an unused key active for ``tenant_id``.

        The update only applies while the key is still ``unused`` and
        either unreserved or reserved for the same tenant.

        Returns:
            True if this call claimed the key, False if it was no
            longer claimable
        """
        pass

    @abstractmethod
    async def revoke(self, license_key_id: uuid.UUID, now: datetime) -> bool:
        """
        Set a key's status to ``revoked``.

        Returns:
            True if the status changed, False if already revoked
        """
        pass

    @abstractmethod
    async def list(
        self,
        status: Optional[LicenseKeyStatus] = None,
        tenant_id: Optional[uuid.UUID] = None,
        limit: int = 50,
    ) -> List[LicenseKey]:
        """
        List keys, newest first.

        Args:
            status: Optional status filter
            tenant_id: Optional assigned tenant filter
            limit: Maximum number of rows

        Returns:
            List of LicenseKey entities
        """
        pass

    @abstractmethod
    async def statistics(
        self,
        status: Optional[LicenseKeyStatus] = None,
        tenant_id: Optional[uuid.UUID] = None,
    ) -> LicenseKeyStatistics:
        """Aggregate counts for the keys matching the filters."""
        pass
