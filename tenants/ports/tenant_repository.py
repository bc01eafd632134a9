"""
Tenant repository port (interface).

This defines the contract for tenant persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
import uuid

from core.domain.value_objects import TenantStatus
from tenants.domain.tenant import Tenant


class TenantRepository(ABC):
    """Abstract repository for Tenant entities."""

    @abstractmethod
    async def find_by_id(self, tenant_id: uuid.UUID) -> Optional[Tenant]:
        """
        Find a tenant by ID.

        Args:
            tenant_id: Tenant UUID

        Returns:
            Tenant entity or None if not found
        """
        pass

    @abstractmethod
    async def exists(self, tenant_id: uuid.UUID) -> bool:
        """Check if a tenant exists."""
        pass

    @abstractmethod
    async def set_status(self, tenant_id: uuid.UUID, status: TenantStatus, now: datetime) -> bool:
        """
        Move a tenant to ``status`` unless it is already there.

        Both ``status`` and ``subscription_status`` are written.

        Returns:
            True if a row changed, False if the tenant was already in
            ``status`` (or does not exist)
        """
        pass

    @abstractmethod
    async def list_unsuspended(self) -> List[Tenant]:
        """Every tenant whose status is not ``suspended``."""
        pass
