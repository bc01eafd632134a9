"""
TenantLicense repository port (interface).

This defines the contract for tenant license assignment persistence.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
import uuid

from activations.domain.assignment import TenantLicenseAssignment


@dataclass(frozen=True)
class ExpiringAssignment:
    """An active assignment joined with the tenant's contact details."""

    assignment: TenantLicenseAssignment
    tenant_name: str
    tenant_email: str


class TenantLicenseRepository(ABC):
    """
    Abstract repository for TenantLicenseAssignment entities.

    The store allows at most one active assignment per tenant.
    """

    @abstractmethod
    async def add(self, assignment: TenantLicenseAssignment) -> TenantLicenseAssignment:
        """
        Insert a new assignment.

        Args:
            assignment: New TenantLicenseAssignment

        Returns:
            Saved assignment

        Raises:
            ConcurrentActivationError: If the tenant already has another
                active assignment
        """
        pass

    @abstractmethod
    async def find_by_id(self, assignment_id: uuid.UUID) -> Optional[TenantLicenseAssignment]:
        """Find an assignment by ID."""
        pass

    @abstractmethod
    async def find_active_for_tenant(self, tenant_id: uuid.UUID) -> Optional[TenantLicenseAssignment]:
        """
        Find the tenant's current active assignment.

        Args:
            tenant_id: Tenant UUID

        Returns:
            The active assignment or None
        """
        pass

    @abstractmethod
    async def find_active_for_license_key(
        self, license_key_id: uuid.UUID
    ) -> Optional[TenantLicenseAssignment]:
        """Find the active assignment created from a license key."""
        pass

    @abstractmethod
    async def end(self, assignment_id: uuid.UUID, now: datetime) -> bool:
        """
        Mark an active assignment ``expired`` with ``ended_at = now``.

        Returns:
            True if the assignment was active and is now ended
        """
        pass

    @abstractmethod
    async def list_expiring(self, start: datetime, end: datetime) -> List[ExpiringAssignment]:
        """
        Active assignments with ``start <= expires_at <= end``.

        Returns:
            ExpiringAssignment rows ordered by ``expires_at``
        """
        pass

    @abstractmethod
    async def list_active_expired_before(self, cutoff: datetime) -> List[TenantLicenseAssignment]:
        """Active assignments whose ``expires_at`` is before ``cutoff``."""
        pass
