"""
Reminder ledger repository port (interface).

The ledger records which reminders were sent so that every
(tenant, assignment, threshold) is notified at most once.
"""
from abc import ABC, abstractmethod
from datetime import datetime
import uuid


class ReminderLedgerRepository(ABC):
    """Abstract repository for the reminder ledger."""

    @abstractmethod
    async def record_if_absent(
        self,
        tenant_id: uuid.UUID,
        assignment_id: uuid.UUID,
        threshold_days: int,
        sent_at: datetime,
    ) -> bool:
        """
        Claim a ledger entry.

        Args:
            tenant_id: Tenant UUID
            assignment_id: TenantLicense UUID
            threshold_days: Matched threshold
            sent_at: Claim timestamp

        Returns:
            True if this call created the entry, False if it existed
        """
        pass

    @abstractmethod
    async def release(self, tenant_id: uuid.UUID, assignment_id: uuid.UUID, threshold_days: int) -> None:
        """Remove a claimed entry so that a later run retries it."""
        pass

    @abstractmethod
    async def exists(self, tenant_id: uuid.UUID, assignment_id: uuid.UUID, threshold_days: int) -> bool:
        """Check whether an entry has been recorded."""
        pass

    @abstractmethod
    async def purge_expired_before(self, cutoff: datetime) -> int:
        """
        Delete entries whose assignment expired before ``cutoff``.

        Returns:
            Number of entries deleted
        """
        pass
