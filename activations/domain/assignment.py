"""
TenantLicenseAssignment domain entity.

Records which license key a tenant activated and the access window
it grants. A tenant has at most one ``active`` assignment; earlier
ones are kept as ``expired`` history.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from core.domain.value_objects import AssignmentStatus
from licenses.domain.license_key import LicenseKey


@dataclass(frozen=True)
class TenantLicenseAssignment:
    """
    TenantLicenseAssignment domain entity.

    ``expires_at`` is fixed at activation and never extended; a new
    key creates a new assignment.
    """

    id: uuid.UUID
    tenant_id: uuid.UUID
    license_key_id: uuid.UUID
    key_code: str
    duration_days: int
    activated_at: datetime
    expires_at: datetime
    status: AssignmentStatus
    ended_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate assignment entity."""
        if self.expires_at <= self.activated_at:
            raise ValueError("Assignment must expire after it is activated")

    @classmethod
    def create(
        cls,
        tenant_id: uuid.UUID,
        license_key: LicenseKey,
        now: datetime,
        assignment_id: Optional[uuid.UUID] = None,
    ) -> "TenantLicenseAssignment":
        """
        Create the active assignment produced by activating a key.

        Args:
            tenant_id: Tenant UUID
            license_key: The key being consumed
            now: Activation timestamp
            assignment_id: Optional UUID (generated if not provided)

        Returns:
            TenantLicenseAssignment entity instance
        """
        return cls(
            id=assignment_id or uuid.uuid4(),
            tenant_id=tenant_id,
            license_key_id=license_key.id,
            key_code=license_key.key_code,
            duration_days=license_key.duration_days,
            activated_at=now,
            expires_at=now + timedelta(days=license_key.duration_days),
            status=AssignmentStatus.ACTIVE,
        )

    @property
    def is_active(self) -> bool:
        return self.status == AssignmentStatus.ACTIVE

    def grace_ends_at(self, grace_period: timedelta) -> datetime:
        return self.expires_at + grace_period
