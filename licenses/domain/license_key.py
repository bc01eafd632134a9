"""
LicenseKey domain entity.

A license key is a single-use voucher for ``duration_days`` of
service. It is independent of infrastructure.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.exceptions import InvalidDurationError
from core.domain.value_objects import LicenseKeyStatus

MIN_DURATION_DAYS = 1
MAX_DURATION_DAYS = 365


def validate_duration(duration_days: int) -> None:
    """
    Check a license duration.

    Raises:
        InvalidDurationError: If outside 1..365 days
    """
    if (
        isinstance(duration_days, bool)
        or not isinstance(duration_days, int)
        or not MIN_DURATION_DAYS <= duration_days <= MAX_DURATION_DAYS
    ):
        raise InvalidDurationError()


@dataclass(frozen=True)
class LicenseKey:
    """
    LicenseKey domain entity.

    ``assigned_tenant_id`` on an unused key reserves it for that
    tenant; on an active key it names the tenant that consumed it.
    """

    id: uuid.UUID
    key_code: str
    duration_days: int
    status: LicenseKeyStatus
    created_at: datetime
    updated_at: datetime
    assigned_tenant_id: Optional[uuid.UUID] = None
    created_by: str = ""
    notes: Optional[str] = None

    def __post_init__(self):
        """Validate license key entity."""
        if not self.key_code:
            raise ValueError("License key code cannot be empty")
        validate_duration(self.duration_days)

    @classmethod
    def create(
        cls,
        key_code: str,
        duration_days: int,
        now: datetime,
        created_by: str = "",
        assigned_tenant_id: Optional[uuid.UUID] = None,
        notes: Optional[str] = None,
        license_key_id: Optional[uuid.UUID] = None,
    ) -> "LicenseKey":
        """
        Create a new, unused LicenseKey.

        Args:
            key_code: Display form of the key
            duration_days: Days of service granted on activation
            now: Creation timestamp
            created_by: Admin identifier
            assigned_tenant_id: Optional tenant the key is reserved for
            notes: Free-form admin notes
            license_key_id: Optional UUID (generated if not provided)

        Returns:
            LicenseKey entity instance
        """
        return cls(
            id=license_key_id or uuid.uuid4(),
            key_code=key_code,
            duration_days=duration_days,
            status=LicenseKeyStatus.UNUSED,
            created_at=now,
            updated_at=now,
            assigned_tenant_id=assigned_tenant_id,
            created_by=created_by,
            notes=notes,
        )

    def is_activatable_by(self, tenant_id: uuid.UUID) -> bool:
        """Whether ``tenant_id`` may consume this key."""
        if self.status != LicenseKeyStatus.UNUSED:
            return False
        return self.assigned_tenant_id is None or self.assigned_tenant_id == tenant_id

    @property
    def is_revoked(self) -> bool:
        return self.status == LicenseKeyStatus.REVOKED
