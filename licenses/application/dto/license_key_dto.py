"""
License key DTOs for API responses.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from licenses.domain.license_key import LicenseKey


@dataclass
class LicenseKeyDTO:
    """DTO for license key information."""

    id: uuid.UUID
    key_code: str
    duration_days: int
    status: str
    assigned_tenant_id: Optional[uuid.UUID]
    created_by: str
    notes: Optional[str]
    created_at: datetime

    @classmethod
    def from_entity(cls, license_key: LicenseKey) -> "LicenseKeyDTO":
        return cls(
            id=license_key.id,
            key_code=license_key.key_code,
            duration_days=license_key.duration_days,
            status=license_key.status.value,
            assigned_tenant_id=license_key.assigned_tenant_id,
            created_by=license_key.created_by,
            notes=license_key.notes,
            created_at=license_key.created_at,
        )


@dataclass
class GenerateLicenseKeysResponseDTO:
    """DTO for generate license keys response."""

    keys: List[LicenseKeyDTO]

    @property
    def count(self) -> int:
        return len(self.keys)


@dataclass
class LicenseKeyStatisticsDTO:
    """Aggregate counts shown with key listings."""

    total: int
    total_days: int
    by_status: Dict[str, int] = field(default_factory=dict)


@dataclass
class LicenseKeyListDTO:
    """DTO for license key list response."""

    keys: List[LicenseKeyDTO]
    statistics: LicenseKeyStatisticsDTO


@dataclass
class RevokeLicenseKeyResponseDTO:
    """DTO for revoke license key response."""

    id: uuid.UUID
    key_code: str
    status: str
    already_revoked: bool
    ended_assignment_id: Optional[uuid.UUID] = None
