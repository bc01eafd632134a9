"""
License domain events.

Domain events represent something that happened in the license domain.
"""
import uuid
from dataclasses import dataclass
from typing import Optional, Tuple

from core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class LicenseKeysGenerated(DomainEvent):
    """Event raised when a batch of license keys is generated."""

    license_key_ids: Tuple[uuid.UUID, ...]
    key_codes: Tuple[str, ...]
    duration_days: int
    created_by: str
    assigned_tenant_id: Optional[uuid.UUID] = None


@dataclass(frozen=True, kw_only=True)
class LicenseKeyRevoked(DomainEvent):
    """Event raised when a license key is revoked."""

    license_key_id: uuid.UUID
    key_code: str
    tenant_id: Optional[uuid.UUID] = None
    ended_assignment_id: Optional[uuid.UUID] = None
