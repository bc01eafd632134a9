"""
Activation domain events.

Domain events represent something that happened in the activation domain.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class LicenseActivated(DomainEvent):
    """Event raised when a tenant activates a license key."""

    tenant_id: uuid.UUID
    license_key_id: uuid.UUID
    key_code: str
    assignment_id: uuid.UUID
    duration_days: int
    expires_at: datetime
    superseded_assignment_id: Optional[uuid.UUID] = None
    superseded_license_key_id: Optional[uuid.UUID] = None
