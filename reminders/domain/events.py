"""
Reminder domain events.
"""
import uuid
from dataclasses import dataclass

from core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class LicenseReminderSent(DomainEvent):
    """Event raised when an expiry reminder is delivered."""

    tenant_id: uuid.UUID
    assignment_id: uuid.UUID
    key_code: str
    threshold_days: int
