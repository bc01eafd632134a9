"""
Reminder domain objects.

Reminders go out when a license is 7, 3, 1 or 0 calendar days from
expiry. Each (tenant, assignment, threshold) is notified at most once.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import FrozenSet, Iterable, Optional

DEFAULT_THRESHOLDS = (7, 3, 1, 0)
DEFAULT_WINDOW_DAYS = 30


def days_until_expiry(expires_at: datetime, now: datetime) -> int:
    """Calendar days between ``now`` and ``expires_at``, ignoring time of day."""
    return (expires_at.date() - now.date()).days


@dataclass(frozen=True)
class ReminderPolicy:
    """Which day offsets trigger a reminder, and how far ahead to look."""

    thresholds: FrozenSet[int] = frozenset(DEFAULT_THRESHOLDS)
    window_days: int = DEFAULT_WINDOW_DAYS

    def __post_init__(self):
        if any(t < 0 for t in self.thresholds):
            raise ValueError("Reminder thresholds cannot be negative")
        if self.window_days < max(self.thresholds, default=0):
            raise ValueError("Reminder window must cover the largest threshold")

    @classmethod
    def from_thresholds(cls, thresholds: Iterable[int], window_days: int = DEFAULT_WINDOW_DAYS) -> "ReminderPolicy":
        return cls(thresholds=frozenset(int(t) for t in thresholds), window_days=window_days)

    def threshold_for(self, days: int) -> Optional[int]:
        """The threshold matching ``days``, or None."""
        return days if days in self.thresholds else None


@dataclass(frozen=True)
class ExpiryReminder:
    """A reminder that a tenant's license is about to expire."""

    tenant_id: uuid.UUID
    tenant_name: str
    tenant_email: str
    key_code: str
    expires_at: datetime
    days_until_expiry: int
    renewal_url: str = ""

    @property
    def subject(self) -> str:
        if self.days_until_expiry == 0:
            return "License Expires Today"
        return f"License Expiring Soon - {self.days_until_expiry} Day(s) Remaining"


@dataclass(frozen=True)
class SuspensionNotice:
    """Notice that a tenant's service has been suspended."""

    tenant_id: uuid.UUID
    tenant_name: str
    tenant_email: str
    message: str
    renewal_url: str = ""
