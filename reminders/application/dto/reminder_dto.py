"""
Reminder DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime


@dataclass
class ReminderScanResultDTO:
    """Counts from one reminder scan."""

    total_checked: int = 0
    sent: int = 0
    failed: int = 0
    skipped: int = 0
    dry_run: bool = False


@dataclass
class ExpiringLicenseDTO:
    """An active license close to expiry."""

    tenant_id: uuid.UUID
    tenant_name: str
    tenant_email: str
    key_code: str
    expires_at: datetime
    days_until_expiry: int
