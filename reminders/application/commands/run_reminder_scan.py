"""
RunReminderScanCommand and PurgeReminderLedgerCommand.
"""
from dataclasses import dataclass

DEFAULT_LEDGER_RETENTION_DAYS = 30


@dataclass
class RunReminderScanCommand:
    """
    Command to send due expiry reminders.

    With ``dry_run`` nothing is recorded or sent; reminders that would
    go out are counted as sent.
    """

    dry_run: bool = False


@dataclass
class PurgeReminderLedgerCommand:
    """Command to drop ledger rows of long-expired assignments."""

    retention_days: int = DEFAULT_LEDGER_RETENTION_DAYS
