"""
PurgeReminderLedgerHandler.
"""
import logging
from datetime import datetime, timedelta
from typing import Callable

from django.utils import timezone

from reminders.application.commands.run_reminder_scan import PurgeReminderLedgerCommand
from reminders.ports.reminder_ledger_repository import ReminderLedgerRepository

logger = logging.getLogger(__name__)


class PurgeReminderLedgerHandler:
    """Deletes ledger rows for assignments that expired long ago."""

    def __init__(
        self,
        ledger_repository: ReminderLedgerRepository,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self.ledger_repository = ledger_repository
        self.clock = clock

    async def handle(self, command: PurgeReminderLedgerCommand) -> int:
        """
        Handle purge command.

        Returns:
            Number of ledger rows deleted
        """
        cutoff = self.clock() - timedelta(days=command.retention_days)
        deleted = await self.ledger_repository.purge_expired_before(cutoff)
        logger.info("Purged %d reminder ledger row(s) older than %s", deleted, cutoff.isoformat())
        return deleted
