"""
RunReminderScanHandler.

Sends expiry reminders for active licenses that are exactly at a
reminder threshold.
"""
import logging
from datetime import datetime, timedelta
from typing import Callable

from django.utils import timezone

from activations.ports.tenant_license_repository import (
    ExpiringAssignment,
    TenantLicenseRepository,
)
from core.domain.events import EventBus
from core.infrastructure.events import event_bus as default_event_bus
from core.metrics import license_reminders_total
from reminders.application.commands.run_reminder_scan import RunReminderScanCommand
from reminders.application.dto.reminder_dto import ReminderScanResultDTO
from reminders.domain.events import LicenseReminderSent
from reminders.domain.reminder import ExpiryReminder, ReminderPolicy, days_until_expiry
from reminders.ports.notifier import Notifier
from reminders.ports.reminder_ledger_repository import ReminderLedgerRepository

logger = logging.getLogger(__name__)


class RunReminderScanHandler:
    """
    Handler for RunReminderScanCommand.

    The ledger entry is claimed before the notifier is called, so two
    overlapping scans never both send. A failed delivery releases the
    claim and the next scan on the same day retries it.
    """

    def __init__(
        self,
        tenant_license_repository: TenantLicenseRepository,
        ledger_repository: ReminderLedgerRepository,
        notifier: Notifier,
        policy: ReminderPolicy = ReminderPolicy(),
        renewal_url: str = "",
        event_bus: EventBus = default_event_bus,
        clock: Callable[[], datetime] = timezone.now,
    ):
        """Initialize handler with repositories and the notifier."""
        self.tenant_license_repository = tenant_license_repository
        self.ledger_repository = ledger_repository
        self.notifier = notifier
        self.policy = policy
        self.renewal_url = renewal_url
        self.event_bus = event_bus
        self.clock = clock

    async def handle(self, command: RunReminderScanCommand) -> ReminderScanResultDTO:
        """
        Handle reminder scan command.

        Args:
            command: RunReminderScanCommand

        Returns:
            ReminderScanResultDTO
        """
        now = self.clock()
        result = ReminderScanResultDTO(dry_run=command.dry_run)

        expiring = await self.tenant_license_repository.list_expiring(
            now, now + timedelta(days=self.policy.window_days)
        )

        for row in expiring:
            result.total_checked += 1
            days = days_until_expiry(row.assignment.expires_at, now)
            threshold = self.policy.threshold_for(days)
            if threshold is None:
                continue
            try:
                outcome = await self._remind(row, days, threshold, now, command.dry_run)
            except Exception:  # pylint: disable=broad-exception-caught
                outcome = "failed"
                logger.error(
                    "Reminder processing failed for tenant %s", row.assignment.tenant_id, exc_info=True
                )
            setattr(result, outcome, getattr(result, outcome) + 1)
            license_reminders_total.labels(outcome=outcome).inc()

        logger.info(
            "Reminder scan finished: checked=%d sent=%d failed=%d skipped=%d dry_run=%s",
            result.total_checked,
            result.sent,
            result.failed,
            result.skipped,
            command.dry_run,
        )
        return result

    async def _remind(
        self,
        row: ExpiringAssignment,
        days: int,
        threshold: int,
        now: datetime,
        dry_run: bool,
    ) -> str:
        """Process one due reminder and return its outcome counter name."""
        assignment = row.assignment

        if dry_run:
            already = await self.ledger_repository.exists(assignment.tenant_id, assignment.id, threshold)
            return "skipped" if already else "sent"

        claimed = await self.ledger_repository.record_if_absent(
            assignment.tenant_id, assignment.id, threshold, now
        )
        if not claimed:
            return "skipped"

        reminder = ExpiryReminder(
            tenant_id=assignment.tenant_id,
            tenant_name=row.tenant_name,
            tenant_email=row.tenant_email,
            key_code=assignment.key_code,
            expires_at=assignment.expires_at,
            days_until_expiry=days,
            renewal_url=self.renewal_url,
        )
        try:
            await self.notifier.send_expiry_reminder(reminder)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.error(
                "Failed to send %d-day reminder to tenant %s",
                threshold,
                assignment.tenant_id,
                exc_info=True,
            )
            await self.ledger_repository.release(assignment.tenant_id, assignment.id, threshold)
            return "failed"

        await self.event_bus.publish(
            LicenseReminderSent(
                aggregate_id=str(assignment.tenant_id),
                tenant_id=assignment.tenant_id,
                assignment_id=assignment.id,
                key_code=assignment.key_code,
                threshold_days=threshold,
            )
        )
        return "sent"
