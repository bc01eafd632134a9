"""
Django implementation of ReminderLedgerRepository port.
"""
import logging
import uuid
from datetime import datetime

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from reminders.infrastructure.models import LicenseReminder
from reminders.ports.reminder_ledger_repository import ReminderLedgerRepository

logger = logging.getLogger(__name__)


class DjangoReminderLedgerRepository(ReminderLedgerRepository):
    """Django ORM implementation of ReminderLedgerRepository."""

    @sync_to_async
    def record_if_absent(
        self,
        tenant_id: uuid.UUID,
        assignment_id: uuid.UUID,
        threshold_days: int,
        sent_at: datetime,
    ) -> bool:
        """
        Insert a ledger row unless one exists.

        Returns:
            True if this call inserted the row
        """
        try:
            with transaction.atomic():
                LicenseReminder.objects.create(
                    tenant_id=tenant_id,
                    tenant_license_id=assignment_id,
                    threshold_days=threshold_days,
                    sent_at=sent_at,
                )
        except IntegrityError:
            logger.debug(
                "Reminder already recorded for assignment %s at %d day(s)", assignment_id, threshold_days
            )
            return False
        return True

    @sync_to_async
    def release(self, tenant_id: uuid.UUID, assignment_id: uuid.UUID, threshold_days: int) -> None:
        LicenseReminder.objects.filter(
            tenant_id=tenant_id,
            tenant_license_id=assignment_id,
            threshold_days=threshold_days,
        ).delete()

    @sync_to_async
    def exists(self, tenant_id: uuid.UUID, assignment_id: uuid.UUID, threshold_days: int) -> bool:
        return LicenseReminder.objects.filter(
            tenant_id=tenant_id,
            tenant_license_id=assignment_id,
            threshold_days=threshold_days,
        ).exists()

    @sync_to_async
    def purge_expired_before(self, cutoff: datetime) -> int:
        deleted, _ = LicenseReminder.objects.filter(tenant_license__expires_at__lt=cutoff).delete()
        return deleted
