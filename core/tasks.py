"""
Celery tasks for background processing.

Periodic entitlement jobs: expiry reminders, the access sweep and
ledger cleanup. Scheduled by Celery beat (see
``EntitlementService.celery``).
"""
import logging
from dataclasses import asdict

from asgiref.sync import async_to_sync

from EntitlementService.celery import app

from core import container
from reminders.application.commands.run_reminder_scan import (
    PurgeReminderLedgerCommand,
    RunReminderScanCommand,
)
from tenants.application.commands.sweep_tenant_access import SweepTenantAccessCommand

logger = logging.getLogger(__name__)


@app.task(bind=True, max_retries=3)
def run_license_reminder_scan(self):
    """
    Send due expiry reminders.

    Returns:
        Scan counts as a dict
    """
    try:
        result = async_to_sync(container.run_reminder_scan_handler().handle)(RunReminderScanCommand())
    except Exception as exc:
        logger.error("Reminder scan failed: %s", exc, exc_info=True)
        raise self.retry(exc=exc, countdown=60 * 2 ** self.request.retries)
    return asdict(result)


@app.task(bind=True, max_retries=3)
def sweep_tenant_access(self):
    """
    Expire lapsed assignments and suspend unentitled tenants.

    Returns:
        Sweep counts as a dict
    """
    try:
        result = async_to_sync(container.sweep_tenant_access_handler().handle)(SweepTenantAccessCommand())
    except Exception as exc:
        logger.error("Access sweep failed: %s", exc, exc_info=True)
        raise self.retry(exc=exc, countdown=60 * 2 ** self.request.retries)
    return asdict(result)


@app.task
def purge_reminder_ledger():
    """Delete reminder ledger rows of long-expired licenses."""
    return async_to_sync(container.purge_reminder_ledger_handler().handle)(PurgeReminderLedgerCommand())
