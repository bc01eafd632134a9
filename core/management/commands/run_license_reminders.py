"""
Django management command to send license expiry reminders.

This command should be run daily (e.g., via cron or Celery beat).
"""
from asgiref.sync import async_to_sync

from django.core.management.base import BaseCommand

from core import container
from reminders.application.commands.run_reminder_scan import RunReminderScanCommand


class Command(BaseCommand):
    """Command to send due license expiry reminders."""

    help = "Send license expiry reminders at 7, 3, 1 and 0 days before expiry"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - report due reminders without sending or recording them",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        dry_run = options["dry_run"]
        if dry_run:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("DRY RUN - No reminders will be sent"))

        handler = container.run_reminder_scan_handler()
        result = async_to_sync(handler.handle)(RunReminderScanCommand(dry_run=dry_run))

        self.stdout.write(f"Checked {result.total_checked} expiring license(s)")
        summary = f"Sent {result.sent}, skipped {result.skipped}, failed {result.failed}"
        # pylint: disable=no-member
        if result.failed:
            self.stdout.write(self.style.WARNING(summary))
        else:
            self.stdout.write(self.style.SUCCESS(summary))
