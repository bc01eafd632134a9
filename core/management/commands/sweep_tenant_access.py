"""
Django management command to re-evaluate tenant access.

Marks assignments past their grace period as expired and suspends
tenants left without a trial or license.
"""
from asgiref.sync import async_to_sync

from django.core.management.base import BaseCommand

from core import container
from tenants.application.commands.sweep_tenant_access import SweepTenantAccessCommand


class Command(BaseCommand):
    """Command to sweep tenant access."""

    help = "Expire lapsed license assignments and suspend unentitled tenants"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - don't actually update tenants or assignments",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        dry_run = options["dry_run"]
        if dry_run:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("DRY RUN - No changes will be made"))

        handler = container.sweep_tenant_access_handler()
        result = async_to_sync(handler.handle)(SweepTenantAccessCommand(dry_run=dry_run))

        self.stdout.write(f"Checked {result.checked} tenant(s)")
        self.stdout.write(f"Expired {result.expired_assignments} assignment(s)")
        summary = f"Suspended {result.suspended} tenant(s), {result.failed} failure(s)"
        # pylint: disable=no-member
        if result.failed:
            self.stdout.write(self.style.WARNING(summary))
        else:
            self.stdout.write(self.style.SUCCESS(summary))
