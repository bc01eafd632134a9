"""
Django admin configuration for reminders app.
"""

from django.contrib import admin

from reminders.infrastructure.models import LicenseReminder


@admin.register(LicenseReminder)
class LicenseReminderAdmin(admin.ModelAdmin):
    """Admin interface for the reminder ledger."""

    list_display = ["tenant", "tenant_license", "threshold_days", "sent_at"]
    list_filter = ["threshold_days", "sent_at"]
    search_fields = ["tenant__name", "tenant__slug", "tenant_license__key_code"]
    readonly_fields = ["id", "tenant", "tenant_license", "threshold_days", "sent_at"]

    def has_add_permission(self, request):
        """Reminders are recorded by the scan only."""
        return False
