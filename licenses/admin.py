"""
Django admin configuration for licenses app.
"""
import json

from django.contrib import admin
from django.utils.html import format_html

from licenses.infrastructure.models import LicenseHistory, LicenseKey


@admin.register(LicenseKey)
class LicenseKeyAdmin(admin.ModelAdmin):
    """Admin interface for LicenseKey model."""

    list_display = [
        "key_code",
        "duration_days",
        "status_display",
        "assigned_tenant",
        "created_by",
        "created_at",
    ]
    list_filter = ["status", "duration_days", "created_at"]
    search_fields = ["key_code", "assigned_tenant__name", "assigned_tenant__slug", "created_by"]
    readonly_fields = ["id", "key_code", "created_at", "updated_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "key_code", "duration_days", "status"),
            },
        ),
        (
            "Assignment",
            {
                "fields": ("assigned_tenant", "created_by", "notes"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def status_display(self, obj):
        """Display status with color coding."""
        colors = {
            "unused": "blue",
            "active": "green",
            "expired": "gray",
            "revoked": "red",
        }
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            colors.get(obj.status, "black"),
            obj.status.upper(),
        )

    status_display.short_description = "Status"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("assigned_tenant")


@admin.register(LicenseHistory)
class LicenseHistoryAdmin(admin.ModelAdmin):
    """Admin interface for LicenseHistory model."""

    list_display = ["action", "tenant_id", "license_key_id", "performed_by", "created_at"]
    list_filter = ["action", "created_at"]
    search_fields = ["tenant_id", "license_key_id", "performed_by"]
    readonly_fields = ["id", "created_at", "details_display"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "action", "tenant_id", "license_key_id"),
            },
        ),
        (
            "Details",
            {
                "fields": ("performed_by", "details_display", "created_at"),
            },
        ),
    )

    def details_display(self, obj):
        """Display details in a formatted way."""
        if obj.details:
            return format_html(
                '<pre style="background: #f5f5f5; padding: 10px; '
                'border-radius: 4px; overflow-x: auto;">{}</pre>',
                json.dumps(obj.details, indent=2),
            )
        return "-"

    details_display.short_description = "Details"

    def has_add_permission(self, request):
        """History is read-only."""
        return False

    def has_change_permission(self, request, obj=None):
        """History is read-only."""
        return False

    def has_delete_permission(self, request, obj=None):
        """History should not be deleted."""
        return False
