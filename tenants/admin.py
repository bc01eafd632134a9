"""
Django admin configuration for tenants app.
"""

from django.contrib import admin
from django.utils.html import format_html

from tenants.infrastructure.models import Tenant


@admin.register(Tenant)
class TenantAdmin(admin.ModelAdmin):
    """Admin interface for Tenant model."""

    list_display = ["name", "slug", "email", "status_display", "trial_ends_at", "created_at"]
    list_filter = ["status", "subscription_status", "created_at"]
    search_fields = ["name", "slug", "email"]
    readonly_fields = ["id", "created_at", "updated_at"]
    prepopulated_fields = {"slug": ("name",)}

    def status_display(self, obj):
        """Display status with color coding."""
        colors = {"trial": "blue", "active": "green", "suspended": "red"}
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            colors.get(obj.status, "black"),
            obj.status.upper(),
        )

    status_display.short_description = "Status"
