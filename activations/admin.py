"""
Django admin configuration for activations app.
"""

from django.contrib import admin
from django.utils import timezone
from django.utils.html import format_html

from activations.infrastructure.models import TenantLicense


@admin.register(TenantLicense)
class TenantLicenseAdmin(admin.ModelAdmin):
    """Admin interface for TenantLicense model."""

    list_display = [
        "tenant",
        "key_code",
        "duration_days",
        "status",
        "activated_at",
        "expires_at_display",
    ]
    list_filter = ["status", "activated_at", "expires_at"]
    search_fields = ["key_code", "tenant__name", "tenant__slug", "tenant__email"]
    readonly_fields = ["id", "key_code", "activated_at", "ended_at", "created_at", "updated_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "tenant", "license_key", "key_code", "status"),
            },
        ),
        (
            "Validity",
            {
                "fields": ("duration_days", "activated_at", "expires_at", "ended_at"),
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

    def expires_at_display(self, obj):
        """Display expiry, highlighting lapsed licenses."""
        if obj.expires_at <= timezone.now():
            return format_html('<span style="color: red;">{}</span>', obj.expires_at)
        return obj.expires_at

    expires_at_display.short_description = "Expires At"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("tenant", "license_key")
