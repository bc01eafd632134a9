"""
LicenseKey and LicenseHistory models.
"""
import uuid

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class LicenseKey(models.Model):
    """
    A single-use license key worth ``duration_days`` of service.

    Rows are never deleted so that a key code can never be issued twice.
    """

    STATUS_CHOICES = [
        ("unused", "Unused"),
        ("active", "Active"),
        ("expired", "Expired"),
        ("revoked", "Revoked"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    key_code = models.CharField(max_length=32, unique=True)
    duration_days = models.PositiveIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(365)]
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="unused")
    assigned_tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="license_keys",
    )
    created_by = models.CharField(max_length=255, blank=True, default="")
    notes = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        db_table = "license_keys"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"]),
            models.Index(fields=["assigned_tenant", "status"]),
        ]

    def __str__(self):
        return self.key_code


class LicenseHistory(models.Model):
    """
    Append-only audit trail of entitlement changes.
    """

    ACTION_CHOICES = [
        ("generated", "Generated"),
        ("activated", "Activated"),
        ("superseded", "Superseded"),
        ("revoked", "Revoked"),
        ("tenant_suspended", "Tenant Suspended"),
        ("tenant_reactivated", "Tenant Reactivated"),
        ("reminder_sent", "Reminder Sent"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tenant_id = models.UUIDField(null=True, blank=True, db_index=True)
    license_key_id = models.UUIDField(null=True, blank=True, db_index=True)
    action = models.CharField(max_length=32, choices=ACTION_CHOICES)
    details = models.JSONField(default=dict, blank=True)
    performed_by = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "license_history"
        ordering = ["-created_at"]
        verbose_name_plural = "license history"
        indexes = [
            models.Index(fields=["action"]),
            models.Index(fields=["created_at"]),
        ]

    def __str__(self):
        return f"{self.action} - {self.license_key_id or self.tenant_id}"
