"""
TenantLicense model.
"""
import uuid

from django.db import models
from django.db.models import Q


class TenantLicense(models.Model):
    """
    A license key activated by a tenant and the window it grants.

    At most one row per tenant is ``active``; superseded, revoked and
    swept assignments stay as ``expired`` history.
    """

    STATUS_CHOICES = [
        ("active", "Active"),
        ("expired", "Expired"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tenant = models.ForeignKey("tenants.Tenant", on_delete=models.CASCADE, related_name="licenses")
    license_key = models.ForeignKey(
        "licenses.LicenseKey", on_delete=models.PROTECT, related_name="assignments"
    )
    key_code = models.CharField(max_length=32)
    duration_days = models.PositiveIntegerField()
    activated_at = models.DateTimeField()
    expires_at = models.DateTimeField(db_index=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="active")
    ended_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "tenant_licenses"
        ordering = ["-activated_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["tenant"],
                condition=Q(status="active"),
                name="one_active_license_per_tenant",
            ),
        ]
        indexes = [
            models.Index(fields=["tenant", "status"]),
            models.Index(fields=["status", "expires_at"]),
        ]

    def __str__(self):
        return f"{self.key_code} @ {self.tenant_id}"
