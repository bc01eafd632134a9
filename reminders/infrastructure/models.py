"""
LicenseReminder model.
"""
import uuid

from django.db import models


class LicenseReminder(models.Model):
    """
    Ledger of expiry reminders already sent.

    One row per (tenant, assignment, threshold); the unique constraint
    is what makes concurrent scans send each reminder once.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tenant = models.ForeignKey("tenants.Tenant", on_delete=models.CASCADE, related_name="license_reminders")
    tenant_license = models.ForeignKey(
        "activations.TenantLicense", on_delete=models.CASCADE, related_name="reminders"
    )
    threshold_days = models.PositiveSmallIntegerField()
    sent_at = models.DateTimeField()

    class Meta:
        db_table = "license_reminders"
        ordering = ["-sent_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["tenant", "tenant_license", "threshold_days"],
                name="unique_license_reminder",
            ),
        ]

    def __str__(self):
        return f"{self.tenant_license_id} @ {self.threshold_days}d"
