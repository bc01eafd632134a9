"""
Tenant model.
"""
import uuid
from datetime import timedelta

from django.conf import settings
from django.db import models
from django.utils import timezone


def default_trial_end():
    """Trial end for a tenant created now."""
    return timezone.now() + timedelta(days=getattr(settings, "TRIAL_PERIOD_DAYS", 3))


class Tenant(models.Model):
    """
    A restaurant account, reduced to its entitlement fields.
    """

    STATUS_CHOICES = [
        ("trial", "Trial"),
        ("active", "Active"),
        ("suspended", "Suspended"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    slug = models.SlugField(max_length=100, unique=True)
    name = models.CharField(max_length=255)
    email = models.EmailField(blank=True, default="")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="trial")
    subscription_status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="trial")
    trial_ends_at = models.DateTimeField(default=default_trial_end)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "tenants"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["status"]),
        ]

    def __str__(self):
        return self.name
