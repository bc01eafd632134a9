"""
Tenant domain entity.

Only the fields that decide entitlement are modelled here; menus,
orders and the rest of a restaurant account live elsewhere.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from core.domain.value_objects import TenantStatus

DEFAULT_TRIAL_PERIOD_DAYS = 3


@dataclass(frozen=True)
class Tenant:
    """
    Tenant domain entity.

    ``trial_ends_at`` is set once at creation and never changes.
    ``subscription_status`` mirrors ``status``.
    """

    id: uuid.UUID
    slug: str
    name: str
    email: str
    status: TenantStatus
    subscription_status: TenantStatus
    trial_ends_at: datetime
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate tenant entity."""
        if not self.slug:
            raise ValueError("Tenant slug cannot be empty")
        if not self.name:
            raise ValueError("Tenant name cannot be empty")

    @classmethod
    def create(
        cls,
        slug: str,
        name: str,
        email: str,
        now: datetime,
        trial_period_days: int = DEFAULT_TRIAL_PERIOD_DAYS,
        tenant_id: Optional[uuid.UUID] = None,
    ) -> "Tenant":
        """
        Create a new tenant in its trial window.

        Args:
            slug: URL slug
            name: Display name
            email: Contact address for reminders
            now: Creation timestamp
            trial_period_days: Length of the trial
            tenant_id: Optional UUID (generated if not provided)

        Returns:
            Tenant entity instance
        """
        return cls(
            id=tenant_id or uuid.uuid4(),
            slug=slug,
            name=name,
            email=email,
            status=TenantStatus.TRIAL,
            subscription_status=TenantStatus.TRIAL,
            trial_ends_at=now + timedelta(days=trial_period_days),
            created_at=now,
            updated_at=now,
        )

    @property
    def is_suspended(self) -> bool:
        return self.status == TenantStatus.SUSPENDED

    def in_trial(self, now: datetime) -> bool:
        """Whether the tenant is still in its trial window."""
        return self.status == TenantStatus.TRIAL and now < self.trial_ends_at
