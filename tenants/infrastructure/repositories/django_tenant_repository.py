"""
Django implementation of TenantRepository port.
"""
import uuid
from datetime import datetime
from typing import List, Optional

from asgiref.sync import sync_to_async

from core.domain.value_objects import TenantStatus
from tenants.domain.tenant import Tenant
from tenants.infrastructure.models import Tenant as TenantModel
from tenants.ports.tenant_repository import TenantRepository


class DjangoTenantRepository(TenantRepository):
    """Django ORM implementation of TenantRepository."""

    def _to_domain(self, model: TenantModel) -> Tenant:
        return Tenant(
            id=model.id,
            slug=model.slug,
            name=model.name,
            email=model.email,
            status=TenantStatus(model.status),
            subscription_status=TenantStatus(model.subscription_status),
            trial_ends_at=model.trial_ends_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @sync_to_async
    def find_by_id(self, tenant_id: uuid.UUID) -> Optional[Tenant]:
        try:
            return self._to_domain(TenantModel.objects.get(id=tenant_id))
        except TenantModel.DoesNotExist:
            return None

    @sync_to_async
    def exists(self, tenant_id: uuid.UUID) -> bool:
        return TenantModel.objects.filter(id=tenant_id).exists()

    @sync_to_async
    def set_status(self, tenant_id: uuid.UUID, status: TenantStatus, now: datetime) -> bool:
        """
        Conditionally move a tenant to ``status``.

        Returns:
            True if exactly one row was updated
        """
        updated = (
            TenantModel.objects.filter(id=tenant_id)
            .exclude(status=status.value)
            .update(status=status.value, subscription_status=status.value, updated_at=now)
        )
        return updated == 1

    @sync_to_async
    def list_unsuspended(self) -> List[Tenant]:
        models = TenantModel.objects.exclude(status=TenantStatus.SUSPENDED.value).order_by("created_at")
        return [self._to_domain(model) for model in models]
