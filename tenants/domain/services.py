"""
Tenant domain services.
"""
import logging
import uuid
from datetime import datetime
from typing import Callable

from django.utils import timezone

from core.domain.events import EventBus
from core.domain.value_objects import TenantStatus
from core.metrics import tenants_suspended_total
from tenants.domain.events import TenantReactivated, TenantSuspended
from tenants.ports.tenant_repository import TenantRepository

logger = logging.getLogger(__name__)


class SuspensionEnforcer:
    """
    Applies suspension and reactivation to the tenant record.

    Both operations are idempotent conditional updates; events are
    only published on a real transition.
    """

    def __init__(
        self,
        tenant_repository: TenantRepository,
        event_bus: EventBus,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self.tenant_repository = tenant_repository
        self.event_bus = event_bus
        self.clock = clock

    async def suspend(self, tenant_id: uuid.UUID, reason: str = "") -> bool:
        """
        Suspend a tenant.

        Args:
            tenant_id: Tenant UUID
            reason: Free-form reason recorded on the event

        Returns:
            True if the tenant was moved to suspended, False if it
            already was
        """
        changed = await self.tenant_repository.set_status(
            tenant_id, TenantStatus.SUSPENDED, self.clock()
        )
        if not changed:
            logger.debug("Tenant %s already suspended", tenant_id)
            return False

        logger.warning("Tenant %s suspended: %s", tenant_id, reason or "no valid entitlement")
        tenants_suspended_total.inc()
        await self.event_bus.publish(
            TenantSuspended(aggregate_id=str(tenant_id), tenant_id=tenant_id, reason=reason)
        )
        return True

    async def reactivate(self, tenant_id: uuid.UUID) -> bool:
        """
        Set a tenant's status to active.

        Only the activation flow calls this. The caller publishes the
        returned transition once its transaction has committed.

        Returns:
            True if the status changed
        """
        changed = await self.tenant_repository.set_status(
            tenant_id, TenantStatus.ACTIVE, self.clock()
        )
        if changed:
            logger.info("Tenant %s reactivated", tenant_id)
        return changed

    async def publish_reactivated(self, tenant_id: uuid.UUID) -> None:
        await self.event_bus.publish(
            TenantReactivated(aggregate_id=str(tenant_id), tenant_id=tenant_id)
        )
