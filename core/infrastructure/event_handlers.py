"""
Event handlers for domain events.

These handlers process domain events for side effects: the license
history audit trail, access status cache invalidation and suspension
notices.
"""
import logging
from typing import Any, Dict, List

from asgiref.sync import sync_to_async

from activations.domain.events import LicenseActivated
from core.domain.events import DomainEvent, EventBus, EventHandler
from licenses.domain.events import LicenseKeyRevoked, LicenseKeysGenerated
from reminders.domain.events import LicenseReminderSent
from reminders.domain.reminder import SuspensionNotice
from reminders.ports.notifier import Notifier
from tenants.application.services.access_cache_service import AccessStatusCacheService
from tenants.domain.events import TenantReactivated, TenantSuspended
from tenants.ports.tenant_repository import TenantRepository

logger = logging.getLogger(__name__)


def history_rows(event: DomainEvent) -> List[Dict[str, Any]]:
    """
    Translate a domain event into license history rows.

    Args:
        event: Domain event

    Returns:
        Field dicts for ``LicenseHistory``; empty for unrelated events
    """
    if isinstance(event, LicenseKeysGenerated):
        return [
            {
                "tenant_id": event.assigned_tenant_id,
                "license_key_id": key_id,
                "action": "generated",
                "details": {"key_code": code, "duration_days": event.duration_days},
                "performed_by": event.created_by,
            }
            for key_id, code in zip(event.license_key_ids, event.key_codes)
        ]

    if isinstance(event, LicenseActivated):
        rows = [
            {
                "tenant_id": event.tenant_id,
                "license_key_id": event.license_key_id,
                "action": "activated",
                "details": {
                    "key_code": event.key_code,
                    "duration_days": event.duration_days,
                    "expires_at": event.expires_at.isoformat(),
                },
            }
        ]
        if event.superseded_assignment_id:
            rows.append(
                {
                    "tenant_id": event.tenant_id,
                    "license_key_id": event.superseded_license_key_id,
                    "action": "superseded",
                    "details": {
                        "assignment_id": str(event.superseded_assignment_id),
                        "superseded_by": event.key_code,
                    },
                }
            )
        return rows

    if isinstance(event, LicenseKeyRevoked):
        details = {"key_code": event.key_code}
        if event.ended_assignment_id:
            details["ended_assignment_id"] = str(event.ended_assignment_id)
        return [
            {
                "tenant_id": event.tenant_id,
                "license_key_id": event.license_key_id,
                "action": "revoked",
                "details": details,
            }
        ]

    if isinstance(event, TenantSuspended):
        return [{"tenant_id": event.tenant_id, "action": "tenant_suspended", "details": {"reason": event.reason}}]

    if isinstance(event, TenantReactivated):
        return [{"tenant_id": event.tenant_id, "action": "tenant_reactivated", "details": {}}]

    if isinstance(event, LicenseReminderSent):
        return [
            {
                "tenant_id": event.tenant_id,
                "action": "reminder_sent",
                "details": {
                    "key_code": event.key_code,
                    "assignment_id": str(event.assignment_id),
                    "threshold_days": event.threshold_days,
                },
            }
        ]

    return []


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Writes every entitlement change to the license history table.
    """

    @staticmethod
    @sync_to_async
    def _write(rows: List[Dict[str, Any]]) -> None:
        from licenses.infrastructure.models import LicenseHistory

        LicenseHistory.objects.bulk_create([LicenseHistory(**row) for row in rows])

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra=event.to_dict(),
        )
        rows = history_rows(event)
        if rows:
            await self._write(rows)


class AccessCacheInvalidationHandler(EventHandler):
    """
    Event handler for cache invalidation.

    Drops a tenant's cached access verdict whenever its entitlement
    changes.
    """

    def __init__(self, cache_service: AccessStatusCacheService):
        self.cache_service = cache_service

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for cache invalidation.

        Args:
            event: Domain event
        """
        tenant_id = getattr(event, "tenant_id", None)
        if tenant_id is None:
            return
        await self.cache_service.invalidate(tenant_id)
        logger.info("Access cache invalidated for tenant %s (event: %s)", tenant_id, event.event_type)


class SuspensionNoticeHandler(EventHandler):
    """Notifies a tenant that its service was suspended."""

    def __init__(self, tenant_repository: TenantRepository, notifier: Notifier, renewal_url: str = ""):
        self.tenant_repository = tenant_repository
        self.notifier = notifier
        self.renewal_url = renewal_url

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle TenantSuspended.

        Args:
            event: Domain event
        """
        if not isinstance(event, TenantSuspended):
            return
        tenant = await self.tenant_repository.find_by_id(event.tenant_id)
        if tenant is None:
            logger.warning("Suspended tenant %s no longer exists", event.tenant_id)
            return
        await self.notifier.send_suspension_notice(
            SuspensionNotice(
                tenant_id=tenant.id,
                tenant_name=tenant.name,
                tenant_email=tenant.email,
                message=event.reason or "Trial expired and no valid license found. Service suspended.",
                renewal_url=self.renewal_url,
            )
        )


def register_event_handlers(bus: EventBus = None) -> None:
    """Register all event handlers with the event bus."""
    from core import container
    from core.infrastructure.events import event_bus

    bus = bus or event_bus

    audit_handler = AuditLogEventHandler()
    cache_handler = AccessCacheInvalidationHandler(container.access_cache_service())
    notice_handler = SuspensionNoticeHandler(
        container.tenant_repository(), container.notifier(), container.renewal_url()
    )

    for event_type in (
        LicenseKeysGenerated,
        LicenseActivated,
        LicenseKeyRevoked,
        TenantSuspended,
        TenantReactivated,
        LicenseReminderSent,
    ):
        bus.subscribe(event_type, audit_handler)

    for event_type in (LicenseActivated, LicenseKeyRevoked, TenantSuspended, TenantReactivated):
        bus.subscribe(event_type, cache_handler)

    bus.subscribe(TenantSuspended, notice_handler)

    logger.info("Event handlers registered")
