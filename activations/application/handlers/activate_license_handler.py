"""
ActivateLicenseHandler.

Handles the activate license command.
"""
import logging
from datetime import datetime
from typing import Callable

from django.utils import timezone

from activations.application.commands.activate_license import ActivateLicenseCommand
from activations.application.dto.activation_dto import ActivationResultDTO
from activations.domain.assignment import TenantLicenseAssignment
from activations.domain.events import LicenseActivated
from activations.ports.tenant_license_repository import TenantLicenseRepository
from core.domain.events import EventBus
from core.domain.exceptions import (
    KeyAlreadyUsedError,
    LicenseKeyNotFoundError,
    TenantNotFoundError,
)
from core.infrastructure.events import event_bus as default_event_bus
from core.metrics import licenses_activated_total
from core.ports.unit_of_work import UnitOfWork
from licenses.domain.key_codec import KeyCodec
from licenses.ports.license_key_repository import LicenseKeyRepository
from tenants.domain.services import SuspensionEnforcer
from tenants.ports.tenant_repository import TenantRepository

logger = logging.getLogger(__name__)


class ActivateLicenseHandler:
    """
    Handler for ActivateLicenseCommand.

    Claiming the key, superseding the previous assignment, inserting
    the new one and reactivating the tenant happen in one unit of
    work. Events are published only after it commits.
    """

    def __init__(
        self,
        codec: KeyCodec,
        tenant_repository: TenantRepository,
        license_key_repository: LicenseKeyRepository,
        tenant_license_repository: TenantLicenseRepository,
        enforcer: SuspensionEnforcer,
        unit_of_work: UnitOfWork,
        event_bus: EventBus = default_event_bus,
        clock: Callable[[], datetime] = timezone.now,
    ):
        """Initialize handler with repositories and domain services."""
        self.codec = codec
        self.tenant_repository = tenant_repository
        self.license_key_repository = license_key_repository
        self.tenant_license_repository = tenant_license_repository
        self.enforcer = enforcer
        self.unit_of_work = unit_of_work
        self.event_bus = event_bus
        self.clock = clock

    async def handle(self, command: ActivateLicenseCommand) -> ActivationResultDTO:
        """
        Handle activate license command.

        Args:
            command: ActivateLicenseCommand

        Returns:
            ActivationResultDTO with the new expiry

        Raises:
            InvalidKeyFormatError: If the key is malformed
            TenantNotFoundError: If the tenant does not exist
            LicenseKeyNotFoundError: If the key does not exist
            KeyAlreadyUsedError: If the key is consumed, revoked or
                reserved for another tenant
            ConcurrentActivationError: If another activation for the
                same tenant committed first
        """
        key_code = self.codec.normalize(command.license_key)

        tenant = await self.tenant_repository.find_by_id(command.tenant_id)
        if tenant is None:
            raise TenantNotFoundError()

        license_key = await self.license_key_repository.find_by_code(key_code)
        if license_key is None:
            raise LicenseKeyNotFoundError()

        if not license_key.is_activatable_by(tenant.id):
            raise KeyAlreadyUsedError()

        now = self.clock()
        assignment = TenantLicenseAssignment.create(tenant.id, license_key, now)

        async with self.unit_of_work.atomic():
            if not await self.license_key_repository.claim(license_key.id, tenant.id, now):
                raise KeyAlreadyUsedError()

            previous = await self.tenant_license_repository.find_active_for_tenant(tenant.id)
            if previous is not None:
                await self.tenant_license_repository.end(previous.id, now)
                await self.license_key_repository.revoke(previous.license_key_id, now)

            await self.tenant_license_repository.add(assignment)
            reactivated = await self.enforcer.reactivate(tenant.id)

        logger.info(
            "Tenant %s activated license %s until %s",
            tenant.id,
            key_code,
            assignment.expires_at.isoformat(),
        )
        licenses_activated_total.inc()

        await self.event_bus.publish(
            LicenseActivated(
                aggregate_id=str(tenant.id),
                tenant_id=tenant.id,
                license_key_id=license_key.id,
                key_code=key_code,
                assignment_id=assignment.id,
                duration_days=assignment.duration_days,
                expires_at=assignment.expires_at,
                superseded_assignment_id=previous.id if previous else None,
                superseded_license_key_id=previous.license_key_id if previous else None,
            )
        )
        if reactivated:
            await self.enforcer.publish_reactivated(tenant.id)

        return ActivationResultDTO(
            tenant_id=tenant.id,
            license_key=key_code,
            duration_days=assignment.duration_days,
            activated_at=assignment.activated_at,
            expires_at=assignment.expires_at,
            message=(
                "License activated successfully! "
                f"Valid until {assignment.expires_at.date().isoformat()}"
            ),
        )
