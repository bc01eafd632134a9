"""
RevokeLicenseKeyHandler.

Handles the revoke license key command.
"""
import logging
import uuid
from datetime import datetime
from typing import Callable, Optional

from django.utils import timezone

from activations.ports.tenant_license_repository import TenantLicenseRepository
from core.domain.events import EventBus
from core.domain.exceptions import LicenseKeyNotFoundError
from core.infrastructure.events import event_bus as default_event_bus
from core.metrics import license_keys_revoked_total
from core.ports.unit_of_work import UnitOfWork
from licenses.application.commands.revoke_license_key import RevokeLicenseKeyCommand
from licenses.application.dto.license_key_dto import RevokeLicenseKeyResponseDTO
from licenses.domain.events import LicenseKeyRevoked
from licenses.ports.license_key_repository import LicenseKeyRepository

logger = logging.getLogger(__name__)


class RevokeLicenseKeyHandler:
    """
    Handler for RevokeLicenseKeyCommand.

    Revoking an active key also ends the assignment it created. The
    tenant is left as is; its next access check decides whether it is
    still entitled.
    """

    def __init__(
        self,
        license_key_repository: LicenseKeyRepository,
        tenant_license_repository: TenantLicenseRepository,
        unit_of_work: UnitOfWork,
        event_bus: EventBus = default_event_bus,
        clock: Callable[[], datetime] = timezone.now,
    ):
        """Initialize handler with repositories."""
        self.license_key_repository = license_key_repository
        self.tenant_license_repository = tenant_license_repository
        self.unit_of_work = unit_of_work
        self.event_bus = event_bus
        self.clock = clock

    async def handle(self, command: RevokeLicenseKeyCommand) -> RevokeLicenseKeyResponseDTO:
        """
        Handle revoke license key command.

        Args:
            command: RevokeLicenseKeyCommand

        Returns:
            RevokeLicenseKeyResponseDTO

        Raises:
            LicenseKeyNotFoundError: If the key does not exist
        """
        license_key = await self.license_key_repository.find_by_id(command.license_key_id)
        if license_key is None:
            raise LicenseKeyNotFoundError()

        if license_key.is_revoked:
            return RevokeLicenseKeyResponseDTO(
                id=license_key.id,
                key_code=license_key.key_code,
                status=license_key.status.value,
                already_revoked=True,
            )

        now = self.clock()
        ended_assignment_id: Optional[uuid.UUID] = None
        async with self.unit_of_work.atomic():
            revoked = await self.license_key_repository.revoke(license_key.id, now)
            assignment = await self.tenant_license_repository.find_active_for_license_key(license_key.id)
            if assignment is not None and await self.tenant_license_repository.end(assignment.id, now):
                ended_assignment_id = assignment.id

        if not revoked:
            # Lost a race with another revocation
            return RevokeLicenseKeyResponseDTO(
                id=license_key.id,
                key_code=license_key.key_code,
                status="revoked",
                already_revoked=True,
            )

        logger.info(
            "License key %s revoked by %s", license_key.key_code, command.revoked_by or "unknown"
        )
        license_keys_revoked_total.inc()

        await self.event_bus.publish(
            LicenseKeyRevoked(
                aggregate_id=str(license_key.id),
                license_key_id=license_key.id,
                key_code=license_key.key_code,
                tenant_id=license_key.assigned_tenant_id,
                ended_assignment_id=ended_assignment_id,
            )
        )

        return RevokeLicenseKeyResponseDTO(
            id=license_key.id,
            key_code=license_key.key_code,
            status="revoked",
            already_revoked=False,
            ended_assignment_id=ended_assignment_id,
        )
