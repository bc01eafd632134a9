"""
GenerateLicenseKeysHandler.

Handles the generate license keys command.
"""
import logging
from datetime import datetime
from typing import Callable

from django.utils import timezone

from core.domain.events import EventBus
from core.domain.exceptions import InvalidQuantityError, TenantNotFoundError
from core.infrastructure.events import event_bus as default_event_bus
from core.metrics import license_keys_generated_total
from licenses.application.commands.generate_license_keys import GenerateLicenseKeysCommand
from licenses.application.dto.license_key_dto import (
    GenerateLicenseKeysResponseDTO,
    LicenseKeyDTO,
)
from licenses.domain.events import LicenseKeysGenerated
from licenses.domain.license_key import LicenseKey, validate_duration
from licenses.domain.services import LicenseKeyGenerator
from licenses.ports.license_key_repository import LicenseKeyRepository
from tenants.ports.tenant_repository import TenantRepository

logger = logging.getLogger(__name__)

MIN_QUANTITY = 1
MAX_QUANTITY = 100


class GenerateLicenseKeysHandler:
    """Handler for GenerateLicenseKeysCommand."""

    def __init__(
        self,
        license_key_repository: LicenseKeyRepository,
        tenant_repository: TenantRepository,
        generator: LicenseKeyGenerator,
        event_bus: EventBus = default_event_bus,
        clock: Callable[[], datetime] = timezone.now,
    ):
        """Initialize handler with repositories."""
        self.license_key_repository = license_key_repository
        self.tenant_repository = tenant_repository
        self.generator = generator
        self.event_bus = event_bus
        self.clock = clock

    async def handle(self, command: GenerateLicenseKeysCommand) -> GenerateLicenseKeysResponseDTO:
        """
        Handle generate license keys command.

        Args:
            command: GenerateLicenseKeysCommand

        Returns:
            GenerateLicenseKeysResponseDTO with the new keys

        Raises:
            InvalidDurationError: If duration is outside 1..365 days
            InvalidQuantityError: If quantity is outside 1..100
            TenantNotFoundError: If the reserving tenant does not exist
            KeyGenerationExhaustedError: If a unique code could not be drawn
            StorageError: If the batch could not be persisted
        """
        validate_duration(command.duration_days)
        if (
            isinstance(command.quantity, bool)
            or not isinstance(command.quantity, int)
            or not MIN_QUANTITY <= command.quantity <= MAX_QUANTITY
        ):
            raise InvalidQuantityError()

        if command.assigned_tenant_id is not None:
            if not await self.tenant_repository.exists(command.assigned_tenant_id):
                raise TenantNotFoundError()

        codes = await self.generator.generate_batch(command.quantity)

        now = self.clock()
        keys = [
            LicenseKey.create(
                key_code=code,
                duration_days=command.duration_days,
                now=now,
                created_by=command.created_by,
                assigned_tenant_id=command.assigned_tenant_id,
                notes=command.notes,
            )
            for code in codes
        ]

        saved = await self.license_key_repository.save_batch(keys)

        logger.info(
            "Generated %d license key(s) of %d day(s) by %s",
            len(saved),
            command.duration_days,
            command.created_by or "unknown",
        )
        license_keys_generated_total.labels(duration_days=str(command.duration_days)).inc(len(saved))

        await self.event_bus.publish(
            LicenseKeysGenerated(
                aggregate_id=str(saved[0].id),
                license_key_ids=tuple(key.id for key in saved),
                key_codes=tuple(key.key_code for key in saved),
                duration_days=command.duration_days,
                created_by=command.created_by,
                assigned_tenant_id=command.assigned_tenant_id,
            )
        )

        return GenerateLicenseKeysResponseDTO(keys=[LicenseKeyDTO.from_entity(key) for key in saved])
