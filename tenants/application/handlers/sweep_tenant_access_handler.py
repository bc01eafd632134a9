"""
SweepTenantAccessHandler.

Periodic pass over all tenants: expires assignments that are past
their grace window and suspends tenants left without entitlement.
License keys are left untouched.
"""
import logging
from datetime import datetime, timedelta
from typing import Callable

from django.utils import timezone

from activations.ports.tenant_license_repository import TenantLicenseRepository
from core.domain.value_objects import AccessState
from tenants.application.commands.sweep_tenant_access import SweepTenantAccessCommand
from tenants.application.dto.access_dto import SweepResultDTO
from tenants.domain.access import AccessEvaluator
from tenants.domain.services import SuspensionEnforcer
from tenants.ports.tenant_repository import TenantRepository

logger = logging.getLogger(__name__)


class SweepTenantAccessHandler:
    """Handler for SweepTenantAccessCommand."""

    def __init__(
        self,
        tenant_repository: TenantRepository,
        tenant_license_repository: TenantLicenseRepository,
        evaluator: AccessEvaluator,
        enforcer: SuspensionEnforcer,
        clock: Callable[[], datetime] = timezone.now,
    ):
        """Initialize handler with repositories and domain services."""
        self.tenant_repository = tenant_repository
        self.tenant_license_repository = tenant_license_repository
        self.evaluator = evaluator
        self.enforcer = enforcer
        self.clock = clock

    async def handle(self, command: SweepTenantAccessCommand) -> SweepResultDTO:
        """
        Handle sweep command.

        A failure for one assignment or tenant is logged and counted;
        the sweep continues with the next one.

        Args:
            command: SweepTenantAccessCommand

        Returns:
            SweepResultDTO
        """
        now = self.clock()
        result = SweepResultDTO(dry_run=command.dry_run)

        lapsed = await self.tenant_license_repository.list_active_expired_before(
            now - self.evaluator.grace_period
        )
        for assignment in lapsed:
            if command.dry_run:
                result.expired_assignments += 1
                continue
            try:
                if await self.tenant_license_repository.end(assignment.id, now):
                    result.expired_assignments += 1
            except Exception:  # pylint: disable=broad-exception-caught
                result.failed += 1
                logger.error("Failed to expire assignment %s", assignment.id, exc_info=True)

        for tenant in await self.tenant_repository.list_unsuspended():
            result.checked += 1
            try:
                assignment = await self.tenant_license_repository.find_active_for_tenant(tenant.id)
                decision = self.evaluator.evaluate(tenant, assignment, now)
                if decision.state != AccessState.SUSPENDED:
                    continue
                if command.dry_run:
                    result.suspended += 1
                elif await self.enforcer.suspend(tenant.id, reason=decision.message):
                    result.suspended += 1
            except Exception:  # pylint: disable=broad-exception-caught
                result.failed += 1
                logger.error("Failed to sweep tenant %s", tenant.id, exc_info=True)

        logger.info(
            "Access sweep finished: checked=%d suspended=%d expired_assignments=%d failed=%d dry_run=%s",
            result.checked,
            result.suspended,
            result.expired_assignments,
            result.failed,
            command.dry_run,
        )
        return result
