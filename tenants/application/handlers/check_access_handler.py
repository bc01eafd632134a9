"""
CheckAccessHandler.

Handles the check access query: evaluates a tenant's entitlement and
applies suspension when the verdict requires it.
"""
import logging
from datetime import datetime
from typing import Callable

from django.utils import timezone

from activations.ports.tenant_license_repository import TenantLicenseRepository
from core.domain.exceptions import TenantNotFoundError
from core.domain.value_objects import AccessState
from core.metrics import access_checks_total
from tenants.application.dto.access_dto import AccessStatusDTO
from tenants.application.queries.check_access import CheckAccessQuery
from tenants.domain.access import AccessDecision, AccessEvaluator
from tenants.domain.services import SuspensionEnforcer
from tenants.ports.tenant_repository import TenantRepository

logger = logging.getLogger(__name__)


class CheckAccessHandler:
    """
    Handler for CheckAccessQuery.

    Any failure other than an unknown tenant yields a deny verdict;
    access is never granted on error.
    """

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

    async def handle(self, query: CheckAccessQuery) -> AccessStatusDTO:
        """
        Handle check access query.

        Args:
            query: CheckAccessQuery

        Returns:
            AccessStatusDTO

        Raises:
            TenantNotFoundError: If the tenant does not exist
        """
        try:
            tenant = await self.tenant_repository.find_by_id(query.tenant_id)
            if tenant is None:
                raise TenantNotFoundError()

            assignment = await self.tenant_license_repository.find_active_for_tenant(tenant.id)
            decision = self.evaluator.evaluate(tenant, assignment, self.clock())
        except TenantNotFoundError:
            raise
        except Exception:  # pylint: disable=broad-exception-caught
            logger.error("Error checking access for tenant %s", query.tenant_id, exc_info=True)
            access_checks_total.labels(state="error").inc()
            return AccessStatusDTO.from_decision(query.tenant_id, AccessDecision.denied())

        access_checks_total.labels(state=decision.state.value).inc()

        if decision.state == AccessState.SUSPENDED and not tenant.is_suspended:
            try:
                await self.enforcer.suspend(tenant.id, reason=decision.message)
            except Exception:  # pylint: disable=broad-exception-caught
                # The verdict stands; the next check retries the write
                logger.error("Failed to suspend tenant %s", tenant.id, exc_info=True)

        return AccessStatusDTO.from_decision(tenant.id, decision)
