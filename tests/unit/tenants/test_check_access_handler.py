"""
Unit tests for CheckAccessHandler.
"""
import uuid
from datetime import timedelta

import pytest

from activations.application.commands.activate_license import ActivateLicenseCommand
from core.domain.exceptions import TenantNotFoundError
from core.domain.value_objects import TenantStatus
from tenants.application.handlers.check_access_handler import CheckAccessHandler
from tenants.application.queries.check_access import CheckAccessQuery
from tenants.domain.access import ERROR_MESSAGE
from tenants.domain.events import TenantReactivated, TenantSuspended
from tests.fakes import NOW, make_assignment


@pytest.fixture
def handler(tenant_repository, tenant_license_repository, evaluator, enforcer, clock):
    return CheckAccessHandler(tenant_repository, tenant_license_repository, evaluator, enforcer, clock)


@pytest.mark.asyncio
class TestCheckAccessHandler:
    """Tests for CheckAccessHandler."""

    async def test_trial_tenant(self, handler, make_tenant):
        """Test a fresh tenant is in trial."""
        tenant = make_tenant()
        result = await handler.handle(CheckAccessQuery(tenant_id=tenant.id))
        assert result.status == "trial"
        assert result.is_valid
        assert result.days_remaining == 3

    async def test_licensed_tenant(self, handler, make_tenant, make_key, tenant_license_repository):
        """Test an active license grants access."""
        tenant = make_tenant(created_at=NOW - timedelta(days=10), status=TenantStatus.ACTIVE)
        await tenant_license_repository.add(make_assignment(tenant.id, make_key(duration_days=30), NOW))

        result = await handler.handle(CheckAccessQuery(tenant_id=tenant.id))

        assert result.status == "licensed"
        assert result.days_remaining == 30
        assert result.expires_at == NOW + timedelta(days=30)

    async def test_expired_trial_suspends(self, handler, make_tenant, tenant_repository, event_bus):
        """Test a tenant with nothing left is suspended as a side effect."""
        tenant = make_tenant(created_at=NOW - timedelta(days=4))

        result = await handler.handle(CheckAccessQuery(tenant_id=tenant.id))

        assert result.status == "suspended"
        assert not result.is_valid
        assert (await tenant_repository.find_by_id(tenant.id)).status == TenantStatus.SUSPENDED
        assert len(event_bus.of_type(TenantSuspended)) == 1

    async def test_already_suspended_tenant_is_not_resuspended(self, handler, make_tenant, event_bus):
        """Test repeated checks do not publish again."""
        tenant = make_tenant(created_at=NOW - timedelta(days=4), status=TenantStatus.SUSPENDED)
        result = await handler.handle(CheckAccessQuery(tenant_id=tenant.id))
        assert result.status == "suspended"
        assert event_bus.events == []

    async def test_unknown_tenant(self, handler):
        """Test TenantNotFoundError propagates."""
        with pytest.raises(TenantNotFoundError):
            await handler.handle(CheckAccessQuery(tenant_id=uuid.uuid4()))

    async def test_storage_failure_denies(self, handler, make_tenant, tenant_repository):
        """Test a lookup failure yields a deny verdict instead of an error."""
        tenant = make_tenant()
        tenant_repository.fail_on_find = True

        result = await handler.handle(CheckAccessQuery(tenant_id=tenant.id))

        assert result.status == "suspended"
        assert not result.is_valid
        assert result.message == ERROR_MESSAGE

    async def test_suspend_failure_keeps_verdict(self, handler, make_tenant, tenant_repository):
        """Test the verdict is returned even if the suspension write fails."""
        tenant = make_tenant(created_at=NOW - timedelta(days=4))
        tenant_repository.fail_on_set_status = True

        result = await handler.handle(CheckAccessQuery(tenant_id=tenant.id))

        assert result.status == "suspended"
        assert (await tenant_repository.find_by_id(tenant.id)).status == TenantStatus.TRIAL


@pytest.mark.asyncio
class TestTrialToLicenseScenario:
    """A trial runs out and a license brings the tenant back."""

    async def test_suspended_after_trial_then_licensed(
        self, handler, activate_handler, make_tenant, make_key, tenant_repository, event_bus, clock
    ):
        tenant = make_tenant(created_at=NOW)
        clock.advance(days=3, hours=1)

        before = await handler.handle(CheckAccessQuery(tenant_id=tenant.id))

        assert before.status == "suspended"
        assert not before.is_valid
        assert (await tenant_repository.find_by_id(tenant.id)).status == TenantStatus.SUSPENDED

        key = make_key(duration_days=30)
        await activate_handler.handle(ActivateLicenseCommand(tenant_id=tenant.id, license_key=key.key_code))
        after = await handler.handle(CheckAccessQuery(tenant_id=tenant.id))

        assert after.status == "licensed"
        assert after.is_valid
        assert after.days_remaining == 30
        assert after.expires_at == clock() + timedelta(days=30)
        assert (await tenant_repository.find_by_id(tenant.id)).status == TenantStatus.ACTIVE
        assert len(event_bus.of_type(TenantReactivated)) == 1
