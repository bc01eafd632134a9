"""
Unit tests for AccessEvaluator.
"""
from datetime import timedelta

import pytest

from core.domain.value_objects import AccessState, AssignmentStatus, TenantStatus
from tenants.domain.access import AccessDecision, AccessEvaluator, ERROR_MESSAGE, days_between
from tests.fakes import NOW, make_assignment, with_status

SECOND = timedelta(seconds=1)


@pytest.fixture
def licensed(make_tenant, make_key):
    """An active tenant whose 30-day license was activated at NOW."""
    tenant = make_tenant(created_at=NOW - timedelta(days=10), status=TenantStatus.ACTIVE)
    key = make_key(duration_days=30)
    return tenant, make_assignment(tenant.id, key, NOW)


class TestDaysBetween:
    """Tests for days_between rounding."""

    def test_rounds_up_partial_days(self):
        assert days_between(NOW, NOW + SECOND) == 1
        assert days_between(NOW, NOW + timedelta(days=1)) == 1
        assert days_between(NOW, NOW + timedelta(days=1) + SECOND) == 2


class TestAccessEvaluatorTrial:
    """Trial window boundaries."""

    def test_new_tenant_is_in_trial(self, evaluator, make_tenant):
        tenant = make_tenant(created_at=NOW)
        decision = evaluator.evaluate(tenant, None, NOW)
        assert decision.state == AccessState.TRIAL_ACTIVE
        assert decision.days_remaining == 3
        assert decision.is_valid
        assert decision.expires_at == tenant.trial_ends_at
        assert decision.valid_until == tenant.trial_ends_at
        assert decision.message == "Trial active. 3 day(s) remaining. Please purchase a license key."

    def test_one_second_before_trial_end(self, evaluator, make_tenant):
        tenant = make_tenant(created_at=NOW)
        decision = evaluator.evaluate(tenant, None, tenant.trial_ends_at - SECOND)
        assert decision.state == AccessState.TRIAL_ACTIVE
        assert decision.days_remaining == 1

    def test_at_trial_end_without_license(self, evaluator, make_tenant):
        tenant = make_tenant(created_at=NOW)
        decision = evaluator.evaluate(tenant, None, tenant.trial_ends_at)
        assert decision.state == AccessState.SUSPENDED
        assert decision.days_remaining == 0
        assert not decision.is_valid
        assert decision.message == "Trial expired and no valid license found. Service suspended."

    def test_trial_only_applies_to_trial_status(self, evaluator, make_tenant):
        tenant = make_tenant(created_at=NOW, status=TenantStatus.SUSPENDED)
        assert evaluator.evaluate(tenant, None, NOW + SECOND).state == AccessState.SUSPENDED

    def test_trial_takes_precedence(self, evaluator, make_tenant, make_key):
        tenant = make_tenant(created_at=NOW)
        assignment = make_assignment(tenant.id, make_key(duration_days=30), NOW)
        assert evaluator.evaluate(tenant, assignment, NOW + SECOND).state == AccessState.TRIAL_ACTIVE


class TestAccessEvaluatorLicense:
    """License and grace window boundaries."""

    def test_licensed(self, evaluator, licensed):
        tenant, assignment = licensed
        decision = evaluator.evaluate(tenant, assignment, NOW)
        assert decision.state == AccessState.LICENSED
        assert decision.days_remaining == 30
        assert not decision.warning
        assert decision.expires_at == assignment.expires_at
        assert decision.valid_until == assignment.expires_at
        assert decision.message == "License active. 30 day(s) remaining."

    def test_warning_within_seven_days(self, evaluator, licensed):
        tenant, assignment = licensed
        assert not evaluator.evaluate(tenant, assignment, assignment.expires_at - timedelta(days=8)).warning
        assert evaluator.evaluate(tenant, assignment, assignment.expires_at - timedelta(days=7)).warning

    def test_one_second_before_expiry(self, evaluator, licensed):
        tenant, assignment = licensed
        decision = evaluator.evaluate(tenant, assignment, assignment.expires_at - SECOND)
        assert decision.state == AccessState.LICENSED
        assert decision.days_remaining == 1
        assert decision.warning

    def test_at_expiry_enters_grace(self, evaluator, licensed):
        tenant, assignment = licensed
        decision = evaluator.evaluate(tenant, assignment, assignment.expires_at)
        assert decision.state == AccessState.EXPIRED_IN_GRACE
        assert decision.days_remaining == 7
        assert decision.warning
        assert decision.is_valid
        assert decision.expires_at == assignment.expires_at
        assert decision.valid_until == assignment.expires_at + timedelta(days=7)
        assert decision.message == (
            "License expired but in grace period. 7 day(s) remaining to activate new license."
        )

    def test_one_second_before_grace_end(self, evaluator, licensed):
        tenant, assignment = licensed
        decision = evaluator.evaluate(tenant, assignment, assignment.expires_at + timedelta(days=7) - SECOND)
        assert decision.state == AccessState.EXPIRED_IN_GRACE
        assert decision.days_remaining == 1

    def test_at_grace_end(self, evaluator, licensed):
        tenant, assignment = licensed
        decision = evaluator.evaluate(tenant, assignment, assignment.expires_at + timedelta(days=7))
        assert decision.state == AccessState.SUSPENDED
        assert not decision.is_valid
        assert decision.valid_until is None

    def test_custom_grace_period(self, licensed):
        tenant, assignment = licensed
        evaluator = AccessEvaluator(grace_period_days=2)
        at = assignment.expires_at + timedelta(days=2)
        assert evaluator.evaluate(tenant, assignment, at - SECOND).state == AccessState.EXPIRED_IN_GRACE
        assert evaluator.evaluate(tenant, assignment, at).state == AccessState.SUSPENDED

    def test_ended_assignment_grants_nothing(self, evaluator, licensed):
        tenant, assignment = licensed
        ended = make_assignment(tenant.id, _key_of(assignment), NOW, status=AssignmentStatus.EXPIRED)
        assert evaluator.evaluate(tenant, ended, NOW).state == AccessState.SUSPENDED

    def test_suspended_tenant_with_valid_assignment(self, evaluator, licensed):
        """A stale suspended flag does not override a live license."""
        tenant, assignment = licensed
        tenant = with_status(tenant, TenantStatus.SUSPENDED, NOW)
        assert evaluator.evaluate(tenant, assignment, NOW).state == AccessState.LICENSED


class TestAccessDecision:
    """Tests for AccessDecision helpers."""

    def test_denied(self):
        decision = AccessDecision.denied()
        assert decision.state == AccessState.SUSPENDED
        assert not decision.is_valid
        assert decision.message == ERROR_MESSAGE

    @pytest.mark.parametrize(
        "state,grants",
        [
            (AccessState.TRIAL_ACTIVE, True),
            (AccessState.LICENSED, True),
            (AccessState.EXPIRED_IN_GRACE, True),
            (AccessState.SUSPENDED, False),
        ],
    )
    def test_grants_access(self, state, grants):
        assert state.grants_access is grants


def _key_of(assignment):
    from licenses.domain.license_key import LicenseKey

    return LicenseKey.create(
        key_code=assignment.key_code,
        duration_days=assignment.duration_days,
        now=assignment.activated_at,
        license_key_id=assignment.license_key_id,
    )
