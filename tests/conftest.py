"""
Pytest configuration and shared fixtures.
"""

import uuid
from dataclasses import replace
from datetime import timedelta

import pytest
from django.core.cache import cache

from activations.application.handlers.activate_license_handler import ActivateLicenseHandler
from core.domain.value_objects import LicenseKeyStatus, TenantStatus
from licenses.domain.key_codec import KeyCodec
from licenses.domain.license_key import LicenseKey
from tenants.domain.access import AccessEvaluator
from tenants.domain.services import SuspensionEnforcer
from tenants.domain.tenant import Tenant
from tests.fakes import (
    NOW,
    FrozenClock,
    InMemoryLicenseKeyRepository,
    InMemoryReminderLedgerRepository,
    InMemoryTenantLicenseRepository,
    InMemoryTenantRepository,
    InMemoryUnitOfWork,
    RecordingEventBus,
    RecordingNotifier,
    with_status,
)


@pytest.fixture
def now():
    """Fixed evaluation instant."""
    return NOW


@pytest.fixture
def clock():
    """Fixture for a frozen clock starting at NOW."""
    return FrozenClock(NOW)


@pytest.fixture
def event_bus():
    """Fixture for an event bus that records published events."""
    return RecordingEventBus()


@pytest.fixture
def codec():
    """Fixture for the default key codec."""
    return KeyCodec()


@pytest.fixture
def evaluator():
    """Fixture for AccessEvaluator with the default grace period."""
    return AccessEvaluator()


@pytest.fixture
def tenant_repository():
    """Fixture for an in-memory TenantRepository."""
    return InMemoryTenantRepository()


@pytest.fixture
def license_key_repository():
    """Fixture for an in-memory LicenseKeyRepository."""
    return InMemoryLicenseKeyRepository()


@pytest.fixture
def tenant_license_repository(tenant_repository):
    """Fixture for an in-memory TenantLicenseRepository."""
    return InMemoryTenantLicenseRepository(tenant_repository)


@pytest.fixture
def ledger_repository(tenant_license_repository):
    """Fixture for an in-memory ReminderLedgerRepository."""
    return InMemoryReminderLedgerRepository(tenant_license_repository)


@pytest.fixture
def unit_of_work(license_key_repository, tenant_license_repository, tenant_repository):
    """Fixture for a unit of work spanning the in-memory repositories."""
    return InMemoryUnitOfWork(license_key_repository, tenant_license_repository, tenant_repository)


@pytest.fixture
def notifier():
    """Fixture for a notifier that records deliveries."""
    return RecordingNotifier()


@pytest.fixture
def enforcer(tenant_repository, event_bus, clock):
    """Fixture for SuspensionEnforcer over the in-memory tenant store."""
    return SuspensionEnforcer(tenant_repository, event_bus, clock)


@pytest.fixture
def activate_handler(
    codec,
    tenant_repository,
    license_key_repository,
    tenant_license_repository,
    enforcer,
    unit_of_work,
    event_bus,
    clock,
):
    """Fixture for ActivateLicenseHandler wired to in-memory ports."""
    return ActivateLicenseHandler(
        codec=codec,
        tenant_repository=tenant_repository,
        license_key_repository=license_key_repository,
        tenant_license_repository=tenant_license_repository,
        enforcer=enforcer,
        unit_of_work=unit_of_work,
        event_bus=event_bus,
        clock=clock,
    )


@pytest.fixture
def make_tenant(tenant_repository):
    """Factory fixture storing a tenant created at ``created_at``."""

    def _make(created_at=NOW, status=TenantStatus.TRIAL, email="owner@example.com", name=None):
        unique = uuid.uuid4().hex[:8]
        tenant = Tenant.create(
            slug=f"bistro-{unique}",
            name=name or f"Bistro {unique}",
            email=email,
            now=created_at,
        )
        if status != TenantStatus.TRIAL:
            tenant = with_status(tenant, status, created_at)
        tenant_repository._rows[tenant.id] = tenant
        return tenant

    return _make


@pytest.fixture
def make_key(license_key_repository, codec):
    """Factory fixture storing an unused license key."""

    def _make(duration_days=30, body=None, assigned_tenant_id=None, status=LicenseKeyStatus.UNUSED):
        body = body or uuid.uuid4().hex[:10].upper()
        key = LicenseKey.create(
            key_code=codec.compose(body),
            duration_days=duration_days,
            now=NOW - timedelta(days=30),
            assigned_tenant_id=assigned_tenant_id,
        )
        if status != LicenseKeyStatus.UNUSED:
            key = replace(key, status=status)
        license_key_repository._rows[key.id] = key
        return key

    return _make


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    """Start every test with an empty cache."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def db_tenant(db):
    """Factory fixture creating a Tenant row."""
    from django.utils import timezone

    from tenants.infrastructure.models import Tenant as TenantModel

    def _make(status="trial", created_days_ago=0, email="owner@example.com"):
        created_at = timezone.now() - timedelta(days=created_days_ago)
        unique = uuid.uuid4().hex[:8]
        return TenantModel.objects.create(
            slug=f"bistro-{unique}",
            name=f"Bistro {unique}",
            email=email,
            status=status,
            subscription_status=status,
            created_at=created_at,
            updated_at=created_at,
            trial_ends_at=created_at + timedelta(days=3),
        )

    return _make


@pytest.fixture
def db_license_key(db):
    """Factory fixture creating an unused LicenseKey row."""
    from django.utils import timezone

    from licenses.infrastructure.models import LicenseKey as LicenseKeyModel

    def _make(duration_days=30, status="unused", assigned_tenant=None, key_code=None):
        now = timezone.now()
        return LicenseKeyModel.objects.create(
            key_code=key_code or KeyCodec().compose(uuid.uuid4().hex[:10].upper()),
            duration_days=duration_days,
            status=status,
            assigned_tenant=assigned_tenant,
            created_at=now,
            updated_at=now,
        )

    return _make


@pytest.fixture
def cron_headers():
    """Authorization header accepted by the cron endpoints."""
    return {"HTTP_AUTHORIZATION": "Bearer test-cron-token"}
