"""
Handler wiring.

Builds application handlers with their Django adapters and the
entitlement settings. Views, middleware, management commands, Celery
tasks and event handler registration all obtain handlers here.
"""
from django.conf import settings
from django.utils.module_loading import import_string

from activations.application.handlers.activate_license_handler import ActivateLicenseHandler
from activations.infrastructure.repositories.django_tenant_license_repository import (
    DjangoTenantLicenseRepository,
)
from core.infrastructure.database import DjangoUnitOfWork
from core.infrastructure.events import event_bus
from licenses.application.handlers.generate_license_keys_handler import GenerateLicenseKeysHandler
from licenses.application.handlers.list_license_keys_handler import ListLicenseKeysHandler
from licenses.application.handlers.revoke_license_key_handler import RevokeLicenseKeyHandler
from licenses.domain.key_codec import KeyCodec
from licenses.domain.services import LicenseKeyGenerator
from licenses.infrastructure.repositories.django_license_key_repository import (
    DjangoLicenseKeyRepository,
)
from reminders.application.handlers.list_expiring_licenses_handler import ListExpiringLicensesHandler
from reminders.application.handlers.purge_reminder_ledger_handler import PurgeReminderLedgerHandler
from reminders.application.handlers.run_reminder_scan_handler import RunReminderScanHandler
from reminders.domain.reminder import ReminderPolicy
from reminders.infrastructure.repositories.django_reminder_ledger_repository import (
    DjangoReminderLedgerRepository,
)
from reminders.ports.notifier import Notifier
from tenants.application.handlers.check_access_handler import CheckAccessHandler
from tenants.application.handlers.sweep_tenant_access_handler import SweepTenantAccessHandler
from tenants.application.services.access_cache_service import AccessStatusCacheService
from tenants.domain.access import AccessEvaluator
from tenants.domain.services import SuspensionEnforcer
from tenants.infrastructure.repositories.django_tenant_repository import DjangoTenantRepository


def _setting(name, default):
    return getattr(settings, name, default)


# Repositories
def license_key_repository() -> DjangoLicenseKeyRepository:
    return DjangoLicenseKeyRepository()


def tenant_repository() -> DjangoTenantRepository:
    return DjangoTenantRepository()


def tenant_license_repository() -> DjangoTenantLicenseRepository:
    return DjangoTenantLicenseRepository()


def reminder_ledger_repository() -> DjangoReminderLedgerRepository:
    return DjangoReminderLedgerRepository()


# Domain services and adapters
def key_codec() -> KeyCodec:
    return KeyCodec(_setting("LICENSE_KEY_PREFIX", "OWLTD"))


def access_evaluator() -> AccessEvaluator:
    return AccessEvaluator(grace_period_days=_setting("LICENSE_GRACE_PERIOD_DAYS", 7))


def suspension_enforcer() -> SuspensionEnforcer:
    return SuspensionEnforcer(tenant_repository(), event_bus)


def access_cache_service() -> AccessStatusCacheService:
    return AccessStatusCacheService(ttl=_setting("ACCESS_STATUS_CACHE_TTL", 60))


def reminder_policy() -> ReminderPolicy:
    return ReminderPolicy.from_thresholds(
        _setting("LICENSE_REMINDER_THRESHOLDS", [7, 3, 1, 0]),
        window_days=_setting("LICENSE_REMINDER_WINDOW_DAYS", 30),
    )


def notifier() -> Notifier:
    """Instantiate the notifier named by ``ENTITLEMENT_NOTIFIER``."""
    notifier_class = import_string(
        _setting("ENTITLEMENT_NOTIFIER", "reminders.infrastructure.notifiers.LoggingNotifier")
    )
    return notifier_class()


def renewal_url() -> str:
    base_url = _setting("APP_BASE_URL", "").rstrip("/")
    return f"{base_url}/license" if base_url else ""


# Handlers
def generate_license_keys_handler() -> GenerateLicenseKeysHandler:
    repository = license_key_repository()
    generator = LicenseKeyGenerator(
        key_codec(),
        repository,
        max_attempts=_setting("LICENSE_KEY_GENERATION_MAX_ATTEMPTS", 10),
    )
    return GenerateLicenseKeysHandler(repository, tenant_repository(), generator)


def list_license_keys_handler() -> ListLicenseKeysHandler:
    return ListLicenseKeysHandler(license_key_repository())


def revoke_license_key_handler() -> RevokeLicenseKeyHandler:
    return RevokeLicenseKeyHandler(
        license_key_repository(), tenant_license_repository(), DjangoUnitOfWork()
    )


def activate_license_handler() -> ActivateLicenseHandler:
    return ActivateLicenseHandler(
        codec=key_codec(),
        tenant_repository=tenant_repository(),
        license_key_repository=license_key_repository(),
        tenant_license_repository=tenant_license_repository(),
        enforcer=suspension_enforcer(),
        unit_of_work=DjangoUnitOfWork(),
    )


def check_access_handler() -> CheckAccessHandler:
    return CheckAccessHandler(
        tenant_repository(),
        tenant_license_repository(),
        access_evaluator(),
        suspension_enforcer(),
    )


def sweep_tenant_access_handler() -> SweepTenantAccessHandler:
    return SweepTenantAccessHandler(
        tenant_repository(),
        tenant_license_repository(),
        access_evaluator(),
        suspension_enforcer(),
    )


def run_reminder_scan_handler() -> RunReminderScanHandler:
    return RunReminderScanHandler(
        tenant_license_repository(),
        reminder_ledger_repository(),
        notifier(),
        policy=reminder_policy(),
        renewal_url=renewal_url(),
    )


def list_expiring_licenses_handler() -> ListExpiringLicensesHandler:
    return ListExpiringLicensesHandler(tenant_license_repository())


def purge_reminder_ledger_handler() -> PurgeReminderLedgerHandler:
    return PurgeReminderLedgerHandler(reminder_ledger_repository())
