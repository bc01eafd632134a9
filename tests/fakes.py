"""
In-memory port implementations for unit tests.
"""
import asyncio
import contextlib
import copy
import uuid
from dataclasses import replace
from datetime import datetime, timedelta, timezone as dt_timezone
from typing import Dict, List, Optional

from activations.domain.assignment import TenantLicenseAssignment
from activations.ports.tenant_license_repository import ExpiringAssignment, TenantLicenseRepository
from core.domain.events import DomainEvent, EventBus, EventHandler
from core.domain.exceptions import ConcurrentActivationError, StorageError
from core.domain.value_objects import AssignmentStatus, LicenseKeyStatus, TenantStatus
from core.infrastructure.cache import CachePort
from core.ports.unit_of_work import UnitOfWork
from licenses.domain.license_key import LicenseKey
from licenses.ports.license_key_repository import LicenseKeyRepository, LicenseKeyStatistics
from reminders.domain.reminder import ExpiryReminder, SuspensionNotice
from reminders.ports.notifier import Notifier
from reminders.ports.reminder_ledger_repository import ReminderLedgerRepository
from tenants.domain.tenant import Tenant
from tenants.ports.tenant_repository import TenantRepository

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=dt_timezone.utc)


def with_status(tenant: Tenant, status: TenantStatus, now: datetime) -> Tenant:
    """Copy of ``tenant`` moved to ``status``, as a conditional status update stores it."""
    return replace(tenant, status=status, subscription_status=status, updated_at=now)


class FrozenClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class _SnapshotMixin:
    """Lets InMemoryUnitOfWork roll a repository back."""

    _rows: dict

    def snapshot(self):
        return copy.copy(self._rows)

    def restore(self, rows) -> None:
        self._rows = rows


class InMemoryLicenseKeyRepository(_SnapshotMixin, LicenseKeyRepository):
    def __init__(self, existing_codes=()):
        self._rows: Dict[uuid.UUID, LicenseKey] = {}
        self.existing_codes = set(existing_codes)
        self.fail_on_save = False

    async def save_batch(self, license_keys: List[LicenseKey]) -> List[LicenseKey]:
        if self.fail_on_save:
            raise StorageError()
        for key in license_keys:
            self._rows[key.id] = key
        return list(license_keys)

    async def find_by_id(self, license_key_id: uuid.UUID) -> Optional[LicenseKey]:
        return self._rows.get(license_key_id)

    async def find_by_code(self, key_code: str) -> Optional[LicenseKey]:
        return next((key for key in self._rows.values() if key.key_code == key_code), None)

    async def code_exists(self, key_code: str) -> bool:
        return key_code in self.existing_codes or await self.find_by_code(key_code) is not None

    async def claim(self, license_key_id: uuid.UUID, tenant_id: uuid.UUID, now: datetime) -> bool:
        # Let concurrent callers interleave before the conditional write
        await asyncio.sleep(0)
        key = self._rows.get(license_key_id)
        if key is None or not key.is_activatable_by(tenant_id):
            return False
        self._rows[license_key_id] = replace(
            key, status=LicenseKeyStatus.ACTIVE, assigned_tenant_id=tenant_id, updated_at=now
        )
        return True

    async def revoke(self, license_key_id: uuid.UUID, now: datetime) -> bool:
        key = self._rows.get(license_key_id)
        if key is None or key.is_revoked:
            return False
        self._rows[license_key_id] = replace(key, status=LicenseKeyStatus.REVOKED, updated_at=now)
        return True

    def _filter(self, status, tenant_id) -> List[LicenseKey]:
        keys = list(self._rows.values())
        if status is not None:
            keys = [key for key in keys if key.status == status]
        if tenant_id is not None:
            keys = [key for key in keys if key.assigned_tenant_id == tenant_id]
        return keys

    async def list(self, status=None, tenant_id=None, limit: int = 50) -> List[LicenseKey]:
        keys = sorted(self._filter(status, tenant_id), key=lambda key: key.created_at, reverse=True)
        return keys[:limit]

    async def statistics(self, status=None, tenant_id=None) -> LicenseKeyStatistics:
        keys = self._filter(status, tenant_id)
        by_status: Dict[str, int] = {}
        for key in keys:
            by_status[key.status.value] = by_status.get(key.status.value, 0) + 1
        return LicenseKeyStatistics(
            total=len(keys),
            total_days=sum(key.duration_days for key in keys),
            by_status=by_status,
        )


class InMemoryTenantRepository(_SnapshotMixin, TenantRepository):
    def __init__(self):
        self._rows: Dict[uuid.UUID, Tenant] = {}
        self.fail_on_set_status = False
        self.fail_on_find = False

    async def find_by_id(self, tenant_id: uuid.UUID) -> Optional[Tenant]:
        if self.fail_on_find:
            raise StorageError()
        return self._rows.get(tenant_id)

    async def exists(self, tenant_id: uuid.UUID) -> bool:
        return tenant_id in self._rows

    async def set_status(self, tenant_id: uuid.UUID, status: TenantStatus, now: datetime) -> bool:
        if self.fail_on_set_status:
            raise StorageError()
        tenant = self._rows.get(tenant_id)
        if tenant is None or tenant.status == status:
            return False
        self._rows[tenant_id] = with_status(tenant, status, now)
        return True

    async def list_unsuspended(self) -> List[Tenant]:
        return [tenant for tenant in self._rows.values() if tenant.status != TenantStatus.SUSPENDED]


class InMemoryTenantLicenseRepository(_SnapshotMixin, TenantLicenseRepository):
    def __init__(self, tenant_repository: Optional[InMemoryTenantRepository] = None):
        self._rows: Dict[uuid.UUID, TenantLicenseAssignment] = {}
        self.tenant_repository = tenant_repository
        self.fail_on_add = False

    async def add(self, assignment: TenantLicenseAssignment) -> TenantLicenseAssignment:
        if self.fail_on_add:
            raise StorageError()
        if await self.find_active_for_tenant(assignment.tenant_id) is not None:
            raise ConcurrentActivationError()
        self._rows[assignment.id] = assignment
        return assignment

    async def find_by_id(self, assignment_id: uuid.UUID) -> Optional[TenantLicenseAssignment]:
        return self._rows.get(assignment_id)

    async def find_active_for_tenant(self, tenant_id: uuid.UUID) -> Optional[TenantLicenseAssignment]:
        return next(
            (a for a in self._rows.values() if a.tenant_id == tenant_id and a.is_active),
            None,
        )

    async def find_active_for_license_key(
        self, license_key_id: uuid.UUID
    ) -> Optional[TenantLicenseAssignment]:
        return next(
            (a for a in self._rows.values() if a.license_key_id == license_key_id and a.is_active),
            None,
        )

    async def end(self, assignment_id: uuid.UUID, now: datetime) -> bool:
        assignment = self._rows.get(assignment_id)
        if assignment is None or not assignment.is_active:
            return False
        self._rows[assignment_id] = replace(assignment, status=AssignmentStatus.EXPIRED, ended_at=now)
        return True

    async def list_expiring(self, start: datetime, end: datetime) -> List[ExpiringAssignment]:
        rows = []
        for assignment in sorted(self._rows.values(), key=lambda a: a.expires_at):
            if not assignment.is_active or not start <= assignment.expires_at <= end:
                continue
            tenant = None
            if self.tenant_repository is not None:
                tenant = await self.tenant_repository.find_by_id(assignment.tenant_id)
            rows.append(
                ExpiringAssignment(
                    assignment=assignment,
                    tenant_name=tenant.name if tenant else "",
                    tenant_email=tenant.email if tenant else "",
                )
            )
        return rows

    async def list_active_expired_before(self, cutoff: datetime) -> List[TenantLicenseAssignment]:
        return [a for a in self._rows.values() if a.is_active and a.expires_at < cutoff]

    def all(self) -> List[TenantLicenseAssignment]:
        return list(self._rows.values())


class InMemoryReminderLedgerRepository(ReminderLedgerRepository):
    def __init__(self, tenant_license_repository: Optional[InMemoryTenantLicenseRepository] = None):
        self.entries: Dict[tuple, datetime] = {}
        self.tenant_license_repository = tenant_license_repository

    async def record_if_absent(self, tenant_id, assignment_id, threshold_days, sent_at) -> bool:
        key = (tenant_id, assignment_id, threshold_days)
        if key in self.entries:
            return False
        self.entries[key] = sent_at
        return True

    async def release(self, tenant_id, assignment_id, threshold_days) -> None:
        self.entries.pop((tenant_id, assignment_id, threshold_days), None)

    async def exists(self, tenant_id, assignment_id, threshold_days) -> bool:
        return (tenant_id, assignment_id, threshold_days) in self.entries

    async def purge_expired_before(self, cutoff: datetime) -> int:
        stale = []
        for key in self.entries:
            assignment = await self.tenant_license_repository.find_by_id(key[1])
            if assignment is not None and assignment.expires_at < cutoff:
                stale.append(key)
        for key in stale:
            del self.entries[key]
        return len(stale)


class InMemoryUnitOfWork(UnitOfWork):
    """
    Serializes atomic blocks and restores repository rows when one
    raises.
    """

    def __init__(self, *repositories):
        self.repositories = repositories
        self._lock = asyncio.Lock()
        self.commits = 0
        self.rollbacks = 0

    @contextlib.asynccontextmanager
    async def atomic(self):
        async with self._lock:
            snapshots = [repository.snapshot() for repository in self.repositories]
            try:
                yield
            except BaseException:
                for repository, rows in zip(self.repositories, snapshots):
                    repository.restore(rows)
                self.rollbacks += 1
                raise
            self.commits += 1


class RecordingEventBus(EventBus):
    def __init__(self):
        self.events: List[DomainEvent] = []

    async def publish(self, event: DomainEvent) -> None:
        self.events.append(event)

    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        pass

    def of_type(self, event_type: type) -> List[DomainEvent]:
        return [event for event in self.events if isinstance(event, event_type)]


class RecordingNotifier(Notifier):
    def __init__(self, fail_for=()):
        self.reminders: List[ExpiryReminder] = []
        self.notices: List[SuspensionNotice] = []
        self.fail_for = set(fail_for)

    async def send_expiry_reminder(self, reminder: ExpiryReminder) -> None:
        if reminder.tenant_id in self.fail_for:
            raise ConnectionError("SMTP unavailable")
        self.reminders.append(reminder)

    async def send_suspension_notice(self, notice: SuspensionNotice) -> None:
        self.notices.append(notice)


class InMemoryCache(CachePort):
    def __init__(self):
        self.values: Dict[str, object] = {}
        self.timeouts: Dict[str, Optional[int]] = {}

    async def get(self, key: str):
        return self.values.get(key)

    async def set(self, key: str, value, timeout: Optional[int] = None) -> None:
        self.values[key] = value
        self.timeouts[key] = timeout

    async def delete(self, key: str) -> None:
        self.values.pop(key, None)


def make_assignment(tenant_id, license_key, activated_at, status=AssignmentStatus.ACTIVE):
    """Build an assignment for ``license_key`` activated at ``activated_at``."""
    assignment = TenantLicenseAssignment.create(tenant_id, license_key, activated_at)
    return replace(assignment, status=status)
