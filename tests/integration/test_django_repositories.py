"""
Integration tests for the Django repository implementations.
"""
import uuid
from datetime import timedelta

import pytest
from asgiref.sync import async_to_sync
from django.utils import timezone

from activations.domain.assignment import TenantLicenseAssignment
from activations.infrastructure.repositories.django_tenant_license_repository import (
    DjangoTenantLicenseRepository,
)
from core.domain.exceptions import ConcurrentActivationError
from core.domain.value_objects import LicenseKeyStatus, TenantStatus
from licenses.domain.key_codec import KeyCodec
from licenses.domain.license_key import LicenseKey
from licenses.infrastructure.models import LicenseKey as LicenseKeyModel
from licenses.infrastructure.repositories.django_license_key_repository import (
    DjangoLicenseKeyRepository,
)
from reminders.infrastructure.repositories.django_reminder_ledger_repository import (
    DjangoReminderLedgerRepository,
)
from tenants.infrastructure.repositories.django_tenant_repository import DjangoTenantRepository


@pytest.fixture
def key_store():
    return DjangoLicenseKeyRepository()


@pytest.fixture
def tenant_store():
    return DjangoTenantRepository()


@pytest.fixture
def assignment_store():
    return DjangoTenantLicenseRepository()


@pytest.fixture
def ledger_store():
    return DjangoReminderLedgerRepository()


@pytest.fixture
def db_assignment(db_tenant, db_license_key, key_store, assignment_store):
    """Factory fixture activating a fresh key for a new tenant."""

    def _make(expires_in_days=10, duration_days=30, email="owner@example.com"):
        tenant = db_tenant(status="active", created_days_ago=60, email=email)
        key_row = db_license_key(duration_days=duration_days)
        key = async_to_sync(key_store.find_by_id)(key_row.id)
        activated_at = timezone.now() + timedelta(days=expires_in_days - duration_days)
        assignment = TenantLicenseAssignment.create(tenant.id, key, activated_at)
        return async_to_sync(assignment_store.add)(assignment)

    return _make


@pytest.mark.django_db
@pytest.mark.integration
class TestDjangoLicenseKeyRepository:
    """Integration tests for DjangoLicenseKeyRepository."""

    def test_save_batch_and_find(self, key_store):
        """Test persisting a batch and reading it back by id and code."""
        codec = KeyCodec()
        now = timezone.now()
        keys = [
            LicenseKey.create(key_code=codec.compose(f"BATCH{i:05d}"), duration_days=30, now=now)
            for i in range(3)
        ]

        async_to_sync(key_store.save_batch)(keys)

        assert LicenseKeyModel.objects.count() == 3
        found = async_to_sync(key_store.find_by_code)(keys[1].key_code)
        assert found.id == keys[1].id
        assert found.status == LicenseKeyStatus.UNUSED
        assert async_to_sync(key_store.code_exists)(keys[2].key_code)
        assert not async_to_sync(key_store.code_exists)("OWLTD-ZZZZZ-ZZZZZ")

    def test_claim_is_conditional(self, key_store, db_tenant, db_license_key):
        """Test only the first claim of a key succeeds."""
        first, second = db_tenant(), db_tenant()
        key = db_license_key()
        now = timezone.now()

        assert async_to_sync(key_store.claim)(key.id, first.id, now) is True
        assert async_to_sync(key_store.claim)(key.id, second.id, now) is False

        key.refresh_from_db()
        assert key.status == "active"
        assert key.assigned_tenant_id == first.id

    def test_claim_respects_reservation(self, key_store, db_tenant, db_license_key):
        """Test a reserved key is claimable only by its tenant."""
        owner, other = db_tenant(), db_tenant()
        key = db_license_key(assigned_tenant=owner)
        now = timezone.now()

        assert async_to_sync(key_store.claim)(key.id, other.id, now) is False
        assert async_to_sync(key_store.claim)(key.id, owner.id, now) is True

    def test_revoke_once(self, key_store, db_license_key):
        key = db_license_key()
        now = timezone.now()

        assert async_to_sync(key_store.revoke)(key.id, now) is True
        assert async_to_sync(key_store.revoke)(key.id, now) is False

    def test_list_and_statistics(self, key_store, db_license_key):
        """Test filters and aggregate counts."""
        db_license_key(duration_days=30)
        db_license_key(duration_days=90)
        db_license_key(duration_days=7, status="revoked")

        unused = async_to_sync(key_store.list)(status=LicenseKeyStatus.UNUSED)
        stats = async_to_sync(key_store.statistics)()

        assert len(unused) == 2
        assert stats.total == 3
        assert stats.total_days == 127
        assert stats.by_status["unused"] == 2
        assert stats.by_status["revoked"] == 1
        assert stats.by_status["active"] == 0


@pytest.mark.django_db
@pytest.mark.integration
class TestDjangoTenantRepository:
    """Integration tests for DjangoTenantRepository."""

    def test_find(self, tenant_store, db_tenant):
        row = db_tenant(email="chef@example.com")

        tenant = async_to_sync(tenant_store.find_by_id)(row.id)

        assert tenant.email == "chef@example.com"
        assert tenant.status == TenantStatus.TRIAL
        assert async_to_sync(tenant_store.find_by_id)(uuid.uuid4()) is None

    def test_set_status_is_idempotent(self, tenant_store, db_tenant):
        """Test a repeated transition reports no change."""
        row = db_tenant()
        now = timezone.now()

        assert async_to_sync(tenant_store.set_status)(row.id, TenantStatus.SUSPENDED, now) is True
        assert async_to_sync(tenant_store.set_status)(row.id, TenantStatus.SUSPENDED, now) is False

        row.refresh_from_db()
        assert row.status == "suspended"
        assert row.subscription_status == "suspended"

    def test_list_unsuspended(self, tenant_store, db_tenant):
        trial = db_tenant()
        db_tenant(status="suspended")

        assert [t.id for t in async_to_sync(tenant_store.list_unsuspended)()] == [trial.id]


@pytest.mark.django_db
@pytest.mark.integration
class TestDjangoTenantLicenseRepository:
    """Integration tests for DjangoTenantLicenseRepository."""

    def test_one_active_assignment_per_tenant(self, assignment_store, key_store, db_license_key, db_assignment):
        """Test a second active row for a tenant is rejected."""
        existing = db_assignment()
        other_key = async_to_sync(key_store.find_by_id)(db_license_key().id)

        with pytest.raises(ConcurrentActivationError):
            async_to_sync(assignment_store.add)(
                TenantLicenseAssignment.create(existing.tenant_id, other_key, timezone.now())
            )

        active = async_to_sync(assignment_store.find_active_for_tenant)(existing.tenant_id)
        assert active.id == existing.id

    def test_end_frees_the_tenant(self, assignment_store, key_store, db_license_key, db_assignment):
        """Test ending an assignment allows a new active one."""
        existing = db_assignment()
        now = timezone.now()

        assert async_to_sync(assignment_store.end)(existing.id, now) is True
        assert async_to_sync(assignment_store.end)(existing.id, now) is False

        other_key = async_to_sync(key_store.find_by_id)(db_license_key().id)
        replacement = async_to_sync(assignment_store.add)(
            TenantLicenseAssignment.create(existing.tenant_id, other_key, now)
        )
        assert async_to_sync(assignment_store.find_active_for_tenant)(existing.tenant_id).id == replacement.id

    def test_list_expiring(self, assignment_store, db_assignment):
        """Test the window is inclusive and ordered soonest first."""
        later = db_assignment(expires_in_days=10, email="later@example.com")
        sooner = db_assignment(expires_in_days=2, email="sooner@example.com")
        db_assignment(expires_in_days=40)
        db_assignment(expires_in_days=-3)
        now = timezone.now()

        rows = async_to_sync(assignment_store.list_expiring)(now, now + timedelta(days=30))

        assert [row.assignment.id for row in rows] == [sooner.id, later.id]
        assert rows[0].tenant_email == "sooner@example.com"

    def test_list_active_expired_before(self, assignment_store, db_assignment):
        lapsed = db_assignment(expires_in_days=-10)
        db_assignment(expires_in_days=5)

        rows = async_to_sync(assignment_store.list_active_expired_before)(timezone.now() - timedelta(days=7))

        assert [row.id for row in rows] == [lapsed.id]


@pytest.mark.django_db
@pytest.mark.integration
class TestDjangoReminderLedgerRepository:
    """Integration tests for DjangoReminderLedgerRepository."""

    def test_record_once(self, ledger_store, db_assignment):
        """Test the unique constraint makes the second claim fail."""
        assignment = db_assignment(expires_in_days=3)
        now = timezone.now()

        assert async_to_sync(ledger_store.record_if_absent)(assignment.tenant_id, assignment.id, 3, now)
        assert not async_to_sync(ledger_store.record_if_absent)(assignment.tenant_id, assignment.id, 3, now)
        assert async_to_sync(ledger_store.record_if_absent)(assignment.tenant_id, assignment.id, 1, now)

    def test_release(self, ledger_store, db_assignment):
        assignment = db_assignment(expires_in_days=3)
        now = timezone.now()
        async_to_sync(ledger_store.record_if_absent)(assignment.tenant_id, assignment.id, 3, now)

        async_to_sync(ledger_store.release)(assignment.tenant_id, assignment.id, 3)

        assert not async_to_sync(ledger_store.exists)(assignment.tenant_id, assignment.id, 3)

    def test_purge_expired_before(self, ledger_store, db_assignment):
        old = db_assignment(expires_in_days=-45)
        current = db_assignment(expires_in_days=3)
        now = timezone.now()
        async_to_sync(ledger_store.record_if_absent)(old.tenant_id, old.id, 0, now)
        async_to_sync(ledger_store.record_if_absent)(current.tenant_id, current.id, 3, now)

        purged = async_to_sync(ledger_store.purge_expired_before)(now - timedelta(days=30))

        assert purged == 1
        assert async_to_sync(ledger_store.exists)(current.tenant_id, current.id, 3)
