"""
Unit tests for LicenseKey entity.
"""
import uuid
from dataclasses import replace

import pytest

from core.domain.exceptions import InvalidDurationError
from core.domain.value_objects import LicenseKeyStatus
from licenses.domain.license_key import LicenseKey


class TestLicenseKeyEntity:
    """Tests for LicenseKey entity."""

    def test_create_is_unused(self, now):
        """Test new keys start unused and unassigned."""
        key = LicenseKey.create(key_code="OWLTD-ABCDE-12345", duration_days=30, now=now, created_by="ops")
        assert key.status == LicenseKeyStatus.UNUSED
        assert key.assigned_tenant_id is None
        assert key.created_at == key.updated_at == now
        assert key.created_by == "ops"

    @pytest.mark.parametrize("duration", [0, -1, 366, True, "30", 30.0])
    def test_invalid_duration(self, now, duration):
        """Test durations outside 1..365 integer days are rejected."""
        with pytest.raises(InvalidDurationError):
            LicenseKey.create(key_code="OWLTD-ABCDE-12345", duration_days=duration, now=now)

    @pytest.mark.parametrize("duration", [1, 365])
    def test_duration_bounds(self, now, duration):
        """Test both duration bounds are accepted."""
        key = LicenseKey.create(key_code="OWLTD-ABCDE-12345", duration_days=duration, now=now)
        assert key.duration_days == duration

    def test_reserved_key_only_activatable_by_its_tenant(self, now):
        """Test a reservation restricts who may consume the key."""
        owner = uuid.uuid4()
        key = LicenseKey.create(
            key_code="OWLTD-ABCDE-12345", duration_days=30, now=now, assigned_tenant_id=owner
        )
        assert key.is_activatable_by(owner)
        assert not key.is_activatable_by(uuid.uuid4())

    @pytest.mark.parametrize("status", [LicenseKeyStatus.ACTIVE, LicenseKeyStatus.EXPIRED, LicenseKeyStatus.REVOKED])
    def test_used_key_is_not_activatable(self, now, status):
        """Test only unused keys can be consumed."""
        key = replace(LicenseKey.create(key_code="OWLTD-ABCDE-12345", duration_days=30, now=now), status=status)
        assert not key.is_activatable_by(uuid.uuid4())
        assert key.is_revoked == (status == LicenseKeyStatus.REVOKED)
