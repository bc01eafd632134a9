"""
Django implementation of LicenseKeyRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import logging
import uuid
from datetime import datetime
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Count, Q, Sum

from core.domain.exceptions import StorageError
from core.domain.value_objects import LicenseKeyStatus
from licenses.domain.license_key import LicenseKey
from licenses.infrastructure.models import LicenseKey as LicenseKeyModel
from licenses.ports.license_key_repository import (
    LicenseKeyRepository,
    LicenseKeyStatistics,
)

logger = logging.getLogger(__name__)


class DjangoLicenseKeyRepository(LicenseKeyRepository):
    """
    Django ORM implementation of LicenseKeyRepository.

    Status transitions that race with other requests (claiming and
    revoking) are conditional UPDATEs whose row count decides the
    winner.
    """

    def _to_domain(self, model: LicenseKeyModel) -> LicenseKey:
        return LicenseKey(
            id=model.id,
            key_code=model.key_code,
            duration_days=model.duration_days,
            status=LicenseKeyStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
            assigned_tenant_id=model.assigned_tenant_id,
            created_by=model.created_by,
            notes=model.notes,
        )

    def _to_model(self, license_key: LicenseKey) -> LicenseKeyModel:
        return LicenseKeyModel(
            id=license_key.id,
            key_code=license_key.key_code,
            duration_days=license_key.duration_days,
            status=license_key.status.value,
            assigned_tenant_id=license_key.assigned_tenant_id,
            created_by=license_key.created_by,
            notes=license_key.notes,
            created_at=license_key.created_at,
            updated_at=license_key.updated_at,
        )

    def _filtered(self, status: Optional[LicenseKeyStatus], tenant_id: Optional[uuid.UUID]):
        queryset = LicenseKeyModel.objects.all()
        if status is not None:
            queryset = queryset.filter(status=status.value)
        if tenant_id is not None:
            queryset = queryset.filter(assigned_tenant_id=tenant_id)
        return queryset

    @sync_to_async
    def save_batch(self, license_keys: List[LicenseKey]) -> List[LicenseKey]:
        """
        Insert several new keys in one transaction.

        Args:
            license_keys: New LicenseKey entities

        Returns:
            Saved entities
        """
        models = [self._to_model(license_key) for license_key in license_keys]
        try:
            with transaction.atomic():
                LicenseKeyModel.objects.bulk_create(models)
        except (IntegrityError, DatabaseError) as e:
            logger.error("Failed to persist batch of %d license keys: %s", len(models), e)
            raise StorageError(f"Failed to persist license keys: {e}") from e
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def find_by_id(self, license_key_id: uuid.UUID) -> Optional[LicenseKey]:
        """
        Find a license key by ID.

        Args:
            license_key_id: License key UUID

        Returns:
            LicenseKey entity or None if not found
        """
        try:
            return self._to_domain(LicenseKeyModel.objects.get(id=license_key_id))
        except LicenseKeyModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_code(self, key_code: str) -> Optional[LicenseKey]:
        try:
            return self._to_domain(LicenseKeyModel.objects.get(key_code=key_code))
        except LicenseKeyModel.DoesNotExist:
            return None

    @sync_to_async
    def code_exists(self, key_code: str) -> bool:
        return LicenseKeyModel.objects.filter(key_code=key_code).exists()

    @sync_to_async
    def claim(self, license_key_id: uuid.UUID, tenant_id: uuid.UUID, now: datetime) -> bool:
        """
        Conditionally mark an unused key active for a tenant.

        Returns:
            True if exactly one row was updated
        """
        updated = (
            LicenseKeyModel.objects.filter(id=license_key_id, status=LicenseKeyStatus.UNUSED.value)
            .filter(Q(assigned_tenant__isnull=True) | Q(assigned_tenant_id=tenant_id))
            .update(
                status=LicenseKeyStatus.ACTIVE.value,
                assigned_tenant_id=tenant_id,
                updated_at=now,
            )
        )
        return updated == 1

    @sync_to_async
    def revoke(self, license_key_id: uuid.UUID, now: datetime) -> bool:
        updated = (
            LicenseKeyModel.objects.filter(id=license_key_id)
            .exclude(status=LicenseKeyStatus.REVOKED.value)
            .update(status=LicenseKeyStatus.REVOKED.value, updated_at=now)
        )
        return updated == 1

    @sync_to_async
    def list(
        self,
        status: Optional[LicenseKeyStatus] = None,
        tenant_id: Optional[uuid.UUID] = None,
        limit: int = 50,
    ) -> List[LicenseKey]:
        """
        List keys, newest first.

        Args:
            status: Optional status filter
            tenant_id: Optional assigned tenant filter
            limit: Maximum number of rows

        Returns:
            List of LicenseKey entities
        """
        queryset = self._filtered(status, tenant_id).order_by("-created_at")[:limit]
        return [self._to_domain(model) for model in queryset]

    @sync_to_async
    def statistics(
        self,
        status: Optional[LicenseKeyStatus] = None,
        tenant_id: Optional[uuid.UUID] = None,
    ) -> LicenseKeyStatistics:
        queryset = self._filtered(status, tenant_id)
        totals = queryset.aggregate(total=Count("id"), total_days=Sum("duration_days"))
        by_status = {s.value: 0 for s in LicenseKeyStatus}
        for row in queryset.values("status").annotate(count=Count("id")).order_by():
            by_status[row["status"]] = row["count"]
        return LicenseKeyStatistics(
            total=totals["total"] or 0,
            total_days=totals["total_days"] or 0,
            by_status=by_status,
        )
