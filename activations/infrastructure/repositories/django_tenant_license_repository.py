"""
Django implementation of TenantLicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import logging
import uuid
from datetime import datetime
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import DatabaseError, IntegrityError, transaction

from activations.domain.assignment import TenantLicenseAssignment
from activations.infrastructure.models import TenantLicense as TenantLicenseModel
from activations.ports.tenant_license_repository import (
    ExpiringAssignment,
    TenantLicenseRepository,
)
from core.domain.exceptions import ConcurrentActivationError, StorageError
from core.domain.value_objects import AssignmentStatus

logger = logging.getLogger(__name__)


class DjangoTenantLicenseRepository(TenantLicenseRepository):
    """
    Django ORM implementation of TenantLicenseRepository.

    The ``one_active_license_per_tenant`` partial unique index backs
    the single-active-assignment rule; a violation on insert surfaces
    as ``ConcurrentActivationError``.
    """

    def _to_domain(self, model: TenantLicenseModel) -> TenantLicenseAssignment:
        return TenantLicenseAssignment(
            id=model.id,
            tenant_id=model.tenant_id,
            license_key_id=model.license_key_id,
            key_code=model.key_code,
            duration_days=model.duration_days,
            activated_at=model.activated_at,
            expires_at=model.expires_at,
            status=AssignmentStatus(model.status),
            ended_at=model.ended_at,
        )

    @sync_to_async
    def add(self, assignment: TenantLicenseAssignment) -> TenantLicenseAssignment:
        """
        Insert a new assignment.

        Args:
            assignment: New TenantLicenseAssignment

        Returns:
            Saved assignment
        """
        model = TenantLicenseModel(
            id=assignment.id,
            tenant_id=assignment.tenant_id,
            license_key_id=assignment.license_key_id,
            key_code=assignment.key_code,
            duration_days=assignment.duration_days,
            activated_at=assignment.activated_at,
            expires_at=assignment.expires_at,
            status=assignment.status.value,
            ended_at=assignment.ended_at,
        )
        try:
            # Savepoint so the caller's transaction stays usable after a violation
            with transaction.atomic():
                model.save(force_insert=True)
        except IntegrityError as e:
            logger.warning("Active assignment conflict for tenant %s: %s", assignment.tenant_id, e)
            raise ConcurrentActivationError() from e
        except DatabaseError as e:
            raise StorageError(f"Failed to save license assignment: {e}") from e
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, assignment_id: uuid.UUID) -> Optional[TenantLicenseAssignment]:
        try:
            return self._to_domain(TenantLicenseModel.objects.get(id=assignment_id))
        except TenantLicenseModel.DoesNotExist:
            return None

    @sync_to_async
    def find_active_for_tenant(self, tenant_id: uuid.UUID) -> Optional[TenantLicenseAssignment]:
        """
        Find the tenant's current active assignment.

        Args:
            tenant_id: Tenant UUID

        Returns:
            The active assignment or None
        """
        model = (
            TenantLicenseModel.objects.filter(tenant_id=tenant_id, status=AssignmentStatus.ACTIVE.value)
            .order_by("-activated_at")
            .first()
        )
        return self._to_domain(model) if model else None

    @sync_to_async
    def find_active_for_license_key(
        self, license_key_id: uuid.UUID
    ) -> Optional[TenantLicenseAssignment]:
        model = TenantLicenseModel.objects.filter(
            license_key_id=license_key_id, status=AssignmentStatus.ACTIVE.value
        ).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def end(self, assignment_id: uuid.UUID, now: datetime) -> bool:
        updated = TenantLicenseModel.objects.filter(
            id=assignment_id, status=AssignmentStatus.ACTIVE.value
        ).update(status=AssignmentStatus.EXPIRED.value, ended_at=now, updated_at=now)
        return updated == 1

    @sync_to_async
    def list_expiring(self, start: datetime, end: datetime) -> List[ExpiringAssignment]:
        """
        Active assignments expiring inside ``[start, end]``.

        Returns:
            ExpiringAssignment rows ordered by ``expires_at``
        """
        models = (
            TenantLicenseModel.objects.select_related("tenant")
            .filter(
                status=AssignmentStatus.ACTIVE.value,
                expires_at__gte=start,
                expires_at__lte=end,
            )
            .order_by("expires_at")
        )
        return [
            ExpiringAssignment(
                assignment=self._to_domain(model),
                tenant_name=model.tenant.name,
                tenant_email=model.tenant.email,
            )
            for model in models
        ]

    @sync_to_async
    def list_active_expired_before(self, cutoff: datetime) -> List[TenantLicenseAssignment]:
        models = TenantLicenseModel.objects.filter(
            status=AssignmentStatus.ACTIVE.value, expires_at__lt=cutoff
        ).order_by("expires_at")
        return [self._to_domain(model) for model in models]
