"""
ListExpiringLicensesHandler.

Handles the list expiring licenses query. Read only.
"""
from datetime import datetime, timedelta
from typing import Callable, List

from django.utils import timezone

from activations.ports.tenant_license_repository import TenantLicenseRepository
from core.domain.exceptions import InvalidQueryError
from reminders.application.dto.reminder_dto import ExpiringLicenseDTO
from reminders.application.queries.list_expiring_licenses import (
    MAX_WITHIN_DAYS,
    ListExpiringLicensesQuery,
)
from reminders.domain.reminder import days_until_expiry


class ListExpiringLicensesHandler:
    """Handler for ListExpiringLicensesQuery."""

    def __init__(
        self,
        tenant_license_repository: TenantLicenseRepository,
        clock: Callable[[], datetime] = timezone.now,
    ):
        """Initialize handler with repository."""
        self.tenant_license_repository = tenant_license_repository
        self.clock = clock

    async def handle(self, query: ListExpiringLicensesQuery) -> List[ExpiringLicenseDTO]:
        """
        Handle list expiring licenses query.

        Args:
            query: ListExpiringLicensesQuery

        Returns:
            ExpiringLicenseDTO rows ordered by expiry

        Raises:
            InvalidQueryError: If ``within_days`` is outside 0..365
        """
        if not 0 <= query.within_days <= MAX_WITHIN_DAYS:
            raise InvalidQueryError(f"within_days must be between 0 and {MAX_WITHIN_DAYS}")

        now = self.clock()
        rows = await self.tenant_license_repository.list_expiring(
            now, now + timedelta(days=query.within_days)
        )
        return [
            ExpiringLicenseDTO(
                tenant_id=row.assignment.tenant_id,
                tenant_name=row.tenant_name,
                tenant_email=row.tenant_email,
                key_code=row.assignment.key_code,
                expires_at=row.assignment.expires_at,
                days_until_expiry=days_until_expiry(row.assignment.expires_at, now),
            )
            for row in rows
        ]
