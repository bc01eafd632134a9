"""
ListLicenseKeysHandler.

Handles the list license keys query.
"""
from core.domain.exceptions import InvalidQueryError
from core.domain.value_objects import LicenseKeyStatus
from licenses.application.dto.license_key_dto import (
    LicenseKeyDTO,
    LicenseKeyListDTO,
    LicenseKeyStatisticsDTO,
)
from licenses.application.queries.list_license_keys import (
    MAX_LIST_LIMIT,
    ListLicenseKeysQuery,
)
from licenses.ports.license_key_repository import LicenseKeyRepository


class ListLicenseKeysHandler:
    """Handler for ListLicenseKeysQuery."""

    def __init__(self, license_key_repository: LicenseKeyRepository):
        """Initialize handler with repository."""
        self.license_key_repository = license_key_repository

    async def handle(self, query: ListLicenseKeysQuery) -> LicenseKeyListDTO:
        """
        Handle list license keys query.

        Args:
            query: ListLicenseKeysQuery

        Returns:
            LicenseKeyListDTO with keys (newest first) and statistics

        Raises:
            InvalidQueryError: If the status or limit is invalid
        """
        status = None
        if query.status:
            try:
                status = LicenseKeyStatus(query.status)
            except ValueError as e:
                raise InvalidQueryError(f"Unknown license key status: {query.status}") from e

        if not 1 <= query.limit <= MAX_LIST_LIMIT:
            raise InvalidQueryError(f"Limit must be between 1 and {MAX_LIST_LIMIT}")

        keys = await self.license_key_repository.list(
            status=status, tenant_id=query.tenant_id, limit=query.limit
        )
        stats = await self.license_key_repository.statistics(status=status, tenant_id=query.tenant_id)

        return LicenseKeyListDTO(
            keys=[LicenseKeyDTO.from_entity(key) for key in keys],
            statistics=LicenseKeyStatisticsDTO(
                total=stats.total,
                total_days=stats.total_days,
                by_status=dict(stats.by_status),
            ),
        )
