"""
Tenant entitlement middleware.

This middleware resolves the tenant named by the ``X-Tenant-ID``
header, evaluates its access and makes the verdict available
throughout the request lifecycle.
"""
import contextvars
import logging
import uuid
from typing import Callable, Optional

from asgiref.sync import async_to_sync
from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse

from core import container
from core.domain.exceptions import TenantNotFoundError
from tenants.application.dto.access_dto import AccessStatusDTO
from tenants.application.queries.check_access import CheckAccessQuery

logger = logging.getLogger(__name__)

TENANT_HEADER = "X-Tenant-ID"

# Context variable for the current tenant ID
tenant_context: contextvars.ContextVar[Optional[uuid.UUID]] = contextvars.ContextVar(
    "tenant_id", default=None
)


def get_current_tenant_id() -> Optional[uuid.UUID]:
    """
    Get the current tenant ID from context.

    Returns:
        Tenant ID (UUID) or None if not set
    """
    return tenant_context.get(None)


class EntitlementMiddleware:
    """
    Middleware to enforce tenant entitlement.

    This middleware:
    1. Reads the tenant ID from the ``X-Tenant-ID`` header
    2. Evaluates access (cached for ``ACCESS_STATUS_CACHE_TTL``)
    3. Returns 402 for denied tenants on protected path prefixes
    4. Adds ``X-License-*`` headers describing the verdict
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response
        self.protected_prefixes = tuple(getattr(settings, "ENTITLEMENT_PROTECTED_PATH_PREFIXES", ()))

    def _tenant_id(self, request: HttpRequest) -> Optional[uuid.UUID]:
        raw = request.headers.get(TENANT_HEADER)
        if not raw:
            return None
        try:
            return uuid.UUID(raw)
        except ValueError:
            logger.debug("Ignoring malformed %s header: %s", TENANT_HEADER, raw)
            return None

    async def _access_status(self, tenant_id: uuid.UUID) -> Optional[AccessStatusDTO]:
        cache_service = container.access_cache_service()
        status = await cache_service.get(tenant_id)
        if status is not None:
            return status
        try:
            status = await container.check_access_handler().handle(CheckAccessQuery(tenant_id=tenant_id))
        except TenantNotFoundError:
            return None
        await cache_service.set(status)
        return status

    def _is_protected(self, path: str) -> bool:
        return any(path.startswith(prefix) for prefix in self.protected_prefixes)

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request and apply entitlement.

        Args:
            request: HTTP request

        Returns:
            HTTP response
        """
        tenant_id = self._tenant_id(request)
        status = async_to_sync(self._access_status)(tenant_id) if tenant_id else None
        if status is None:
            tenant_id = None

        token = tenant_context.set(tenant_id)
        request.tenant_id = tenant_id  # type: ignore
        request.access_status = status  # type: ignore

        try:
            if status is not None and not status.is_valid and self._is_protected(request.path):
                logger.info("Blocked %s for tenant %s: %s", request.path, tenant_id, status.status)
                response = JsonResponse(
                    {"error": {"code": "LICENSE_REQUIRED", "message": status.message}},
                    status=402,
                )
            else:
                response = self.get_response(request)
        finally:
            tenant_context.reset(token)

        if status is not None:
            response["X-License-Status"] = status.status
            response["X-License-Message"] = status.message
            response["X-License-Days-Remaining"] = str(status.days_remaining)
            if status.warning:
                response["X-License-Warning"] = "true"
        return response
