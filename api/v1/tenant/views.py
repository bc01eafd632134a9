"""
Tenant API views.

These endpoints are used by tenant systems to:
- Redeem a license key
- Check the current access state
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from activations.application.commands.activate_license import ActivateLicenseCommand
from api.exceptions import validation_error_response
from api.v1.tenant.serializers import (
    AccessStatusSerializer,
    ActivateLicenseRequestSerializer,
    ActivationResultSerializer,
)
from core import container
from core.instrumentation import Status, StatusCode, get_tracer
from tenants.application.queries.check_access import CheckAccessQuery

tracer = get_tracer(__name__)


class ActivateLicenseView(APIView):
    """View for activating a license key."""

    @extend_schema(
        operation_id="activate_license",
        summary="Activate License",
        description=(
            "Redeem a license key for the tenant. Case and separators are ignored. "
            "A currently active license is replaced and a suspended tenant is reactivated."
        ),
        tags=["Tenant API"],
        request=ActivateLicenseRequestSerializer,
        responses={
            200: ActivationResultSerializer,
            400: {"description": "Invalid license key format"},
            404: {"description": "Tenant or license key not found"},
            409: {"description": "License key already used"},
        },
    )
    def post(self, request: Request, tenant_id: uuid.UUID) -> Response:
        """Activate a license key."""
        return async_to_sync(self._handle_activate)(request, tenant_id)

    async def _handle_activate(self, request: Request, tenant_id: uuid.UUID) -> Response:
        """Async handler for activate license."""
        with tracer.start_as_current_span("activate_license") as span:
            span.set_attribute("operation", "activate_license")
            span.set_attribute("tenant.id", str(tenant_id))

            serializer = ActivateLicenseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return validation_error_response(serializer.errors)

            command = ActivateLicenseCommand(
                tenant_id=tenant_id,
                license_key=serializer.validated_data["license_key"],
            )
            result = await container.activate_license_handler().handle(command)

            span.set_attribute("license_key", result.license_key)
            span.set_attribute("duration_days", result.duration_days)
            span.set_status(Status(StatusCode.OK))
            return Response(ActivationResultSerializer(result).data, status=status.HTTP_200_OK)


class AccessStatusView(APIView):
    """View for a tenant's access state."""

    @extend_schema(
        operation_id="check_access",
        summary="Check Access",
        description=(
            "Evaluate the tenant's access state: trial, licensed, grace_period or suspended. "
            "A tenant found past every entitlement is suspended as a side effect."
        ),
        tags=["Tenant API"],
        responses={
            200: AccessStatusSerializer,
            404: {"description": "Tenant not found"},
        },
    )
    def get(self, request: Request, tenant_id: uuid.UUID) -> Response:
        """Check tenant access."""
        return async_to_sync(self._handle_check_access)(request, tenant_id)

    async def _handle_check_access(self, request: Request, tenant_id: uuid.UUID) -> Response:
        """Async handler for check access."""
        with tracer.start_as_current_span("check_access") as span:
            span.set_attribute("operation", "check_access")
            span.set_attribute("tenant.id", str(tenant_id))

            result = await container.check_access_handler().handle(CheckAccessQuery(tenant_id=tenant_id))
            await container.access_cache_service().set(result)

            span.set_attribute("access.status", result.status)
            span.set_status(Status(StatusCode.OK))
            return Response(AccessStatusSerializer(result).data, status=status.HTTP_200_OK)
