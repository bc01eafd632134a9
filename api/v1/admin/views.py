"""
Admin API views.

These endpoints are used by operators to:
- Generate batches of license keys
- List and revoke license keys
- Review licenses that are about to expire
"""

import uuid
from typing import Optional

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.exceptions import validation_error_response
from api.v1.admin.serializers import (
    ExpiringLicenseSerializer,
    GenerateLicenseKeysRequestSerializer,
    GenerateLicenseKeysResponseSerializer,
    LicenseKeyListSerializer,
    RevokeLicenseKeyResponseSerializer,
)
from core import container
from core.domain.exceptions import InvalidQueryError
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.generate_license_keys import GenerateLicenseKeysCommand
from licenses.application.commands.revoke_license_key import RevokeLicenseKeyCommand
from licenses.application.queries.list_license_keys import DEFAULT_LIST_LIMIT, ListLicenseKeysQuery
from reminders.application.queries.list_expiring_licenses import ListExpiringLicensesQuery
from reminders.domain.reminder import DEFAULT_WINDOW_DAYS

tracer = get_tracer(__name__)


def _int_param(request: Request, name: str, default: int) -> int:
    raw = request.query_params.get(name)
    if raw in (None, ""):
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise InvalidQueryError(f"{name} must be an integer") from e


def _uuid_param(request: Request, name: str) -> Optional[uuid.UUID]:
    raw = request.query_params.get(name)
    if not raw:
        return None
    try:
        return uuid.UUID(raw)
    except ValueError as e:
        raise InvalidQueryError(f"{name} must be a UUID") from e


class LicenseKeysView(APIView):
    """View for generating and listing license keys."""

    @extend_schema(
        operation_id="generate_license_keys",
        summary="Generate License Keys",
        description=(
            "Mint a batch of 1-100 license keys valid for 1-365 days once activated. "
            "Passing assigned_tenant_id reserves every key in the batch for that tenant."
        ),
        tags=["Admin API"],
        request=GenerateLicenseKeysRequestSerializer,
        responses={
            201: GenerateLicenseKeysResponseSerializer,
            400: {"description": "Bad Request"},
            404: {"description": "Reserving tenant not found"},
            503: {"description": "Key generation exhausted or storage unavailable"},
        },
    )
    def post(self, request: Request) -> Response:
        """Generate license keys."""
        return async_to_sync(self._handle_generate)(request)

    async def _handle_generate(self, request: Request) -> Response:
        """Async handler for generate license keys."""
        with tracer.start_as_current_span("generate_license_keys") as span:
            span.set_attribute("operation", "generate_license_keys")

            serializer = GenerateLicenseKeysRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return validation_error_response(serializer.errors)

            data = serializer.validated_data
            span.set_attribute("duration_days", data["duration_days"])
            span.set_attribute("quantity", data["quantity"])

            command = GenerateLicenseKeysCommand(
                duration_days=data["duration_days"],
                quantity=data["quantity"],
                created_by=data["created_by"],
                assigned_tenant_id=data["assigned_tenant_id"],
                notes=data["notes"],
            )
            result = await container.generate_license_keys_handler().handle(command)

            span.set_attribute("license_keys.count", result.count)
            span.set_status(Status(StatusCode.OK))
            return Response(
                GenerateLicenseKeysResponseSerializer(result).data,
                status=status.HTTP_201_CREATED,
            )

    @extend_schema(
        operation_id="list_license_keys",
        summary="List License Keys",
        description="List license keys, newest first, with aggregate statistics.",
        tags=["Admin API"],
        parameters=[
            OpenApiParameter(
                name="status",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description="unused, active, expired or revoked",
            ),
            OpenApiParameter(
                name="tenant_id",
                type=uuid.UUID,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Only keys assigned to this tenant",
            ),
            OpenApiParameter(
                name="limit",
                type=int,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Maximum number of keys (1-500, default 50)",
            ),
        ],
        responses={
            200: LicenseKeyListSerializer,
            400: {"description": "Bad Request"},
        },
    )
    def get(self, request: Request) -> Response:
        """List license keys."""
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        """Async handler for list license keys."""
        with tracer.start_as_current_span("list_license_keys") as span:
            span.set_attribute("operation", "list_license_keys")

            query = ListLicenseKeysQuery(
                status=request.query_params.get("status") or None,
                tenant_id=_uuid_param(request, "tenant_id"),
                limit=_int_param(request, "limit", DEFAULT_LIST_LIMIT),
            )
            result = await container.list_license_keys_handler().handle(query)

            span.set_attribute("license_keys.count", len(result.keys))
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseKeyListSerializer(result).data, status=status.HTTP_200_OK)


class LicenseKeyDetailView(APIView):
    """View for revoking a single license key."""

    @extend_schema(
        operation_id="revoke_license_key",
        summary="Revoke License Key",
        description=(
            "Revoke a license key. An active assignment backed by the key is ended; "
            "the tenant's access is re-evaluated on its next check. Revoking twice is a no-op."
        ),
        tags=["Admin API"],
        responses={
            200: RevokeLicenseKeyResponseSerializer,
            404: {"description": "License key not found"},
        },
    )
    def delete(self, request: Request, license_key_id: uuid.UUID) -> Response:
        """Revoke a license key."""
        return async_to_sync(self._handle_revoke)(request, license_key_id)

    async def _handle_revoke(self, request: Request, license_key_id: uuid.UUID) -> Response:
        """Async handler for revoke license key."""
        with tracer.start_as_current_span("revoke_license_key") as span:
            span.set_attribute("operation", "revoke_license_key")
            span.set_attribute("license_key.id", str(license_key_id))

            command = RevokeLicenseKeyCommand(
                license_key_id=license_key_id,
                revoked_by=request.data.get("revoked_by", ""),
            )
            result = await container.revoke_license_key_handler().handle(command)

            span.set_attribute("already_revoked", result.already_revoked)
            span.set_status(Status(StatusCode.OK))
            return Response(RevokeLicenseKeyResponseSerializer(result).data, status=status.HTTP_200_OK)


class ExpiringLicensesView(APIView):
    """View for listing licenses close to expiry."""

    @extend_schema(
        operation_id="list_expiring_licenses",
        summary="List Expiring Licenses",
        description="Active licenses expiring within the given number of days, soonest first.",
        tags=["Admin API"],
        parameters=[
            OpenApiParameter(
                name="within_days",
                type=int,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Look-ahead window in days (0-365, default 30)",
            ),
        ],
        responses={
            200: ExpiringLicenseSerializer(many=True),
            400: {"description": "Bad Request"},
        },
    )
    def get(self, request: Request) -> Response:
        """List expiring licenses."""
        return async_to_sync(self._handle_list_expiring)(request)

    async def _handle_list_expiring(self, request: Request) -> Response:
        """Async handler for list expiring licenses."""
        with tracer.start_as_current_span("list_expiring_licenses") as span:
            span.set_attribute("operation", "list_expiring_licenses")

            query = ListExpiringLicensesQuery(
                within_days=_int_param(request, "within_days", DEFAULT_WINDOW_DAYS)
            )
            span.set_attribute("within_days", query.within_days)
            result = await container.list_expiring_licenses_handler().handle(query)

            span.set_attribute("licenses.count", len(result))
            span.set_status(Status(StatusCode.OK))
            return Response(ExpiringLicenseSerializer(result, many=True).data, status=status.HTTP_200_OK)
