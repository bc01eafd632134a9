"""
Cron API views.

Called by an external scheduler as an alternative to Celery beat.
Requests must carry ``Authorization: Bearer <CRON_SECRET_TOKEN>``.
"""

import hmac
import logging

from asgiref.sync import async_to_sync
from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.exceptions import APIError, validation_error_response
from api.v1.cron.serializers import (
    RunReminderScanRequestSerializer,
    RunReminderScanResponseSerializer,
)
from core import container
from core.instrumentation import Status, StatusCode, get_tracer
from reminders.application.commands.run_reminder_scan import (
    PurgeReminderLedgerCommand,
    RunReminderScanCommand,
)

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


def _check_cron_token(request: Request) -> None:
    expected = getattr(settings, "CRON_SECRET_TOKEN", "")
    provided = request.headers.get("Authorization", "")
    if not expected or not hmac.compare_digest(provided, f"Bearer {expected}"):
        raise APIError("Unauthorized", code="unauthorized", status_code=status.HTTP_401_UNAUTHORIZED)


class LicenseRemindersView(APIView):
    """View for triggering the expiry reminder scan."""

    @extend_schema(
        operation_id="run_license_reminders",
        summary="Run License Reminder Scan",
        description=(
            "Send due expiry reminders, then purge reminder ledger rows of long-expired "
            "licenses. Each reminder is sent at most once per license and threshold."
        ),
        tags=["Cron API"],
        request=RunReminderScanRequestSerializer,
        responses={
            200: RunReminderScanResponseSerializer,
            401: {"description": "Unauthorized - Missing or invalid cron token"},
        },
    )
    def post(self, request: Request) -> Response:
        """Run the reminder scan."""
        return async_to_sync(self._handle_run_reminders)(request)

    async def _handle_run_reminders(self, request: Request) -> Response:
        """Async handler for the reminder scan."""
        with tracer.start_as_current_span("run_license_reminders") as span:
            span.set_attribute("operation", "run_license_reminders")

            _check_cron_token(request)

            serializer = RunReminderScanRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return validation_error_response(serializer.errors)
            dry_run = serializer.validated_data["dry_run"]

            result = await container.run_reminder_scan_handler().handle(
                RunReminderScanCommand(dry_run=dry_run)
            )
            purged = 0
            if not dry_run:
                purged = await container.purge_reminder_ledger_handler().handle(
                    PurgeReminderLedgerCommand()
                )

            span.set_attribute("reminders.sent", result.sent)
            span.set_attribute("reminders.failed", result.failed)
            span.set_status(Status(StatusCode.OK))
            logger.info("License reminder check completed: sent=%d failed=%d", result.sent, result.failed)

            payload = {
                "success": True,
                "message": "Reminder check completed successfully",
                "result": result,
                "purged": purged,
            }
            return Response(RunReminderScanResponseSerializer(payload).data, status=status.HTTP_200_OK)
