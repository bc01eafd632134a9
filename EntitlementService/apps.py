"""
App configuration for the Entitlement Service project.
"""
import logging
import sys

from django.apps import AppConfig

logger = logging.getLogger(__name__)

# Management commands that never publish domain events
_SKIP_SETUP_COMMANDS = {"migrate", "makemigrations", "collectstatic", "check", "createsuperuser"}


class EntitlementServiceConfig(AppConfig):
    """App configuration for EntitlementService."""

    name = "EntitlementService"
    verbose_name = "Tenant Entitlement Service"
    _initialized = False

    def ready(self):
        """Set up tracing and event handlers once Django has loaded all apps."""
        if len(sys.argv) > 1 and sys.argv[1] in _SKIP_SETUP_COMMANDS:
            return
        if EntitlementServiceConfig._initialized:
            return

        from core.infrastructure.event_handlers import register_event_handlers
        from core.instrumentation import setup_opentelemetry

        try:
            setup_opentelemetry()
        except Exception:  # pylint: disable=broad-exception-caught
            # Tracing is optional; the service runs without an exporter
            logger.warning("Failed to set up OpenTelemetry", exc_info=True)

        register_event_handlers()
        EntitlementServiceConfig._initialized = True
        logger.info("Entitlement service initialized")
