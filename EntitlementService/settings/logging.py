"""
Logging configuration for structured JSON logging.

Every record is emitted as one JSON object; records produced inside
an OpenTelemetry span carry its trace and span ids.
"""
import sys

from opentelemetry import trace
from pythonjsonlogger import jsonlogger

APP_LOGGERS = ("core", "api", "licenses", "tenants", "activations", "reminders")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter that adds trace context."""

    def add_fields(self, log_record, record, message_dict):
        """Add custom fields to log record."""
        super().add_fields(log_record, record, message_dict)

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            log_record["trace_id"] = format(span_context.trace_id, "032x")
            log_record["span_id"] = format(span_context.span_id, "016x")


def get_logging_config(environment: str = "development", log_file: str = None) -> dict:
    """
    Get logging configuration for the application.

    Args:
        environment: Environment name (development, production)
        log_file: Optional path of a rotating JSON log file

    Returns:
        Django logging configuration dictionary
    """
    log_level = "DEBUG" if environment == "development" else "INFO"
    root_handlers = ["console"]

    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "stream": sys.stdout,
        },
    }
    if log_file:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "json",
            "filename": log_file,
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5,
        }
        root_handlers.append("file")

    loggers = {
        "django": {"handlers": root_handlers, "level": "INFO", "propagate": False},
        "django.request": {"handlers": root_handlers, "level": "WARNING", "propagate": False},
        "django.db.backends": {"handlers": root_handlers, "level": "WARNING", "propagate": False},
        "celery": {"handlers": root_handlers, "level": "INFO", "propagate": False},
    }
    for name in APP_LOGGERS:
        loggers[name] = {"handlers": root_handlers, "level": log_level, "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": CustomJsonFormatter,
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s %(pathname)s %(lineno)d",
            },
        },
        "handlers": handlers,
        "root": {"handlers": root_handlers, "level": log_level},
        "loggers": loggers,
    }
