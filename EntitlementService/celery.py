"""
Celery configuration for background tasks.

Runs the periodic entitlement jobs defined in ``core.tasks``; the
schedule is ``CELERY_BEAT_SCHEDULE`` in settings.
"""
import os

from celery import Celery

# Set default Django settings module
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "EntitlementService.settings.dev")

app = Celery("EntitlementService")

# Load configuration from Django settings
app.config_from_object("django.conf:settings", namespace="CELERY")

# Auto-discover tasks from all installed apps
app.autodiscover_tasks()
