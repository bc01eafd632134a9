"""
Test settings for EntitlementService.
"""
from .base import *  # noqa: F403, F401

DEBUG = False

SECRET_KEY = "test-secret-key"

# In-memory SQLite for fast, isolated tests
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Use in-memory cache for tests
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

# Password hashers for faster tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
ENTITLEMENT_NOTIFIER = "reminders.infrastructure.notifiers.LoggingNotifier"
CRON_SECRET_TOKEN = "test-cron-token"
APP_BASE_URL = "https://app.example.test"

CELERY_TASK_ALWAYS_EAGER = True
CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"

# Disable logging during tests
LOGGING_CONFIG = None
