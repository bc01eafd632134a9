"""
Base Django settings for EntitlementService.

These settings are shared across all environments.
Environment-specific overrides are in dev.py, test.py, and prod.py
"""
import os
from pathlib import Path

from celery.schedules import crontab

from .logging import get_logging_config

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get("SECRET_KEY", "django-insecure-entitlement-service-dev-only-key")

ALLOWED_HOSTS = os.environ.get("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")

# Application definition
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Third party
    "rest_framework",
    "drf_spectacular",
    # Local apps
    "EntitlementService.apps.EntitlementServiceConfig",
    "core",
    "tenants",
    "licenses",
    "activations",
    "reminders",
    "api",
]

MIDDLEWARE = [
    "core.middleware.metrics.MetricsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    # Custom middleware
    "core.middleware.tenant.EntitlementMiddleware",
]

ROOT_URLCONF = "EntitlementService.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "EntitlementService.wsgi.application"
ASGI_APPLICATION = "EntitlementService.asgi.application"

# Database
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.environ.get("DB_NAME", "entitlement_service"),
        "USER": os.environ.get("DB_USER", "postgres"),
        "PASSWORD": os.environ.get("DB_PASSWORD", "postgres"),
        "HOST": os.environ.get("DB_HOST", "localhost"),
        "PORT": os.environ.get("DB_PORT", "5432"),
        "OPTIONS": {
            "connect_timeout": 10,
        },
    }
}

# Password validation
AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Static files (CSS, JavaScript, Images)
STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# REST Framework
REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [],
    "UNAUTHENTICATED_USER": None,
    "EXCEPTION_HANDLER": "api.exceptions.custom_exception_handler",
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

# drf-spectacular settings
SPECTACULAR_SETTINGS = {
    "TITLE": "Tenant Entitlement Service API",
    "DESCRIPTION": (
        "License key and access management for a multi-tenant restaurant "
        "platform: key generation, activation, trial and grace period "
        "evaluation, suspension and expiry reminders."
    ),
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "COMPONENT_SPLIT_REQUEST": True,
    "SCHEMA_PATH_PREFIX": "/api/v1",
    "TAGS": [
        {"name": "Admin API", "description": "License key administration"},
        {"name": "Tenant API", "description": "Tenant license activation and access"},
        {"name": "Cron API", "description": "Scheduled jobs"},
        {"name": "Health", "description": "Health check endpoints"},
    ],
}

# Redis Cache
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.redis.RedisCache",
        "LOCATION": os.environ.get("REDIS_URL", "redis://127.0.0.1:6379/1"),
        "OPTIONS": {
            "socket_connect_timeout": 5,
            "socket_timeout": 5,
        },
    }
}

# Celery
CELERY_BROKER_URL = os.environ.get("CELERY_BROKER_URL", "redis://127.0.0.1:6379/0")
CELERY_RESULT_BACKEND = os.environ.get("CELERY_RESULT_BACKEND", "redis://127.0.0.1:6379/0")
CELERY_TIMEZONE = TIME_ZONE
CELERY_BEAT_SCHEDULE = {
    "sweep-tenant-access": {
        "task": "core.tasks.sweep_tenant_access",
        "schedule": crontab(hour=0, minute=15),
    },
    "run-license-reminder-scan": {
        "task": "core.tasks.run_license_reminder_scan",
        "schedule": crontab(hour=9, minute=0),
    },
    "purge-reminder-ledger": {
        "task": "core.tasks.purge_reminder_ledger",
        "schedule": crontab(hour=3, minute=30, day_of_week="sunday"),
    },
}

# Email
DEFAULT_FROM_EMAIL = os.environ.get("DEFAULT_FROM_EMAIL", "licensing@localhost")

# Entitlement
LICENSE_KEY_PREFIX = os.environ.get("LICENSE_KEY_PREFIX", "OWLTD")
TRIAL_PERIOD_DAYS = 3
LICENSE_GRACE_PERIOD_DAYS = 7
LICENSE_REMINDER_THRESHOLDS = [7, 3, 1, 0]
LICENSE_REMINDER_WINDOW_DAYS = 30
LICENSE_KEY_GENERATION_MAX_ATTEMPTS = 10
ACCESS_STATUS_CACHE_TTL = 60
ENTITLEMENT_NOTIFIER = os.environ.get(
    "ENTITLEMENT_NOTIFIER", "reminders.infrastructure.notifiers.EmailNotifier"
)
ENTITLEMENT_PROTECTED_PATH_PREFIXES = ["/app/"]
CRON_SECRET_TOKEN = os.environ.get("CRON_SECRET_TOKEN", "")
APP_BASE_URL = os.environ.get("APP_BASE_URL", "http://localhost:3000")

# Observability
LOGGING = get_logging_config(os.environ.get("ENVIRONMENT", "development"))
