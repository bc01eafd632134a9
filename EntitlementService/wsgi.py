"""
WSGI config for EntitlementService.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "EntitlementService.settings.prod")

application = get_wsgi_application()
