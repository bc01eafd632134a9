"""Model discovery for the licenses app."""
from licenses.infrastructure.models import LicenseHistory, LicenseKey  # noqa: F401
