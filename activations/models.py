"""Model discovery for the activations app."""
from activations.infrastructure.models import TenantLicense  # noqa: F401
