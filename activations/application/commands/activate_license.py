"""
ActivateLicenseCommand.

Command for a tenant to redeem a license key.
"""
import uuid
from dataclasses import dataclass


@dataclass
class ActivateLicenseCommand:
    """Command to activate a license key for a tenant."""

    tenant_id: uuid.UUID
    license_key: str
