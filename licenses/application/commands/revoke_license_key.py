"""
RevokeLicenseKeyCommand.
"""
import uuid
from dataclasses import dataclass


@dataclass
class RevokeLicenseKeyCommand:
    """Command to revoke a license key."""

    license_key_id: uuid.UUID
    revoked_by: str = ""
