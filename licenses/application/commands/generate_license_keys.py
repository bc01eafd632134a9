"""
GenerateLicenseKeysCommand.

Command to mint a batch of license keys.
"""
import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class GenerateLicenseKeysCommand:
    """
    Command to generate license keys.

    ``assigned_tenant_id`` reserves every key in the batch for one
    tenant.
    """

    duration_days: int
    quantity: int
    created_by: str
    assigned_tenant_id: Optional[uuid.UUID] = None
    notes: Optional[str] = None
