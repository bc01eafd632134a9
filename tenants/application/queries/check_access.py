"""
CheckAccessQuery.
"""
import uuid
from dataclasses import dataclass


@dataclass
class CheckAccessQuery:
    """Query for a tenant's current access state."""

    tenant_id: uuid.UUID
