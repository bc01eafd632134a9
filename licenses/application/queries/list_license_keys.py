"""
ListLicenseKeysQuery.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

DEFAULT_LIST_LIMIT = 50
MAX_LIST_LIMIT = 500


@dataclass
class ListLicenseKeysQuery:
    """Query to list license keys with optional filters."""

    status: Optional[str] = None
    tenant_id: Optional[uuid.UUID] = None
    limit: int = DEFAULT_LIST_LIMIT
