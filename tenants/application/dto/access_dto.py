"""
Tenant access DTOs for API responses.
"""
import uuid
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from tenants.domain.access import AccessDecision


@dataclass
class AccessStatusDTO:
    """DTO for a tenant access verdict."""

    tenant_id: uuid.UUID
    status: str
    is_valid: bool
    days_remaining: int
    message: str
    warning: bool = False
    expires_at: Optional[datetime] = None
    valid_until: Optional[datetime] = None

    @classmethod
    def from_decision(cls, tenant_id: uuid.UUID, decision: AccessDecision) -> "AccessStatusDTO":
        return cls(
            tenant_id=tenant_id,
            status=decision.state.value,
            is_valid=decision.is_valid,
            days_remaining=decision.days_remaining,
            message=decision.message,
            warning=decision.warning,
            expires_at=decision.expires_at,
            valid_until=decision.valid_until,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SweepResultDTO:
    """Outcome of one access sweep."""

    checked: int = 0
    suspended: int = 0
    expired_assignments: int = 0
    failed: int = 0
    dry_run: bool = False
