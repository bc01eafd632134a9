"""
Tenant domain events.
"""
import uuid
from dataclasses import dataclass

from core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class TenantSuspended(DomainEvent):
    """Event raised when a tenant loses access."""

    tenant_id: uuid.UUID
    reason: str = ""


@dataclass(frozen=True, kw_only=True)
class TenantReactivated(DomainEvent):
    """Event raised when a suspended or trial tenant becomes active."""

    tenant_id: uuid.UUID
