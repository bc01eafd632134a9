"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. Status fields are closed enums so that
invalid states cannot be represented.
"""
from enum import Enum


class LicenseKeyStatus(Enum):
    """Lifecycle status of a license key."""

    UNUSED = "unused"
    ACTIVE = "active"
    EXPIRED = "expired"
    REVOKED = "revoked"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class AssignmentStatus(Enum):
    """Status of a tenant-license assignment."""

    ACTIVE = "active"
    EXPIRED = "expired"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class TenantStatus(Enum):
    """Entitlement status stored on the tenant record."""

    TRIAL = "trial"
    ACTIVE = "active"
    SUSPENDED = "suspended"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class AccessState(Enum):
    """Access verdict computed by the access evaluator."""

    TRIAL_ACTIVE = "trial"
    LICENSED = "licensed"
    EXPIRED_IN_GRACE = "grace_period"
    SUSPENDED = "suspended"

    @property
    def grants_access(self) -> bool:
        """Whether this state allows the tenant to use the product."""
        return self is not AccessState.SUSPENDED

    def __str__(self) -> str:
        """Return state as string."""
        return self.value
