"""
Access evaluation.

``AccessEvaluator.evaluate`` is the single decision function for
whether a tenant may use the product. It is pure: suspension is
applied by the caller based on the returned verdict.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from core.domain.value_objects import AccessState
from activations.domain.assignment import TenantLicenseAssignment
from tenants.domain.tenant import Tenant

DEFAULT_GRACE_PERIOD_DAYS = 7
EXPIRY_WARNING_DAYS = 7

SECONDS_PER_DAY = 24 * 60 * 60

ERROR_MESSAGE = "Error checking access. Please contact support."


def days_between(start: datetime, end: datetime) -> int:
    """Whole days from ``start`` to ``end``, rounded up."""
    return math.ceil((end - start).total_seconds() / SECONDS_PER_DAY)


@dataclass(frozen=True)
class AccessDecision:
    """Verdict for one tenant at one instant."""

    state: AccessState
    days_remaining: int
    message: str
    warning: bool = False
    expires_at: Optional[datetime] = None
    # Instant the verdict stops holding
    valid_until: Optional[datetime] = None

    @property
    def is_valid(self) -> bool:
        return self.state.grants_access

    @classmethod
    def denied(cls, message: str = ERROR_MESSAGE) -> "AccessDecision":
        """Verdict used when access could not be evaluated."""
        return cls(state=AccessState.SUSPENDED, days_remaining=0, message=message)


class AccessEvaluator:
    """
    Decides a tenant's access state.

    Precedence:
        1. Trial: tenant status is ``trial`` and the trial has not ended.
        2. Licensed: the current active assignment has not expired.
        3. Grace: the current active assignment expired less than
           ``grace_period_days`` ago.
        4. Suspended: everything else.

    Trial only applies while the tenant status is ``trial``; activating
    a key moves the tenant to ``active``.
    """

    def __init__(self, grace_period_days: int = DEFAULT_GRACE_PERIOD_DAYS):
        self.grace_period = timedelta(days=grace_period_days)

    def evaluate(
        self,
        tenant: Tenant,
        assignment: Optional[TenantLicenseAssignment],
        now: datetime,
    ) -> AccessDecision:
        """
        Evaluate access for a tenant.

        Args:
            tenant: Tenant entity
            assignment: The tenant's current active assignment, if any
            now: Evaluation instant

        Returns:
            AccessDecision
        """
        if tenant.in_trial(now):
            days = days_between(now, tenant.trial_ends_at)
            return AccessDecision(
                state=AccessState.TRIAL_ACTIVE,
                days_remaining=days,
                message=f"Trial active. {days} day(s) remaining. Please purchase a license key.",
                expires_at=tenant.trial_ends_at,
                valid_until=tenant.trial_ends_at,
            )

        if assignment is not None and assignment.is_active:
            if now < assignment.expires_at:
                days = days_between(now, assignment.expires_at)
                return AccessDecision(
                    state=AccessState.LICENSED,
                    days_remaining=days,
                    message=f"License active. {days} day(s) remaining.",
                    warning=days <= EXPIRY_WARNING_DAYS,
                    expires_at=assignment.expires_at,
                    valid_until=assignment.expires_at,
                )

            grace_ends_at = assignment.grace_ends_at(self.grace_period)
            if now < grace_ends_at:
                days = days_between(now, grace_ends_at)
                return AccessDecision(
                    state=AccessState.EXPIRED_IN_GRACE,
                    days_remaining=days,
                    message=(
                        "License expired but in grace period. "
                        f"{days} day(s) remaining to activate new license."
                    ),
                    warning=True,
                    expires_at=assignment.expires_at,
                    valid_until=grace_ends_at,
                )

        return AccessDecision(
            state=AccessState.SUSPENDED,
            days_remaining=0,
            message="Trial expired and no valid license found. Service suspended.",
        )
