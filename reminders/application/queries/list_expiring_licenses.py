"""
ListExpiringLicensesQuery.
"""
from dataclasses import dataclass

from reminders.domain.reminder import DEFAULT_WINDOW_DAYS

MAX_WITHIN_DAYS = 365


@dataclass
class ListExpiringLicensesQuery:
    """Query for active licenses expiring within ``within_days``."""

    within_days: int = DEFAULT_WINDOW_DAYS
