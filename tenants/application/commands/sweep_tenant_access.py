"""
SweepTenantAccessCommand.
"""
from dataclasses import dataclass


@dataclass
class SweepTenantAccessCommand:
    """
    Command to re-evaluate every tenant and expire lapsed assignments.

    With ``dry_run`` nothing is written; the result reports what would
    change.
    """

    dry_run: bool = False
