"""Model discovery for the reminders app."""
from reminders.infrastructure.models import LicenseReminder  # noqa: F401
