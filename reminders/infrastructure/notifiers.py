"""
Notifier adapters.

``EmailNotifier`` sends through Django's mail framework;
``LoggingNotifier`` only logs and is the default outside production.
The active adapter is chosen by the ``ENTITLEMENT_NOTIFIER`` setting.
"""
import logging

from asgiref.sync import sync_to_async
from django.conf import settings
from django.core.mail import send_mail

from reminders.domain.reminder import ExpiryReminder, SuspensionNotice
from reminders.ports.notifier import Notifier

logger = logging.getLogger(__name__)


class EmailNotifier(Notifier):
    """Delivers notices by email."""

    def __init__(self, from_email: str = None):
        self.from_email = from_email or getattr(settings, "DEFAULT_FROM_EMAIL", None)

    def _expiry_body(self, reminder: ExpiryReminder) -> str:
        if reminder.days_until_expiry == 0:
            lead = f"The license for {reminder.tenant_name} expires today."
        else:
            lead = (
                f"The license for {reminder.tenant_name} expires in "
                f"{reminder.days_until_expiry} day(s), on {reminder.expires_at.date().isoformat()}."
            )
        lines = [
            lead,
            f"License key: {reminder.key_code}",
            "Activate a new license key before it expires to keep your service running.",
        ]
        if reminder.renewal_url:
            lines.append(f"Renew here: {reminder.renewal_url}")
        return "\n\n".join(lines)

    async def send_expiry_reminder(self, reminder: ExpiryReminder) -> None:
        if not reminder.tenant_email:
            raise ValueError(f"Tenant {reminder.tenant_id} has no email address")
        await sync_to_async(send_mail)(
            reminder.subject,
            self._expiry_body(reminder),
            self.from_email,
            [reminder.tenant_email],
            fail_silently=False,
        )
        logger.info("Sent %d-day expiry reminder to tenant %s", reminder.days_until_expiry, reminder.tenant_id)

    async def send_suspension_notice(self, notice: SuspensionNotice) -> None:
        if not notice.tenant_email:
            raise ValueError(f"Tenant {notice.tenant_id} has no email address")
        body = notice.message
        if notice.renewal_url:
            body += f"\n\nActivate a license key here: {notice.renewal_url}"
        await sync_to_async(send_mail)(
            "Service Suspended",
            body,
            self.from_email,
            [notice.tenant_email],
            fail_silently=False,
        )
        logger.info("Sent suspension notice to tenant %s", notice.tenant_id)


class LoggingNotifier(Notifier):
    """Writes notices to the log instead of delivering them."""

    async def send_expiry_reminder(self, reminder: ExpiryReminder) -> None:
        logger.info(
            "Expiry reminder for tenant %s: %s (%s)",
            reminder.tenant_id,
            reminder.subject,
            reminder.key_code,
        )

    async def send_suspension_notice(self, notice: SuspensionNotice) -> None:
        logger.info("Suspension notice for tenant %s: %s", notice.tenant_id, notice.message)
