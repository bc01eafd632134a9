"""
Notifier port (interface).

Outbound delivery of reminders and notices. Adapters live in
``reminders.infrastructure.notifiers``.
"""
from abc import ABC, abstractmethod

from reminders.domain.reminder import ExpiryReminder, SuspensionNotice


class Notifier(ABC):
    """Abstract notifier."""

    @abstractmethod
    async def send_expiry_reminder(self, reminder: ExpiryReminder) -> None:
        """
        Deliver an expiry reminder.

        Args:
            reminder: ExpiryReminder to deliver

        Raises:
            Exception: Any delivery failure; the caller treats it as
                not delivered
        """
        pass

    @abstractmethod
    async def send_suspension_notice(self, notice: SuspensionNotice) -> None:
        """
        Deliver a suspension notice.

        Args:
            notice: SuspensionNotice to deliver
        """
        pass
