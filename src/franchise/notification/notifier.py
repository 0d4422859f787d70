"""Notifier port, the email-backed default, and its registry.

Provides get_notifier() / set_notifier() to swap implementations.
"""

from abc import ABC, abstractmethod

import structlog

from franchise.channel import get_email_channel
from franchise.notification.intents import Intent, recipient_of
from franchise.templates import get_template

logger = structlog.get_logger(__name__)


class NotificationDeliveryError(Exception):
    """The channel reported that a message was not sent."""


class Notifier(ABC):
    @abstractmethod
    def notify(self, intent: Intent) -> None:
        """Deliver one intent. May raise; callers decide whether to swallow."""
        ...


class EmailNotifier(Notifier):
    """Renders the intent's template and sends it through the email channel."""

    def notify(self, intent: Intent) -> None:
        template_cls = get_template(type(intent))
        rendered = template_cls.render(intent)
        to = recipient_of(intent)

        result = get_email_channel().send(
            to=to,
            subject=rendered["subject"],
            body=rendered["body"],
            html_body=rendered.get("html_body"),
        )
        if result.get("status") != "sent":
            raise NotificationDeliveryError(result.get("error") or "Email delivery failed")

        logger.info(
            "notification_sent",
            intent=type(intent).__name__,
            message_id=result.get("message_id"),
        )


_current_notifier: Notifier | None = None


def get_notifier() -> Notifier:
    global _current_notifier
    if _current_notifier is None:
        _current_notifier = EmailNotifier()
    return _current_notifier


def set_notifier(notifier: Notifier) -> None:
    """Override the active notifier (useful for tests)."""
    global _current_notifier
    _current_notifier = notifier


def reset_notifier() -> None:
    global _current_notifier
    _current_notifier = None
