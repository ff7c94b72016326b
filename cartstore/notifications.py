"""
Notification sinks.

A sink surfaces a human-readable failure message to the user. Delivery is
fire-and-forget: the store never waits on or inspects the outcome, and a
broken sink must not turn a reported failure into a raised one.
"""
from abc import ABC, abstractmethod
from typing import Callable

from .logging import get_logger

logger = get_logger(__name__)


class NotificationSink(ABC):
    """Base sink. Subclasses implement ``_deliver``."""

    def notify(self, message: str) -> None:
        try:
            self._deliver(message)
        except Exception:
            logger.exception("Failed to deliver cart notification")

    @abstractmethod
    def _deliver(self, message: str) -> None:
        """Hand ``message`` to the user-facing channel."""


class LoggingNotificationSink(NotificationSink):
    """Writes messages to the ``cartstore.notifications`` logger."""

    def _deliver(self, message: str) -> None:
        logger.warning(message)


class CallbackNotificationSink(NotificationSink):
    """Forwards messages to a callable, e.g. a UI toast."""

    def __init__(self, callback: Callable[[str], object]):
        self.callback = callback

    def _deliver(self, message: str) -> None:
        self.callback(message)


__all__ = ["NotificationSink", "LoggingNotificationSink", "CallbackNotificationSink"]
