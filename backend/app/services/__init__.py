"""Business services."""

from app.services.notifier import NotificationSink, Notifier
from app.services.signal_processor import SignalProcessor

__all__ = [
    "NotificationSink",
    "Notifier",
    "SignalProcessor",
]
