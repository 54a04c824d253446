"""Inbound condition event processing.

Routes each event to its correlator through the condition store and hands
emitted trade alerts to the notifier once the store lock is released.
"""

import logging

from core.correlation import ConditionStore, CorrelationResult
from core.models import ConditionEvent, TradeSignal

from app.services.notifier import Notifier

logger = logging.getLogger(__name__)


class SignalProcessor:
    """Glue between the HTTP layer, the condition store and notifications."""

    def __init__(self, store: ConditionStore, notifier: Notifier):
        self.store = store
        self.notifier = notifier
        self.events_processed = 0
        self.signals_emitted = 0

    async def process(self, event: ConditionEvent) -> TradeSignal | None:
        """Process one validated event.

        Returns:
            The trade signal if the event completed the conditions
        """
        logger.info(
            f"Received {event.kind.value} for {event.key} "
            f"at {event.candle_time} (close {event.price})"
        )

        result: CorrelationResult = await self.store.process(event)
        self.events_processed += 1

        if result.alert is None:
            return None

        # Store lock is released here; delivery runs independently
        self.signals_emitted += 1
        self.notifier.dispatch(result.alert)
        return result.alert.signal

    def stats(self) -> dict:
        return {
            "events_processed": self.events_processed,
            "signals_emitted": self.signals_emitted,
            "notifications_sent": self.notifier.sent_count,
            "notifications_failed": self.notifier.failed_count,
            "notifications_pending": self.notifier.pending,
        }
