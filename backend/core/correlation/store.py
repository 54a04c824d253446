"""Keyed store of correlators.

One asyncio lock guards the whole map for the duration of one event's
processing: lookup-or-create, application, readiness, time window,
composition and the partial reset. Unrelated pairs therefore contend on
the same lock; decisions are always confined to a single key, so the lock
can be split per key without changing behaviour.

Correlators are created lazily and never evicted.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator

from core.correlation.composer import compose_trade_signal
from core.correlation.correlator import ApplyOutcome, Correlator
from core.correlation.time_window import is_fvg_eligible
from core.models.config import CorrelatorConfig
from core.models.events import ConditionEvent, CorrelationKey
from core.models.signal import TradeAlert

logger = logging.getLogger(__name__)


@dataclass
class CorrelationResult:
    """Result of processing one event.

    Attributes:
        key: Correlation key the event was routed to.
        outcome: Effect of the event on the condition slots.
        alert: Trade alert if a signal was emitted.
        suppressed: True if all conditions were met but the FVG time
            window rejected the emission.
    """

    key: CorrelationKey
    outcome: ApplyOutcome
    alert: TradeAlert | None = None
    suppressed: bool = False


class ConditionStore:
    """Mapping of correlation key to Correlator."""

    def __init__(self, config: CorrelatorConfig | None = None):
        self.config = config or CorrelatorConfig()
        self._correlators: dict[CorrelationKey, Correlator] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._correlators)

    def __contains__(self, key: CorrelationKey) -> bool:
        return key in self._correlators

    def keys(self) -> list[CorrelationKey]:
        return list(self._correlators)

    def get(self, key: CorrelationKey) -> Correlator | None:
        return self._correlators.get(key)

    def get_or_create(self, key: CorrelationKey) -> Correlator:
        """Return the correlator for a key, creating it on first use.

        Callers mutating the result must hold the store lock.
        """
        correlator = self._correlators.get(key)
        if correlator is None:
            correlator = Correlator(key, self.config)
            self._correlators[key] = correlator
            logger.info("Tracking new pair %s (%d total)", key, len(self._correlators))
        return correlator

    @asynccontextmanager
    async def locked(self) -> AsyncIterator[ConditionStore]:
        """Hold exclusive access to every correlator in the store."""
        async with self._lock:
            yield self

    async def process(self, event: ConditionEvent) -> CorrelationResult:
        """Apply an event and emit a trade alert if the conditions line up.

        Args:
            event: Validated inbound event

        Returns:
            CorrelationResult; ``alert`` is set when a signal fired
        """
        async with self.locked():
            correlator = self.get_or_create(event.key)
            outcome = correlator.apply(event)
            logger.debug("Current state %r", correlator)

            if not correlator.is_ready():
                return CorrelationResult(key=event.key, outcome=outcome)

            if not is_fvg_eligible(correlator, self.config.fvg_window):
                logger.info("FVG outside time window for %s, not generating trade signal", event.key)
                return CorrelationResult(key=event.key, outcome=outcome, suppressed=True)

            alert = compose_trade_signal(correlator, event.price)

        logger.info(
            "TRADE SIGNAL: %s %s %s at %s (%d this session)",
            alert.signal.pair,
            alert.signal.timeframe,
            alert.signal.direction.value,
            alert.signal.candle_time,
            alert.emissions_this_session,
        )
        return CorrelationResult(key=event.key, outcome=outcome, alert=alert)

    async def snapshot(self) -> list[dict]:
        """Summaries of every tracked correlator."""
        async with self.locked():
            return [c.summary() for c in self._correlators.values()]
