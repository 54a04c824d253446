"""Per pair/timeframe condition state machine.

A Correlator accumulates four conditions for one correlation key:

1. Sessions sweep - establishes the directional bias of a session
2. Fair-value gap (FVG) - a price gap between candles
3. Absorption - large-size execution without price extension
4. CVD divergence - only accepted once absorption has been seen, and only
   when it runs against the sweep

A new sweep performs a full reset (keeping an already-met FVG). After a
trade signal is emitted only the divergence slot is cleared, so one sweep
session can produce up to ``max_emissions_per_session`` signals as the
divergence re-arms.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum

from core.models.config import CorrelatorConfig
from core.models.events import ConditionEvent, ConditionKind, CorrelationKey, Direction
from core.models.signal import ConditionDetail, FvgDetail, SweepDetail

logger = logging.getLogger(__name__)

Detail = SweepDetail | FvgDetail | ConditionDetail


class ApplyOutcome(str, Enum):
    """Effect an event had on the correlator."""

    STORED = "stored"  # A condition slot was written
    IGNORED = "ignored"  # Accepted, but left the slots untouched
    RESET = "reset"  # Sweep reset without a new sweep direction


@dataclass(slots=True)
class ConditionSlot:
    """State of a single condition."""

    met: bool = False
    direction: Direction | None = None
    observed_at: str | None = None
    detail: Detail | None = None

    def fill(self, direction: Direction, detail: Detail) -> None:
        """Mark the condition as met with the given evidence."""
        self.met = True
        self.direction = direction
        self.observed_at = detail.time
        self.detail = detail

    def clear(self) -> None:
        """Return the slot to the unmet state."""
        self.met = False
        self.direction = None
        self.observed_at = None
        self.detail = None

    def copy(self) -> ConditionSlot:
        return replace(self)


class Correlator:
    """Condition state for one pair/timeframe."""

    def __init__(self, key: CorrelationKey, config: CorrelatorConfig | None = None):
        """
        Args:
            key: Pair/timeframe this correlator tracks
            config: Emission cap, FVG window and update policy
        """
        self.key = key
        self.config = config or CorrelatorConfig()

        self.sweep = ConditionSlot()
        self.fvg = ConditionSlot()
        self.absorption = ConditionSlot()
        self.divergence = ConditionSlot()

        self.last_candle_time: str | None = None

        # An FVG carried over from before the sweep is eligible but not latched
        self._fvg_latched = False

        # Signals emitted since the last sweep
        self.emissions_this_session = 0

    def __repr__(self) -> str:
        return (
            f"Correlator({self.key}, sweep={self.sweep.met}, fvg={self.fvg.met}, "
            f"absorption={self.absorption.met}, divergence={self.divergence.met}, "
            f"emissions={self.emissions_this_session})"
        )

    # ------------------------------------------------------------------
    # Event application
    # ------------------------------------------------------------------

    def apply(self, event: ConditionEvent) -> ApplyOutcome:
        """Apply one validated event to the condition slots.

        Args:
            event: Event for this correlator's key

        Returns:
            What the event did to the state
        """
        self.last_candle_time = event.candle_time

        handlers = {
            ConditionKind.SESSIONS_SWEEP: self._apply_sweep,
            ConditionKind.FVG: self._apply_fvg,
            ConditionKind.ABSORPTION: self._apply_absorption,
            ConditionKind.CVD: self._apply_divergence,
        }
        return handlers[event.kind](event)

    def _apply_sweep(self, event: ConditionEvent) -> ApplyOutcome:
        stored_fvg = self.fvg.copy()

        self.full_reset()

        # An FVG seen before the sweep stays eligible; the time window
        # is checked when all conditions are evaluated.
        if stored_fvg.met:
            self.fvg = stored_fvg

        if event.direction is None:
            logger.info("Sweep without direction for %s, awaiting sweep", self.key)
            return ApplyOutcome.RESET

        self.sweep.fill(
            event.direction,
            SweepDetail(
                time=event.candle_time,
                price=event.price,
                direction=event.direction,
                previous_session_high=event.previous_session_high,
                previous_session_low=event.previous_session_low,
            ),
        )
        logger.info("Sessions sweep condition met for %s (%s)", self.key, event.direction.value)
        return ApplyOutcome.STORED

    def _apply_fvg(self, event: ConditionEvent) -> ApplyOutcome:
        if event.direction is None or event.gap_high is None or event.gap_low is None:
            logger.info("Incomplete FVG event for %s, ignoring", self.key)
            return ApplyOutcome.IGNORED

        if self.config.update_policy == "latch" and self._fvg_latched:
            logger.info("FVG already latched for %s, ignoring", self.key)
            return ApplyOutcome.IGNORED

        self.fvg.fill(
            event.direction,
            FvgDetail(
                time=event.candle_time,
                price=event.price,
                gap_high=event.gap_high,
                gap_low=event.gap_low,
            ),
        )
        self._fvg_latched = True
        logger.info("FVG condition met for %s", self.key)
        return ApplyOutcome.STORED

    def _apply_absorption(self, event: ConditionEvent) -> ApplyOutcome:
        if event.direction is None:
            logger.info("Absorption event without direction for %s, ignoring", self.key)
            return ApplyOutcome.IGNORED

        if self._latched(self.absorption):
            logger.info("Absorption already latched for %s, ignoring", self.key)
            return ApplyOutcome.IGNORED

        self.absorption.fill(
            event.direction,
            ConditionDetail(time=event.candle_time, price=event.price, direction=event.direction),
        )
        logger.info("Absorption condition met for %s", self.key)
        return ApplyOutcome.STORED

    def _apply_divergence(self, event: ConditionEvent) -> ApplyOutcome:
        if not self.absorption.met:
            logger.info("CVD before absorption for %s, ignoring", self.key)
            return ApplyOutcome.IGNORED

        if event.direction is None:
            logger.info("CVD event without direction for %s, ignoring", self.key)
            return ApplyOutcome.IGNORED

        if self.sweep.direction is not None and self.sweep.direction == event.direction:
            logger.info("CVD direction should be opposite to sweep for %s, ignoring", self.key)
            return ApplyOutcome.IGNORED

        self.divergence.fill(
            event.direction,
            ConditionDetail(time=event.candle_time, price=event.price, direction=event.direction),
        )
        logger.info("CVD condition met for %s", self.key)
        return ApplyOutcome.STORED

    def _latched(self, slot: ConditionSlot) -> bool:
        return self.config.update_policy == "latch" and slot.met

    # ------------------------------------------------------------------
    # Resets
    # ------------------------------------------------------------------

    def full_reset(self) -> None:
        """Clear every condition and the emission counter."""
        self.sweep.clear()
        self.fvg.clear()
        self.absorption.clear()
        self.divergence.clear()
        self.emissions_this_session = 0
        self._fvg_latched = False

    def reset_after_trade(self) -> None:
        """Clear only the divergence so it can re-arm within the session."""
        self.divergence.clear()

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    @property
    def cap_reached(self) -> bool:
        return self.emissions_this_session >= self.config.max_emissions_per_session

    def direction_check(self) -> bool:
        """Sweep and divergence must both have a direction and disagree."""
        if self.sweep.direction is None or self.divergence.direction is None:
            return False
        return self.sweep.direction != self.divergence.direction

    def all_conditions_met(self) -> bool:
        return self.sweep.met and self.fvg.met and self.absorption.met and self.divergence.met

    def is_ready(self) -> bool:
        """Check whether a trade signal may be emitted (before the time window)."""
        return self.all_conditions_met() and not self.cap_reached and self.direction_check()

    def summary(self) -> dict:
        """Plain-data view of the state for status endpoints and logs."""

        def slot_view(slot: ConditionSlot) -> dict:
            return {
                "met": slot.met,
                "direction": slot.direction.value if slot.direction else None,
                "observed_at": slot.observed_at,
            }

        return {
            "pair": self.key.pair,
            "timeframe": self.key.timeframe,
            "last_candle_time": self.last_candle_time,
            "emissions_this_session": self.emissions_this_session,
            "sweep": slot_view(self.sweep),
            "fvg": slot_view(self.fvg),
            "absorption": slot_view(self.absorption),
            "divergence": slot_view(self.divergence),
        }
