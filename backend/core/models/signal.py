"""Condition detail, trade signal and alert models."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict

from core.models.events import Direction, TradeDirection


@dataclass(frozen=True, slots=True)
class ConditionDetail:
    """Evidence recorded for an absorption or CVD divergence condition."""

    time: str
    price: float
    direction: Direction


@dataclass(frozen=True, slots=True)
class SweepDetail:
    """Evidence recorded for a sessions sweep."""

    time: str
    price: float
    direction: Direction
    previous_session_high: float | None = None
    previous_session_low: float | None = None


@dataclass(frozen=True, slots=True)
class FvgDetail:
    """Evidence recorded for a fair-value gap."""

    time: str
    price: float
    gap_high: float
    gap_low: float


class TradeSignal(BaseModel):
    """Composite trade signal returned to the caller and sent as an alert."""

    model_config = ConfigDict(frozen=True)

    signal_type: str = "trade_signal"
    pair: str
    timeframe: str
    candle_time: str
    direction: TradeDirection


@dataclass(frozen=True, slots=True)
class TradeAlert:
    """Everything needed to notify about one trade signal.

    Built before the correlator's partial reset, so it carries the
    evidence that triggered the signal. All members are immutable and
    safe to hand to a background task.
    """

    signal: TradeSignal
    close_price: float
    sweep: SweepDetail | None
    fvg: FvgDetail | None
    absorption: ConditionDetail | None
    divergence: ConditionDetail | None
    emissions_this_session: int
