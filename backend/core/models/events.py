"""Inbound condition event models.

Events arrive pre-computed from an external analysis source (e.g. a
TradingView alert). Each one reports a single condition for a
pair/timeframe; the correlator combines them into trade signals.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class ConditionKind(str, Enum):
    """Condition reported by an inbound event (wire values are lowercase)."""

    SESSIONS_SWEEP = "sessions_sweep"
    FVG = "fvg"
    ABSORPTION = "absorption"
    CVD = "cvd"


class Direction(str, Enum):
    """Directional bias of a condition."""

    BULLISH = "bullish"
    BEARISH = "bearish"


class TradeDirection(str, Enum):
    """Direction of an emitted trade signal.

    UNKNOWN is produced when the sweep direction is missing. It never
    compares equal to a Direction.
    """

    BULLISH = "bullish"
    BEARISH = "bearish"
    UNKNOWN = "unknown"


class InvalidEventError(ValueError):
    """Raised when an inbound event cannot be turned into a ConditionEvent."""


class CorrelationKey(BaseModel):
    """Identifies one correlator: a (pair, timeframe) combination."""

    model_config = ConfigDict(frozen=True)

    pair: str
    timeframe: str

    def __str__(self) -> str:
        return f"{self.pair}_{self.timeframe}"


class ConditionEvent(BaseModel):
    """A validated condition observation for one pair/timeframe."""

    model_config = ConfigDict(frozen=True)

    kind: ConditionKind
    pair: str
    timeframe: str
    candle_time: str
    price: float
    direction: Direction | None = None
    gap_high: float | None = None
    gap_low: float | None = None
    previous_session_high: float | None = None
    previous_session_low: float | None = None

    @property
    def key(self) -> CorrelationKey:
        """Correlation key of this event."""
        return CorrelationKey(pair=self.pair, timeframe=self.timeframe)


def parse_kind(value: str) -> ConditionKind:
    """Map a wire ``signal_type`` onto a ConditionKind.

    Raises:
        InvalidEventError: If the value is not a known condition kind.
    """
    try:
        return ConditionKind(value.strip().lower())
    except ValueError:
        raise InvalidEventError(f"Unknown signal type: {value}") from None


def parse_direction(value: str | None) -> Direction | None:
    """Normalise an optional direction string.

    Raises:
        InvalidEventError: If the value is neither bullish nor bearish.
    """
    if value is None or not value.strip():
        return None
    try:
        return Direction(value.strip().lower())
    except ValueError:
        raise InvalidEventError(f"Invalid direction: {value}") from None
