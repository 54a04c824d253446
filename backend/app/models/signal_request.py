"""Wire format of inbound condition events."""

from pydantic import BaseModel, Field

from core.models import (
    ConditionEvent,
    ConditionKind,
    InvalidEventError,
    parse_direction,
    parse_kind,
)


class MissingPriceError(InvalidEventError):
    """Raised when an event arrives without a candle close."""


class SignalRequest(BaseModel):
    """JSON body of ``POST /signal``.

    ``signal_type`` and the directions are kept as plain strings so unknown
    values can be rejected with a 400 instead of a validation error.
    """

    signal_type: str = Field(..., examples=["sessions_sweep"])
    pair: str = Field(..., examples=["EURUSD"])
    timeframe: str = Field(..., examples=["5m"])
    candle_time: str = Field(..., examples=["2024-07-10T10:00:00Z"])
    direction: str | None = None
    candle_close: float | None = None

    # Sessions sweep
    previous_session_high: float | None = None
    previous_session_low: float | None = None

    # FVG
    fvg_direction: str | None = None
    gap_high: float | None = None
    gap_low: float | None = None

    # Absorption
    absorption_direction: str | None = None

    def to_event(self) -> ConditionEvent:
        """Validate and convert to a ConditionEvent.

        FVG events take ``fvg_direction`` and fall back to ``direction``;
        absorption events take ``direction`` and fall back to
        ``absorption_direction``.

        Raises:
            MissingPriceError: If ``candle_close`` is missing.
            InvalidEventError: If the kind or a direction is not recognised.
        """
        if self.candle_close is None:
            raise MissingPriceError("candle_close is required")

        kind = parse_kind(self.signal_type)

        if kind == ConditionKind.FVG:
            raw_direction = self.fvg_direction or self.direction
        elif kind == ConditionKind.ABSORPTION:
            raw_direction = self.direction or self.absorption_direction
        else:
            raw_direction = self.direction

        return ConditionEvent(
            kind=kind,
            pair=self.pair,
            timeframe=self.timeframe,
            candle_time=self.candle_time,
            price=self.candle_close,
            direction=parse_direction(raw_direction),
            gap_high=self.gap_high,
            gap_low=self.gap_low,
            previous_session_high=self.previous_session_high,
            previous_session_low=self.previous_session_low,
        )
