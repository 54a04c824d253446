"""Shared test fixtures."""

import pytest

from core.models import ConditionEvent, ConditionKind, Direction


@pytest.fixture
def make_event():
    """Factory for condition events on EURUSD 5m."""

    def _make(
        kind: ConditionKind,
        candle_time: str,
        direction: Direction | None = None,
        price: float = 1.1000,
        pair: str = "EURUSD",
        timeframe: str = "5m",
        **extra,
    ) -> ConditionEvent:
        if kind == ConditionKind.FVG:
            extra.setdefault("gap_high", 105.0)
            extra.setdefault("gap_low", 100.0)
        return ConditionEvent(
            kind=kind,
            pair=pair,
            timeframe=timeframe,
            candle_time=candle_time,
            price=price,
            direction=direction,
            **extra,
        )

    return _make
