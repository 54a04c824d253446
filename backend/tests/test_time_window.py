"""Tests for FVG time-window validation."""

from datetime import datetime, timedelta

import pytest

from core.correlation import Correlator, is_fvg_eligible, parse_candle_time
from core.models import ConditionKind, CorrelationKey, Direction


class TestParseCandleTime:
    """Tests for candle timestamp parsing."""

    @pytest.mark.parametrize(
        "value",
        [
            "2024-07-10T10:00:00",
            "2024-07-10T10:00:00Z",
            "2024-07-10 10:00:00",
            "2024-07-10T10:00:00.000Z",
            "2024-07-10T12:00:00+02:00",
        ],
    )
    def test_supported_formats(self, value):
        assert parse_candle_time(value) == datetime(2024, 7, 10, 10, 0, 0)

    @pytest.mark.parametrize("value", ["", "yesterday", "10/07/2024 10:00"])
    def test_unparseable(self, value):
        assert parse_candle_time(value) is None


class TestIsFvgEligible:
    """Tests for the FVG window check."""

    def _correlator(self, make_event, sweep_time: str | None, fvg_time: str) -> Correlator:
        correlator = Correlator(CorrelationKey(pair="EURUSD", timeframe="5m"))
        if sweep_time is not None:
            correlator.apply(make_event(ConditionKind.SESSIONS_SWEEP, sweep_time, Direction.BEARISH))
        correlator.apply(make_event(ConditionKind.FVG, fvg_time, Direction.BULLISH))
        return correlator

    def test_no_sweep_accepts(self, make_event):
        correlator = self._correlator(make_event, None, "2024-07-10T08:00:00")
        assert is_fvg_eligible(correlator)

    def test_fvg_after_sweep_accepted(self, make_event):
        correlator = self._correlator(make_event, "2024-07-10T10:00:00", "2024-07-10T15:00:00")
        assert is_fvg_eligible(correlator)

    def test_fvg_at_sweep_accepted(self, make_event):
        correlator = self._correlator(make_event, "2024-07-10T10:00:00", "2024-07-10 10:00:00")
        assert is_fvg_eligible(correlator)

    def test_fvg_within_window_accepted(self, make_event):
        correlator = self._correlator(make_event, "2024-07-10T10:00:00Z", "2024-07-10T09:30:00Z")
        assert is_fvg_eligible(correlator)

    def test_fvg_exactly_one_hour_accepted(self, make_event):
        correlator = self._correlator(make_event, "2024-07-10T10:00:00", "2024-07-10T09:00:00")
        assert is_fvg_eligible(correlator)

    def test_fvg_outside_window_rejected(self, make_event):
        correlator = self._correlator(make_event, "2024-07-10T10:00:00", "2024-07-10T08:00:00")
        assert not is_fvg_eligible(correlator)

    def test_custom_window(self, make_event):
        correlator = self._correlator(make_event, "2024-07-10T10:00:00", "2024-07-10T08:00:00")
        assert is_fvg_eligible(correlator, window=timedelta(hours=3))
        assert not is_fvg_eligible(correlator, window=timedelta(minutes=30))

    def test_unparseable_fvg_time_accepted(self, make_event, caplog):
        correlator = self._correlator(make_event, "2024-07-10T10:00:00", "not a time")
        with caplog.at_level("WARNING"):
            assert is_fvg_eligible(correlator)
        assert "Could not parse FVG time" in caplog.text

    def test_unparseable_sweep_time_accepted(self, make_event):
        correlator = self._correlator(make_event, "10 o'clock", "2024-07-10T08:00:00")
        assert is_fvg_eligible(correlator)

    def test_rejection_does_not_mutate(self, make_event):
        correlator = self._correlator(make_event, "2024-07-10T10:00:00", "2024-07-10T08:00:00")
        before = correlator.summary()

        is_fvg_eligible(correlator)

        assert correlator.summary() == before
