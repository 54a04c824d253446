"""Tests for trade signal composition and alert formatting."""

import pytest

from core.correlation import Correlator, compose_trade_signal, format_alert_message, invert_direction
from core.models import (
    ConditionDetail,
    ConditionKind,
    CorrelationKey,
    Direction,
    FvgDetail,
    SweepDetail,
    TradeAlert,
    TradeDirection,
    TradeSignal,
)


class TestInvertDirection:
    """Tests for the sweep-to-trade direction rule."""

    def test_bullish_becomes_bearish(self):
        assert invert_direction(Direction.BULLISH) == TradeDirection.BEARISH

    def test_bearish_becomes_bullish(self):
        assert invert_direction(Direction.BEARISH) == TradeDirection.BULLISH

    def test_missing_is_unknown(self):
        assert invert_direction(None) == TradeDirection.UNKNOWN

    def test_unknown_never_matches_a_direction(self):
        """The sentinel must not pass a bullish/bearish filter downstream."""
        unknown = invert_direction(None)
        assert unknown not in (TradeDirection.BULLISH, TradeDirection.BEARISH)
        assert unknown.value not in {d.value for d in Direction}


class TestComposeTradeSignal:
    """Tests for compose_trade_signal."""

    @pytest.fixture
    def armed(self, make_event):
        correlator = Correlator(CorrelationKey(pair="EURUSD", timeframe="5m"))
        correlator.apply(make_event(ConditionKind.SESSIONS_SWEEP, "2024-07-10T10:00:00", Direction.BEARISH, price=1.2))
        correlator.apply(make_event(ConditionKind.FVG, "2024-07-10T09:30:00", Direction.BULLISH, price=1.3))
        correlator.apply(make_event(ConditionKind.ABSORPTION, "2024-07-10T10:05:00", Direction.BULLISH, price=1.4))
        correlator.apply(make_event(ConditionKind.CVD, "2024-07-10T10:07:00", Direction.BULLISH, price=1.5))
        return correlator

    def test_builds_signal(self, armed):
        alert = compose_trade_signal(armed, close_price=1.5)

        assert alert.signal == TradeSignal(
            pair="EURUSD",
            timeframe="5m",
            candle_time="2024-07-10T10:07:00",
            direction=TradeDirection.BULLISH,
        )
        assert alert.signal.signal_type == "trade_signal"
        assert alert.close_price == 1.5

    def test_increments_counter(self, armed):
        alert = compose_trade_signal(armed, close_price=1.5)
        assert armed.emissions_this_session == 1
        assert alert.emissions_this_session == 1

    def test_snapshot_taken_before_partial_reset(self, armed):
        """The alert keeps the divergence evidence even though the slot is cleared."""
        alert = compose_trade_signal(armed, close_price=1.5)

        assert alert.divergence == ConditionDetail(
            time="2024-07-10T10:07:00", price=1.5, direction=Direction.BULLISH,
        )
        assert alert.sweep.direction == Direction.BEARISH
        assert alert.fvg.time == "2024-07-10T09:30:00"
        assert alert.absorption.price == 1.4

        assert not armed.divergence.met
        assert armed.sweep.met and armed.fvg.met and armed.absorption.met

    def test_alert_unaffected_by_later_reset(self, armed, make_event):
        """A later sweep on the same key does not change an issued alert."""
        alert = compose_trade_signal(armed, close_price=1.5)

        armed.apply(make_event(ConditionKind.SESSIONS_SWEEP, "2024-07-10T11:00:00", Direction.BULLISH))

        assert alert.sweep.direction == Direction.BEARISH
        assert alert.absorption is not None


class TestFormatAlertMessage:
    """Tests for the notification text."""

    @pytest.fixture
    def alert(self):
        return TradeAlert(
            signal=TradeSignal(
                pair="EURUSD",
                timeframe="5m",
                candle_time="2024-07-10T10:07:00",
                direction=TradeDirection.BULLISH,
            ),
            close_price=1.23456,
            sweep=SweepDetail(time="2024-07-10T10:00:00", price=1.2, direction=Direction.BEARISH),
            fvg=FvgDetail(time="2024-07-10T09:30:00", price=1.3, gap_high=105, gap_low=100),
            absorption=ConditionDetail(time="2024-07-10T10:05:00", price=1.4, direction=Direction.BULLISH),
            divergence=ConditionDetail(time="2024-07-10T10:07:00", price=1.5, direction=Direction.BULLISH),
            emissions_this_session=1,
        )

    def test_full_message(self, alert):
        message = format_alert_message(alert)

        assert message == (
            "_______________ Trade Signal Alert _______________\n\n"
            "Pair: EURUSD -- Time: 2024-07-10T10:07:00 -- Direction: bullish -- Candle Close: 1.23\n\n"
            "Sweep :: Time 2024-07-10T10:00:00 -- Price: 1.20 -- Direction: bearish\n\n"
            "FVG :: Time 2024-07-10T09:30:00 -- Price: 1.30 -- FVG High: 105.00 -- FVG Low : 100.00\n\n"
            "Absorption :: Time 2024-07-10T10:05:00 -- Price: 1.40\n\n"
            "CVD :: Time 2024-07-10T10:07:00 -- Price: 1.50 -- Divergence Direction: bullish\n"
            "___________________________________"
        )

    def test_missing_details_skipped(self, alert):
        sparse = TradeAlert(
            signal=alert.signal,
            close_price=alert.close_price,
            sweep=None,
            fvg=None,
            absorption=None,
            divergence=None,
            emissions_this_session=1,
        )
        message = format_alert_message(sparse)

        assert "Sweep ::" not in message
        assert "FVG ::" not in message
        assert message.endswith("___________________________________")
