"""Trade signal composition and alert formatting."""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.models.events import Direction, TradeDirection
from core.models.signal import TradeAlert, TradeSignal

if TYPE_CHECKING:
    from core.correlation.correlator import Correlator

_INVERSE = {
    Direction.BULLISH: TradeDirection.BEARISH,
    Direction.BEARISH: TradeDirection.BULLISH,
}

ALERT_HEADER = "_______________ Trade Signal Alert _______________"
ALERT_FOOTER = "___________________________________"


def invert_direction(direction: Direction | None) -> TradeDirection:
    """Trade direction for a sweep: the signal fades the sweep."""
    if direction is None:
        return TradeDirection.UNKNOWN
    return _INVERSE.get(direction, TradeDirection.UNKNOWN)


def compose_trade_signal(correlator: Correlator, close_price: float) -> TradeAlert:
    """Build the trade alert for a ready correlator and apply the partial reset.

    Increments the session emission counter and snapshots the evidence
    before clearing the divergence slot.

    Args:
        correlator: Correlator that passed readiness and time-window checks
        close_price: Candle close of the event that completed the conditions

    Returns:
        Immutable alert carrying the signal and its evidence
    """
    signal = TradeSignal(
        pair=correlator.key.pair,
        timeframe=correlator.key.timeframe,
        candle_time=correlator.last_candle_time or "",
        direction=invert_direction(correlator.sweep.direction),
    )

    correlator.emissions_this_session += 1

    # Details are frozen dataclasses and are shared, not copied
    alert = TradeAlert(
        signal=signal,
        close_price=close_price,
        sweep=correlator.sweep.detail,
        fvg=correlator.fvg.detail,
        absorption=correlator.absorption.detail,
        divergence=correlator.divergence.detail,
        emissions_this_session=correlator.emissions_this_session,
    )

    correlator.reset_after_trade()
    return alert


def format_alert_message(alert: TradeAlert) -> str:
    """Render the notification text for a trade alert."""
    signal = alert.signal
    lines = [
        ALERT_HEADER,
        "",
        f"Pair: {signal.pair} -- Time: {signal.candle_time} -- "
        f"Direction: {signal.direction.value} -- Candle Close: {alert.close_price:.2f}",
        "",
    ]

    if alert.sweep is not None:
        lines += [
            f"Sweep :: Time {alert.sweep.time} -- Price: {alert.sweep.price:.2f} -- "
            f"Direction: {alert.sweep.direction.value}",
            "",
        ]

    if alert.fvg is not None:
        lines += [
            f"FVG :: Time {alert.fvg.time} -- Price: {alert.fvg.price:.2f} -- "
            f"FVG High: {alert.fvg.gap_high:.2f} -- FVG Low : {alert.fvg.gap_low:.2f}",
            "",
        ]

    if alert.absorption is not None:
        lines += [
            f"Absorption :: Time {alert.absorption.time} -- Price: {alert.absorption.price:.2f}",
            "",
        ]

    if alert.divergence is not None:
        lines.append(
            f"CVD :: Time {alert.divergence.time} -- Price: {alert.divergence.price:.2f} -- "
            f"Divergence Direction: {alert.divergence.direction.value}"
        )

    lines.append(ALERT_FOOTER)
    return "\n".join(lines)
