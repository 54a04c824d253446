"""Condition correlation engine.

Combines sessions sweep, FVG, absorption and CVD divergence events per
pair/timeframe into trade signals.
"""

from core.correlation.composer import compose_trade_signal, format_alert_message, invert_direction
from core.correlation.correlator import ApplyOutcome, ConditionSlot, Correlator
from core.correlation.store import ConditionStore, CorrelationResult
from core.correlation.time_window import DEFAULT_FVG_WINDOW, is_fvg_eligible, parse_candle_time

__all__ = [
    "ApplyOutcome",
    "ConditionSlot",
    "ConditionStore",
    "CorrelationResult",
    "Correlator",
    "DEFAULT_FVG_WINDOW",
    "compose_trade_signal",
    "format_alert_message",
    "invert_direction",
    "is_fvg_eligible",
    "parse_candle_time",
]
