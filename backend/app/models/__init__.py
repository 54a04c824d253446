"""Data models."""

from core.models import (
    ConditionEvent,
    ConditionKind,
    CorrelationKey,
    CorrelatorConfig,
    Direction,
    InvalidEventError,
    TradeAlert,
    TradeDirection,
    TradeSignal,
)
from app.models.signal_request import MissingPriceError, SignalRequest

__all__ = [
    # Domain (core)
    "ConditionEvent",
    "ConditionKind",
    "CorrelationKey",
    "CorrelatorConfig",
    "Direction",
    "InvalidEventError",
    "TradeAlert",
    "TradeDirection",
    "TradeSignal",
    # Wire
    "MissingPriceError",
    "SignalRequest",
]
