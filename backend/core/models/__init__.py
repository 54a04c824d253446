"""Domain models shared by the correlation engine and the service."""

from core.models.config import CorrelatorConfig, UpdatePolicy
from core.models.events import (
    ConditionEvent,
    ConditionKind,
    CorrelationKey,
    Direction,
    InvalidEventError,
    TradeDirection,
    parse_direction,
    parse_kind,
)
from core.models.signal import (
    ConditionDetail,
    FvgDetail,
    SweepDetail,
    TradeAlert,
    TradeSignal,
)

__all__ = [
    "CorrelatorConfig",
    "UpdatePolicy",
    "ConditionEvent",
    "ConditionKind",
    "CorrelationKey",
    "Direction",
    "InvalidEventError",
    "TradeDirection",
    "parse_direction",
    "parse_kind",
    "ConditionDetail",
    "FvgDetail",
    "SweepDetail",
    "TradeAlert",
    "TradeSignal",
]
