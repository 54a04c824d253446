"""REST API routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from app.models import InvalidEventError, SignalRequest, TradeSignal
from app.services import SignalProcessor

logger = logging.getLogger(__name__)

router = APIRouter()


# Response models
class Acknowledgement(BaseModel):
    """Returned when an event was processed without emitting a signal."""

    status: str = "ok"
    message: str = "Signal processed"


class SystemStatus(BaseModel):
    """System status response."""

    status: str
    tracked_pairs: int
    max_signals_per_session: int
    fvg_window_minutes: int
    condition_update_policy: str
    telegram_enabled: bool
    stats: dict
    pairs: list[dict]


def get_processor(request: Request) -> SignalProcessor:
    """Signal processor created in the application lifespan."""
    return request.app.state.processor


@router.post("/signal", response_model=TradeSignal | Acknowledgement)
async def receive_signal(
    body: SignalRequest,
    processor: SignalProcessor = Depends(get_processor),
):
    """Apply one condition event; return the trade signal if it fired."""
    try:
        event = body.to_event()
    except InvalidEventError as e:
        logger.warning(f"Rejected {body.signal_type} event for {body.pair}_{body.timeframe}: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    trade_signal = await processor.process(event)
    if trade_signal is None:
        return Acknowledgement()
    return trade_signal


@router.get("/api/status", response_model=SystemStatus)
async def get_status(processor: SignalProcessor = Depends(get_processor)):
    """Get tracked pairs and their condition state."""
    pairs = await processor.store.snapshot()
    config = processor.store.config

    return SystemStatus(
        status="running",
        tracked_pairs=len(pairs),
        max_signals_per_session=config.max_emissions_per_session,
        fvg_window_minutes=int(config.fvg_window.total_seconds() // 60),
        condition_update_policy=config.update_policy,
        telegram_enabled=processor.notifier.enabled,
        stats=processor.stats(),
        pairs=pairs,
    )
