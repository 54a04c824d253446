"""FVG time-window validation.

A fair-value gap found at or after the sweep is always current. One found
before the sweep is only usable if it is at most ``window`` older than the
sweep. Timestamps that cannot be parsed are accepted so a formatting quirk
never drops a trade.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.correlation.correlator import Correlator

logger = logging.getLogger(__name__)

DEFAULT_FVG_WINDOW = timedelta(hours=1)

_TIME_FORMATS = (
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
)


def parse_candle_time(value: str) -> datetime | None:
    """Parse a candle timestamp into a naive datetime.

    Accepts ``2023-07-10T12:00:00`` (optionally followed by ``Z``) and
    ``2023-07-10 12:00:00``. Fractional seconds and numeric UTC offsets are
    accepted through ISO parsing; offsets are dropped after converting to
    UTC-equivalent wall time so both sides compare on the same clock.

    Returns:
        Parsed datetime, or None if the value is not recognised
    """
    cleaned = value.strip().removesuffix("Z")

    for fmt in _TIME_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt)
        except ValueError:
            continue

    try:
        parsed = datetime.fromisoformat(cleaned)
    except ValueError:
        return None

    if parsed.tzinfo is not None:
        parsed = (parsed - parsed.utcoffset()).replace(tzinfo=None)
    return parsed


def is_fvg_eligible(
    correlator: Correlator,
    window: timedelta = DEFAULT_FVG_WINDOW,
) -> bool:
    """Check whether the stored FVG is still valid relative to the sweep.

    Never mutates the correlator.

    Args:
        correlator: Correlator with all conditions met
        window: Maximum age of an FVG that precedes the sweep

    Returns:
        True if the FVG may be used for a trade signal
    """
    sweep = correlator.sweep.detail
    if sweep is None:
        return True

    fvg = correlator.fvg.detail
    if fvg is None:
        return True

    fvg_dt = parse_candle_time(fvg.time)
    if fvg_dt is None:
        logger.warning("Could not parse FVG time '%s', accepting by default", fvg.time)
        return True

    sweep_dt = parse_candle_time(sweep.time)
    if sweep_dt is None:
        logger.warning("Could not parse sweep time '%s', accepting FVG by default", sweep.time)
        return True

    if fvg_dt >= sweep_dt:
        logger.debug("FVG after sweep for %s - valid", correlator.key)
        return True

    gap = sweep_dt - fvg_dt
    if gap <= window:
        logger.info("FVG within %s window before sweep for %s (%s)", window, correlator.key, gap)
        return True

    logger.info("FVG outside %s window before sweep for %s (%s)", window, correlator.key, gap)
    return False
