#!/usr/bin/env python3
"""Post a scripted condition-event sequence to a running server.

Sends sweep, FVG, absorption and CVD events for one pair and prints each
response, which makes it easy to check a deployment end to end.

Usage:
    python scripts/replay_scenario.py
    python scripts/replay_scenario.py --url http://localhost:3000 --pair GBPUSD
    python scripts/replay_scenario.py --stale-fvg   # FVG two hours before the sweep
"""

import argparse
import sys

import httpx


def build_events(pair: str, timeframe: str, stale_fvg: bool) -> list[dict]:
    """Bearish sweep followed by evidence for a bullish fade."""
    fvg_time = "2024-07-10T08:00:00Z" if stale_fvg else "2024-07-10T09:30:00Z"

    def event(signal_type: str, candle_time: str, close: float, **extra) -> dict:
        return {
            "signal_type": signal_type,
            "pair": pair,
            "timeframe": timeframe,
            "candle_time": candle_time,
            "candle_close": close,
            **extra,
        }

    return [
        event("sessions_sweep", "2024-07-10T10:00:00Z", 1.0850, direction="bearish"),
        event("fvg", fvg_time, 1.0830, fvg_direction="bullish", gap_high=1.0840, gap_low=1.0825),
        event("absorption", "2024-07-10T10:05:00Z", 1.0835, direction="bullish"),
        # Same direction as the sweep: ignored
        event("cvd", "2024-07-10T10:06:00Z", 1.0836, direction="bearish"),
        event("cvd", "2024-07-10T10:07:00Z", 1.0838, direction="bullish"),
    ]


def main() -> int:
    parser = argparse.ArgumentParser(description="Replay a condition-event scenario")
    parser.add_argument("--url", default="http://localhost:3000", help="Server base URL")
    parser.add_argument("--pair", default="EURUSD")
    parser.add_argument("--timeframe", default="5m")
    parser.add_argument("--stale-fvg", action="store_true", help="Place the FVG outside the window")
    args = parser.parse_args()

    events = build_events(args.pair, args.timeframe, args.stale_fvg)

    with httpx.Client(base_url=args.url, timeout=10.0) as client:
        try:
            client.get("/health").raise_for_status()
        except httpx.HTTPError as e:
            print(f"Server not reachable at {args.url}: {e}")
            return 1

        for body in events:
            response = client.post("/signal", json=body)
            print(f"{body['signal_type']:<15} {body['candle_time']}  ->  {response.status_code} {response.text}")

        status = client.get("/api/status").json()
        print(f"\nTracked pairs: {status['tracked_pairs']}, stats: {status['stats']}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
