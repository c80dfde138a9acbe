#!/usr/bin/env python3
"""Write a synthetic tick feed for replaying the detector offline."""

import argparse
import random
from datetime import datetime, timedelta
from decimal import Decimal
from pathlib import Path

import pandas as pd
from loguru import logger

from src.config.constants import DEFAULT_ASSETS, DEFAULT_EXCHANGES
from src.config.logging_config import setup_logging
from src.market_data.feeds import TICK_COLUMNS

# Rough reference prices for the built-in assets
BASE_PRICES = {
    "BTC": Decimal("65000"),
    "ETH": Decimal("3400"),
    "SOL": Decimal("150"),
    "XRP": Decimal("0.55"),
    "ADA": Decimal("0.45"),
}


def generate_tick_frame(
    start: datetime,
    instants: int,
    step_seconds: int = 1,
    spread_pct: float = 0.8,
    seed: int | None = None,
) -> pd.DataFrame:
    """
    Generate ticks for every default exchange and asset.

    Each asset follows a random walk; each exchange quotes it at the same
    instant with its own noise so that cross-exchange spreads appear.

    Args:
        start: Timestamp of the first instant (naive UTC)
        instants: Number of quote instants
        step_seconds: Seconds between instants
        spread_pct: Maximum per-exchange deviation from the walk, in percent
        seed: Seed for reproducible feeds

    Returns:
        DataFrame with the tick feed columns
    """
    rng = random.Random(seed)
    mids = {asset["id"]: BASE_PRICES.get(asset["id"], Decimal("1")) for asset in DEFAULT_ASSETS}

    rows = []
    for i in range(instants):
        timestamp = start + timedelta(seconds=i * step_seconds)
        for asset_id, mid in mids.items():
            mid = mid * (1 + Decimal(str(round(rng.gauss(0, 0.05), 6))) / 100)
            mids[asset_id] = mid
            for exchange in DEFAULT_EXCHANGES:
                noise = Decimal(str(round(rng.uniform(-spread_pct, spread_pct), 6)))
                rows.append(
                    {
                        "exchange_id": exchange["id"],
                        "asset_id": asset_id,
                        "price": str((mid * (1 + noise / 100)).quantize(Decimal("0.00000001"))),
                        "volume": str(Decimal(str(round(rng.uniform(0.01, 25), 4)))),
                        "timestamp": timestamp.isoformat(),
                    }
                )
    return pd.DataFrame(rows, columns=TICK_COLUMNS)


def main() -> None:
    """Main entry point for feed generation."""
    parser = argparse.ArgumentParser(description="Generate a synthetic tick feed")
    parser.add_argument(
        "--start",
        type=str,
        default="2024-01-01T00:00:00",
        help="First timestamp (ISO 8601, UTC)",
    )
    parser.add_argument("--instants", type=int, default=120, help="Number of quote instants")
    parser.add_argument("--step", type=int, default=1, help="Seconds between instants")
    parser.add_argument("--spread", type=float, default=0.8, help="Per-exchange noise in percent")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--output", type=str, default="data/ticks.csv", help="Output CSV path")

    args = parser.parse_args()
    setup_logging()

    frame = generate_tick_frame(
        start=datetime.fromisoformat(args.start),
        instants=args.instants,
        step_seconds=args.step,
        spread_pct=args.spread,
        seed=args.seed,
    )
    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(output, index=False)
    logger.info(f"Wrote {len(frame)} ticks to {output}")


if __name__ == "__main__":
    main()
