"""Main entry point for the arbitrage detector."""

import argparse
import asyncio
import threading
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from loguru import logger

from src.arbitrage.detector import DetectionOrchestrator
from src.arbitrage.results import DetectionConfig
from src.config.logging_config import setup_logging
from src.config.settings import settings
from src.exchanges.loader import load_asset_catalog, load_exchange_catalog
from src.market_data.feeds import CsvTickSource
from src.market_data.tick_store import PriceTickStore
from src.models.market import to_naive_utc, utc_now
from src.reporting.export import export_opportunities_csv, summarize_opportunities


def _parse_utc(value: str) -> datetime:
    """Parse an ISO 8601 timestamp into naive UTC, matching tick timestamps."""
    return to_naive_utc(datetime.fromisoformat(value))


async def main(
    config: DetectionConfig,
    ticks_file: str,
    exchanges_file: str = "",
    assets_file: str = "",
    export_dir: str = "",
    iterations: int = 0,
    now: datetime | None = None,
) -> None:
    """
    Run detection cycles on a fixed cadence.

    Args:
        config: Detection parameters
        ticks_file: CSV tick feed, re-read for new rows every cycle
        exchanges_file: CSV exchange reference feed (empty = defaults)
        assets_file: CSV asset reference feed (empty = defaults)
        export_dir: Directory for per-cycle CSV exports (empty = no export)
        iterations: Number of cycles to run (0 = until interrupted)
        now: Pinned reference time (None = wall clock each cycle)
    """
    setup_logging()
    logger.info(
        f"Starting arbitrage detector "
        f"(min_profit={config.min_profit_pct}%, max_age={config.max_age_seconds}s)"
    )

    catalog = load_exchange_catalog(exchanges_file)
    assets = load_asset_catalog(assets_file)
    store = PriceTickStore()
    source = CsvTickSource(ticks_file)
    orchestrator = DetectionOrchestrator(store, catalog)
    cancel = threading.Event()

    iteration = 0
    opportunities_found = 0

    try:
        while True:
            iteration += 1
            source.load_into(store)

            now_reference = to_naive_utc(now) if now else utc_now()
            result = await asyncio.to_thread(
                orchestrator.run_with_config, config, now_reference, cancel
            )

            cycle_log = logger.bind(cycle=iteration)
            if not result.ok:
                cycle_log.warning(f"Cycle {iteration}: {result.status.value} ({result.error})")
            else:
                opportunities_found += len(result.opportunities)
                tiers = " ".join(
                    f"{tier.value}={n}" for tier, n in result.count_by_confidence().items()
                )
                cycle_log.info(
                    f"Cycle {iteration}: {result.status.value} at {now_reference.isoformat()}, "
                    f"{len(result.opportunities)} opportunities ({tiers})"
                )
                summary = summarize_opportunities(result.opportunities, assets)
                logger.info(f"Cycle {iteration}:\n{summary}")
                if export_dir:
                    stamp = now_reference.strftime("%Y%m%dT%H%M%S")
                    export_opportunities_csv(
                        result.opportunities,
                        Path(export_dir) / f"opportunities_{stamp}.csv",
                        assets,
                    )

            if iterations and iteration >= iterations:
                break

            await asyncio.sleep(settings.SCAN_INTERVAL_MS / 1000)

    except KeyboardInterrupt:
        cancel.set()
        logger.info("Shutting down...")
    except asyncio.CancelledError:
        cancel.set()
        logger.info("Cancelled, shutting down...")
        raise
    finally:
        logger.info("=" * 50)
        logger.info(f"Cycles: {iteration}")
        logger.info(f"Ticks stored: {len(store)}")
        logger.info(f"Opportunities found: {opportunities_found}")
        logger.info("=" * 50)


def run() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Cross-exchange arbitrage detector")
    parser.add_argument(
        "--min-profit",
        type=str,
        default=str(settings.MIN_PROFIT_PCT),
        help="Minimum gross profit percentage (default: %(default)s)",
    )
    parser.add_argument(
        "--max-age",
        type=int,
        default=settings.MAX_AGE_SECONDS,
        help="Window length in seconds (default: %(default)s)",
    )
    parser.add_argument("--ticks", default=settings.TICKS_FILE, help="CSV tick feed")
    parser.add_argument("--exchanges", default=settings.EXCHANGES_FILE, help="CSV exchange feed")
    parser.add_argument("--assets", default=settings.ASSETS_FILE, help="CSV asset feed")
    parser.add_argument("--export-dir", default=settings.EXPORT_DIR, help="CSV export directory")
    parser.add_argument(
        "--iterations",
        type=int,
        default=0,
        help="Number of detection cycles (0=infinite)",
    )
    parser.add_argument(
        "--now",
        type=_parse_utc,
        default=None,
        help="Pin the reference time (ISO 8601, UTC) for replaying a recorded feed",
    )
    args = parser.parse_args()

    config = DetectionConfig(
        min_profit_pct=Decimal(args.min_profit),
        max_age_seconds=args.max_age,
    )

    asyncio.run(
        main(
            config=config,
            ticks_file=args.ticks,
            exchanges_file=args.exchanges,
            assets_file=args.assets,
            export_dir=args.export_dir,
            iterations=args.iterations,
            now=args.now,
        )
    )


if __name__ == "__main__":
    run()
