"""Arbitrage detection orchestrator."""

from datetime import datetime
from decimal import Decimal
from typing import Protocol

from loguru import logger

from src.arbitrage.calculator import FeeAdjuster
from src.arbitrage.classifier import ConfidenceClassifier
from src.arbitrage.results import CycleStatus, DetectionConfig, DetectionResult
from src.arbitrage.scanner import PairwiseScanner
from src.arbitrage.window import WindowSnapshotBuilder
from src.exceptions import EmptyInputError
from src.exchanges.catalog import ExchangeCatalog
from src.market_data.tick_store import PriceTickStore
from src.models.market import to_naive_utc


class CancelSignal(Protocol):
    """Anything with ``is_set()``: threading.Event, asyncio.Event, ..."""

    def is_set(self) -> bool: ...


class DetectionOrchestrator:
    """Run snapshot -> scan -> fee adjustment -> classification."""

    def __init__(self, store: PriceTickStore, catalog: ExchangeCatalog) -> None:
        """
        Initialize the orchestrator.

        Args:
            store: Tick store to read from (read-only during a cycle)
            catalog: Exchange catalog for fee lookup
        """
        self.store = store
        self.catalog = catalog
        self.classifier = ConfidenceClassifier()

    def run(
        self,
        min_profit_pct: Decimal | float | str,
        max_age_seconds: int,
        now_reference: datetime,
        cancel_event: CancelSignal | None = None,
    ) -> DetectionResult:
        """
        Run one detection cycle.

        Args:
            min_profit_pct: Minimum gross profit (%), > 0
            max_age_seconds: Window length in seconds, > 0
            now_reference: Window anchor and analysis timestamp
            cancel_event: Optional cancellation signal checked between stages

        Returns:
            DetectionResult; NO_DATA when the window is empty, CANCELLED when
            the signal was set. Neither carries partial results.
        """
        config = DetectionConfig(
            min_profit_pct=Decimal(str(min_profit_pct)),
            max_age_seconds=max_age_seconds,
        )
        return self.run_with_config(config, now_reference, cancel_event)

    def run_with_config(
        self,
        config: DetectionConfig,
        now_reference: datetime,
        cancel_event: CancelSignal | None = None,
    ) -> DetectionResult:
        """Run one detection cycle with an explicit config object."""
        now_reference = to_naive_utc(now_reference)
        ticks = self.store.snapshot()

        try:
            snapshot = WindowSnapshotBuilder.build(ticks, config.max_age_seconds, now=now_reference)
        except EmptyInputError as e:
            logger.warning(f"No data for detection cycle at {now_reference.isoformat()}: {e}")
            return DetectionResult(
                status=CycleStatus.NO_DATA,
                analysis_timestamp=now_reference,
                error=str(e),
            )
        if self._cancelled(cancel_event, "snapshot"):
            return self._cancelled_result(now_reference)

        scanner = PairwiseScanner()
        candidates = scanner.scan(snapshot, config.min_profit_pct)
        if self._cancelled(cancel_event, "scan"):
            return self._cancelled_result(now_reference)

        adjuster = FeeAdjuster()
        adjusted, skipped = adjuster.adjust_with_report(candidates, self.catalog, now_reference)
        if self._cancelled(cancel_event, "fee adjustment"):
            return self._cancelled_result(now_reference)

        opportunities = tuple(self.classifier.classify(opp) for opp in adjusted)
        if self._cancelled(cancel_event, "classification"):
            return self._cancelled_result(now_reference)

        logger.info(
            f"Detection cycle {now_reference.isoformat()}: "
            f"snapshot={len(snapshot)} candidates={len(candidates)} "
            f"opportunities={len(opportunities)} skipped={len(scanner.last_skipped) + len(skipped)}"
        )

        return DetectionResult(
            status=CycleStatus.OK,
            opportunities=opportunities,
            skipped=tuple(scanner.last_skipped) + tuple(skipped),
            analysis_timestamp=now_reference,
        )

    @staticmethod
    def _cancelled(cancel_event: CancelSignal | None, stage: str) -> bool:
        if cancel_event is not None and cancel_event.is_set():
            logger.info(f"Detection cycle cancelled after {stage}")
            return True
        return False

    @staticmethod
    def _cancelled_result(now_reference: datetime) -> DetectionResult:
        return DetectionResult(
            status=CycleStatus.CANCELLED,
            analysis_timestamp=now_reference,
            error="Detection cycle cancelled",
        )
