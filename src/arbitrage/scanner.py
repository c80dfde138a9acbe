"""Pairwise cross-exchange scanner."""

from collections import defaultdict
from decimal import Decimal

from loguru import logger

from src.arbitrage.calculator import ArbitrageCalculator
from src.exceptions import ComputationError
from src.models.market import Snapshot, SnapshotEntry
from src.models.opportunity import ArbitrageCandidate, SkippedCandidate


class PairwiseScanner:
    """Find buy/sell pairs across exchanges quoting the same asset."""

    def __init__(self) -> None:
        """Initialize the scanner."""
        self.calculator = ArbitrageCalculator()
        self.last_skipped: list[SkippedCandidate] = []

    def scan(self, snapshot: Snapshot, min_profit_pct: Decimal) -> list[ArbitrageCandidate]:
        """
        Scan a snapshot for gross arbitrage candidates.

        Every ordered pair of distinct exchanges quoting the same asset at
        the same timestamp is checked. A pair qualifies when
        sell_price > buy_price * (1 + min_profit_pct / 100).

        Args:
            snapshot: Latest in-window entries
            min_profit_pct: Minimum gross profit (%)

        Returns:
            Candidates by profit_pct descending, then asset, buy exchange
            and sell exchange ascending
        """
        self.last_skipped = []
        threshold = 1 + Decimal(str(min_profit_pct)) / 100

        by_asset: dict[str, list[SnapshotEntry]] = defaultdict(list)
        for entry in snapshot.values():
            by_asset[entry.asset_id].append(entry)

        candidates: list[ArbitrageCandidate] = []
        for asset_id, entries in by_asset.items():
            if len(entries) < 2:
                continue
            for buy in entries:
                for sell in entries:
                    if buy.exchange_id == sell.exchange_id or buy.timestamp != sell.timestamp:
                        continue
                    if not sell.price > buy.price * threshold:
                        continue
                    try:
                        candidates.append(self._make_candidate(asset_id, buy, sell))
                    except ComputationError as e:
                        logger.warning(
                            f"Skipping {asset_id} {buy.exchange_id}->{sell.exchange_id}: {e}"
                        )
                        self.last_skipped.append(
                            SkippedCandidate(
                                asset_id=asset_id,
                                buy_exchange_id=buy.exchange_id,
                                sell_exchange_id=sell.exchange_id,
                                reason=str(e),
                            )
                        )

        candidates.sort(key=lambda c: c.sort_key)
        logger.debug(f"Scanner: {len(candidates)} candidates across {len(by_asset)} assets")
        return candidates

    def _make_candidate(
        self, asset_id: str, buy: SnapshotEntry, sell: SnapshotEntry
    ) -> ArbitrageCandidate:
        """Build a candidate from the buy and sell legs."""
        gross_profit, profit_pct = self.calculator.calculate_gross_profit(buy.price, sell.price)
        return ArbitrageCandidate(
            asset_id=asset_id,
            buy_exchange_id=buy.exchange_id,
            sell_exchange_id=sell.exchange_id,
            buy_price=buy.price,
            sell_price=sell.price,
            buy_volume=buy.volume,
            sell_volume=sell.volume,
            gross_profit=gross_profit,
            profit_pct=profit_pct,
            timestamp=buy.timestamp,
        )
