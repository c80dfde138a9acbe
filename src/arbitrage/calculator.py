"""Arbitrage profit calculator and fee adjustment."""

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal, DivisionByZero, InvalidOperation

from loguru import logger

from src.exceptions import ComputationError, UnknownExchangeError
from src.exchanges.catalog import ExchangeCatalog
from src.models.market import to_naive_utc, utc_now
from src.models.opportunity import ArbitrageCandidate, ArbitrageOpportunity, SkippedCandidate


class ArbitrageCalculator:
    """Calculate gross and fee-adjusted arbitrage profits."""

    @staticmethod
    def _percent_of(amount: Decimal, base: Decimal) -> Decimal:
        """amount / base * 100, failing loudly on a degenerate base."""
        if base == 0:
            raise ComputationError(f"Cannot express {amount} as a percentage of zero")
        try:
            result = (amount / base) * 100
        except (DivisionByZero, InvalidOperation) as e:
            raise ComputationError(f"Cannot compute {amount} / {base}: {e}") from e
        if not result.is_finite():
            raise ComputationError(f"Non-finite percentage: {amount} / {base}")
        return result

    @staticmethod
    def calculate_gross_profit(
        buy_price: Decimal,
        sell_price: Decimal,
    ) -> tuple[Decimal, Decimal]:
        """
        Calculate gross profit for buying on one exchange and selling on another.

        Args:
            buy_price: Price on the buy exchange
            sell_price: Price on the sell exchange

        Returns:
            Tuple of (gross_profit, profit_pct)

        Raises:
            ComputationError: If buy_price is zero
        """
        gross_profit = sell_price - buy_price
        return gross_profit, ArbitrageCalculator._percent_of(gross_profit, buy_price)

    @staticmethod
    def calculate_net_profit(
        buy_price: Decimal,
        sell_price: Decimal,
        buy_fee_percent: Decimal,
        sell_fee_percent: Decimal,
    ) -> tuple[Decimal, Decimal]:
        """
        Calculate profit net of both legs' trading fees.

        Each fee is a percentage of its own leg's price, not of the profit:
        net = (sell - buy) - buy * buy_fee / 100 - sell * sell_fee / 100

        Args:
            buy_price: Price on the buy exchange
            sell_price: Price on the sell exchange
            buy_fee_percent: Effective fee on the buy exchange (%)
            sell_fee_percent: Effective fee on the sell exchange (%)

        Returns:
            Tuple of (net_profit, net_profit_pct)

        Raises:
            ComputationError: If buy_price is zero
        """
        gross_profit = sell_price - buy_price
        buy_cost = buy_price * buy_fee_percent / 100
        sell_cost = sell_price * sell_fee_percent / 100
        net_profit = gross_profit - buy_cost - sell_cost
        return net_profit, ArbitrageCalculator._percent_of(net_profit, buy_price)


class FeeAdjuster:
    """Join candidates with exchange fees to produce net opportunities."""

    def __init__(self) -> None:
        """Initialize the fee adjuster."""
        self.calculator = ArbitrageCalculator()
        self.last_skipped: list[SkippedCandidate] = []

    def adjust(
        self,
        candidates: Iterable[ArbitrageCandidate],
        catalog: ExchangeCatalog,
        analysis_timestamp: datetime | None = None,
    ) -> list[ArbitrageOpportunity]:
        """
        Apply effective fees to each candidate.

        Candidates referencing an exchange missing from the catalog, or whose
        net figures cannot be computed, are skipped with a warning; the rest
        of the batch continues. Input order is preserved.

        Args:
            candidates: Gross candidates, in scanner order
            catalog: Exchange catalog for fee lookup
            analysis_timestamp: Cycle reference time (defaults to now, naive UTC)

        Returns:
            Opportunities with confidence unset
        """
        opportunities, _ = self.adjust_with_report(candidates, catalog, analysis_timestamp)
        return opportunities

    def adjust_with_report(
        self,
        candidates: Iterable[ArbitrageCandidate],
        catalog: ExchangeCatalog,
        analysis_timestamp: datetime | None = None,
    ) -> tuple[list[ArbitrageOpportunity], list[SkippedCandidate]]:
        """
        Apply effective fees and report skipped candidates.

        Returns:
            Tuple of (opportunities, skipped candidate records)
        """
        analysis_timestamp = to_naive_utc(analysis_timestamp) if analysis_timestamp else utc_now()
        opportunities: list[ArbitrageOpportunity] = []
        skipped: list[SkippedCandidate] = []

        for candidate in candidates:
            try:
                opportunities.append(self._adjust_one(candidate, catalog, analysis_timestamp))
            except (UnknownExchangeError, ComputationError) as e:
                logger.warning(
                    f"Skipping {candidate.asset_id} "
                    f"{candidate.buy_exchange_id}->{candidate.sell_exchange_id}: {e}"
                )
                skipped.append(
                    SkippedCandidate(
                        asset_id=candidate.asset_id,
                        buy_exchange_id=candidate.buy_exchange_id,
                        sell_exchange_id=candidate.sell_exchange_id,
                        reason=str(e),
                    )
                )

        self.last_skipped = skipped
        logger.debug(f"FeeAdjuster: {len(opportunities)} adjusted, {len(skipped)} skipped")
        return opportunities, skipped

    def _adjust_one(
        self,
        candidate: ArbitrageCandidate,
        catalog: ExchangeCatalog,
        analysis_timestamp: datetime,
    ) -> ArbitrageOpportunity:
        buy_fee = catalog.effective_fee(candidate.buy_exchange_id)
        sell_fee = catalog.effective_fee(candidate.sell_exchange_id)

        net_profit, net_profit_pct = self.calculator.calculate_net_profit(
            buy_price=candidate.buy_price,
            sell_price=candidate.sell_price,
            buy_fee_percent=buy_fee,
            sell_fee_percent=sell_fee,
        )

        return ArbitrageOpportunity(
            **candidate.model_dump(),
            buy_fee=buy_fee,
            sell_fee=sell_fee,
            net_profit=net_profit,
            net_profit_pct=net_profit_pct,
            analysis_timestamp=analysis_timestamp,
        )
