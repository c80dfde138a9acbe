"""Unit tests for arbitrage calculator, fee adjuster and classifier."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from src.arbitrage.calculator import ArbitrageCalculator, FeeAdjuster
from src.arbitrage.classifier import ConfidenceClassifier
from src.exceptions import ComputationError
from src.exchanges.catalog import ExchangeCatalog
from src.models.opportunity import ArbitrageCandidate, ArbitrageOpportunity, Confidence

T0 = datetime(2024, 1, 1, 12, 0, 0)


def _candidate(
    buy: str = "A",
    sell: str = "B",
    buy_price: str = "30000",
    sell_price: str = "30500",
    asset: str = "BTC",
) -> ArbitrageCandidate:
    gross, pct = ArbitrageCalculator.calculate_gross_profit(Decimal(buy_price), Decimal(sell_price))
    return ArbitrageCandidate(
        asset_id=asset,
        buy_exchange_id=buy,
        sell_exchange_id=sell,
        buy_price=Decimal(buy_price),
        sell_price=Decimal(sell_price),
        gross_profit=gross,
        profit_pct=pct,
        timestamp=T0,
    )


class TestArbitrageCalculator:
    """Tests for ArbitrageCalculator."""

    @pytest.fixture
    def calculator(self) -> ArbitrageCalculator:
        """Create calculator instance."""
        return ArbitrageCalculator()

    def test_gross_profit(self, calculator: ArbitrageCalculator) -> None:
        """Test gross profit and percentage."""
        gross, pct = calculator.calculate_gross_profit(Decimal("200"), Decimal("210"))
        assert gross == Decimal("10")
        assert pct == Decimal("5")

    def test_net_profit_applies_fees_to_each_leg(self, calculator: ArbitrageCalculator) -> None:
        """Test fees are charged on each leg's price, not on the profit."""
        net, net_pct = calculator.calculate_net_profit(
            buy_price=Decimal("30000"),
            sell_price=Decimal("30500"),
            buy_fee_percent=Decimal("0.10"),
            sell_fee_percent=Decimal("0.35"),
        )
        assert net == Decimal("363.25")
        assert net_pct == Decimal("363.25") / Decimal("30000") * 100

    def test_zero_buy_price_fails_explicitly(self, calculator: ArbitrageCalculator) -> None:
        """Test a zero buy price raises instead of reporting 0%."""
        with pytest.raises(ComputationError):
            calculator.calculate_gross_profit(Decimal("0"), Decimal("10"))
        with pytest.raises(ComputationError):
            calculator.calculate_net_profit(
                Decimal("0"), Decimal("10"), Decimal("0.1"), Decimal("0.1")
            )


class TestFeeAdjuster:
    """Tests for FeeAdjuster."""

    @pytest.fixture
    def adjuster(self) -> FeeAdjuster:
        """Create fee adjuster instance."""
        return FeeAdjuster()

    def test_scenario_net_profit(
        self, adjuster: FeeAdjuster, scenario_catalog: ExchangeCatalog
    ) -> None:
        """Test A(0.10 STANDARD) -> B(0.50 VIP) net profit is 363.25."""
        [opp] = adjuster.adjust([_candidate()], scenario_catalog, analysis_timestamp=T0)

        assert opp.buy_fee == Decimal("0.10")
        assert opp.sell_fee == Decimal("0.35")
        assert opp.net_profit == Decimal("363.25")
        assert opp.net_profit_pct.quantize(Decimal("0.001")) == Decimal("1.211")
        assert opp.confidence is None
        assert opp.analysis_timestamp == T0

    def test_unknown_exchange_skipped_batch_continues(
        self, adjuster: FeeAdjuster, scenario_catalog: ExchangeCatalog
    ) -> None:
        """Test a candidate on an unknown exchange is dropped with a record."""
        candidates = [
            _candidate(buy="A", sell="GHOST", sell_price="31000"),
            _candidate(),
        ]
        opportunities, skipped = adjuster.adjust_with_report(candidates, scenario_catalog, T0)

        assert [(o.buy_exchange_id, o.sell_exchange_id) for o in opportunities] == [("A", "B")]
        assert len(skipped) == 1
        assert skipped[0].sell_exchange_id == "GHOST"
        assert "GHOST" in skipped[0].reason
        assert adjuster.last_skipped == skipped

    def test_preserves_input_order(
        self, adjuster: FeeAdjuster, wide_catalog: ExchangeCatalog
    ) -> None:
        """Test output follows candidate order."""
        candidates = [
            _candidate(buy="C", sell="D", sell_price="31000"),
            _candidate(buy="A", sell="E", sell_price="30900"),
            _candidate(buy="B", sell="A", sell_price="30100"),
        ]
        opportunities = adjuster.adjust(candidates, wide_catalog, T0)
        assert [(o.buy_exchange_id, o.sell_exchange_id) for o in opportunities] == [
            ("C", "D"),
            ("A", "E"),
            ("B", "A"),
        ]

    def test_net_formula_exact_for_all_pairs(
        self, adjuster: FeeAdjuster, wide_catalog: ExchangeCatalog
    ) -> None:
        """Test net = gross - buy*buy_fee/100 - sell*sell_fee/100 for every pair."""
        ids = ["A", "B", "C", "D", "E"]
        candidates = [
            _candidate(buy=b, sell=s, buy_price="1234.5", sell_price="1300.25")
            for b in ids
            for s in ids
            if b != s
        ]
        for opp in adjuster.adjust(candidates, wide_catalog, T0):
            expected = (
                opp.gross_profit
                - opp.buy_price * opp.buy_fee / 100
                - opp.sell_price * opp.sell_fee / 100
            )
            assert opp.net_profit == expected
            assert opp.buy_fee == wide_catalog.effective_fee(opp.buy_exchange_id)
            assert opp.sell_fee == wide_catalog.effective_fee(opp.sell_exchange_id)

    def test_empty_catalog_skips_everything(self, adjuster: FeeAdjuster) -> None:
        """Test every candidate is skipped when no exchange is known."""
        candidates = [_candidate(), _candidate(buy="B", sell="A")]
        opportunities = adjuster.adjust(candidates, ExchangeCatalog([]), T0)
        assert opportunities == []
        assert len(adjuster.last_skipped) == 2

    def test_zero_fee_leg(self, adjuster: FeeAdjuster, wide_catalog: ExchangeCatalog) -> None:
        """Test a zero-fee exchange charges nothing on its leg."""
        [opp] = adjuster.adjust([_candidate(buy="E", sell="A")], wide_catalog, T0)
        assert opp.buy_fee == Decimal("0")
        assert opp.net_profit == Decimal("500") - Decimal("30500") * Decimal("0.10") / 100

    def test_analysis_timestamp_naive_utc(
        self, adjuster: FeeAdjuster, scenario_catalog: ExchangeCatalog
    ) -> None:
        """Test analysis timestamps are naive UTC, defaulted or converted."""
        [default] = adjuster.adjust([_candidate()], scenario_catalog)
        assert default.analysis_timestamp.tzinfo is None
        now = datetime.now(timezone.utc).replace(tzinfo=None)
        assert abs(now - default.analysis_timestamp) < timedelta(minutes=1)

        plus_two = timezone(timedelta(hours=2))
        [converted] = adjuster.adjust(
            [_candidate()], scenario_catalog, datetime(2024, 1, 1, 14, tzinfo=plus_two)
        )
        assert converted.analysis_timestamp == T0


class TestConfidenceClassifier:
    """Tests for ConfidenceClassifier."""

    @pytest.fixture
    def classifier(self) -> ConfidenceClassifier:
        """Create classifier instance."""
        return ConfidenceClassifier()

    @pytest.mark.parametrize(
        ("net_pct", "expected"),
        [
            ("5", Confidence.HIGH),
            ("1.0", Confidence.HIGH),
            ("0.999999", Confidence.MEDIUM),
            ("0.5", Confidence.MEDIUM),
            ("0.499999", Confidence.LOW),
            ("0", Confidence.LOW),
            ("-3", Confidence.LOW),
        ],
    )
    def test_boundaries(
        self, classifier: ConfidenceClassifier, net_pct: str, expected: Confidence
    ) -> None:
        """Test lower bounds are closed."""
        assert classifier.tier_for(Decimal(net_pct)) == expected

    def test_classify_sets_confidence(
        self, classifier: ConfidenceClassifier, scenario_catalog: ExchangeCatalog
    ) -> None:
        """Test classify returns a copy with the tier set."""
        [opp] = FeeAdjuster().adjust([_candidate()], scenario_catalog, T0)
        classified = classifier.classify(opp)

        assert isinstance(classified, ArbitrageOpportunity)
        assert classified.confidence == Confidence.HIGH
        assert opp.confidence is None
