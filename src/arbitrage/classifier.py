"""Confidence classification for fee-adjusted opportunities."""

from decimal import Decimal

from src.config.constants import HIGH_CONFIDENCE_PCT, MEDIUM_CONFIDENCE_PCT
from src.models.opportunity import ArbitrageOpportunity, Confidence


class ConfidenceClassifier:
    """Bucket opportunities by net profit percentage."""

    def __init__(
        self,
        high_pct: Decimal = HIGH_CONFIDENCE_PCT,
        medium_pct: Decimal = MEDIUM_CONFIDENCE_PCT,
    ) -> None:
        self.high_pct = high_pct
        self.medium_pct = medium_pct

    def tier_for(self, net_profit_pct: Decimal) -> Confidence:
        """Confidence tier for a net profit percentage (lower bounds inclusive)."""
        if net_profit_pct >= self.high_pct:
            return Confidence.HIGH
        if net_profit_pct >= self.medium_pct:
            return Confidence.MEDIUM
        return Confidence.LOW

    def classify(self, opportunity: ArbitrageOpportunity) -> ArbitrageOpportunity:
        """Return a copy of the opportunity with its confidence tier set."""
        return opportunity.with_confidence(self.tier_for(opportunity.net_profit_pct))
