"""Arbitrage candidate and opportunity models."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Confidence(str, Enum):
    """Confidence tier derived from net profit percentage."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class ArbitrageCandidate(BaseModel):
    """Buy-low/sell-high pair found by the scanner, before fees."""

    model_config = ConfigDict(frozen=True)

    asset_id: str = Field(..., description="Asset traded")
    buy_exchange_id: str = Field(..., description="Exchange to buy on")
    sell_exchange_id: str = Field(..., description="Exchange to sell on")

    # Prices and volumes
    buy_price: Decimal = Field(..., description="Price on the buy exchange")
    sell_price: Decimal = Field(..., description="Price on the sell exchange")
    buy_volume: Decimal = Field(default=Decimal("0"), description="Volume quoted on buy side")
    sell_volume: Decimal = Field(default=Decimal("0"), description="Volume quoted on sell side")

    # Gross figures
    gross_profit: Decimal = Field(..., description="sell_price - buy_price")
    profit_pct: Decimal = Field(..., description="Gross profit as % of buy price")

    timestamp: datetime = Field(..., description="Shared timestamp of both legs")

    @model_validator(mode="after")
    def _check_distinct_exchanges(self) -> "ArbitrageCandidate":
        if self.buy_exchange_id == self.sell_exchange_id:
            raise ValueError("buy and sell exchange must differ")
        return self

    @property
    def sort_key(self) -> tuple:
        """Descending profit_pct, then asset/buy/sell ascending."""
        return (-self.profit_pct, self.asset_id, self.buy_exchange_id, self.sell_exchange_id)


class ArbitrageOpportunity(ArbitrageCandidate):
    """Fee-adjusted arbitrage opportunity."""

    # Fees (effective, %)
    buy_fee: Decimal = Field(..., description="Effective fee on buy exchange (%)")
    sell_fee: Decimal = Field(..., description="Effective fee on sell exchange (%)")

    # Net figures
    net_profit: Decimal = Field(..., description="Gross profit minus both legs' fees")
    net_profit_pct: Decimal = Field(..., description="Net profit as % of buy price")

    confidence: Confidence | None = Field(default=None, description="Confidence tier")
    analysis_timestamp: datetime = Field(..., description="Detection cycle reference time")

    def with_confidence(self, confidence: Confidence) -> "ArbitrageOpportunity":
        """Return a copy with the confidence tier set."""
        return self.model_copy(update={"confidence": confidence})

    @property
    def total_fee_pct(self) -> Decimal:
        """Sum of both legs' effective fees (%)."""
        return self.buy_fee + self.sell_fee

    @property
    def is_profitable(self) -> bool:
        """Check if opportunity is profitable after fees."""
        return self.net_profit > 0


class SkippedCandidate(BaseModel):
    """Warning record for a candidate dropped during a cycle."""

    model_config = ConfigDict(frozen=True)

    asset_id: str
    buy_exchange_id: str
    sell_exchange_id: str
    reason: str
