"""Market and reference data models."""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.config.constants import FEE_TIER_MULTIPLIERS


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware timestamp to naive UTC; naive values are assumed UTC already."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def utc_now() -> datetime:
    """Current time as naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class FeeTier(str, Enum):
    """Volume/loyalty tier that discounts an exchange's nominal fee."""

    STANDARD = "STANDARD"
    PRO = "PRO"
    VIP = "VIP"

    @property
    def multiplier(self) -> Decimal:
        """Fee multiplier for this tier."""
        return FEE_TIER_MULTIPLIERS[self.value]


class Exchange(BaseModel):
    """Exchange reference data."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Exchange ID")
    fee_rate: Decimal = Field(..., ge=Decimal("0"), description="Nominal trading fee (%)")
    fee_tier: FeeTier = Field(default=FeeTier.STANDARD, description="Fee tier")

    # Display passthrough, not used by detection
    country: str | None = Field(default=None, description="Country of registration")
    launch_date: date | None = Field(default=None, description="Launch date")
    has_fiat: bool | None = Field(default=None, description="Supports fiat on-ramp")

    @property
    def effective_fee(self) -> Decimal:
        """Fee rate (%) after applying the tier multiplier."""
        return self.fee_rate * self.fee_tier.multiplier


class Asset(BaseModel):
    """Tradable asset reference data."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Asset ID (e.g., BTC)")
    name: str = Field(default="", description="Display name")
    market_cap: Decimal | None = Field(default=None, description="Market capitalisation")


class PriceTick(BaseModel):
    """One observed quote from one exchange for one asset at one instant."""

    model_config = ConfigDict(frozen=True)

    exchange_id: str = Field(..., min_length=1, description="Exchange quoting the price")
    asset_id: str = Field(..., min_length=1, description="Asset being quoted")
    price: Decimal = Field(..., gt=Decimal("0"), description="Quoted price")
    volume: Decimal = Field(default=Decimal("0"), ge=Decimal("0"), description="Quoted volume")
    timestamp: datetime = Field(..., description="Observation time (naive UTC)")

    @field_validator("timestamp")
    @classmethod
    def _to_naive_utc(cls, value: datetime) -> datetime:
        return to_naive_utc(value)

    @property
    def key(self) -> tuple[str, str]:
        """Snapshot key (exchange_id, asset_id)."""
        return self.exchange_id, self.asset_id


class SnapshotEntry(PriceTick):
    """Latest in-window tick for one (exchange, asset) pair."""

    @classmethod
    def from_tick(cls, tick: PriceTick) -> "SnapshotEntry":
        """Build a snapshot entry from a tick."""
        return cls(**tick.model_dump())


Snapshot = dict[tuple[str, str], SnapshotEntry]
