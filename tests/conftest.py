"""Pytest configuration and fixtures."""

import random
from collections.abc import Callable
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any

import pytest

from src.exchanges.catalog import AssetCatalog, ExchangeCatalog
from src.market_data.feeds import BaseTickSource
from src.market_data.tick_store import PriceTickStore
from src.models.market import Asset, Exchange, FeeTier, PriceTick

T0 = datetime(2024, 1, 1, 12, 0, 0)


class FakeTickSource(BaseTickSource):
    """
    Seeded generator of synthetic tick records.

    Every exchange quotes every asset at the same instants, one instant per
    ``step_seconds``, with prices scattered around a per-asset base price.
    """

    BASE_PRICES = {
        "BTC": Decimal("30000"),
        "ETH": Decimal("2000"),
        "SOL": Decimal("100"),
    }

    def __init__(
        self,
        exchanges: list[str],
        assets: list[str] | None = None,
        instants: int = 3,
        step_seconds: int = 10,
        spread_pct: float = 2.0,
        start: datetime = T0,
        seed: int = 42,
    ) -> None:
        self.exchanges = exchanges
        self.assets = assets or list(self.BASE_PRICES)
        self.instants = instants
        self.step_seconds = step_seconds
        self.spread_pct = spread_pct
        self.start = start
        self.rng = random.Random(seed)

    def fetch(self) -> list[dict[str, Any]]:
        records = []
        for i in range(self.instants):
            timestamp = self.start + timedelta(seconds=i * self.step_seconds)
            for asset in self.assets:
                base = self.BASE_PRICES.get(asset, Decimal("10"))
                for exchange in self.exchanges:
                    jitter = Decimal(str(round(self.rng.uniform(-1, 1) * self.spread_pct, 4)))
                    records.append(
                        {
                            "exchange_id": exchange,
                            "asset_id": asset,
                            "price": (base * (1 + jitter / 100)).quantize(Decimal("0.01")),
                            "volume": Decimal(str(round(self.rng.uniform(0, 5), 4))),
                            "timestamp": timestamp,
                        }
                    )
        return records


@pytest.fixture
def make_tick() -> Callable[..., PriceTick]:
    """Factory for ticks with sensible defaults."""

    def _make(
        exchange_id: str = "A",
        asset_id: str = "BTC",
        price: str | Decimal = "30000",
        volume: str | Decimal = "1",
        timestamp: datetime = T0,
    ) -> PriceTick:
        return PriceTick(
            exchange_id=exchange_id,
            asset_id=asset_id,
            price=Decimal(str(price)),
            volume=Decimal(str(volume)),
            timestamp=timestamp,
        )

    return _make


@pytest.fixture
def scenario_catalog() -> ExchangeCatalog:
    """Exchange A (0.10%, STANDARD) and B (0.50%, VIP -> 0.35%)."""
    return ExchangeCatalog(
        [
            Exchange(id="A", fee_rate=Decimal("0.10"), fee_tier=FeeTier.STANDARD),
            Exchange(id="B", fee_rate=Decimal("0.50"), fee_tier=FeeTier.VIP),
        ]
    )


@pytest.fixture
def wide_catalog() -> ExchangeCatalog:
    """Five exchanges across all fee tiers."""
    return ExchangeCatalog(
        [
            Exchange(id="A", fee_rate=Decimal("0.10"), fee_tier=FeeTier.STANDARD),
            Exchange(id="B", fee_rate=Decimal("0.50"), fee_tier=FeeTier.VIP),
            Exchange(id="C", fee_rate=Decimal("0.20"), fee_tier=FeeTier.PRO),
            Exchange(id="D", fee_rate=Decimal("0.25"), fee_tier=FeeTier.STANDARD),
            Exchange(id="E", fee_rate=Decimal("0"), fee_tier=FeeTier.VIP),
        ]
    )


@pytest.fixture
def asset_catalog() -> AssetCatalog:
    """Asset catalog with display names."""
    return AssetCatalog(
        [
            Asset(id="BTC", name="Bitcoin"),
            Asset(id="ETH", name="Ethereum"),
        ]
    )


@pytest.fixture
def scenario_store(make_tick: Callable[..., PriceTick]) -> PriceTickStore:
    """A/BTC=30000 and B/BTC=30500 at T0."""
    return PriceTickStore(
        [
            make_tick("A", "BTC", "30000", timestamp=T0),
            make_tick("B", "BTC", "30500", timestamp=T0),
        ]
    )


@pytest.fixture
def fake_tick_source() -> Callable[..., FakeTickSource]:
    """Factory for seeded synthetic tick sources."""

    def _make(**kwargs: Any) -> FakeTickSource:
        kwargs.setdefault("exchanges", ["A", "B", "C", "D", "E"])
        return FakeTickSource(**kwargs)

    return _make
