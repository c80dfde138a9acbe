"""Exchange and asset reference catalogs."""

from collections.abc import Iterable, Iterator, Mapping
from decimal import Decimal
from types import MappingProxyType

from src.exceptions import UnknownExchangeError
from src.models.market import Asset, Exchange


class ExchangeCatalog:
    """Read-only mapping of exchange ID to exchange reference data."""

    def __init__(self, exchanges: Iterable[Exchange]) -> None:
        """
        Initialize the catalog.

        Args:
            exchanges: Exchange records; IDs must be unique

        Raises:
            ValueError: If an exchange ID appears twice
        """
        by_id: dict[str, Exchange] = {}
        for exchange in exchanges:
            if exchange.id in by_id:
                raise ValueError(f"Duplicate exchange ID: {exchange.id}")
            by_id[exchange.id] = exchange
        self._exchanges: Mapping[str, Exchange] = MappingProxyType(by_id)

    def get(self, exchange_id: str) -> Exchange:
        """
        Look up an exchange by ID.

        Raises:
            UnknownExchangeError: If the ID is not in the catalog
        """
        try:
            return self._exchanges[exchange_id]
        except KeyError:
            raise UnknownExchangeError(exchange_id) from None

    def effective_fee(self, exchange_id: str) -> Decimal:
        """Effective fee (%) for an exchange, tier multiplier applied."""
        return self.get(exchange_id).effective_fee

    def __contains__(self, exchange_id: object) -> bool:
        return exchange_id in self._exchanges

    def __iter__(self) -> Iterator[Exchange]:
        return iter(self._exchanges.values())

    def __len__(self) -> int:
        return len(self._exchanges)


class AssetCatalog:
    """Read-only mapping of asset ID to asset reference data."""

    def __init__(self, assets: Iterable[Asset]) -> None:
        self._assets: Mapping[str, Asset] = MappingProxyType({a.id: a for a in assets})

    def get(self, asset_id: str) -> Asset | None:
        """Look up an asset by ID."""
        return self._assets.get(asset_id)

    def display_name(self, asset_id: str) -> str:
        """Asset name for display, falling back to the ID."""
        asset = self._assets.get(asset_id)
        return asset.name if asset and asset.name else asset_id

    def __contains__(self, asset_id: object) -> bool:
        return asset_id in self._assets

    def __iter__(self) -> Iterator[Asset]:
        return iter(self._assets.values())

    def __len__(self) -> int:
        return len(self._assets)
