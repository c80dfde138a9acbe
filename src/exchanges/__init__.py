"""Exchange and asset reference data."""

from src.exchanges.catalog import AssetCatalog, ExchangeCatalog
from src.exchanges.loader import load_asset_catalog, load_exchange_catalog

__all__ = ["AssetCatalog", "ExchangeCatalog", "load_asset_catalog", "load_exchange_catalog"]
