"""Load exchange and asset reference feeds."""

from pathlib import Path
from typing import Any

import pandas as pd
from loguru import logger

from src.config.constants import DEFAULT_ASSETS, DEFAULT_EXCHANGES
from src.exchanges.catalog import AssetCatalog, ExchangeCatalog
from src.models.market import Asset, Exchange


def _records(path: str | Path) -> list[dict[str, Any]]:
    """Read a CSV file into row dicts, blank cells mapped to None."""
    frame = pd.read_csv(path, dtype=str, keep_default_na=False)
    return [
        {key: (value if value != "" else None) for key, value in row.items()}
        for row in frame.to_dict(orient="records")
    ]


def build_exchange_catalog(records: list[dict[str, Any]]) -> ExchangeCatalog:
    """
    Build an exchange catalog from reference feed records.

    Only id, fee_rate and fee_tier matter to detection; the remaining
    columns are kept for display.

    Args:
        records: Rows with id, fee_rate, fee_tier and optional extras

    Returns:
        ExchangeCatalog
    """
    exchanges = []
    for row in records:
        exchanges.append(
            Exchange(
                id=row["id"],
                fee_rate=row["fee_rate"],
                fee_tier=(row.get("fee_tier") or "STANDARD").upper(),
                country=row.get("country"),
                launch_date=row.get("launch_date"),
                has_fiat=row.get("has_fiat"),
            )
        )
    return ExchangeCatalog(exchanges)


def build_asset_catalog(records: list[dict[str, Any]]) -> AssetCatalog:
    """Build an asset catalog from reference feed records."""
    return AssetCatalog(
        Asset(id=row["id"], name=row.get("name") or "", market_cap=row.get("market_cap"))
        for row in records
    )


def load_exchange_catalog(path: str | Path | None = None) -> ExchangeCatalog:
    """
    Load the exchange catalog from a CSV feed.

    Args:
        path: CSV path; built-in defaults are used when empty

    Returns:
        ExchangeCatalog
    """
    if not path:
        logger.info("No exchange feed configured, using built-in exchanges")
        return build_exchange_catalog(DEFAULT_EXCHANGES)

    catalog = build_exchange_catalog(_records(path))
    logger.info(f"Loaded {len(catalog)} exchanges from {path}")
    return catalog


def load_asset_catalog(path: str | Path | None = None) -> AssetCatalog:
    """
    Load the asset catalog from a CSV feed.

    Args:
        path: CSV path; built-in defaults are used when empty

    Returns:
        AssetCatalog
    """
    if not path:
        logger.info("No asset feed configured, using built-in assets")
        return build_asset_catalog(DEFAULT_ASSETS)

    catalog = build_asset_catalog(_records(path))
    logger.info(f"Loaded {len(catalog)} assets from {path}")
    return catalog
