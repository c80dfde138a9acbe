"""Opportunity export and tabular summaries."""

from collections.abc import Iterable
from pathlib import Path

import pandas as pd
from loguru import logger

from src.config.constants import EXPORT_COLUMNS, PERCENT_QUANTUM, PRICE_QUANTUM
from src.exchanges.catalog import AssetCatalog
from src.models.opportunity import ArbitrageOpportunity


def opportunities_to_frame(
    opportunities: Iterable[ArbitrageOpportunity],
    assets: AssetCatalog | None = None,
) -> pd.DataFrame:
    """
    Convert opportunities to a DataFrame with the export columns.

    Row order follows the input order. Decimal values are kept as strings
    so the CSV carries exact figures.

    Args:
        opportunities: Opportunities, best first
        assets: Optional asset catalog for display names

    Returns:
        DataFrame with EXPORT_COLUMNS
    """
    rows = []
    for opp in opportunities:
        rows.append(
            {
                "Asset": assets.display_name(opp.asset_id) if assets else opp.asset_id,
                "BuyExchange": opp.buy_exchange_id,
                "SellExchange": opp.sell_exchange_id,
                "BuyPrice": str(opp.buy_price),
                "SellPrice": str(opp.sell_price),
                "GrossProfit": str(opp.gross_profit),
                "ProfitPct": str(opp.profit_pct.quantize(PERCENT_QUANTUM)),
                "NetProfit": str(opp.net_profit),
                "NetProfitPct": str(opp.net_profit_pct.quantize(PERCENT_QUANTUM)),
                "Confidence": opp.confidence.value if opp.confidence else "",
                "AnalysisTimestamp": opp.analysis_timestamp.isoformat(),
            }
        )
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def export_opportunities_csv(
    opportunities: Iterable[ArbitrageOpportunity],
    path: str | Path,
    assets: AssetCatalog | None = None,
) -> Path:
    """
    Write opportunities to a CSV file.

    Args:
        opportunities: Opportunities, best first
        path: Destination file
        assets: Optional asset catalog for display names

    Returns:
        Path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    frame = opportunities_to_frame(opportunities, assets)
    frame.to_csv(path, index=False)
    logger.info(f"Exported {len(frame)} opportunities to {path}")
    return path


def summarize_opportunities(
    opportunities: Iterable[ArbitrageOpportunity],
    assets: AssetCatalog | None = None,
) -> str:
    """Render a fixed-width table of opportunities for logs and the console."""
    opportunities = list(opportunities)
    if not opportunities:
        return "No arbitrage opportunities found"

    frame = opportunities_to_frame(opportunities, assets)
    frame["BuyPrice"] = [
        str(o.buy_price.quantize(PRICE_QUANTUM).normalize()) for o in opportunities
    ]
    frame["SellPrice"] = [
        str(o.sell_price.quantize(PRICE_QUANTUM).normalize()) for o in opportunities
    ]
    frame = frame.drop(columns=["AnalysisTimestamp", "GrossProfit", "NetProfit"])
    return frame.to_string(index=False)
