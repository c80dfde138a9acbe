"""Application constants."""

from decimal import Decimal

# Effective fee = nominal fee rate x tier multiplier
FEE_TIER_MULTIPLIERS = {
    "STANDARD": Decimal("1.0"),
    "PRO": Decimal("0.85"),
    "VIP": Decimal("0.7"),
}

# Confidence thresholds on net profit percentage (lower bound inclusive)
HIGH_CONFIDENCE_PCT = Decimal("1.0")
MEDIUM_CONFIDENCE_PCT = Decimal("0.5")

# Opportunity export layout
EXPORT_COLUMNS = [
    "Asset",
    "BuyExchange",
    "SellExchange",
    "BuyPrice",
    "SellPrice",
    "GrossProfit",
    "ProfitPct",
    "NetProfit",
    "NetProfitPct",
    "Confidence",
    "AnalysisTimestamp",
]

# Reference data used when no exchange/asset feed is configured.
# Fee rates are percentages (0.10 = 0.10%).
DEFAULT_EXCHANGES = [
    {"id": "binance", "fee_rate": "0.10", "fee_tier": "VIP", "country": "MT", "has_fiat": True},
    {"id": "coinbase", "fee_rate": "0.60", "fee_tier": "STANDARD", "country": "US", "has_fiat": True},
    {"id": "kraken", "fee_rate": "0.26", "fee_tier": "PRO", "country": "US", "has_fiat": True},
    {"id": "kucoin", "fee_rate": "0.10", "fee_tier": "STANDARD", "country": "SC", "has_fiat": False},
    {"id": "bybit", "fee_rate": "0.10", "fee_tier": "PRO", "country": "AE", "has_fiat": False},
]

DEFAULT_ASSETS = [
    {"id": "BTC", "name": "Bitcoin"},
    {"id": "ETH", "name": "Ethereum"},
    {"id": "SOL", "name": "Solana"},
    {"id": "XRP", "name": "XRP"},
    {"id": "ADA", "name": "Cardano"},
]

# Display precision for summaries and exports
PRICE_QUANTUM = Decimal("0.00000001")
PERCENT_QUANTUM = Decimal("0.0001")
