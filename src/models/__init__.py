"""Pydantic models for the arbitrage detector."""

from src.models.market import Asset, Exchange, FeeTier, PriceTick, Snapshot, SnapshotEntry
from src.models.opportunity import (
    ArbitrageCandidate,
    ArbitrageOpportunity,
    Confidence,
    SkippedCandidate,
)

__all__ = [
    "Asset",
    "Exchange",
    "FeeTier",
    "PriceTick",
    "Snapshot",
    "SnapshotEntry",
    "ArbitrageCandidate",
    "ArbitrageOpportunity",
    "Confidence",
    "SkippedCandidate",
]
