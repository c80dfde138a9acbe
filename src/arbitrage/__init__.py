"""Arbitrage detection engine."""

from src.arbitrage.calculator import ArbitrageCalculator, FeeAdjuster
from src.arbitrage.classifier import ConfidenceClassifier
from src.arbitrage.detector import DetectionOrchestrator
from src.arbitrage.results import CycleStatus, DetectionConfig, DetectionResult
from src.arbitrage.scanner import PairwiseScanner
from src.arbitrage.window import WindowSnapshotBuilder

__all__ = [
    "ArbitrageCalculator",
    "FeeAdjuster",
    "ConfidenceClassifier",
    "DetectionOrchestrator",
    "CycleStatus",
    "DetectionConfig",
    "DetectionResult",
    "PairwiseScanner",
    "WindowSnapshotBuilder",
]
