"""Detection cycle parameters and results."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from src.exceptions import CycleCancelledError, NoDataError
from src.models.opportunity import ArbitrageOpportunity, Confidence, SkippedCandidate


class DetectionConfig(BaseModel):
    """Run parameters for one detection cycle."""

    model_config = ConfigDict(frozen=True)

    min_profit_pct: Decimal = Field(..., gt=Decimal("0"), description="Minimum gross profit (%)")
    max_age_seconds: int = Field(..., gt=0, description="Window length in seconds")

    @classmethod
    def from_settings(cls) -> "DetectionConfig":
        """Build a config from the application settings."""
        from src.config.settings import settings

        return cls(
            min_profit_pct=settings.MIN_PROFIT_PCT,
            max_age_seconds=settings.MAX_AGE_SECONDS,
        )


class CycleStatus(str, Enum):
    """Outcome of a detection cycle."""

    OK = "ok"
    NO_DATA = "no_data"
    CANCELLED = "cancelled"


class DetectionResult(BaseModel):
    """Ordered opportunities produced by one detection cycle."""

    model_config = ConfigDict(frozen=True)

    status: CycleStatus = Field(default=CycleStatus.OK, description="Cycle outcome")
    opportunities: tuple[ArbitrageOpportunity, ...] = Field(
        default=(), description="Opportunities, best first"
    )
    skipped: tuple[SkippedCandidate, ...] = Field(
        default=(), description="Candidates dropped with a warning"
    )
    analysis_timestamp: datetime = Field(..., description="Cycle reference time")
    error: str | None = Field(default=None, description="Signalled error message")

    @property
    def ok(self) -> bool:
        """True when the cycle ran to completion."""
        return self.status == CycleStatus.OK

    def raise_for_status(self) -> None:
        """Raise the error signalled by a NO_DATA or CANCELLED cycle."""
        if self.status == CycleStatus.NO_DATA:
            raise NoDataError(self.error or "No ticks available")
        if self.status == CycleStatus.CANCELLED:
            raise CycleCancelledError(self.error or "Detection cycle cancelled")

    def count_by_confidence(self) -> dict[Confidence, int]:
        """Count opportunities per confidence tier."""
        counts = {tier: 0 for tier in Confidence}
        for opp in self.opportunities:
            if opp.confidence is not None:
                counts[opp.confidence] += 1
        return counts
