"""Reporting collaborators for detected opportunities."""

from src.reporting.export import (
    export_opportunities_csv,
    opportunities_to_frame,
    summarize_opportunities,
)

__all__ = ["export_opportunities_csv", "opportunities_to_frame", "summarize_opportunities"]
