"""Unit tests for logging configuration."""

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger

from src.config.logging_config import setup_logging


@pytest.fixture
def log_dir(tmp_path: Path) -> Iterator[Path]:
    """Configure logging into a temporary directory and restore stderr afterwards."""
    yield setup_logging(level="WARNING", log_file=str(tmp_path / "logs" / "arbitrage.log"))
    logger.remove()
    logger.add(sys.stderr)


class TestSetupLogging:
    """Tests for setup_logging sinks."""

    def test_creates_log_directory(self, log_dir: Path) -> None:
        """Test the log directory is created and returned."""
        assert log_dir.is_dir()
        assert (log_dir / "arbitrage.log").exists()

    def test_cycle_records_routed_to_cycle_log(self, log_dir: Path) -> None:
        """Test only records bound with a cycle number reach cycles.log."""
        logger.bind(cycle=3).info("Cycle 3: OK, 1 opportunities")
        logger.info("Not a cycle record")
        logger.remove()

        cycles = (log_dir / "cycles.log").read_text()
        assert "cycle=3 | Cycle 3: OK, 1 opportunities" in cycles
        assert "Not a cycle record" not in cycles
        assert "Not a cycle record" in (log_dir / "arbitrage.log").read_text()

    def test_errors_routed_to_error_log(self, log_dir: Path) -> None:
        """Test ERROR records reach errors.log and INFO records do not."""
        logger.error("Feed unreadable")
        logger.info("Routine message")
        logger.remove()

        errors = (log_dir / "errors.log").read_text()
        assert "Feed unreadable" in errors
        assert "Routine message" not in errors
