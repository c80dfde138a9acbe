"""Logging configuration using Loguru."""

import sys
from pathlib import Path

from loguru import logger

from src.config.settings import settings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"
CYCLE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | cycle={extra[cycle]} | {message}"


def _is_cycle_record(record: dict) -> bool:
    """Records bound with a ``cycle`` number go to the cycle report."""
    return "cycle" in record["extra"]


def setup_logging(level: str | None = None, log_file: str | None = None) -> Path:
    """
    Configure logging for the detector.

    Sinks:
        - stderr at ``level``
        - ``log_file``: everything at DEBUG, rotated at 10 MB
        - ``errors.log`` beside it: ERROR and above with tracebacks
        - ``cycles.log`` beside it: one entry per detection cycle, written
          by ``logger.bind(cycle=n)``

    Args:
        level: Console log level (defaults to settings.LOG_LEVEL)
        log_file: Main log file path (defaults to settings.LOG_FILE)

    Returns:
        Directory holding the log files
    """
    level = level or settings.LOG_LEVEL
    log_file = log_file or settings.LOG_FILE
    log_dir = Path(log_file).parent
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)
    logger.add(
        log_file,
        level="DEBUG",
        format=FILE_FORMAT,
        rotation="10 MB",
        retention="7 days",
        compression="zip",
    )
    logger.add(
        log_dir / "errors.log",
        level="ERROR",
        format=FILE_FORMAT + "\n{exception}",
        rotation="10 MB",
        retention="30 days",
        backtrace=True,
        diagnose=False,
    )
    logger.add(
        log_dir / "cycles.log",
        level="INFO",
        format=CYCLE_FORMAT,
        filter=_is_cycle_record,
        rotation="1 day",
        retention="14 days",
    )

    logger.info(f"Logging configured (level={level}, dir={log_dir})")
    return log_dir
