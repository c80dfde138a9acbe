"""Price tick feeds and ingestion-boundary validation."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pandas as pd
from loguru import logger
from pydantic import ValidationError

from src.exceptions import InvalidTickError
from src.market_data.tick_store import PriceTickStore
from src.models.market import PriceTick

TICK_COLUMNS = ["exchange_id", "asset_id", "price", "volume", "timestamp"]


def validate_tick_record(record: dict[str, Any]) -> PriceTick:
    """
    Validate a raw tick record.

    Args:
        record: Mapping with exchange_id, asset_id, price, volume, timestamp

    Returns:
        Validated PriceTick

    Raises:
        InvalidTickError: Missing fields, non-positive price or negative volume
    """
    try:
        return PriceTick.model_validate(record)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise InvalidTickError(f"Invalid tick ({fields}): {record}") from e


class BaseTickSource(ABC):
    """Abstract producer of raw tick records."""

    @abstractmethod
    def fetch(self) -> Iterable[dict[str, Any]]:
        """
        Fetch raw tick records in arrival order.

        Returns:
            Iterable of raw tick mappings
        """
        pass

    def ticks(self) -> list[PriceTick]:
        """
        Fetch and validate ticks, dropping invalid records.

        Returns:
            Valid ticks in arrival order
        """
        valid: list[PriceTick] = []
        dropped = 0
        for record in self.fetch():
            try:
                valid.append(validate_tick_record(record))
            except InvalidTickError as e:
                dropped += 1
                logger.warning(f"Dropping tick: {e}")
        if dropped:
            logger.warning(f"{self.__class__.__name__}: dropped {dropped} invalid ticks")
        return valid

    def load_into(self, store: PriceTickStore) -> int:
        """
        Validate and append this source's ticks to a store.

        Returns:
            Number of ticks appended
        """
        return store.extend(self.ticks())


class CsvTickSource(BaseTickSource):
    """
    Tick feed backed by a CSV file that a producer appends to.

    Each ``fetch()`` returns only the rows added since the previous call,
    so repeated loads into the same store never duplicate ticks.
    """

    def __init__(self, path: str | Path) -> None:
        """
        Initialize CSV tick source.

        Args:
            path: CSV with exchange_id, asset_id, price, volume, timestamp
        """
        self.path = Path(path)
        self._rows_read = 0

    def fetch(self) -> list[dict[str, Any]]:
        """Read raw records appended to the CSV file since the last fetch."""
        if not self.path.exists():
            logger.warning(f"Tick feed {self.path} does not exist yet, no new rows")
            return []

        frame = pd.read_csv(self.path, dtype=str, keep_default_na=False)
        missing = [col for col in TICK_COLUMNS if col not in frame.columns]
        if missing:
            raise ValueError(f"{self.path}: missing columns {missing}")
        frame = frame[TICK_COLUMNS].iloc[self._rows_read :]
        self._rows_read += len(frame)
        logger.debug(f"Read {len(frame)} new tick rows from {self.path}")
        return [
            {key: (value if value != "" else None) for key, value in row.items()}
            for row in frame.to_dict(orient="records")
        ]
