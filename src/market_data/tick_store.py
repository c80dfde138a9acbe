"""Append-only store of price ticks."""

import threading
from collections.abc import Iterable
from datetime import datetime

from loguru import logger

from src.models.market import PriceTick


class PriceTickStore:
    """
    Append-only, ordered collection of price ticks.

    Writers append under a lock; readers take a point-in-time copy with
    ``snapshot()`` so a detection cycle never observes a torn write.
    Insertion order is preserved because the window builder breaks
    timestamp ties by input order.
    """

    def __init__(self, ticks: Iterable[PriceTick] = ()) -> None:
        """
        Initialize the store.

        Args:
            ticks: Initial ticks, in arrival order
        """
        self._lock = threading.Lock()
        self._ticks: list[PriceTick] = list(ticks)

    def append(self, tick: PriceTick) -> None:
        """Append a single validated tick."""
        with self._lock:
            self._ticks.append(tick)

    def extend(self, ticks: Iterable[PriceTick]) -> int:
        """
        Append many validated ticks.

        Args:
            ticks: Ticks in arrival order

        Returns:
            Number of ticks appended
        """
        batch = list(ticks)
        with self._lock:
            self._ticks.extend(batch)
        logger.debug(f"Appended {len(batch)} ticks (total={len(self)})")
        return len(batch)

    def snapshot(self) -> tuple[PriceTick, ...]:
        """Immutable point-in-time copy of all ticks, in arrival order."""
        with self._lock:
            return tuple(self._ticks)

    def range(self, start: datetime | None = None, end: datetime | None = None) -> list[PriceTick]:
        """
        Ticks with start <= timestamp <= end, in arrival order.

        Args:
            start: Inclusive lower bound (None = unbounded)
            end: Inclusive upper bound (None = unbounded)
        """
        return [
            tick
            for tick in self.snapshot()
            if (start is None or tick.timestamp >= start) and (end is None or tick.timestamp <= end)
        ]

    def latest(self, exchange_id: str, asset_id: str) -> PriceTick | None:
        """
        Most recent tick for an (exchange, asset) pair.

        Timestamp ties go to the tick appended last.
        """
        best: PriceTick | None = None
        for tick in self.snapshot():
            if tick.exchange_id != exchange_id or tick.asset_id != asset_id:
                continue
            if best is None or tick.timestamp >= best.timestamp:
                best = tick
        return best

    def __len__(self) -> int:
        with self._lock:
            return len(self._ticks)
