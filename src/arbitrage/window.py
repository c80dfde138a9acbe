"""Windowed latest-price snapshot."""

from collections.abc import Iterable
from datetime import datetime, timedelta

from loguru import logger

from src.exceptions import EmptyInputError
from src.models.market import PriceTick, Snapshot, SnapshotEntry, to_naive_utc


class WindowSnapshotBuilder:
    """Build the latest in-window tick per (exchange, asset)."""

    @staticmethod
    def build(
        ticks: Iterable[PriceTick],
        max_age_seconds: int,
        now: datetime | None = None,
    ) -> Snapshot:
        """
        Build a snapshot of the most recent tick per (exchange, asset).

        The window is [anchor - max_age_seconds, anchor], inclusive at both
        ends. The anchor is ``now`` when given, otherwise the newest tick
        timestamp. Within a key the newest tick wins; on a timestamp tie the
        tick later in input order wins.

        Args:
            ticks: Ticks in input order
            max_age_seconds: Window length in seconds
            now: Optional window anchor; aware values are converted to naive UTC

        Returns:
            Mapping of (exchange_id, asset_id) to SnapshotEntry

        Raises:
            EmptyInputError: If no tick falls inside the window
        """
        ticks = list(ticks)
        if not ticks:
            raise EmptyInputError("No ticks to build a snapshot from")

        anchor = to_naive_utc(now) if now is not None else max(tick.timestamp for tick in ticks)
        cutoff = anchor - timedelta(seconds=max_age_seconds)

        latest: dict[tuple[str, str], PriceTick] = {}
        for tick in ticks:
            if tick.timestamp < cutoff or tick.timestamp > anchor:
                continue
            current = latest.get(tick.key)
            if current is None or tick.timestamp >= current.timestamp:
                latest[tick.key] = tick

        if not latest:
            raise EmptyInputError(f"No ticks between {cutoff.isoformat()} and {anchor.isoformat()}")

        logger.debug(
            f"Snapshot: {len(latest)} entries from {len(ticks)} ticks (cutoff={cutoff.isoformat()})"
        )
        return {key: SnapshotEntry.from_tick(tick) for key, tick in latest.items()}
