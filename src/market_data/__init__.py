"""Price tick storage and feeds."""

from src.market_data.feeds import BaseTickSource, CsvTickSource, validate_tick_record
from src.market_data.tick_store import PriceTickStore

__all__ = ["BaseTickSource", "CsvTickSource", "PriceTickStore", "validate_tick_record"]
