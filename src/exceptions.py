"""Errors raised by the detection engine and its boundary collaborators."""


class ArbitrageError(Exception):
    """Base class for detection engine errors."""


class EmptyInputError(ArbitrageError):
    """No ticks are available inside the detection window."""


class NoDataError(ArbitrageError):
    """A detection cycle had no data to work on and produced no result."""


class UnknownExchangeError(ArbitrageError, KeyError):
    """An exchange ID is not present in the exchange catalog."""

    def __init__(self, exchange_id: str) -> None:
        super().__init__(exchange_id)
        self.exchange_id = exchange_id

    def __str__(self) -> str:
        return f"Unknown exchange: {self.exchange_id}"


class InvalidTickError(ArbitrageError, ValueError):
    """A raw price tick failed validation at the ingestion boundary."""


class ComputationError(ArbitrageError, ArithmeticError):
    """A profit figure could not be computed (e.g. zero buy price)."""


class CycleCancelledError(ArbitrageError):
    """A detection cycle was cancelled between pipeline stages."""
