"""Typed errors for the trading core and its adapters."""

from __future__ import annotations

from typing import Optional


class TradingError(Exception):
    """Base class for trading errors."""


class InsufficientData(TradingError):
    """Raised when a bar series is too short for the requested window."""

    def __init__(self, message: str, symbol: Optional[str] = None) -> None:
        self.symbol = symbol
        super().__init__(message)


class Unavailable(TradingError):
    """Raised when the data source or broker cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class RequestTimeout(Unavailable):
    """Raised when a broker call exceeds its timeout."""


class Unauthorized(TradingError):
    """Raised when the broker refuses our credentials."""


class OrderRejected(TradingError):
    """Raised when the order sink refuses a trade intent."""

    def __init__(
        self,
        message: str,
        symbol: Optional[str] = None,
        status_code: Optional[int] = None,
        broker_error_code: Optional[str] = None,
    ) -> None:
        self.symbol = symbol
        self.status_code = status_code
        self.broker_error_code = broker_error_code
        super().__init__(message)
