"""Pure core contracts for the trading pipeline."""

from alpaca_trader.core.errors import (
    InsufficientData,
    OrderRejected,
    RequestTimeout,
    TradingError,
    Unauthorized,
    Unavailable,
)

__all__ = [
    "TradingError",
    "InsufficientData",
    "Unavailable",
    "RequestTimeout",
    "Unauthorized",
    "OrderRejected",
]
