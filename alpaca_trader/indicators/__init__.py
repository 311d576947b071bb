"""Technical indicators computed from bar series."""

from alpaca_trader.indicators.engine import (
    DEFAULT_RSI_WINDOW,
    DEFAULT_SMA_WINDOW,
    compute_rsi,
    compute_sma,
    compute_snapshot,
)

__all__ = [
    "DEFAULT_SMA_WINDOW",
    "DEFAULT_RSI_WINDOW",
    "compute_sma",
    "compute_rsi",
    "compute_snapshot",
]
