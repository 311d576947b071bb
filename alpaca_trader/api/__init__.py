"""HTTP surface for the trading service."""

from alpaca_trader.api.app import create_app
from alpaca_trader.api.context import TradingContext, build_context

__all__ = ["TradingContext", "build_context", "create_app"]
