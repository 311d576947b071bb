"""Data source adapters."""

from alpaca_trader.data.alpaca_source import AlpacaDataSource
from alpaca_trader.data.client import AlpacaClient

__all__ = ["AlpacaClient", "AlpacaDataSource"]
