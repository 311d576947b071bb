"""Order sinks for live and dry-run trading."""

from alpaca_trader.execution.alpaca_sink import AlpacaOrderSink
from alpaca_trader.execution.dry_run import DryRunOrderSink

__all__ = ["AlpacaOrderSink", "DryRunOrderSink"]
