"""Trading run entrypoints."""

from alpaca_trader.runner.orchestrator import OrchestratorConfig, TradingOrchestrator
from alpaca_trader.runner.profit_loss import compute_profit_loss, fetch_profit_loss

__all__ = ["OrchestratorConfig", "TradingOrchestrator", "compute_profit_loss", "fetch_profit_loss"]
