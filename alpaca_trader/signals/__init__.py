"""Signal evaluation."""

from alpaca_trader.signals.evaluator import (
    DEFAULT_THRESHOLDS,
    SignalThresholds,
    evaluate,
    evaluate_snapshot,
)

__all__ = ["DEFAULT_THRESHOLDS", "SignalThresholds", "evaluate", "evaluate_snapshot"]
