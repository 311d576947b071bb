"""Threshold classifier mapping price and indicators to a signal."""

from __future__ import annotations

from dataclasses import dataclass

from alpaca_trader.core.types import IndicatorSnapshot, Signal


@dataclass(frozen=True)
class SignalThresholds:
    oversold: float = 30.0
    overbought: float = 70.0

    def __post_init__(self) -> None:
        if not 0 <= self.oversold <= self.overbought <= 100:
            raise ValueError(
                f"thresholds must satisfy 0 <= oversold <= overbought <= 100, "
                f"got oversold={self.oversold} overbought={self.overbought}"
            )


DEFAULT_THRESHOLDS = SignalThresholds()


def evaluate(
    last_price: float,
    sma: float,
    rsi: float,
    thresholds: SignalThresholds = DEFAULT_THRESHOLDS,
) -> Signal:
    if last_price < sma and rsi < thresholds.oversold:
        return Signal.BUY
    if last_price > sma and rsi > thresholds.overbought:
        return Signal.SELL
    return Signal.HOLD


def evaluate_snapshot(
    last_price: float,
    snapshot: IndicatorSnapshot,
    thresholds: SignalThresholds = DEFAULT_THRESHOLDS,
) -> Signal:
    return evaluate(last_price, snapshot.sma, snapshot.rsi, thresholds)
