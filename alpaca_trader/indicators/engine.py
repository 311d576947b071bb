"""SMA and RSI over a bar series.

Both functions are pure and read closes in series order. RSI keeps the
fallback of 1.0 for an empty gain or loss set, so a flat or single-bar
series scores exactly 50 and a one-directional series stays finite.
"""

from __future__ import annotations

from alpaca_trader.core.errors import InsufficientData
from alpaca_trader.core.types import BarSeries, IndicatorSnapshot

DEFAULT_SMA_WINDOW = 10
DEFAULT_RSI_WINDOW = 50
EMPTY_AVERAGE_FALLBACK = 1.0


def _check_window(window: int) -> None:
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")


def _mean(values: list[float]) -> float:
    return sum(values) / len(values)


def compute_sma(series: BarSeries, window: int = DEFAULT_SMA_WINDOW) -> float:
    """Arithmetic mean of the last ``window`` closes."""
    _check_window(window)
    if len(series) < window:
        raise InsufficientData(
            f"SMA({window}) needs {window} bars for {series.symbol}, got {len(series)}",
            symbol=series.symbol,
        )
    return _mean([bar.close for bar in series.tail(window)])


def compute_rsi(series: BarSeries, window: int = DEFAULT_RSI_WINDOW) -> float:
    """Relative strength index over the last ``window`` bars.

    Uses up to ``window - 1`` close-to-close deltas. Unchanged closes count
    as neither gain nor loss.
    """
    _check_window(window)
    if len(series) == 0:
        raise InsufficientData(f"RSI needs at least one bar for {series.symbol}", symbol=series.symbol)

    closes = [bar.close for bar in series.tail(window)]
    gains: list[float] = []
    losses: list[float] = []
    for previous, current in zip(closes, closes[1:]):
        delta = current - previous
        if delta > 0:
            gains.append(delta)
        elif delta < 0:
            losses.append(-delta)

    avg_gain = _mean(gains) if gains else EMPTY_AVERAGE_FALLBACK
    avg_loss = _mean(losses) if losses else EMPTY_AVERAGE_FALLBACK
    rs = avg_gain / avg_loss
    return 100 - 100 / (1 + rs)


def compute_snapshot(
    series: BarSeries,
    sma_window: int = DEFAULT_SMA_WINDOW,
    rsi_window: int = DEFAULT_RSI_WINDOW,
) -> IndicatorSnapshot:
    sma = compute_sma(series, sma_window)
    rsi = compute_rsi(series, rsi_window)
    return IndicatorSnapshot(symbol=series.symbol, sma=sma, rsi=rsi, as_of=series.last.timestamp)
