"""Per-symbol trading loop: bars -> indicators -> signal -> order."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Sequence

from alpaca_trader.core.errors import TradingError
from alpaca_trader.core.ports import Clock, DataSource, OrderSink
from alpaca_trader.core.types import (
    Asset,
    ExecutionReport,
    OrderType,
    OutcomeStatus,
    Signal,
    SymbolOutcome,
    TimeInForce,
    TradeIntent,
)
from alpaca_trader.indicators.engine import (
    DEFAULT_RSI_WINDOW,
    DEFAULT_SMA_WINDOW,
    compute_snapshot,
)
from alpaca_trader.signals.evaluator import DEFAULT_THRESHOLDS, SignalThresholds, evaluate_snapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrchestratorConfig:
    timeframe: str = "1Min"
    bar_limit: int = 50
    sma_window: int = DEFAULT_SMA_WINDOW
    rsi_window: int = DEFAULT_RSI_WINDOW
    order_quantity: float = 1.0
    order_type: OrderType = OrderType.MARKET
    time_in_force: TimeInForce = TimeInForce.DAY
    thresholds: SignalThresholds = DEFAULT_THRESHOLDS
    max_workers: int = 1


class _UtcClock:
    def now(self) -> datetime:
        return datetime.now(tz=timezone.utc)


class TradingOrchestrator:
    """
    Runs the signal pipeline for every asset and forwards buy/sell intents.

    A failure for one symbol is recorded in the report and never aborts the
    batch. Only a failure to list assets propagates to the caller.
    """

    def __init__(
        self,
        data_source: DataSource,
        order_sink: OrderSink,
        config: Optional[OrchestratorConfig] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.data_source = data_source
        self.order_sink = order_sink
        self.config = config or OrchestratorConfig()
        self.clock = clock or _UtcClock()

    def run(self, assets: Optional[Sequence[Asset]] = None) -> ExecutionReport:
        started_at = self.clock.now()
        if assets is None:
            assets = self.data_source.list_tradable_assets()

        logger.info(f"Trading run started: {len(assets)} assets, workers={self.config.max_workers}")

        if self.config.max_workers > 1 and len(assets) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
                # map() yields in submission order, so the report follows the asset order.
                outcomes = tuple(pool.map(self.process_asset, assets))
        else:
            outcomes = tuple(self.process_asset(asset) for asset in assets)

        report = ExecutionReport(
            started_at=started_at,
            finished_at=self.clock.now(),
            outcomes=outcomes,
        )
        logger.info(
            f"Trading run finished: orders={report.orders_submitted} "
            f"held={report.held} errors={report.errors}"
        )
        return report

    def process_asset(self, asset: Asset) -> SymbolOutcome:
        symbol = asset.symbol
        try:
            series = self.data_source.get_recent_bars(symbol, self.config.timeframe, self.config.bar_limit)
            snapshot = compute_snapshot(series, self.config.sma_window, self.config.rsi_window)
            last_price = series.last.close
            signal = evaluate_snapshot(last_price, snapshot, self.config.thresholds)

            if signal is Signal.HOLD:
                logger.debug(f"{symbol}: hold (price={last_price} sma={snapshot.sma:.4f} rsi={snapshot.rsi:.2f})")
                return SymbolOutcome(symbol=symbol, status=OutcomeStatus.HELD, signal=signal, snapshot=snapshot)

            intent = TradeIntent(
                symbol=symbol,
                side=signal.side,
                quantity=self.config.order_quantity,
                order_type=self.config.order_type,
                time_in_force=self.config.time_in_force,
            )
            confirmation = self.order_sink.submit_order(intent)
            logger.info(
                f"{intent.side.value.upper()} order placed for {symbol}: "
                f"id={confirmation.order_id} status={confirmation.status}"
            )
            return SymbolOutcome(
                symbol=symbol,
                status=OutcomeStatus.ORDERED,
                signal=signal,
                snapshot=snapshot,
                confirmation=confirmation,
            )
        except TradingError as e:
            logger.warning(f"{symbol}: skipped after {type(e).__name__}: {e}")
            return SymbolOutcome(
                symbol=symbol,
                status=OutcomeStatus.ERROR,
                error=str(e),
                error_type=type(e).__name__,
            )
        except Exception as e:
            # Adapter bugs and unexpected payloads stay contained to this symbol.
            logger.exception(f"{symbol}: unexpected {type(e).__name__}")
            return SymbolOutcome(
                symbol=symbol,
                status=OutcomeStatus.ERROR,
                error=str(e),
                error_type=type(e).__name__,
            )
