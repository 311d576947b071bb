"""Composition of collaborators shared by the HTTP layer and the CLI."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from alpaca_trader.core.ports import Clock, DataSource, OrderSink
from alpaca_trader.data.alpaca_source import AlpacaDataSource
from alpaca_trader.data.client import AlpacaClient
from alpaca_trader.execution.alpaca_sink import AlpacaOrderSink
from alpaca_trader.execution.dry_run import DryRunOrderSink
from alpaca_trader.runner.orchestrator import OrchestratorConfig, TradingOrchestrator
from alpaca_trader.session.clock import SystemClock
from alpaca_trader.session.schedule import TradingSchedule
from alpaca_trader.session.scheduler import SessionScheduler
from alpaca_trader.session.switch import TradingSwitch
from alpaca_trader.signals.evaluator import SignalThresholds
from shared.config import StrategySettings, TradingSettings


@dataclass
class TradingContext:
    data_source: DataSource
    order_sink: OrderSink
    switch: TradingSwitch
    config: OrchestratorConfig = field(default_factory=OrchestratorConfig)
    scheduler: Optional[SessionScheduler] = None
    clock: Optional[Clock] = None

    def orchestrator(self) -> TradingOrchestrator:
        # One orchestrator per run; nothing carries over between runs.
        return TradingOrchestrator(self.data_source, self.order_sink, self.config, self.clock)


def orchestrator_config(settings: StrategySettings) -> OrchestratorConfig:
    return OrchestratorConfig(
        timeframe=settings.bar_timeframe,
        bar_limit=settings.bar_limit,
        sma_window=settings.sma_window,
        rsi_window=settings.rsi_window,
        order_quantity=settings.order_quantity,
        thresholds=SignalThresholds(oversold=settings.rsi_oversold, overbought=settings.rsi_overbought),
        max_workers=settings.max_workers,
    )


def build_context(
    settings: TradingSettings,
    dry_run: Optional[bool] = None,
    max_workers: Optional[int] = None,
) -> TradingContext:
    """
    Wire Alpaca adapters, the trading switch and the session scheduler from settings.

    ``dry_run`` and ``max_workers`` override the strategy settings when given.
    """
    clock = SystemClock()
    client = AlpacaClient(settings.alpaca)
    if dry_run is None:
        dry_run = settings.strategy.dry_run
    order_sink: OrderSink = DryRunOrderSink(clock) if dry_run else AlpacaOrderSink(client)

    config = orchestrator_config(settings.strategy)
    if max_workers is not None:
        config = replace(config, max_workers=max_workers)

    session = settings.session
    if session.enabled:
        switch = TradingSwitch(enabled=False, reason="awaiting session")
        scheduler: Optional[SessionScheduler] = SessionScheduler(
            TradingSchedule.from_settings(session),
            switch,
            clock=clock,
            poll_seconds=session.poll_seconds,
        )
    else:
        switch = TradingSwitch(enabled=True, reason="session schedule disabled")
        scheduler = None

    return TradingContext(
        data_source=AlpacaDataSource(client),
        order_sink=order_sink,
        switch=switch,
        config=config,
        scheduler=scheduler,
        clock=clock,
    )
