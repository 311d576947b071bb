from __future__ import annotations

from datetime import time

import pytest

from alpaca_trader.api.context import build_context, orchestrator_config
from alpaca_trader.execution.alpaca_sink import AlpacaOrderSink
from alpaca_trader.execution.dry_run import DryRunOrderSink
from shared.config import StrategySettings, TradingSettings, get_settings, reload_settings


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults_match_trading_loop() -> None:
    settings = TradingSettings()

    assert settings.strategy.sma_window == 10
    assert settings.strategy.rsi_window == 50
    assert settings.strategy.bar_timeframe == "1Min"
    assert settings.strategy.bar_limit == 50
    assert settings.strategy.order_quantity == 1.0
    assert settings.alpaca.trading_url == "https://paper-api.alpaca.markets/v2"
    assert settings.session.timezone == "America/New_York"
    assert settings.session.start_time == time(10, 0)
    assert settings.server.port == 5000


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("APCA_API_KEY_ID", "key")
    monkeypatch.setenv("APCA_API_SECRET_KEY", "secret")
    monkeypatch.setenv("APCA_PAPER", "false")
    monkeypatch.setenv("SMA_WINDOW", "5")
    monkeypatch.setenv("RSI_OVERSOLD", "25")
    monkeypatch.setenv("SESSION_WEEKDAYS", "0,2,4")
    monkeypatch.setenv("SESSION_STOP_TIME", "15:45")

    settings = reload_settings()

    assert settings.alpaca.has_credentials
    assert settings.alpaca.trading_url == "https://api.alpaca.markets/v2"
    assert settings.strategy.sma_window == 5
    assert settings.strategy.rsi_oversold == 25
    assert settings.session.weekdays == [0, 2, 4]
    assert settings.session.stop_time == time(15, 45)


def test_env_file_is_loaded(tmp_path) -> None:
    (tmp_path / ".env").write_text("RSI_WINDOW=14\nLOG_FORMAT=json\n", encoding="utf-8")
    settings = reload_settings()
    assert settings.strategy.rsi_window == 14
    assert settings.logging.log_format == "json"


def test_invalid_log_format_rejected(monkeypatch) -> None:
    monkeypatch.setenv("LOG_FORMAT", "xml")
    with pytest.raises(ValueError):
        reload_settings()


def test_orchestrator_config_from_strategy_settings() -> None:
    config = orchestrator_config(StrategySettings(RSI_OVERBOUGHT=80, MAX_WORKERS=4))
    assert config.thresholds.overbought == 80
    assert config.thresholds.oversold == 30
    assert config.max_workers == 4


def test_build_context_selects_sink_and_switch(monkeypatch) -> None:
    monkeypatch.setenv("SESSION_ENABLED", "false")
    settings = reload_settings()

    live = build_context(settings, dry_run=False)
    dry = build_context(settings, dry_run=True)

    assert isinstance(live.order_sink, AlpacaOrderSink)
    assert isinstance(dry.order_sink, DryRunOrderSink)
    assert live.scheduler is None
    assert live.switch.is_enabled


def test_build_context_with_session_starts_disabled() -> None:
    context = build_context(TradingSettings())
    assert context.scheduler is not None
    assert not context.switch.is_enabled


def test_build_context_applies_max_workers_override() -> None:
    settings = TradingSettings(strategy=StrategySettings(MAX_WORKERS=2))

    assert build_context(settings).config.max_workers == 2
    assert build_context(settings, max_workers=6).config.max_workers == 6
    assert settings.strategy.max_workers == 2
