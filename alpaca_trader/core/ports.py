"""Port definitions for broker adapters."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .types import AccountSnapshot, Asset, BarSeries, OrderConfirmation, TradeIntent


class DataSource(Protocol):
    def list_tradable_assets(self) -> Sequence[Asset]:
        """Return tradable US equities."""

    def get_recent_bars(self, symbol: str, timeframe: str, limit: int) -> BarSeries:
        """Return the most recent bars for a symbol, oldest first."""

    def get_account_snapshot(self) -> AccountSnapshot:
        """Return current account equity and cash."""


class OrderSink(Protocol):
    def submit_order(self, intent: TradeIntent) -> OrderConfirmation:
        """Submit a trade intent and return the broker acknowledgement."""


class Clock(Protocol):
    def now(self) -> datetime:
        """Return current timezone-aware time."""
