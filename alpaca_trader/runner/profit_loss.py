"""Account profit/loss accessor."""

from __future__ import annotations

from alpaca_trader.core.ports import DataSource
from alpaca_trader.core.types import AccountSnapshot


def compute_profit_loss(snapshot: AccountSnapshot) -> float:
    return snapshot.equity - snapshot.cash


def fetch_profit_loss(data_source: DataSource) -> float:
    """Read the account and return equity minus cash. Data-source errors propagate."""
    return compute_profit_loss(data_source.get_account_snapshot())
