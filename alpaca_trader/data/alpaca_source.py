"""Alpaca-backed DataSource adapter for assets, bars and account state."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Any, Sequence

from alpaca_trader.core.errors import Unavailable
from alpaca_trader.core.ports import DataSource
from alpaca_trader.core.types import AccountSnapshot, Asset, Bar, BarSeries
from alpaca_trader.data.client import AlpacaClient

logger = logging.getLogger(__name__)

US_EQUITY = "us_equity"
_FRACTION = re.compile(r"\.\d+")


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp as returned by Alpaca (``...Z``, up to nanoseconds)."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    # datetime only keeps microseconds
    value = _FRACTION.sub(lambda match: match.group(0)[:7], value)
    return datetime.fromisoformat(value)


class AlpacaDataSource(DataSource):
    """Read-only view over the Alpaca trading and market-data APIs."""

    def __init__(self, client: AlpacaClient) -> None:
        self.client = client

    def list_tradable_assets(self) -> Sequence[Asset]:
        payload = self.client.get_trading("/assets", params={"status": "active", "asset_class": US_EQUITY})
        if not isinstance(payload, list):
            raise Unavailable("Unexpected /assets payload from Alpaca")

        assets = [
            Asset(
                symbol=row["symbol"],
                tradable=bool(row.get("tradable")),
                asset_class=row.get("class", ""),
                name=row.get("name"),
                exchange=row.get("exchange"),
            )
            for row in payload
        ]
        tradable = [asset for asset in assets if asset.tradable and asset.asset_class == US_EQUITY]
        logger.info(f"Fetched {len(assets)} assets, {len(tradable)} tradable US equities")
        return tradable

    def get_recent_bars(self, symbol: str, timeframe: str, limit: int) -> BarSeries:
        payload = self.client.get_data(
            f"/stocks/{symbol}/bars",
            params={
                "timeframe": timeframe,
                "limit": limit,
                "sort": "desc",
                "feed": self.client.settings.data_feed,
            },
        )
        rows = (payload or {}).get("bars") or []
        return self._rows_to_series(symbol, rows)

    def get_account_snapshot(self) -> AccountSnapshot:
        payload = self.client.get_trading("/account")
        try:
            return AccountSnapshot(equity=float(payload["equity"]), cash=float(payload["cash"]))
        except (KeyError, TypeError, ValueError) as e:
            raise Unavailable(f"Unexpected /account payload from Alpaca: {e}") from e

    def _rows_to_series(self, symbol: str, rows: list[dict[str, Any]]) -> BarSeries:
        # Alpaca returns newest-first with sort=desc; later duplicates win.
        by_timestamp: dict[datetime, Bar] = {}
        for row in rows:
            try:
                bar = Bar(
                    symbol=symbol,
                    timestamp=parse_timestamp(row["t"]),
                    open=float(row["o"]),
                    high=float(row["h"]),
                    low=float(row["l"]),
                    close=float(row["c"]),
                    volume=float(row["v"]),
                )
            except (KeyError, TypeError, ValueError) as e:
                raise Unavailable(f"Malformed bar for {symbol}: {e}") from e
            by_timestamp[bar.timestamp] = bar

        return BarSeries.from_bars(symbol, sorted(by_timestamp.values(), key=lambda bar: bar.timestamp))
