"""Order sink that submits market orders to Alpaca."""

from __future__ import annotations

import logging
from typing import Optional

from alpaca_trader.core.errors import OrderRejected
from alpaca_trader.core.ports import OrderSink
from alpaca_trader.core.types import OrderConfirmation, OrderSide, TradeIntent
from alpaca_trader.data.alpaca_source import parse_timestamp
from alpaca_trader.data.client import AlpacaClient

logger = logging.getLogger(__name__)


def _format_quantity(quantity: float) -> str:
    if float(quantity).is_integer():
        return str(int(quantity))
    return str(quantity)


class AlpacaOrderSink(OrderSink):
    def __init__(self, client: AlpacaClient) -> None:
        self.client = client

    def submit_order(self, intent: TradeIntent) -> OrderConfirmation:
        body = {
            "symbol": intent.symbol,
            "qty": _format_quantity(intent.quantity),
            "side": intent.side.value,
            "type": intent.order_type.value,
            "time_in_force": intent.time_in_force.value,
        }
        payload = self.client.post_order(body)
        if not isinstance(payload, dict) or "id" not in payload:
            raise OrderRejected(f"Order for {intent.symbol} was not acknowledged", symbol=intent.symbol)

        submitted_at: Optional[str] = payload.get("submitted_at") or payload.get("created_at")
        return OrderConfirmation(
            order_id=str(payload["id"]),
            symbol=payload.get("symbol", intent.symbol),
            side=OrderSide(payload.get("side", intent.side.value)),
            quantity=float(payload.get("qty") or intent.quantity),
            status=str(payload.get("status", "accepted")),
            submitted_at=parse_timestamp(submitted_at) if submitted_at else None,
        )
