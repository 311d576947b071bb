"""Dry-run order sink that acknowledges intents without sending them."""

from __future__ import annotations

import logging
import threading
from typing import Optional
from uuid import uuid4

from alpaca_trader.core.ports import Clock, OrderSink
from alpaca_trader.core.types import OrderConfirmation, TradeIntent

logger = logging.getLogger(__name__)


class DryRunOrderSink(OrderSink):
    """Records every intent and returns a synthetic ``accepted`` confirmation."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self.clock = clock
        self._lock = threading.Lock()
        self._intents: list[TradeIntent] = []

    @property
    def intents(self) -> tuple[TradeIntent, ...]:
        with self._lock:
            return tuple(self._intents)

    def submit_order(self, intent: TradeIntent) -> OrderConfirmation:
        with self._lock:
            self._intents.append(intent)
        logger.info(f"[dry-run] {intent.side.value} {intent.quantity} {intent.symbol} ({intent.order_type.value})")
        return OrderConfirmation(
            order_id=f"DRY-{uuid4().hex[:8]}",
            symbol=intent.symbol,
            side=intent.side,
            quantity=intent.quantity,
            status="accepted",
            submitted_at=self.clock.now() if self.clock else None,
        )
