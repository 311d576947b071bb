"""Core domain types for the indicator/signal pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, Iterator, Optional


class OrderSide(str, Enum):
    BUY = "buy"
    SELL = "sell"


class OrderType(str, Enum):
    MARKET = "market"
    LIMIT = "limit"


class TimeInForce(str, Enum):
    DAY = "day"
    GTC = "gtc"


class Signal(str, Enum):
    """Evaluator output. HOLD never reaches the order sink."""

    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"

    @property
    def side(self) -> Optional[OrderSide]:
        if self is Signal.HOLD:
            return None
        return OrderSide(self.value)


class OutcomeStatus(str, Enum):
    ORDERED = "ordered"
    HELD = "held"
    ERROR = "error"


@dataclass(frozen=True)
class Bar:
    symbol: str
    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float


@dataclass(frozen=True)
class BarSeries:
    """Bars for one symbol, strictly ascending by timestamp."""

    symbol: str
    bars: tuple[Bar, ...] = ()

    def __post_init__(self) -> None:
        bars = tuple(self.bars)
        object.__setattr__(self, "bars", bars)
        for previous, current in zip(bars, bars[1:]):
            if current.timestamp <= previous.timestamp:
                raise ValueError(
                    f"Bars for {self.symbol} must be strictly ascending by timestamp "
                    f"({previous.timestamp.isoformat()} then {current.timestamp.isoformat()})"
                )
        for bar in bars:
            if bar.symbol != self.symbol:
                raise ValueError(f"Bar for {bar.symbol} does not belong to series {self.symbol}")

    @classmethod
    def from_bars(cls, symbol: str, bars: Iterable[Bar]) -> "BarSeries":
        return cls(symbol=symbol, bars=tuple(bars))

    def __len__(self) -> int:
        return len(self.bars)

    def __iter__(self) -> Iterator[Bar]:
        return iter(self.bars)

    @property
    def closes(self) -> list[float]:
        return [bar.close for bar in self.bars]

    @property
    def last(self) -> Bar:
        if not self.bars:
            raise IndexError(f"Bar series for {self.symbol} is empty")
        return self.bars[-1]

    def tail(self, count: int) -> tuple[Bar, ...]:
        if count <= 0:
            return ()
        return self.bars[-count:]


@dataclass(frozen=True)
class IndicatorSnapshot:
    symbol: str
    sma: float
    rsi: float
    as_of: datetime


@dataclass(frozen=True)
class Asset:
    symbol: str
    tradable: bool
    asset_class: str
    name: Optional[str] = None
    exchange: Optional[str] = None


@dataclass(frozen=True)
class TradeIntent:
    symbol: str
    side: OrderSide
    quantity: float
    order_type: OrderType = OrderType.MARKET
    time_in_force: TimeInForce = TimeInForce.DAY


@dataclass(frozen=True)
class OrderConfirmation:
    order_id: str
    symbol: str
    side: OrderSide
    quantity: float
    status: str
    submitted_at: Optional[datetime] = None


@dataclass(frozen=True)
class AccountSnapshot:
    equity: float
    cash: float


@dataclass(frozen=True)
class SymbolOutcome:
    symbol: str
    status: OutcomeStatus
    signal: Optional[Signal] = None
    snapshot: Optional[IndicatorSnapshot] = None
    confirmation: Optional[OrderConfirmation] = None
    error: Optional[str] = None
    error_type: Optional[str] = None


@dataclass(frozen=True)
class ExecutionReport:
    started_at: datetime
    finished_at: datetime
    outcomes: tuple[SymbolOutcome, ...] = field(default_factory=tuple)

    def _count(self, status: OutcomeStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is status)

    @property
    def orders_submitted(self) -> int:
        return self._count(OutcomeStatus.ORDERED)

    @property
    def held(self) -> int:
        return self._count(OutcomeStatus.HELD)

    @property
    def errors(self) -> int:
        return self._count(OutcomeStatus.ERROR)

    def outcome_for(self, symbol: str) -> Optional[SymbolOutcome]:
        for outcome in self.outcomes:
            if outcome.symbol == symbol:
                return outcome
        return None
