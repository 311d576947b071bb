"""
Shared Models for the HTTP surface
Pydantic response schemas built from the core dataclasses.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from alpaca_trader.core.types import Asset, ExecutionReport, SymbolOutcome


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Assets
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class AssetOut(BaseModel):
    """Tradable asset as listed by the data source."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)
    
    symbol: str
    tradable: bool
    asset_class: str = Field(alias="class")
    name: Optional[str] = None
    exchange: Optional[str] = None
    
    @classmethod
    def from_asset(cls, asset: Asset) -> "AssetOut":
        return cls(
            symbol=asset.symbol,
            tradable=asset.tradable,
            asset_class=asset.asset_class,
            name=asset.name,
            exchange=asset.exchange,
        )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Execution Report
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class SymbolOutcomeOut(BaseModel):
    """Result of one symbol's pass through the pipeline."""
    model_config = ConfigDict(frozen=True)
    
    symbol: str
    status: str  # ordered, held, error
    signal: Optional[str] = None
    sma: Optional[float] = None
    rsi: Optional[float] = None
    order_id: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    
    @classmethod
    def from_outcome(cls, outcome: SymbolOutcome) -> "SymbolOutcomeOut":
        return cls(
            symbol=outcome.symbol,
            status=outcome.status.value,
            signal=outcome.signal.value if outcome.signal else None,
            sma=outcome.snapshot.sma if outcome.snapshot else None,
            rsi=outcome.snapshot.rsi if outcome.snapshot else None,
            order_id=outcome.confirmation.order_id if outcome.confirmation else None,
            error=outcome.error,
            error_type=outcome.error_type,
        )


class ExecutionReportOut(BaseModel):
    """Summary of one orchestration run."""
    model_config = ConfigDict(frozen=True)
    
    message: str = "Trading logic executed."
    started_at: datetime
    finished_at: datetime
    orders_submitted: int
    held: int
    errors: int
    outcomes: list[SymbolOutcomeOut] = Field(default_factory=list)
    
    @classmethod
    def from_report(cls, report: ExecutionReport) -> "ExecutionReportOut":
        return cls(
            started_at=report.started_at,
            finished_at=report.finished_at,
            orders_submitted=report.orders_submitted,
            held=report.held,
            errors=report.errors,
            outcomes=[SymbolOutcomeOut.from_outcome(outcome) for outcome in report.outcomes],
        )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Account / Status
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ProfitLossOut(BaseModel):
    """Equity minus cash, keyed as the dashboard expects."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)
    
    profit_loss: float = Field(alias="profitLoss")


class TradingStatusOut(BaseModel):
    """Trading switch and session state."""
    model_config = ConfigDict(frozen=True)
    
    trading_enabled: bool
    reason: str
    changed_at: Optional[datetime] = None
    session_phase: Optional[str] = None
