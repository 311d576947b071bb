"""
Trading API Router

Endpoints for listing assets, triggering a trading run and reading
profit/loss. All but /status answer 503 while trading is disabled.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from alpaca_trader.api.context import TradingContext
from alpaca_trader.api.dependencies import get_context, require_trading_enabled
from alpaca_trader.core.errors import TradingError, Unauthorized, Unavailable
from alpaca_trader.runner.profit_loss import fetch_profit_loss
from shared.models import AssetOut, ExecutionReportOut, ProfitLossOut, TradingStatusOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["trading"])


def _http_error(error: TradingError, action: str) -> HTTPException:
    logger.error(f"Error {action}: {error}")
    if isinstance(error, Unavailable):
        return HTTPException(status_code=503, detail=f"Broker unavailable while {action}.")
    if isinstance(error, Unauthorized):
        return HTTPException(status_code=502, detail=f"Broker rejected credentials while {action}.")
    return HTTPException(status_code=500, detail=f"Failed {action}.")


@router.get("/assets", response_model=list[AssetOut])
def list_assets(context: TradingContext = Depends(require_trading_enabled)) -> list[AssetOut]:
    """List tradable US equities."""
    try:
        assets = context.data_source.list_tradable_assets()
    except TradingError as e:
        raise _http_error(e, "fetching assets") from e
    return [AssetOut.from_asset(asset) for asset in assets]


@router.get("/trade", response_model=ExecutionReportOut)
def trade(context: TradingContext = Depends(require_trading_enabled)) -> ExecutionReportOut:
    """Run the trading pipeline once over every tradable asset."""
    try:
        report = context.orchestrator().run()
    except TradingError as e:
        raise _http_error(e, "executing trading logic") from e
    return ExecutionReportOut.from_report(report)


@router.get("/profit-loss", response_model=ProfitLossOut)
def profit_loss(context: TradingContext = Depends(require_trading_enabled)) -> ProfitLossOut:
    """Equity minus cash for the trading account."""
    try:
        value = fetch_profit_loss(context.data_source)
    except TradingError as e:
        raise _http_error(e, "fetching profit and loss") from e
    return ProfitLossOut(profit_loss=value)


@router.get("/status", response_model=TradingStatusOut)
def status(context: TradingContext = Depends(get_context)) -> TradingStatusOut:
    """Trading switch state; available at all times."""
    phase = context.scheduler.phase if context.scheduler else None
    return TradingStatusOut(
        trading_enabled=context.switch.is_enabled,
        reason=context.switch.reason,
        changed_at=context.switch.changed_at,
        session_phase=phase.value if phase else None,
    )
