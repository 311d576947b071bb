"""FastAPI dependencies for the trading routes."""

from fastapi import Depends, HTTPException, Request

from alpaca_trader.api.context import TradingContext


def get_context(request: Request) -> TradingContext:
    return request.app.state.trading


def require_trading_enabled(context: TradingContext = Depends(get_context)) -> TradingContext:
    """Reject trading requests outside the session instead of unmounting routes."""
    if not context.switch.is_enabled:
        raise HTTPException(status_code=503, detail=f"Trading is disabled ({context.switch.reason}).")
    return context
