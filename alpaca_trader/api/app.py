"""FastAPI application factory for the trading service."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from typing import Optional, Sequence

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from alpaca_trader.api.context import TradingContext
from alpaca_trader.api.routes import router

logger = logging.getLogger(__name__)


def create_app(context: TradingContext, cors_origins: Optional[Sequence[str]] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        stop_event = asyncio.Event()
        task: Optional[asyncio.Task] = None
        if context.scheduler is not None:
            context.scheduler.tick()
            task = asyncio.create_task(context.scheduler.run(stop_event))
        try:
            yield
        finally:
            stop_event.set()
            if task is not None:
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
            logger.info("Trading service stopped")

    app = FastAPI(title="Alpaca Trading Backend", lifespan=lifespan)
    app.state.trading = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cors_origins or ["*"]),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:
        return "Alpaca Trading Backend is running!"

    app.include_router(router)
    return app
