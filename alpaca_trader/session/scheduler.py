"""Drives the trading switch from the session schedule."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from alpaca_trader.core.ports import Clock
from alpaca_trader.session.clock import SystemClock
from alpaca_trader.session.schedule import SessionPhase, TradingSchedule
from alpaca_trader.session.switch import TradingSwitch

logger = logging.getLogger(__name__)


class SessionScheduler:
    """
    Polls the clock and reacts to phase transitions.

    - entering PRE_OPEN logs the waiting-for-market notice
    - entering OPEN enables the switch
    - leaving OPEN disables it

    The first ``tick`` aligns the switch with the current phase, so a
    process started mid-session trades immediately.
    """

    def __init__(
        self,
        schedule: TradingSchedule,
        switch: TradingSwitch,
        clock: Optional[Clock] = None,
        poll_seconds: float = 30.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.schedule = schedule
        self.switch = switch
        self.clock = clock or SystemClock()
        self.poll_seconds = poll_seconds
        self._sleep = sleep
        self._phase: Optional[SessionPhase] = None

    @property
    def phase(self) -> Optional[SessionPhase]:
        return self._phase

    def tick(self) -> SessionPhase:
        phase = self.schedule.phase_at(self.clock.now())
        if phase == self._phase:
            return phase

        previous, self._phase = self._phase, phase
        logger.debug(f"Session phase {previous} -> {phase.value}")

        if phase is SessionPhase.PRE_OPEN:
            logger.info("Waiting for the stock market to open...")
            self.switch.disable("pre-open")
        elif phase is SessionPhase.OPEN:
            logger.info("Trading session started.")
            self.switch.enable("session open")
        else:
            if previous is SessionPhase.OPEN:
                logger.info("Trading session ended.")
            self.switch.disable("session closed")
        return phase

    async def run(self, stop_event: asyncio.Event) -> None:
        logger.info(f"Session scheduler started (poll every {self.poll_seconds}s, tz={self.schedule.timezone})")
        while not stop_event.is_set():
            try:
                self.tick()
            except Exception:
                logger.exception("Session scheduler tick failed; retrying on next poll")
            await self._sleep(self.poll_seconds)
        logger.info("Session scheduler stopped")
