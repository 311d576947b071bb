"""Trading session schedule and on/off switch."""

from alpaca_trader.session.clock import SystemClock
from alpaca_trader.session.schedule import SessionPhase, TradingSchedule
from alpaca_trader.session.scheduler import SessionScheduler
from alpaca_trader.session.switch import TradingSwitch

__all__ = ["SessionPhase", "SessionScheduler", "SystemClock", "TradingSchedule", "TradingSwitch"]
