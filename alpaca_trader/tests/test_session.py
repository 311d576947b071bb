from __future__ import annotations

import asyncio
from datetime import datetime, time, timezone
from zoneinfo import ZoneInfo

import pytest

from alpaca_trader.session.schedule import SessionPhase, TradingSchedule
from alpaca_trader.session.scheduler import SessionScheduler
from alpaca_trader.session.switch import TradingSwitch
from shared.config import SessionSettings

NY = ZoneInfo("America/New_York")
MONDAY = (2026, 10, 19)
SATURDAY = (2026, 10, 24)


def _ny(day: tuple[int, int, int], hour: int, minute: int = 0) -> datetime:
    return datetime(*day, hour, minute, tzinfo=NY)


class _Clock:
    def __init__(self, moment: datetime) -> None:
        self.moment = moment

    def now(self) -> datetime:
        return self.moment


@pytest.mark.parametrize(
    "moment, phase",
    [
        (_ny(MONDAY, 9, 0), SessionPhase.CLOSED),
        (_ny(MONDAY, 9, 30), SessionPhase.PRE_OPEN),
        (_ny(MONDAY, 9, 59), SessionPhase.PRE_OPEN),
        (_ny(MONDAY, 10, 0), SessionPhase.OPEN),
        (_ny(MONDAY, 16, 29), SessionPhase.OPEN),
        (_ny(MONDAY, 16, 30), SessionPhase.CLOSED),
        (_ny(SATURDAY, 12, 0), SessionPhase.CLOSED),
    ],
)
def test_phase_at(moment: datetime, phase: SessionPhase) -> None:
    assert TradingSchedule().phase_at(moment) is phase


def test_phase_converts_from_utc() -> None:
    # 14:30 UTC is 10:30 in New York while daylight saving is in effect
    assert TradingSchedule().phase_at(datetime(2026, 10, 19, 14, 30, tzinfo=timezone.utc)) is SessionPhase.OPEN


def test_naive_datetime_is_rejected() -> None:
    with pytest.raises(ValueError, match="timezone-aware"):
        TradingSchedule().phase_at(datetime(2026, 10, 19, 12, 0))


def test_schedule_validates_times() -> None:
    with pytest.raises(ValueError):
        TradingSchedule(start_time=time(17, 0), stop_time=time(16, 0))


def test_schedule_from_settings() -> None:
    settings = SessionSettings(weekdays=[5], start_time=time(11, 0), stop_time=time(12, 0), notice_time=time(10, 45))
    schedule = TradingSchedule.from_settings(settings)

    assert schedule.phase_at(_ny(SATURDAY, 11, 30)) is SessionPhase.OPEN
    assert schedule.phase_at(_ny(MONDAY, 11, 30)) is SessionPhase.CLOSED


def test_switch_reports_changes() -> None:
    switch = TradingSwitch()

    assert not switch.is_enabled
    assert switch.enable("open") is True
    assert switch.enable("again") is False
    assert switch.is_enabled
    assert switch.reason == "open"
    assert switch.changed_at is not None
    assert switch.disable("close") is True
    assert not switch.is_enabled


def test_scheduler_flips_switch_across_the_day() -> None:
    clock = _Clock(_ny(MONDAY, 9, 0))
    switch = TradingSwitch(enabled=True)
    scheduler = SessionScheduler(TradingSchedule(), switch, clock=clock)

    assert scheduler.tick() is SessionPhase.CLOSED
    assert not switch.is_enabled

    clock.moment = _ny(MONDAY, 9, 30)
    assert scheduler.tick() is SessionPhase.PRE_OPEN
    assert not switch.is_enabled

    clock.moment = _ny(MONDAY, 10, 0)
    assert scheduler.tick() is SessionPhase.OPEN
    assert switch.is_enabled

    clock.moment = _ny(MONDAY, 16, 30)
    assert scheduler.tick() is SessionPhase.CLOSED
    assert not switch.is_enabled
    assert switch.reason == "session closed"


def test_scheduler_started_mid_session_enables_immediately() -> None:
    switch = TradingSwitch()
    scheduler = SessionScheduler(TradingSchedule(), switch, clock=_Clock(_ny(MONDAY, 13, 0)))

    scheduler.tick()

    assert switch.is_enabled
    assert scheduler.phase is SessionPhase.OPEN


def test_scheduler_leaves_manual_override_alone_within_a_phase() -> None:
    switch = TradingSwitch()
    scheduler = SessionScheduler(TradingSchedule(), switch, clock=_Clock(_ny(MONDAY, 13, 0)))
    scheduler.tick()

    switch.disable("manual")
    scheduler.tick()

    assert not switch.is_enabled


def test_run_polls_until_stopped() -> None:
    clock = _Clock(_ny(MONDAY, 9, 45))
    switch = TradingSwitch()
    stop_event = asyncio.Event()
    sleeps: list[float] = []

    async def fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)
        clock.moment = _ny(MONDAY, 10, 5)
        if len(sleeps) == 2:
            stop_event.set()

    scheduler = SessionScheduler(TradingSchedule(), switch, clock=clock, poll_seconds=5, sleep=fake_sleep)
    asyncio.run(scheduler.run(stop_event))

    assert sleeps == [5, 5]
    assert scheduler.phase is SessionPhase.OPEN
    assert switch.is_enabled


def test_run_survives_a_failing_tick() -> None:
    class _FlakyClock(_Clock):
        def __init__(self, moment: datetime) -> None:
            super().__init__(moment)
            self.calls = 0

        def now(self) -> datetime:
            self.calls += 1
            if self.calls == 1:
                raise RuntimeError("clock unavailable")
            return self.moment

    clock = _FlakyClock(_ny(MONDAY, 10, 5))
    switch = TradingSwitch()
    stop_event = asyncio.Event()
    sleeps: list[float] = []

    async def fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)
        if len(sleeps) == 2:
            stop_event.set()

    scheduler = SessionScheduler(TradingSchedule(), switch, clock=clock, poll_seconds=5, sleep=fake_sleep)
    asyncio.run(scheduler.run(stop_event))

    assert sleeps == [5, 5]
    assert clock.calls == 2
    assert scheduler.phase is SessionPhase.OPEN
    assert switch.is_enabled
