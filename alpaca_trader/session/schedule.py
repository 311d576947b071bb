"""Weekday trading window evaluated in the exchange's local time."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from enum import Enum
from typing import Sequence
from zoneinfo import ZoneInfo

from shared.config import SessionSettings


class SessionPhase(str, Enum):
    CLOSED = "closed"
    PRE_OPEN = "pre_open"
    OPEN = "open"


@dataclass(frozen=True)
class TradingSchedule:
    """
    Phases of a trading day.

    ``PRE_OPEN`` runs from ``notice_time`` to ``start_time`` and ``OPEN`` from
    ``start_time`` to ``stop_time``, on the configured weekdays only
    (Monday=0). Everything else is ``CLOSED``.
    """

    timezone: str = "America/New_York"
    notice_time: time = time(9, 30)
    start_time: time = time(10, 0)
    stop_time: time = time(16, 30)
    weekdays: Sequence[int] = (0, 1, 2, 3, 4)

    def __post_init__(self) -> None:
        object.__setattr__(self, "weekdays", tuple(self.weekdays))
        if not self.notice_time <= self.start_time < self.stop_time:
            raise ValueError("schedule must satisfy notice_time <= start_time < stop_time")
        if any(day not in range(7) for day in self.weekdays):
            raise ValueError(f"weekdays must be in 0..6, got {self.weekdays}")
        ZoneInfo(self.timezone)

    @classmethod
    def from_settings(cls, settings: SessionSettings) -> "TradingSchedule":
        return cls(
            timezone=settings.timezone,
            notice_time=settings.notice_time,
            start_time=settings.start_time,
            stop_time=settings.stop_time,
            weekdays=tuple(settings.weekdays),
        )

    def local(self, moment: datetime) -> datetime:
        if moment.tzinfo is None:
            raise ValueError("schedule needs a timezone-aware datetime")
        return moment.astimezone(ZoneInfo(self.timezone))

    def phase_at(self, moment: datetime) -> SessionPhase:
        local = self.local(moment)
        if local.weekday() not in self.weekdays:
            return SessionPhase.CLOSED
        now = local.time()
        if self.start_time <= now < self.stop_time:
            return SessionPhase.OPEN
        if self.notice_time <= now < self.start_time:
            return SessionPhase.PRE_OPEN
        return SessionPhase.CLOSED
