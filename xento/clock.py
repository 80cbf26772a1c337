"""Calendar arithmetic and the tick-based system clock."""

from __future__ import annotations

import threading

from xento.rtc import Rtc

__all__ = [
    "PIT_DIVIDER",
    "PIT_FREQUENCY",
    "PIT_INTERVAL",
    "Clock",
    "days_before_month",
    "days_before_year",
    "is_leap_year",
    "pit_commands",
    "rtc_timestamp",
]

PIT_FREQUENCY = 3_579_545.0 / 3.0
PIT_DIVIDER = 1193
PIT_INTERVAL = PIT_DIVIDER / PIT_FREQUENCY

_EPOCH_YEAR = 1970
_DAYS_BEFORE_MONTH = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334, 365)
_PIT_COMMAND_PORT = 0x43
_PIT_DATA_PORT = 0x40
_SQUARE_WAVE_MODE = 6
_LOBYTE_HIBYTE_ACCESS = 3


def is_leap_year(year: int) -> bool:
    """Whether ``year`` is a Gregorian leap year."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_before_year(year: int) -> int:
    """Days from 1970-01-01 to January 1 of ``year`` (0 for earlier years)."""
    return sum(366 if is_leap_year(y) else 365 for y in range(_EPOCH_YEAR, year))


def days_before_month(year: int, month: int) -> int:
    """Days from January 1 to the first day of ``month`` (1-13) of ``year``."""
    if not 1 <= month <= len(_DAYS_BEFORE_MONTH):
        raise ValueError(f"month out of range: {month}")
    leap_day = 1 if is_leap_year(year) and month > 2 else 0
    return _DAYS_BEFORE_MONTH[month - 1] + leap_day


def rtc_timestamp(rtc: Rtc) -> int:
    """Seconds since the Unix epoch for a clock reading taken as UTC."""
    if rtc.day < 1:
        raise ValueError(f"day out of range: {rtc.day}")
    days = (
        days_before_year(rtc.year)
        + days_before_month(rtc.year, rtc.month)
        + rtc.day
        - 1
    )
    return 86400 * days + 3600 * rtc.hour + 60 * rtc.minute + rtc.second


def pit_commands(divider: int, channel: int) -> list[tuple[int, int]]:
    """The ``(port, byte)`` writes that set a PIT channel's frequency divider.

    A divider of 0 stands for 65536.
    """
    if not 0 <= divider <= 0xFFFF:
        raise ValueError(f"divider must be between 0 and 65535, got {divider}")
    if not 0 <= channel <= 2:
        raise ValueError(f"channel must be 0, 1 or 2, got {channel}")
    command = (channel << 6) | (_LOBYTE_HIBYTE_ACCESS << 4) | _SQUARE_WAVE_MODE
    low, high = divider.to_bytes(2, "little")
    data_port = _PIT_DATA_PORT + channel
    return [(_PIT_COMMAND_PORT, command), (data_port, low), (data_port, high)]


class Clock:
    """Counts timer ticks to give uptime and a fractional real time."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ticks = 0
        self._last_rtc_update = 0

    @property
    def ticks(self) -> int:
        """Timer ticks seen so far."""
        with self._lock:
            return self._ticks

    @property
    def last_rtc_update(self) -> int:
        """The tick count at the last clock update."""
        with self._lock:
            return self._last_rtc_update

    def pit_tick(self) -> None:
        """Record one timer interrupt."""
        with self._lock:
            self._ticks += 1

    def rtc_update(self) -> None:
        """Record that the real-time clock has just updated."""
        with self._lock:
            self._last_rtc_update = self._ticks

    def uptime(self) -> float:
        """Seconds since the clock started; never goes backwards."""
        return PIT_INTERVAL * self.ticks

    def realtime(self, rtc: Rtc) -> float:
        """Unix time from a clock reading plus the time since its last update."""
        with self._lock:
            elapsed = self._ticks - self._last_rtc_update
        return float(rtc_timestamp(rtc)) + PIT_INTERVAL * elapsed