"""CMOS real-time clock registers and decoding of their raw values."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import IntEnum

__all__ = ["CmosInterrupt", "CmosRegister", "Rtc", "decode_rtc"]

_BINARY_MODE = 0x04
_TWENTY_FOUR_HOUR = 0x02
_PM_BIT = 0x80
_CENTURY = 2000


class CmosRegister(IntEnum):
    """Addresses of the CMOS registers the clock uses."""

    SECOND = 0x00
    MINUTE = 0x02
    HOUR = 0x04
    DAY = 0x07
    MONTH = 0x08
    YEAR = 0x09
    A = 0x0A
    B = 0x0B
    C = 0x0C


class CmosInterrupt(IntEnum):
    """Interrupt enable bits of status register B."""

    PERIODIC = 1 << 6
    ALARM = 1 << 5
    UPDATE = 1 << 4


@dataclass(frozen=True)
class Rtc:
    """A date and time as read from the real-time clock."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int


def _from_bcd(value: int) -> int:
    return (value & 0x0F) + (value // 16) * 10


def decode_rtc(raw: Rtc, register_b: int) -> Rtc:
    """Convert raw register values to a calendar time, honouring status register B.

    The two-digit year is placed in the 2000s.
    """
    for item in fields(raw):
        value = getattr(raw, item.name)
        if not 0 <= value <= 0xFF:
            raise ValueError(f"raw {item.name} must be a byte, got {value}")
    if not 0 <= register_b <= 0xFF:
        raise ValueError(f"register B must be a byte, got {register_b}")

    year, month, day = raw.year, raw.month, raw.day
    hour, minute, second = raw.hour, raw.minute, raw.second

    if not register_b & _BINARY_MODE:
        second = _from_bcd(second)
        minute = _from_bcd(minute)
        hour = ((hour & 0x0F) + ((hour & 0x70) // 16) * 10) | (hour & _PM_BIT)
        day = _from_bcd(day)
        month = _from_bcd(month)
        year = _from_bcd(year)

    if not register_b & _TWENTY_FOUR_HOUR and not hour & _PM_BIT:
        hour = ((hour & 0x7F) + 12) % 24

    return Rtc(
        year=year + _CENTURY,
        month=month,
        day=day,
        hour=hour,
        minute=minute,
        second=second,
    )