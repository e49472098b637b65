"""Date/time values counted from 2000 and clocks that keep them.

``DateTime`` ignores time zones, daylight saving and leap seconds. ``DS1307``
reads and sets the DS1307 real-time clock chip over an I2C bus, and
``MillisClock`` keeps time from a millisecond counter.
"""

from __future__ import annotations

import time as _time
from typing import Callable, Dict, Iterable, Optional

_U8 = 0xFF
_U16 = 0xFFFF
_U32 = 0xFFFFFFFF

DS1307_ADDRESS = 0x68
SECONDS_PER_DAY = 86400
SECONDS_FROM_1970_TO_2000 = 946684800

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


class I2CBus:
    """An I2C bus of register-addressed devices held in memory.

    The first byte of every write sets the device's register pointer; the
    bytes after it are stored from there on. Reads start at the pointer.
    The pointer advances after each byte and wraps at 256. Subclass and
    override ``write`` and ``read`` to reach real hardware.
    """

    def __init__(self) -> None:
        self._memory: Dict[int, bytearray] = {}
        self._pointer: Dict[int, int] = {}

    def _device(self, address: int) -> bytearray:
        return self._memory.setdefault(address, bytearray(256))

    def write(self, address: int, data: Iterable[int]) -> None:
        """Send one transmission of bytes to the device at ``address``."""
        payload = [b & _U8 for b in data]
        if not payload:
            return
        memory = self._device(address)
        pointer = payload[0]
        for value in payload[1:]:
            memory[pointer] = value
            pointer = (pointer + 1) & _U8
        self._pointer[address] = pointer

    def read(self, address: int, count: int) -> bytes:
        """Request ``count`` bytes from the device at ``address``."""
        if count < 0:
            raise ValueError(f"count must not be negative, got {count}")
        memory = self._device(address)
        pointer = self._pointer.get(address, 0)
        out = bytearray()
        for _ in range(count):
            out.append(memory[pointer])
            pointer = (pointer + 1) & _U8
        self._pointer[address] = pointer
        return bytes(out)


def bcd2bin(value: int) -> int:
    """Convert a packed BCD byte to its binary value."""
    return (value - 6 * (value >> 4)) & _U8


def bin2bcd(value: int) -> int:
    """Convert a binary value below 100 to a packed BCD byte."""
    return (value + 6 * (value // 10)) & _U8


def date2days(year: int, month: int, day: int) -> int:
    """Days since 2000-01-01, valid for 2001 to 2099; ``year`` may be full or an offset."""
    if year >= 2000:
        year -= 2000
    days = day + sum(_DAYS_IN_MONTH[: max(month - 1, 0)])
    if month > 2 and year % 4 == 0:
        days += 1
    return (days + 365 * year + (year + 3) // 4 - 1) & _U16


def _time2long(days: int, hour: int, minute: int, second: int) -> int:
    return ((days * 24 + hour) * 60 + minute) * 60 + second


def _conv2d(text: str) -> int:
    first = text[0]
    v = int(first) if "0" <= first <= "9" else 0
    return (10 * v + ord(text[1]) - ord("0")) & _U8


class DateTime:
    """A calendar date and time between 2000 and 2255."""

    __slots__ = ("_y_off", "_month", "_day", "_hour", "_minute", "_second")

    def __init__(
        self,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
    ) -> None:
        if year >= 2000:
            year -= 2000
        self._y_off = year & _U8
        self._month = month & _U8
        self._day = day & _U8
        self._hour = hour & _U8
        self._minute = minute & _U8
        self._second = second & _U8

    @classmethod
    def from_unixtime(cls, t: int) -> "DateTime":
        """Build from seconds since 1970-01-01."""
        t = (t - SECONDS_FROM_1970_TO_2000) & _U32
        second = t % 60
        t //= 60
        minute = t % 60
        t //= 60
        hour = t % 24
        days = (t // 24) & _U16

        y_off = 0
        while True:
            leap = 1 if y_off % 4 == 0 else 0
            if days < 365 + leap:
                break
            days -= 365 + leap
            y_off += 1

        month = 1
        while True:
            per_month = _DAYS_IN_MONTH[month - 1]
            if leap and month == 2:
                per_month += 1
            if days < per_month:
                break
            days -= per_month
            month += 1

        return cls(y_off, month, days + 1, hour, minute, second)

    @classmethod
    def from_compile_strings(cls, date: str, time: str) -> "DateTime":
        """Build from strings shaped like ``"Dec 26 2009"`` and ``"12:34:56"``."""
        if len(date) < 11 or len(time) < 8:
            raise ValueError(f"malformed date or time: {date!r} {time!r}")
        first = date[0]
        if first == "J":
            if date[1] == "a":
                month = 1
            else:
                month = 6 if date[2] == "n" else 7
        elif first == "F":
            month = 2
        elif first == "A":
            month = 4 if date[2] == "r" else 8
        elif first == "M":
            month = 3 if date[2] == "r" else 5
        elif first == "S":
            month = 9
        elif first == "O":
            month = 10
        elif first == "N":
            month = 11
        elif first == "D":
            month = 12
        else:
            raise ValueError(f"unknown month in {date!r}")
        return cls(
            _conv2d(date[9:]),
            month,
            _conv2d(date[4:]),
            _conv2d(time),
            _conv2d(time[3:]),
            _conv2d(time[6:]),
        )

    @property
    def year(self) -> int:
        return 2000 + self._y_off

    @property
    def month(self) -> int:
        return self._month

    @property
    def day(self) -> int:
        return self._day

    @property
    def hour(self) -> int:
        return self._hour

    @property
    def minute(self) -> int:
        return self._minute

    @property
    def second(self) -> int:
        return self._second

    def day_of_week(self) -> int:
        """Day of the week with Sunday as 0; 2000-01-01 gives 6."""
        return (date2days(self._y_off, self._month, self._day) + 6) % 7

    def unixtime(self) -> int:
        """Seconds since 1970-01-01."""
        days = date2days(self._y_off, self._month, self._day)
        t = _time2long(days, self._hour, self._minute, self._second)
        return (t + SECONDS_FROM_1970_TO_2000) & _U32

    def _fields(self) -> tuple:
        return (self._y_off, self._month, self._day, self._hour, self._minute, self._second)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._fields() == other._fields()

    def __hash__(self) -> int:
        return hash(self._fields())

    def __repr__(self) -> str:
        return (
            f"DateTime({self.year:04d}-{self.month:02d}-{self.day:02d} "
            f"{self.hour:02d}:{self.minute:02d}:{self.second:02d})"
        )


class DS1307:
    """The DS1307 real-time clock chip on an I2C bus."""

    def __init__(self, bus: I2CBus) -> None:
        self.bus = bus

    def is_running(self) -> bool:
        """True unless the chip's clock-halt bit is set."""
        self.bus.write(DS1307_ADDRESS, [0])
        ss = self.bus.read(DS1307_ADDRESS, 1)[0]
        return not (ss >> 7)

    def adjust(self, dt: DateTime) -> None:
        """Set the chip's clock to ``dt``."""
        self.bus.write(
            DS1307_ADDRESS,
            [
                0,
                bin2bcd(dt.second),
                bin2bcd(dt.minute),
                bin2bcd(dt.hour),
                bin2bcd(0),
                bin2bcd(dt.day),
                bin2bcd(dt.month),
                bin2bcd(dt.year - 2000),
                0,
            ],
        )

    def now(self) -> DateTime:
        """Read the chip's current date and time."""
        self.bus.write(DS1307_ADDRESS, [0])
        raw = self.bus.read(DS1307_ADDRESS, 7)
        ss = bcd2bin(raw[0] & 0x7F)
        mm = bcd2bin(raw[1])
        hh = bcd2bin(raw[2])
        d = bcd2bin(raw[4])
        m = bcd2bin(raw[5])
        y = bcd2bin(raw[6]) + 2000
        return DateTime(y, m, d, hh, mm, ss)


def _monotonic_millis() -> int:
    return int(_time.monotonic() * 1000)


class MillisClock:
    """A clock kept from a millisecond counter; set it before use."""

    def __init__(self, millis: Optional[Callable[[], int]] = None) -> None:
        self._millis = millis if millis is not None else _monotonic_millis
        self._offset = 0

    def adjust(self, dt: DateTime) -> None:
        self._offset = dt.unixtime() - self._millis() // 1000

    def now(self) -> DateTime:
        return DateTime.from_unixtime((self._offset + self._millis() // 1000) & _U32)