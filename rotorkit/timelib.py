"""Low level time and date functions working on seconds since 1970-01-01.

Times are unsigned 32-bit second counts, broken into calendar fields with
years stored as an offset from 1970.
"""

from __future__ import annotations

import time as _time
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional

_U32 = 0xFFFFFFFF

SECS_PER_MIN = 60
SECS_PER_HOUR = 3600
SECS_PER_DAY = SECS_PER_HOUR * 24
DAYS_PER_WEEK = 7
SECS_PER_WEEK = SECS_PER_DAY * DAYS_PER_WEEK
SECS_PER_YEAR = SECS_PER_DAY * 365
SECS_YR_2000 = 946684800

_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

_MONTH_NAMES = (
    "", "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
)
_MONTH_SHORT_NAMES = "ErrJanFebMarAprMayJunJulAugSepOctNovDec"
_DAY_NAMES = (
    "Err", "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday",
    "Saturday",
)
_DAY_SHORT_NAMES = "ErrSunMonTueWedThuFriSat"
_SHORT_LEN = 3


class TimeStatus(IntEnum):
    """Whether the clock has been set and recently synchronised."""

    NOT_SET = 0
    NEEDS_SYNC = 1
    SET = 2


@dataclass
class TimeElements:
    """Calendar fields of a time; ``year`` is an offset from 1970, Sunday is weekday 1."""

    second: int = 0
    minute: int = 0
    hour: int = 0
    wday: int = 0
    day: int = 0
    month: int = 0
    year: int = 0

    @property
    def calendar_year(self) -> int:
        return self.year + 1970


def leap_year(year_offset: int) -> bool:
    """True if the year ``1970 + year_offset`` is a leap year."""
    y = 1970 + year_offset
    return y > 0 and y % 4 == 0 and (y % 100 != 0 or y % 400 == 0)


def _year_length(year_offset: int) -> int:
    return 366 if leap_year(year_offset) else 365


def break_time(t: int) -> TimeElements:
    """Split a time into its calendar fields."""
    t &= _U32
    second = t % 60
    t //= 60
    minute = t % 60
    t //= 60
    hour = t % 24
    t //= 24
    wday = (t + 4) % 7 + 1

    year = 0
    days = 0
    while True:
        days += _year_length(year)
        if days > t:
            break
        year += 1
    days -= _year_length(year)
    t -= days

    month = 0
    for month, length in enumerate(_MONTH_DAYS):
        if month == 1 and leap_year(year):
            length = 29
        if t >= length:
            t -= length
        else:
            break
    else:
        month = 12

    return TimeElements(
        second=second,
        minute=minute,
        hour=hour,
        wday=wday,
        day=t + 1,
        month=month + 1,
        year=year,
    )


def make_time(elements: TimeElements) -> int:
    """Assemble calendar fields into seconds since 1970."""
    seconds = elements.year * SECS_PER_YEAR
    seconds += sum(SECS_PER_DAY for y in range(elements.year) if leap_year(y))
    for m in range(1, elements.month):
        if m == 2 and leap_year(elements.year):
            seconds += SECS_PER_DAY * 29
        else:
            seconds += SECS_PER_DAY * _MONTH_DAYS[m - 1]
    seconds += (elements.day - 1) * SECS_PER_DAY
    seconds += elements.hour * SECS_PER_HOUR
    seconds += elements.minute * SECS_PER_MIN
    seconds += elements.second
    return seconds & _U32


def hour(t: int) -> int:
    return break_time(t).hour


def hour_format12(t: int) -> int:
    """The hour in 12-hour form, with midnight as 12."""
    h = hour(t)
    if h == 0:
        return 12
    if h > 12:
        return h - 12
    return h


def is_pm(t: int) -> bool:
    return hour(t) >= 12


def is_am(t: int) -> bool:
    return not is_pm(t)


def minute(t: int) -> int:
    return break_time(t).minute


def second(t: int) -> int:
    return break_time(t).second


def day(t: int) -> int:
    return break_time(t).day


def weekday(t: int) -> int:
    """Day of the week, Sunday being 1."""
    return break_time(t).wday


def month(t: int) -> int:
    return break_time(t).month


def year(t: int) -> int:
    """The full four-digit year."""
    return break_time(t).calendar_year


def number_of_seconds(t: int) -> int:
    return t % SECS_PER_MIN


def number_of_minutes(t: int) -> int:
    return (t // SECS_PER_MIN) % SECS_PER_MIN


def number_of_hours(t: int) -> int:
    return (t % SECS_PER_DAY) // SECS_PER_HOUR


def day_of_week(t: int) -> int:
    """Day of the week, Sunday being 1."""
    return (t // SECS_PER_DAY + 4) % DAYS_PER_WEEK + 1


def elapsed_days(t: int) -> int:
    return t // SECS_PER_DAY


def elapsed_secs_today(t: int) -> int:
    return t % SECS_PER_DAY


def previous_midnight(t: int) -> int:
    return (t // SECS_PER_DAY) * SECS_PER_DAY


def next_midnight(t: int) -> int:
    return previous_midnight(t) + SECS_PER_DAY


def elapsed_secs_this_week(t: int) -> int:
    return elapsed_secs_today(t) + (day_of_week(t) - 1) * SECS_PER_DAY


def previous_sunday(t: int) -> int:
    return t - elapsed_secs_this_week(t)


def next_sunday(t: int) -> int:
    return previous_sunday(t) + SECS_PER_WEEK


def _check_index(value: int, upper: int, what: str) -> None:
    if not 0 <= value <= upper:
        raise ValueError(f"{what} must be between 0 and {upper}, got {value}")


def month_str(month: int) -> str:
    """Full month name; month 0 gives an empty string."""
    _check_index(month, 12, "month")
    return _MONTH_NAMES[month]


def month_short_str(month: int) -> str:
    """Three-letter month name; month 0 gives 'Err'."""
    _check_index(month, 12, "month")
    start = month * _SHORT_LEN
    return _MONTH_SHORT_NAMES[start:start + _SHORT_LEN]


def day_str(day: int) -> str:
    """Full weekday name, Sunday being 1; day 0 gives 'Err'."""
    _check_index(day, 7, "day")
    return _DAY_NAMES[day]


def day_short_str(day: int) -> str:
    """Three-letter weekday name, Sunday being 1; day 0 gives 'Err'."""
    _check_index(day, 7, "day")
    start = day * _SHORT_LEN
    return _DAY_SHORT_NAMES[start:start + _SHORT_LEN]


def _monotonic_millis() -> int:
    return int(_time.monotonic() * 1000)


class SoftClock:
    """A seconds clock driven by a millisecond counter, with optional external sync."""

    def __init__(self, millis: Optional[Callable[[], int]] = None) -> None:
        self._millis = millis if millis is not None else _monotonic_millis
        self._sys_time = 0
        self._prev_millis = 0
        self._next_sync_time = 0
        self._sync_interval = 300
        self._status = TimeStatus.NOT_SET
        self._provider: Optional[Callable[[], int]] = None

    def now(self) -> int:
        """Current time in seconds since 1970, syncing from the provider when due."""
        elapsed = (self._millis() - self._prev_millis) & _U32
        ticks = elapsed // 1000
        if ticks:
            self._sys_time = (self._sys_time + ticks) & _U32
            self._prev_millis = (self._prev_millis + ticks * 1000) & _U32
        if self._next_sync_time <= self._sys_time and self._provider is not None:
            t = self._provider()
            if t:
                self.set_time(t)
            else:
                self._next_sync_time = (self._sys_time + self._sync_interval) & _U32
                if self._status != TimeStatus.NOT_SET:
                    self._status = TimeStatus.NEEDS_SYNC
        return self._sys_time

    def set_time(self, t: int) -> None:
        self._sys_time = t & _U32
        self._next_sync_time = (self._sys_time + self._sync_interval) & _U32
        self._status = TimeStatus.SET
        self._prev_millis = self._millis() & _U32

    def set_time_fields(self, hr: int, minute: int, sec: int, day: int, month: int, yr: int) -> None:
        """Set the clock from fields; ``yr`` is a full year or two digits since 2000."""
        yr = yr - 1970 if yr > 99 else yr + 30
        elements = TimeElements(
            second=sec, minute=minute, hour=hr, day=day, month=month, year=yr
        )
        self.set_time(make_time(elements))

    def adjust_time(self, adjustment: int) -> None:
        self._sys_time = (self._sys_time + adjustment) & _U32

    def status(self) -> TimeStatus:
        self.now()
        return self._status

    def set_sync_provider(self, provider: Optional[Callable[[], int]]) -> None:
        self._provider = provider
        self._next_sync_time = self._sys_time
        self.now()

    def set_sync_interval(self, interval: int) -> None:
        self._sync_interval = interval & _U32
        self._next_sync_time = (self._sys_time + self._sync_interval) & _U32