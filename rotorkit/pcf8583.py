"""The PCF8583 real-time clock chip.

The chip counts only four years, so the base year is kept in the first two
bytes of its user memory (registers 0x10 and 0x11).
"""

from __future__ import annotations

from .rtclib import I2CBus

_U8 = 0xFF

_MONTH_TABLE = (0, 3, 3, 6, 1, 4, 6, 2, 5, 0, 3, 5, -1, 2, 3, 6, 1, 4, 6, 2, 5, 0, 3, 5)


def is_leap_year(year: int) -> bool:
    return year % 400 == 0 or (year % 100 != 0 and year % 4 == 0)


def day_of_week(year: int, month: int, day: int) -> int:
    """Day of the week with Sunday as 0."""
    y = year % 100
    c = (6 - 2 * ((year // 100) % 4)) & _U8
    offset = _MONTH_TABLE[int(is_leap_year(year)) * 12 + month - 1]
    return ((day + offset + y + y // 4 + c) % 7) & _U8


def bcd_to_byte(bcd: int) -> int:
    """Convert a packed BCD byte to its binary value."""
    return ((bcd >> 4) * 10) + (bcd & 0x0F)


def int_to_bcd(value: int) -> int:
    """Convert a value below 100 to a packed BCD byte."""
    return (((value // 10) << 4) + (value % 10)) & _U8


class PCF8583:
    """The clock and daily alarm of a PCF8583 on an I2C bus.

    ``device_address`` is the 8-bit address from the datasheet.
    """

    def __init__(self, bus: I2CBus, device_address: int = 0xA0) -> None:
        self.bus = bus
        self.address = device_address >> 1
        self._dow = 0
        self.second = 0
        self.minute = 0
        self.hour = 0
        self.day = 0
        self.month = 0
        self.year = 0
        self.year_base = 0
        self.alarm_milisec = 0
        self.alarm_second = 0
        self.alarm_minute = 0
        self.alarm_hour = 0
        self.alarm_day = 0

    @property
    def weekday(self) -> int:
        """Day of the week, Sunday as 0, as last read or written."""
        return self._dow

    def init(self) -> None:
        """Reset the control/status register so the alarm output goes high."""
        self.bus.write(self.address, [0x00, 0x04])

    def get_time(self) -> None:
        """Read the clock into the time fields."""
        self.bus.write(self.address, [0xC0])
        self.bus.write(self.address, [0x02])
        raw = self.bus.read(self.address, 5)
        self.second = bcd_to_byte(raw[0])
        self.minute = bcd_to_byte(raw[1])
        self.hour = bcd_to_byte(raw[2])
        self.day = bcd_to_byte(raw[3] & 0x3F)
        year_bits = (raw[3] >> 6) & 0x03
        self.month = bcd_to_byte(raw[4] & 0x1F)
        self._dow = raw[4] >> 5

        self.bus.write(self.address, [0x10])
        base = self.bus.read(self.address, 2)
        self.year_base = (base[0] << 8) | base[1]
        self.year = year_bits + self.year_base

    def set_time(self) -> None:
        """Write the time fields to the clock; 29 February of a common year becomes 1 March."""
        if not is_leap_year(self.year) and self.month == 2 and self.day == 29:
            self.month = 3
            self.day = 1

        self.year_base = self.year - self.year % 4
        if not is_leap_year(self.year_base):
            self.year_base = self.year - 1

        self._dow = day_of_week(self.year, self.month, self.day)

        self.bus.write(self.address, [0xC0])
        self.bus.write(
            self.address,
            [
                0x02,
                int_to_bcd(self.second),
                int_to_bcd(self.minute),
                int_to_bcd(self.hour),
                ((((self.year - self.year_base) & _U8) << 6) | int_to_bcd(self.day)) & _U8,
                ((self._dow << 5) | (int_to_bcd(self.month) & 0x1F)) & _U8,
            ],
        )
        self.bus.write(
            self.address,
            [0x10, (self.year_base >> 8) & _U8, self.year_base & _U8],
        )
        self.init()

    def get_alarm(self) -> None:
        """Read the alarm registers into the alarm fields."""
        self.bus.write(self.address, [0x0A])
        raw = self.bus.read(self.address, 4)
        self.alarm_second = bcd_to_byte(raw[0])
        self.alarm_minute = bcd_to_byte(raw[1])
        self.alarm_hour = bcd_to_byte(raw[2])

        self.bus.write(self.address, [0x0E])
        self.alarm_day = bcd_to_byte(self.bus.read(self.address, 1)[0])

    def set_daily_alarm(self) -> None:
        """Arm a daily alarm at the alarm hour, minute and second."""
        self.bus.write(self.address, [0x08, 0x90])
        self.bus.write(
            self.address,
            [
                0x09,
                0x00,
                int_to_bcd(self.alarm_second),
                int_to_bcd(self.alarm_minute),
                int_to_bcd(self.alarm_hour),
                0x00,
            ],
        )