import calendar
import datetime

import pytest

from rotorkit.pcf8583 import (
    PCF8583,
    bcd_to_byte,
    day_of_week,
    int_to_bcd,
    is_leap_year,
)
from rotorkit.rtclib import I2CBus


def _set(chip, year, month, day, hour=0, minute=0, second=0):
    chip.year, chip.month, chip.day = year, month, day
    chip.hour, chip.minute, chip.second = hour, minute, second
    chip.set_time()


def test_is_leap_year_matches_calendar():
    for year in range(1890, 2410):
        assert is_leap_year(year) == calendar.isleap(year)


def test_bcd_round_trip():
    for value in range(100):
        assert bcd_to_byte(int_to_bcd(value)) == value


def test_int_to_bcd_nibbles():
    for value in range(100):
        assert int_to_bcd(value) >> 4 == value // 10
        assert int_to_bcd(value) & 0x0F == value % 10


def test_day_of_week_matches_calendar():
    date = datetime.date(2000, 1, 1)
    while date.year < 2100:
        assert day_of_week(date.year, date.month, date.day) == date.isoweekday() % 7
        date += datetime.timedelta(days=3)


def test_init_writes_control_register_at_7bit_address():
    bus = I2CBus()
    PCF8583(bus, 0xA0).init()
    bus.write(0x50, [0x00])
    assert bus.read(0x50, 1) == bytes([0x04])


@pytest.mark.parametrize(
    "fields",
    [
        (2001, 1, 1, 0, 0, 0),
        (2003, 12, 31, 23, 59, 59),
        (2024, 2, 29, 12, 30, 45),
        (2100, 6, 15, 7, 8, 9),
        (2103, 3, 1, 1, 2, 3),
    ],
)
def test_set_then_get_time_round_trip(fields):
    bus = I2CBus()
    _set(PCF8583(bus), *fields)
    reader = PCF8583(bus)
    reader.get_time()
    assert (reader.year, reader.month, reader.day, reader.hour, reader.minute, reader.second) == fields
    y, m, d = fields[:3]
    assert reader.weekday == datetime.date(y, m, d).isoweekday() % 7


def test_feb_29_of_common_year_becomes_march_1():
    chip = PCF8583(I2CBus())
    _set(chip, 2023, 2, 29)
    assert (chip.month, chip.day) == (3, 1)
    chip.get_time()
    assert (chip.year, chip.month, chip.day) == (2023, 3, 1)


def test_year_base_is_previous_leap_year():
    bus = I2CBus()
    chip = PCF8583(bus)
    _set(chip, 2023, 5, 5)
    assert chip.year_base == 2020
    bus.write(chip.address, [0x10])
    assert bus.read(chip.address, 2) == bytes([2020 >> 8, 2020 & 0xFF])


def test_year_base_skips_non_leap_century():
    chip = PCF8583(I2CBus())
    _set(chip, 2101, 5, 5)
    assert chip.year_base == 2100
    assert not is_leap_year(chip.year_base + 0) or chip.year_base == 2100


def test_set_time_records_weekday():
    chip = PCF8583(I2CBus())
    _set(chip, 2024, 7, 4)
    assert chip.weekday == day_of_week(2024, 7, 4)


def test_daily_alarm_round_trip():
    bus = I2CBus()
    chip = PCF8583(bus)
    chip.alarm_hour, chip.alarm_minute, chip.alarm_second = 6, 45, 30
    chip.set_daily_alarm()
    reader = PCF8583(bus)
    reader.get_alarm()
    assert (reader.alarm_hour, reader.alarm_minute, reader.alarm_second) == (6, 45, 30)
    assert reader.alarm_day == 0


def test_daily_alarm_control_register():
    bus = I2CBus()
    PCF8583(bus).set_daily_alarm()
    bus.write(0x50, [0x08])
    assert bus.read(0x50, 1) == bytes([0x90])