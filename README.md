# rotorkit

Pure-Python building blocks for antenna rotator controllers: timekeeping,
real-time-clock chips, GPS sentence parsing, the Moon's position and the
state codes a controller uses. It runs on Python 3.10 or later and needs
no third-party libraries.

## What is inside

- `rotorkit.timelib`: calendar arithmetic on unsigned 32-bit seconds since
  1970 (`break_time`, `make_time`, `hour`, `hour_format12`, `weekday`,
  `year`, `previous_midnight`, `next_sunday`, ...), a `TimeElements`
  dataclass whose `year` is an offset from 1970, month and day names
  (`month_str`, `month_short_str`, `day_str`, `day_short_str`), and
  `SoftClock`, a seconds clock driven by a millisecond counter with an
  optional sync provider and a `TimeStatus`.
- `rotorkit.rtclib`: `DateTime` for dates from 2000 on, the BCD helpers
  `bcd2bin` and `bin2bcd`, `date2days`, a `DS1307` driver, `MillisClock`,
  and `I2CBus`, an in-memory bus of register-addressed devices. Subclass
  `I2CBus` and override `write` and `read` to reach real hardware.
- `rotorkit.pcf8583`: a `PCF8583` clock and daily-alarm driver that keeps
  the base year in the chip's user memory, plus `is_leap_year`,
  `day_of_week`, `bcd_to_byte` and `int_to_bcd`.
- `rotorkit.tinygps`: `TinyGPS`, a character-at-a-time parser for `GPRMC`
  and `GPGGA` sentences with checksum checking and `GPSStats` counters,
  and the helpers `distance_between`, `course_to` and `cardinal`.
- `rotorkit.moon`: `grid2deg` for Maidenhead locators, `dcoord` for
  spherical coordinate rotation, and `moon2`, which returns a
  `MoonPosition` (right ascension, declination, topocentric values, local
  sidereal time, hour angle, azimuth, elevation and distance).
- `rotorkit.constants`: enumerations such as `AzimuthState`,
  `ElevationState`, `RotationRequest`, `ParkStatus`, `LcdState`,
  `Process` and the `NextionCapability` flags.

Clocks and the GPS parser take an optional `millis` callable; by default
they count from `time.monotonic()`.

## Install

```
pip install .
```

## Examples

Where is the Moon?

```python
from rotorkit.moon import grid2deg, moon2

lon, lat = grid2deg("DO62QC")
pos = moon2(2014, 1, 4, 17 + 9 / 60, lon, lat)
print(f"az {pos.az:.1f}  el {pos.el:.1f}")
```

Parse a GPS sentence:

```python
from rotorkit.tinygps import TinyGPS

gps = TinyGPS(millis=lambda: 0)
gps.feed("$GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A\r\n")
lat, lon, age = gps.f_get_position()
year, month, day, hour, minute, second, hundredths, age = gps.crack_datetime()
```

Keep time in software:

```python
from rotorkit.timelib import SoftClock, break_time

clock = SoftClock()
clock.set_time_fields(14, 30, 0, 12, 9, 2009)
print(break_time(clock.now()))
```

Set and read a DS1307 on the in-memory bus:

```python
from rotorkit.rtclib import DS1307, DateTime, I2CBus

rtc = DS1307(I2CBus())
rtc.adjust(DateTime(2020, 8, 15, 12, 0, 0))
print(rtc.now(), rtc.is_running())
```

## What it does not do

rotorkit holds parts, not a controller. It does not drive rotator motors,
read position sensors, speak a rotator command protocol on a serial port,
run a display, or check which combinations of controller features go
together. `I2CBus` only simulates devices in memory until it is subclassed
for real hardware.

## Running the tests

```
pip install .[test]
pytest
```