"""A small NMEA parser for GPRMC and GPGGA sentences.

Positions are kept in millionths of a degree, altitude in centimetres,
speed in hundredths of a knot, course and HDOP in hundredths, the date as
``ddmmyy`` and the time as ``hhmmsscc``. Fix ages are in milliseconds,
measured with a millisecond counter supplied by the caller.
"""

from __future__ import annotations

import math
import time as _time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Tuple, Union

_U8 = 0xFF
_U16 = 0xFFFF
_U32 = 0xFFFFFFFF

LIBRARY_VERSION = 13

GPS_MPH_PER_KNOT = 1.15077945
GPS_MPS_PER_KNOT = 0.51444444
GPS_KMPH_PER_KNOT = 1.852
GPS_MILES_PER_METER = 0.00062137112
GPS_KM_PER_METER = 0.001

GPS_INVALID_AGE = 0xFFFFFFFF
GPS_INVALID_ANGLE = 999999999
GPS_INVALID_ALTITUDE = 999999999
GPS_INVALID_DATE = 0
GPS_INVALID_TIME = 0xFFFFFFFF
GPS_INVALID_SPEED = 999999999
GPS_INVALID_FIX_TIME = 0xFFFFFFFF
GPS_INVALID_SATELLITES = 0xFF
GPS_INVALID_HDOP = 0xFFFFFFFF

GPS_INVALID_F_ANGLE = 1000.0
GPS_INVALID_F_ALTITUDE = 1000000.0
GPS_INVALID_F_SPEED = -1.0

_EARTH_RADIUS_M = 6372795

_SENTENCE_GPGGA = 0
_SENTENCE_GPRMC = 1
_SENTENCE_OTHER = 2

_GPRMC_TERM = "GPRMC"
_GPGGA_TERM = "GPGGA"

_TERM_SIZE = 15

_DIRECTIONS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)


def _s32(value: int) -> int:
    value &= _U32
    return value - (1 << 32) if value & 0x80000000 else value


def _isdigit(c: str) -> bool:
    return "0" <= c <= "9"


def _leading_digits(text: str) -> str:
    end = 0
    while end < len(text) and _isdigit(text[end]):
        end += 1
    return text[:end]


def _gpsatol(text: str) -> int:
    digits = _leading_digits(text)
    return int(digits) if digits else 0


def _atoi(text: str) -> int:
    text = text.lstrip(" \t\n\r\f\v")
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    return sign * _gpsatol(text)


def _from_hex(c: str) -> int:
    if "A" <= c <= "F":
        return ord(c) - ord("A") + 10
    if "a" <= c <= "f":
        return ord(c) - ord("a") + 10
    return ord(c) - ord("0")


def _parse_decimal(term: str) -> int:
    negative = term.startswith("-")
    if negative:
        term = term[1:]
    ret = 100 * _gpsatol(term)
    rest = term[len(_leading_digits(term)):]
    if rest.startswith(".") and len(rest) > 1 and _isdigit(rest[1]):
        ret += 10 * (ord(rest[1]) - ord("0"))
        if len(rest) > 2 and _isdigit(rest[2]):
            ret += ord(rest[2]) - ord("0")
    return -ret if negative else ret


def _parse_degrees(term: str) -> int:
    """Parse ``ddmm.mmmm`` into millionths of a degree."""
    left_of_decimal = _gpsatol(term)
    hundred1000ths_of_minute = (left_of_decimal % 100) * 100000
    rest = term[len(_leading_digits(term)):]
    if rest.startswith("."):
        mult = 10000
        for c in rest[1:]:
            if not _isdigit(c):
                break
            hundred1000ths_of_minute += mult * (ord(c) - ord("0"))
            mult //= 10
    return (left_of_decimal // 100) * 1000000 + (hundred1000ths_of_minute + 3) // 6


def distance_between(lat1: float, long1: float, lat2: float, long2: float) -> float:
    """Great-circle distance in metres between two positions in signed degrees."""
    delta = math.radians(long1 - long2)
    sdlong = math.sin(delta)
    cdlong = math.cos(delta)
    lat1 = math.radians(lat1)
    lat2 = math.radians(lat2)
    slat1 = math.sin(lat1)
    clat1 = math.cos(lat1)
    slat2 = math.sin(lat2)
    clat2 = math.cos(lat2)
    delta = (clat1 * slat2) - (slat1 * clat2 * cdlong)
    delta = delta * delta
    delta += (clat2 * sdlong) ** 2
    delta = math.sqrt(delta)
    denom = (slat1 * slat2) + (clat1 * clat2 * cdlong)
    delta = math.atan2(delta, denom)
    return delta * _EARTH_RADIUS_M


def course_to(lat1: float, long1: float, lat2: float, long2: float) -> float:
    """Initial course in degrees (north 0, west 270) from position 1 to position 2."""
    dlon = math.radians(long2 - long1)
    lat1 = math.radians(lat1)
    lat2 = math.radians(lat2)
    a1 = math.sin(dlon) * math.cos(lat2)
    a2 = math.sin(lat1) * math.cos(lat2) * math.cos(dlon)
    a2 = math.cos(lat1) * math.sin(lat2) - a2
    a2 = math.atan2(a1, a2)
    if a2 < 0.0:
        a2 += 2 * math.pi
    return math.degrees(a2)


def cardinal(course: float) -> str:
    """The sixteen-point compass name of a course in degrees."""
    direction = int((course + 11.25) / 22.5)
    return _DIRECTIONS[direction % 16]


@dataclass(frozen=True)
class GPSStats:
    """Counters of characters fed, sentences accepted and checksums failed."""

    chars: int
    good_sentences: int
    failed_checksum: int


def _monotonic_millis() -> int:
    return int(_time.monotonic() * 1000)


class TinyGPS:
    """Parses NMEA characters one at a time and keeps the last valid fix."""

    def __init__(self, millis: Optional[Callable[[], int]] = None) -> None:
        self._millis = millis if millis is not None else _monotonic_millis

        self._time = GPS_INVALID_TIME
        self._date = GPS_INVALID_DATE
        self._latitude = GPS_INVALID_ANGLE
        self._longitude = GPS_INVALID_ANGLE
        self._altitude = GPS_INVALID_ALTITUDE
        self._speed = GPS_INVALID_SPEED
        self._course = GPS_INVALID_ANGLE
        self._hdop = GPS_INVALID_HDOP
        self._numsats = GPS_INVALID_SATELLITES
        self._last_time_fix = GPS_INVALID_FIX_TIME
        self._last_position_fix = GPS_INVALID_FIX_TIME

        self._new_time = GPS_INVALID_TIME
        self._new_date = GPS_INVALID_DATE
        self._new_latitude = GPS_INVALID_ANGLE
        self._new_longitude = GPS_INVALID_ANGLE
        self._new_altitude = GPS_INVALID_ALTITUDE
        self._new_speed = GPS_INVALID_SPEED
        self._new_course = GPS_INVALID_ANGLE
        self._new_hdop = GPS_INVALID_HDOP
        self._new_numsats = GPS_INVALID_SATELLITES
        self._new_time_fix = GPS_INVALID_FIX_TIME
        self._new_position_fix = GPS_INVALID_FIX_TIME

        self._parity = 0
        self._is_checksum_term = False
        self._term: list = []
        self._sentence_type = _SENTENCE_OTHER
        self._term_number = 0
        self._gps_data_good = False

        self._encoded_characters = 0
        self._good_sentences = 0
        self._failed_checksum = 0

    def _now(self) -> int:
        return self._millis() & _U32

    def encode(self, c: Union[str, int]) -> bool:
        """Process one character; True when it completes a valid, checksummed sentence."""
        code = (ord(c) if isinstance(c, str) else int(c)) & _U8
        ch = chr(code)
        self._encoded_characters = (self._encoded_characters + 1) & _U32

        if ch in ",\r\n*":
            if ch == ",":
                self._parity ^= code
            valid = self._term_complete()
            self._term_number = (self._term_number + 1) & _U8
            self._term = []
            self._is_checksum_term = ch == "*"
            return valid

        if ch == "$":
            self._term_number = 0
            self._term = []
            self._parity = 0
            self._sentence_type = _SENTENCE_OTHER
            self._is_checksum_term = False
            self._gps_data_good = False
            return False

        if len(self._term) < _TERM_SIZE - 1:
            self._term.append(ch)
        if not self._is_checksum_term:
            self._parity ^= code
        return False

    def feed(self, data: Union[str, bytes, Iterable[int]]) -> int:
        """Process many characters; return how many valid sentences they completed."""
        return sum(1 for c in data if self.encode(c))

    def _term_complete(self) -> bool:
        term = "".join(self._term)

        if self._is_checksum_term:
            padded = term + "\0\0"
            checksum = (16 * _from_hex(padded[0]) + _from_hex(padded[1])) & _U8
            if checksum == self._parity:
                if self._gps_data_good:
                    self._good_sentences = (self._good_sentences + 1) & _U16
                    self._last_time_fix = self._new_time_fix
                    self._last_position_fix = self._new_position_fix
                    if self._sentence_type == _SENTENCE_GPRMC:
                        self._time = self._new_time
                        self._date = self._new_date
                        self._latitude = self._new_latitude
                        self._longitude = self._new_longitude
                        self._speed = self._new_speed
                        self._course = self._new_course
                    elif self._sentence_type == _SENTENCE_GPGGA:
                        self._altitude = self._new_altitude
                        self._time = self._new_time
                        self._latitude = self._new_latitude
                        self._longitude = self._new_longitude
                        self._numsats = self._new_numsats
                        self._hdop = self._new_hdop
                    return True
            else:
                self._failed_checksum = (self._failed_checksum + 1) & _U16
            return False

        if self._term_number == 0:
            if _GPRMC_TERM.startswith(term):
                self._sentence_type = _SENTENCE_GPRMC
            elif _GPGGA_TERM.startswith(term):
                self._sentence_type = _SENTENCE_GPGGA
            else:
                self._sentence_type = _SENTENCE_OTHER
            return False

        if self._sentence_type == _SENTENCE_OTHER or not term:
            return False

        key = (self._sentence_type, self._term_number)
        rmc, gga = _SENTENCE_GPRMC, _SENTENCE_GPGGA
        if key in ((rmc, 1), (gga, 1)):
            self._new_time = _parse_decimal(term) & _U32
            self._new_time_fix = self._now()
        elif key == (rmc, 2):
            self._gps_data_good = term[0] == "A"
        elif key in ((rmc, 3), (gga, 2)):
            self._new_latitude = _s32(_parse_degrees(term))
            self._new_position_fix = self._now()
        elif key in ((rmc, 4), (gga, 3)):
            if term[0] == "S":
                self._new_latitude = _s32(-self._new_latitude)
        elif key in ((rmc, 5), (gga, 4)):
            self._new_longitude = _s32(_parse_degrees(term))
        elif key in ((rmc, 6), (gga, 5)):
            if term[0] == "W":
                self._new_longitude = _s32(-self._new_longitude)
        elif key == (rmc, 7):
            self._new_speed = _parse_decimal(term) & _U32
        elif key == (rmc, 8):
            self._new_course = _parse_decimal(term) & _U32
        elif key == (rmc, 9):
            self._new_date = _gpsatol(term) & _U32
        elif key == (gga, 6):
            self._gps_data_good = term[0] > "0"
        elif key == (gga, 7):
            self._new_numsats = _atoi(term) & _U8
        elif key == (gga, 8):
            self._new_hdop = _parse_decimal(term) & _U32
        elif key == (gga, 9):
            self._new_altitude = _s32(_parse_decimal(term))
        return False

    def _age(self, fix: int) -> int:
        if fix == GPS_INVALID_FIX_TIME:
            return GPS_INVALID_AGE
        return (self._now() - fix) & _U32

    def get_position(self) -> Tuple[int, int, int]:
        """Latitude and longitude in millionths of a degree, and fix age in ms."""
        return self._latitude, self._longitude, self._age(self._last_position_fix)

    def get_datetime(self) -> Tuple[int, int, int]:
        """Date as ``ddmmyy``, time as ``hhmmsscc``, and fix age in ms."""
        return self._date, self._time, self._age(self._last_time_fix)

    def f_get_position(self) -> Tuple[float, float, int]:
        """Latitude and longitude in degrees, and fix age in ms."""
        lat, lon, age = self.get_position()
        if lat == GPS_INVALID_ANGLE:
            return GPS_INVALID_F_ANGLE, GPS_INVALID_F_ANGLE, age
        return lat / 1000000.0, lon / 1000000.0, age

    def crack_datetime(self) -> Tuple[int, int, int, int, int, int, int, int]:
        """Year, month, day, hour, minute, second, hundredths and fix age in ms."""
        date, time_, age = self.get_datetime()
        yr = date % 100
        yr += 1900 if yr > 80 else 2000
        return (
            yr,
            ((date // 100) % 100) & _U8,
            (date // 10000) & _U8,
            (time_ // 1000000) & _U8,
            ((time_ // 10000) % 100) & _U8,
            ((time_ // 100) % 100) & _U8,
            (time_ % 100) & _U8,
            age,
        )

    def altitude(self) -> int:
        """Signed altitude in centimetres from the last GPGGA sentence."""
        return self._altitude

    def course(self) -> int:
        """Course in hundredths of a degree from the last GPRMC sentence."""
        return self._course

    def speed(self) -> int:
        """Speed in hundredths of a knot from the last GPRMC sentence."""
        return self._speed

    def satellites(self) -> int:
        """Satellites used in the last GPGGA sentence."""
        return self._numsats

    def hdop(self) -> int:
        """Horizontal dilution of precision in hundredths."""
        return self._hdop

    def f_altitude(self) -> float:
        if self._altitude == GPS_INVALID_ALTITUDE:
            return GPS_INVALID_F_ALTITUDE
        return self._altitude / 100.0

    def f_course(self) -> float:
        if self._course == GPS_INVALID_ANGLE:
            return GPS_INVALID_F_ANGLE
        return self._course / 100.0

    def f_speed_knots(self) -> float:
        if self._speed == GPS_INVALID_SPEED:
            return GPS_INVALID_F_SPEED
        return self._speed / 100.0

    def _converted_speed(self, factor: float) -> float:
        sk = self.f_speed_knots()
        return GPS_INVALID_F_SPEED if sk == GPS_INVALID_F_SPEED else factor * sk

    def f_speed_mph(self) -> float:
        return self._converted_speed(GPS_MPH_PER_KNOT)

    def f_speed_mps(self) -> float:
        return self._converted_speed(GPS_MPS_PER_KNOT)

    def f_speed_kmph(self) -> float:
        return self._converted_speed(GPS_KMPH_PER_KNOT)

    def stats(self) -> GPSStats:
        return GPSStats(
            chars=self._encoded_characters,
            good_sentences=self._good_sentences,
            failed_checksum=self._failed_checksum,
        )