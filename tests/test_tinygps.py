import math

import pytest

from rotorkit.tinygps import (
    GPS_INVALID_AGE,
    GPS_INVALID_ANGLE,
    GPS_INVALID_F_ALTITUDE,
    GPS_INVALID_F_ANGLE,
    GPS_INVALID_F_SPEED,
    GPS_INVALID_SATELLITES,
    GPS_KMPH_PER_KNOT,
    GPS_MPH_PER_KNOT,
    GPS_MPS_PER_KNOT,
    GPSStats,
    TinyGPS,
    cardinal,
    course_to,
    distance_between,
)

RMC_BODY = "GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W"
GGA_BODY = "GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,"


class FakeMillis:
    def __init__(self, value=0):
        self.value = value

    def __call__(self):
        return self.value


def sentence(body, lower=False):
    cs = 0
    for ch in body:
        cs ^= ord(ch)
    text = f"{cs:02x}" if lower else f"{cs:02X}"
    return f"${body}*{text}\r\n"


@pytest.fixture
def clock():
    return FakeMillis(1000)


@pytest.fixture
def gps(clock):
    return TinyGPS(millis=clock)


def test_fresh_parser_reports_invalid_values(gps):
    assert gps.get_position() == (GPS_INVALID_ANGLE, GPS_INVALID_ANGLE, GPS_INVALID_AGE)
    assert gps.f_get_position() == (GPS_INVALID_F_ANGLE, GPS_INVALID_F_ANGLE, GPS_INVALID_AGE)
    assert gps.f_altitude() == GPS_INVALID_F_ALTITUDE
    assert gps.f_speed_knots() == GPS_INVALID_F_SPEED
    assert gps.f_speed_mph() == GPS_INVALID_F_SPEED
    assert gps.satellites() == GPS_INVALID_SATELLITES


def test_rmc_sentence_is_parsed(gps):
    assert gps.feed(sentence(RMC_BODY)) == 1
    lat, lon, age = gps.f_get_position()
    assert lat == pytest.approx(48 + 7.038 / 60, abs=1e-6)
    assert lon == pytest.approx(11 + 31.0 / 60, abs=1e-6)
    assert age == 0
    assert gps.f_speed_knots() == pytest.approx(22.4)
    assert gps.f_course() == pytest.approx(84.4)
    date, time_, _ = gps.get_datetime()
    assert date == 230394
    assert time_ == 12351900


def test_crack_datetime_from_rmc(gps):
    gps.feed(sentence(RMC_BODY))
    yr, mon, dy, hr, mi, sec, hund, age = gps.crack_datetime()
    assert (yr, mon, dy) == (1994, 3, 23)
    assert (hr, mi, sec, hund) == (12, 35, 19, 0)
    assert age == 0


def test_two_digit_year_below_81_is_2000s(gps):
    gps.feed(sentence("GPRMC,010203,A,4807.038,N,01131.000,E,0.0,0.0,150820,,"))
    yr, mon, dy, hr, mi, sec, _, _ = gps.crack_datetime()
    assert (yr, mon, dy) == (2020, 8, 15)
    assert (hr, mi, sec) == (1, 2, 3)


def test_gga_sentence_is_parsed(gps):
    assert gps.feed(sentence(GGA_BODY)) == 1
    assert gps.altitude() == 54540
    assert gps.f_altitude() == pytest.approx(545.4)
    assert gps.satellites() == 8
    assert gps.hdop() == 90
    lat, _, _ = gps.get_position()
    assert lat / 1e6 == pytest.approx(48 + 7.038 / 60, abs=1e-6)


def test_lowercase_checksum_is_accepted(gps):
    assert gps.feed(sentence(RMC_BODY, lower=True)) == 1


def test_south_and_west_are_negative(gps):
    gps.feed(sentence("GPRMC,123519,A,4807.038,S,01131.000,W,022.4,084.4,230394,,"))
    lat, lon, _ = gps.f_get_position()
    assert lat == pytest.approx(-(48 + 7.038 / 60), abs=1e-6)
    assert lon == pytest.approx(-(11 + 31.0 / 60), abs=1e-6)


def test_negative_altitude(gps):
    gps.feed(sentence("GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,-12.5,M,46.9,M,,"))
    assert gps.altitude() == -1250
    assert gps.f_altitude() == pytest.approx(-12.5)


def test_bad_checksum_counts_failure_and_keeps_old_fix(gps):
    text = sentence(RMC_BODY)
    star = text.index("*")
    wrong = "00" if text[star + 1:star + 3] != "00" else "11"
    bad = text[: star + 1] + wrong + "\r\n"
    assert gps.feed(bad) == 0
    assert gps.stats().failed_checksum == 1
    assert gps.stats().good_sentences == 0
    assert gps.get_position()[0] == GPS_INVALID_ANGLE


def test_void_rmc_is_not_committed_and_not_a_failure(gps):
    body = RMC_BODY.replace(",A,", ",V,")
    assert gps.feed(sentence(body)) == 0
    assert gps.stats().failed_checksum == 0
    assert gps.get_position()[0] == GPS_INVALID_ANGLE


def test_gga_without_fix_is_not_committed(gps):
    body = GGA_BODY.replace(",E,1,", ",E,0,")
    assert gps.feed(sentence(body)) == 0
    assert gps.satellites() == GPS_INVALID_SATELLITES


def test_valid_flag_set_on_terminator_after_checksum(gps):
    text = sentence(RMC_BODY)
    results = [gps.encode(c) for c in text]
    assert results.count(True) == 1
    assert results.index(True) == text.index("\r")


def test_encode_accepts_bytes(gps):
    assert gps.feed(sentence(RMC_BODY).encode("ascii")) == 1


def test_stats_count_characters(gps):
    text = sentence(RMC_BODY) + sentence(GGA_BODY)
    gps.feed(text)
    assert gps.stats() == GPSStats(chars=len(text), good_sentences=2, failed_checksum=0)


def test_fix_age_grows_with_millis(gps, clock):
    gps.feed(sentence(RMC_BODY))
    clock.value += 2500
    assert gps.get_position()[2] == 2500
    assert gps.get_datetime()[2] == 2500


def test_other_sentences_are_ignored(gps):
    assert gps.feed(sentence("GPGSV,3,1,11,03,03,111,00")) == 0
    assert gps.stats().good_sentences == 0
    assert gps.get_position()[0] == GPS_INVALID_ANGLE


def test_speed_conversions(gps):
    gps.feed(sentence(RMC_BODY))
    knots = gps.f_speed_knots()
    assert gps.f_speed_mph() == pytest.approx(knots * GPS_MPH_PER_KNOT)
    assert gps.f_speed_mps() == pytest.approx(knots * GPS_MPS_PER_KNOT)
    assert gps.f_speed_kmph() == pytest.approx(knots * GPS_KMPH_PER_KNOT)


def test_later_sentence_overrides_earlier(gps):
    gps.feed(sentence(RMC_BODY))
    gps.feed(sentence("GPRMC,000000,A,1000.000,N,02000.000,E,1.0,2.0,010100,,"))
    lat, lon, _ = gps.f_get_position()
    assert lat == pytest.approx(10.0)
    assert lon == pytest.approx(20.0)


@pytest.mark.parametrize(
    "course, name",
    [(0, "N"), (22.5, "NNE"), (90, "E"), (180, "S"), (270, "W"), (359, "N"), (315, "NW")],
)
def test_cardinal(course, name):
    assert cardinal(course) == name


def test_distance_same_point_is_zero():
    assert distance_between(48.1, 11.5, 48.1, 11.5) == pytest.approx(0.0, abs=1e-6)


def test_distance_is_symmetric():
    a = distance_between(48.1, 11.5, 52.5, 13.4)
    b = distance_between(52.5, 13.4, 48.1, 11.5)
    assert a == pytest.approx(b)
    assert a > 0


def test_distance_one_degree_on_equator():
    assert distance_between(0, 0, 0, 1) == pytest.approx(6372795 * math.pi / 180, rel=1e-9)


@pytest.mark.parametrize(
    "lat2, lon2, expected",
    [(1, 0, 0.0), (0, 1, 90.0), (-1, 0, 180.0), (0, -1, 270.0)],
)
def test_course_to_cardinal_directions(lat2, lon2, expected):
    assert course_to(0, 0, lat2, lon2) == pytest.approx(expected, abs=1e-9)


def test_course_to_is_in_range():
    c = course_to(48.1, 11.5, 40.0, -74.0)
    assert 0.0 <= c < 360.0