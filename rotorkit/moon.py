"""Maidenhead grid conversion and topocentric position of the Moon.

The Moon's position follows a low-precision orbital model with the main
perturbation terms, good to a fraction of a degree. That is enough for
pointing an antenna.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

_RAD = 57.2957795131
_TWO_PI = 6.283185307
_FULL_TURN = 6.2831853071795864
_EARTH_RADIUS_KM = 6378.140

_DEFAULT_GRID = "AA00MM"


def _is_alpha(c: str) -> bool:
    return c.isascii() and c.isalpha()


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def grid2deg(grid: str) -> Tuple[float, float]:
    """Return the (longitude, latitude) in degrees of a Maidenhead locator's centre.

    West longitude and south latitude are negative. Only the first six
    characters are used; missing or malformed characters fall back to the
    corresponding character of ``AA00MM``.
    """
    chars = [c.upper() for c in grid[:6]]
    chars += ["\0"] * (6 - len(chars))
    for index in (0, 1, 4, 5):
        if not _is_alpha(chars[index]):
            chars[index] = _DEFAULT_GRID[index]
    for index in (2, 3):
        if not _is_digit(chars[index]):
            chars[index] = _DEFAULT_GRID[index]

    def letter(index: int) -> int:
        return ord(chars[index]) - ord("A")

    def digit(index: int) -> int:
        return ord(chars[index]) - ord("0")

    dlong = 20 * letter(0) - 180.0
    dlat = 10 * letter(1) - 90.0
    dlong += digit(2) * 2
    dlat += digit(3)
    dlong += letter(4) * 5 / 60.0
    dlat += letter(5) * 2.5 / 60.0
    dlong += 2.5 / 60.0
    dlat += 1.25 / 60
    return dlong, dlat


def dcoord(a0: float, b0: float, ap: float, bp: float, a1: float, b1: float) -> Tuple[float, float]:
    """Rotate spherical coordinates (a1, b1) into another system; angles in radians.

    (a0, b0) is the origin of the new system in the old, (ap, bp) its pole.
    Returns (a2, b2) with a2 in [0, 2*pi).
    """
    sb0 = math.sin(b0)
    cb0 = math.cos(b0)
    sbp = math.sin(bp)
    cbp = math.cos(bp)
    sb1 = math.sin(b1)
    cb1 = math.cos(b1)
    sb2 = sbp * sb1 + cbp * cb1 * math.cos(ap - a1)
    cb2 = math.sqrt(max(0.0, 1.0 - sb2 * sb2))
    b2 = math.atan2(sb2, cb2)
    saa = math.sin(ap - a1) * cb1 / cb2
    caa = (sb1 - sb2 * sbp) / (cb2 * cbp)
    cbb = sb0 / cbp
    sbb = math.sin(ap - a0) * cb0
    sa2 = saa * cbb - caa * sbb
    ca2 = caa * cbb + saa * sbb
    if ca2 <= 0.0:
        numerator = 1.0 - ca2
        ta2o2 = numerator / sa2 if sa2 != 0.0 else math.copysign(math.inf, sa2)
    else:
        ta2o2 = sa2 / (1.0 + ca2)
    a2 = 2.0 * math.atan(ta2o2)
    if a2 < 0.0:
        a2 += _FULL_TURN
    return a2, b2


@dataclass(frozen=True)
class MoonPosition:
    """Where the Moon stands; angles in degrees, LST in hours, distance in km."""

    ra: float
    dec: float
    top_ra: float
    top_dec: float
    lst: float
    ha: float
    az: float
    el: float
    dist: float


def _idiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def moon2(year: int, month: int, day: int, ut: float, lon: float, lat: float) -> MoonPosition:
    """Position of the Moon at ``ut`` hours on the given date, seen from (lon, lat).

    Longitude is in degrees with west negative, latitude in degrees.
    """
    rad = _RAD
    d = (
        367 * year
        - _idiv(7 * (year + _idiv(month + 9, 12)), 4)
        + _idiv(275 * month, 9)
        + day
        - 730530
        + ut / 24.0
    )
    ecl = 23.4393 - 3.563e-7 * d

    nn = 125.1228 - 0.0529538083 * d
    incl = 5.1454
    w = math.fmod(318.0634 + 0.1643573223 * d + 360000.0, 360.0)
    a = 60.2666
    e = 0.054900
    mm = math.fmod(115.3654 + 13.0649929509 * d + 360000.0, 360.0)

    ee = mm + e * rad * math.sin(mm / rad) * (1.0 + e * math.cos(mm / rad))
    for _ in range(2):
        ee = ee - (ee - e * rad * math.sin(ee / rad) - mm) / (1.0 - e * math.cos(ee / rad))

    xv = a * (math.cos(ee / rad) - e)
    yv = a * (math.sqrt(1.0 - e * e) * math.sin(ee / rad))

    v = math.fmod(rad * math.atan2(yv, xv) + 720.0, 360.0)
    r = math.sqrt(xv * xv + yv * yv)

    vw = (v + w) / rad
    xg = r * (math.cos(nn / rad) * math.cos(vw) - math.sin(nn / rad) * math.sin(vw) * math.cos(incl / rad))
    yg = r * (math.sin(nn / rad) * math.cos(vw) + math.cos(nn / rad) * math.sin(vw) * math.cos(incl / rad))
    zg = r * (math.sin(vw) * math.sin(incl / rad))

    lonecl = math.fmod(rad * math.atan2(yg / rad, xg / rad) + 720.0, 360.0)
    latecl = rad * math.atan2(zg / rad, math.sqrt(xg * xg + yg * yg) / rad)

    ms = math.fmod(356.0470 + 0.9856002585 * d + 3600000.0, 360.0)
    ws = 282.9404 + 4.70935e-5 * d
    ls = math.fmod(ms + ws + 720.0, 360.0)
    lm = math.fmod(mm + w + nn + 720.0, 360.0)
    dd = math.fmod(lm - ls + 360.0, 360.0)
    ff = math.fmod(lm - nn + 360.0, 360.0)

    def s(x: float) -> float:
        return math.sin(x / rad)

    def c(x: float) -> float:
        return math.cos(x / rad)

    lonecl = (
        lonecl
        - 1.274 * s(mm - 2.0 * dd)
        + 0.658 * s(2.0 * dd)
        - 0.186 * s(ms)
        - 0.059 * s(2.0 * mm - 2.0 * dd)
        - 0.057 * s(mm - 2.0 * dd + ms)
        + 0.053 * s(mm + 2.0 * dd)
        + 0.046 * s(2.0 * dd - ms)
        + 0.041 * s(mm - ms)
        - 0.035 * s(dd)
        - 0.031 * s(mm + ms)
        - 0.015 * s(2.0 * ff - 2.0 * dd)
        + 0.011 * s(mm - 4.0 * dd)
    )

    latecl = (
        latecl
        - 0.173 * s(ff - 2.0 * dd)
        - 0.055 * s(mm - ff - 2.0 * dd)
        - 0.046 * s(mm + ff - 2.0 * dd)
        + 0.033 * s(ff + 2.0 * dd)
        + 0.017 * s(2.0 * mm + ff)
    )

    r = (
        60.36298
        - 3.27746 * c(mm)
        - 0.57994 * c(mm - 2.0 * dd)
        - 0.46357 * c(2.0 * dd)
        - 0.08904 * c(2.0 * mm)
        + 0.03865 * c(2.0 * mm - 2.0 * dd)
        - 0.03237 * c(2.0 * dd - ms)
        - 0.02688 * c(mm + 2.0 * dd)
        - 0.02358 * c(mm - 2.0 * dd + ms)
        - 0.02030 * c(mm - ms)
        + 0.01719 * c(dd)
        + 0.01671 * c(mm + ms)
    )

    dist = r * _EARTH_RADIUS_KM

    xg = r * c(lonecl) * c(latecl)
    yg = r * s(lonecl) * c(latecl)
    zg = r * s(latecl)

    xe = xg
    ye = yg * c(ecl) - zg * s(ecl)
    ze = yg * s(ecl) + zg * c(ecl)

    ra = math.fmod(rad * math.atan2(ye, xe) + 360.0, 360.0)
    dec = rad * math.atan2(ze, math.sqrt(xe * xe + ye * ye))

    mpar = rad * math.asin(1.0 / r)
    gclat = lat - 0.1924 * math.sin(2.0 * lat / rad)
    rho = 0.99883 + 0.00167 * math.cos(2.0 * lat / rad)
    gmst0 = (ls + 180.0) / 15.0
    lst = math.fmod(gmst0 + ut + lon / 15.0 + 48.0, 24.0)

    ha = 15.0 * lst - ra
    g = rad * math.atan(math.tan(gclat / rad) / math.cos(ha / rad))
    top_ra = ra - mpar * rho * math.cos(gclat / rad) * math.sin(ha / rad) / math.cos(dec / rad)
    top_dec = dec - mpar * rho * math.sin(gclat / rad) * math.sin((g - dec) / rad) / math.sin(g / rad)

    ha = 15.0 * lst - top_ra
    if ha > 180.0:
        ha -= 360.0
    if ha < -180.0:
        ha += 360.0

    pi = 0.5 * _TWO_PI
    pio2 = 0.5 * pi
    az, el = dcoord(pi, pio2 - lat / rad, 0.0, lat / rad, ha * _TWO_PI / 360, top_dec / rad)

    return MoonPosition(
        ra=ra,
        dec=dec,
        top_ra=top_ra,
        top_dec=top_dec,
        lst=lst,
        ha=ha,
        az=az * rad,
        el=el * rad,
        dist=dist,
    )