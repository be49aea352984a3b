"""
Calendar utilities for Four Pillars calculations.
Handles proleptic Gregorian day numbers, date validation,
day-of-week computation, and parsing of caller-supplied
date and time strings.

Day arithmetic goes through Swiss Ephemeris Julian Day numbers,
never through zoned timestamps, so DST transitions and local
timezone rules cannot shift a day count.
"""

import logging
import math
import re

import swisseph as swe

from sizhu.errors import InvalidDate, InvalidInput

logger = logging.getLogger("sizhu.calendar")

DAY_NAMES = [
    "Monday", "Tuesday", "Wednesday", "Thursday",
    "Friday", "Saturday", "Sunday",
]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_DIGITS = re.compile(r"[0-9]+")


# ============================================================
# DAY NUMBERS
# ============================================================

def day_number(year: int, month: int, day: int) -> int:
    """
    Julian Day Number of a proleptic Gregorian date.

    swe.julday() at 0h returns a JD ending in .5; adding half a day
    and flooring gives the integer day number for that civil date.
    """
    jd = swe.julday(year, month, day, 0.0, swe.GREG_CAL)
    return math.floor(jd + 0.5)


def date_from_day_number(jdn: int) -> tuple:
    """
    Inverse of day_number(): (year, month, day) for an integer JDN.

    JD ``jdn`` itself is noon of that civil date, far from either
    midnight, so revjul() cannot round onto a neighbouring day.
    """
    year, month, day, _hour = swe.revjul(float(jdn), swe.GREG_CAL)
    return int(year), int(month), int(day)


def days_between(start: tuple, end: tuple) -> int:
    """Signed whole days from ``start`` to ``end``, each a (year, month, day) triple."""
    return day_number(*end) - day_number(*start)


def is_valid_date(year: int, month: int, day: int) -> bool:
    """
    True when (year, month, day) survives a round trip through the calendar.

    The triple is converted to a day number and back; impossible dates
    such as Feb 29 in a common year or Apr 31 normalise onto a different
    date and therefore fail the comparison.
    """
    return date_from_day_number(day_number(year, month, day)) == (year, month, day)


def validate_date(year: int, month: int, day: int) -> None:
    if not is_valid_date(year, month, day):
        raise InvalidDate(f"Invalid date: {year:04d}-{month:02d}-{day:02d}")


def day_of_week(year: int, month: int, day: int) -> dict:
    """
    Returns day of week info for a given date.

    Returns:
        dict with 'date', 'day_name', 'day_number' (0=Monday, 6=Sunday)
    """
    weekday = swe.day_of_week(swe.julday(year, month, day, 12.0, swe.GREG_CAL))
    return {
        "date": f"{year:04d}-{month:02d}-{day:02d}",
        "day_name": DAY_NAMES[weekday],
        "day_number": weekday,
    }


# ============================================================
# INPUT PARSING
# ============================================================

def _lenient_int(text: str):
    """Leading integer of ``text`` (so "08pm" gives 8), or None."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def parse_birth_date(birth_date: str) -> tuple:
    """
    Parse a "YYYY-MM-DD" string into an (year, month, day) triple.

    Only the shape is checked here; whether the triple is a real
    date is left to validate_date().

    Raises:
        InvalidInput: empty string, wrong number of fields, or non-numeric fields
    """
    if not birth_date or not birth_date.strip():
        raise InvalidInput("Birth date and time must not be empty")

    parts = birth_date.strip().split("-")
    if len(parts) != 3 or not all(_DIGITS.fullmatch(p) for p in parts):
        raise InvalidInput(f"Birth date must look like YYYY-MM-DD, got {birth_date!r}")
    year, month, day = (int(p) for p in parts)
    return year, month, day


def parse_birth_time(birth_time: str) -> tuple:
    """
    Parse "HH:mm" or bare "HH" into (hour, minute).

    Parsing is permissive: an unreadable hour becomes 0 and a missing
    or unreadable minute becomes 0. Range checking is the caller's job.

    Raises:
        InvalidInput: empty string
    """
    if not birth_time or not birth_time.strip():
        raise InvalidInput("Birth date and time must not be empty")

    parts = birth_time.strip().split(":")
    hour = _lenient_int(parts[0])
    minute = _lenient_int(parts[1]) if len(parts) > 1 else None
    if hour is None:
        logger.debug("Unreadable hour in %r, using 0", birth_time)
        hour = 0
    if minute is None:
        minute = 0
    return hour, minute
