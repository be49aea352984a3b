"""
BaZi (Four Pillars) computation engine.

Handles:
- Year pillar from a fixed Jia Zi epoch year
- Month pillar from a fixed month-branch table and the Five Tigers rule
- Day pillar from an epoch-anchored Julian Day count
- Hour pillar from the shi chen buckets and the Five Rats rule
- Validation of caller input and assembly of the combined record

Design principle: This module COMPUTES. It does not interpret, render,
or persist. Callers get an immutable FourPillarsRecord back.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sizhu.astro_calendar import (
    day_number, day_of_week, parse_birth_date, parse_birth_time, validate_date,
)
from sizhu.errors import InvalidDate, InvalidInput
from sizhu.symbols import (
    BRANCH_COUNT, EARTHLY_BRANCHES, HEAVENLY_STEMS, SEXAGENARY_COUNT, STEM_COUNT,
    EarthlyBranch, HeavenlyStem, find_time_bucket,
)

logger = logging.getLogger("sizhu")


# ============================================================
# EPOCHS AND DERIVATION TABLES
# ============================================================

# 1984 was a Jia Zi year: stem 0, branch 0
YEAR_EPOCH = 1984

# 1900-01-01 sits at stem 6, branch 8 under this table's numbering
DAY_EPOCH = (1900, 1, 1)
DAY_EPOCH_STEM = 6
DAY_EPOCH_BRANCH = 8

# Calendar month (1-12) -> month branch index. Month 1 is the Tiger (寅) month.
MONTH_BRANCHES = (2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 0, 1)

# Five Tigers Escape (五虎遁): year stem index -> stem of the Tiger month
#   Jia/Ji → Bing, Yi/Geng → Wu, Bing/Xin → Geng, Ding/Ren → Ren, Wu/Gui → Jia
TIGER_START_STEMS = (2, 4, 6, 8, 0, 2, 4, 6, 8, 0)

# Five Rats Escape (五鼠遁): day stem index -> stem of the Zi hour
#   Jia/Ji → Jia, Yi/Geng → Bing, Bing/Xin → Wu, Ding/Ren → Geng, Wu/Gui → Ren
RAT_START_STEMS = (0, 2, 4, 6, 8, 0, 2, 4, 6, 8)

POSITIONS = ("year", "month", "day", "hour")


# ============================================================
# RECORD TYPES
# ============================================================

@dataclass(frozen=True)
class Pillar:
    stem: HeavenlyStem
    branch: EarthlyBranch
    position: str  # "year", "month", "day", "hour"
    name: Optional[str] = None  # shi chen name, hour pillar only

    def __post_init__(self):
        # Only same-parity pairs occur in the 60-cycle
        if self.stem.index % 2 != self.branch.index % 2:
            raise ValueError(
                f"{self.stem.chinese}{self.branch.chinese} is not a pair in the sexagenary cycle"
            )

    @property
    def full(self) -> str:
        return self.stem.chinese + self.branch.chinese

    @property
    def sexagenary_index(self) -> int:
        """Position 0-59 in the Jia Zi cycle."""
        # n ≡ stem (mod 10) and n ≡ branch (mod 12)
        return (6 * self.stem.index - 5 * self.branch.index) % SEXAGENARY_COUNT

    def __str__(self):
        return f"{self.stem.pinyin} {self.branch.pinyin} ({self.stem.polarity.value} {self.stem.element.value} {self.branch.animal})"

    def to_dict(self):
        out = {
            "position": self.position,
            "stem": self.stem.chinese,
            "branch": self.branch.chinese,
            "full": self.full,
            "stem_index": self.stem.index,
            "branch_index": self.branch.index,
            "pinyin": f"{self.stem.pinyin} {self.branch.pinyin}",
            "element": self.stem.element.value,
            "polarity": self.stem.polarity.value,
            "animal": self.branch.animal,
            "description": str(self),
        }
        if self.name is not None:
            out["name"] = self.name
        return out


@dataclass(frozen=True)
class BirthInput:
    birth_date: str
    birth_time: str
    gender: Optional[str]
    year: int
    month: int
    day: int
    hour: int
    minute: int

    @classmethod
    def parse(cls, birth_date: str, birth_time: str, gender: Optional[str] = None) -> "BirthInput":
        """
        Build a validated BirthInput from caller strings.

        Raises:
            InvalidInput: missing/empty strings, malformed date, hour or minute out of range
            InvalidDate: the date does not exist on the Gregorian calendar
        """
        year, month, day = parse_birth_date(birth_date)
        hour, minute = parse_birth_time(birth_time)
        validate_date(year, month, day)
        if not 0 <= hour <= 23:
            raise InvalidInput(f"Hour must be between 0 and 23, got {hour}")
        if not 0 <= minute <= 59:
            raise InvalidInput(f"Minute must be between 0 and 59, got {minute}")

        return cls(
            birth_date=birth_date,
            birth_time=birth_time,
            gender=gender,
            year=year,
            month=month,
            day=day,
            hour=hour,
            minute=minute,
        )

    def to_dict(self):
        return {
            "birth_date": self.birth_date,
            "birth_time": self.birth_time,
            "gender": self.gender,
            "year": self.year,
            "month": self.month,
            "day": self.day,
            "hour": self.hour,
            "minute": self.minute,
            "weekday": day_of_week(self.year, self.month, self.day)["day_name"],
        }


@dataclass(frozen=True)
class FourPillarsRecord:
    year: Pillar
    month: Pillar
    day: Pillar
    hour: Pillar
    input: BirthInput

    @property
    def bazi(self) -> str:
        """The four labels, space separated: "庚午 戊寅 壬子 丙午"."""
        return " ".join(p.full for p in self.pillars())

    @property
    def hour_name(self) -> str:
        return self.hour.name

    @property
    def day_master(self) -> HeavenlyStem:
        return self.day.stem

    def pillars(self) -> list:
        return [self.year, self.month, self.day, self.hour]

    def to_dict(self):
        out = {p.position: p.to_dict() for p in self.pillars()}
        out["bazi"] = self.bazi
        out["input"] = self.input.to_dict()
        return out


# ============================================================
# PILLAR COMPUTATION
# ============================================================

def year_pillar(year: int) -> Pillar:
    """
    Compute the Year Pillar.

    The stem and branch are the year's offset from the Jia Zi epoch,
    reduced into the 60-year cycle. No Li Chun adjustment is applied:
    the pillar follows the Gregorian year number.
    """
    offset = (year - YEAR_EPOCH) % SEXAGENARY_COUNT
    return Pillar(
        stem=HEAVENLY_STEMS[offset % STEM_COUNT],
        branch=EARTHLY_BRANCHES[offset % BRANCH_COUNT],
        position="year",
    )


def month_branch_index(month: int) -> int:
    if not 1 <= month <= 12:
        raise InvalidDate(f"Month must be between 1 and 12, got {month}")
    return MONTH_BRANCHES[month - 1]


def month_pillar(year: int, month: int) -> Pillar:
    """
    Compute the Month Pillar using the Five Tigers Escape (Wu Hu Dun) formula.

    The branch comes from the calendar month directly (no solar-term
    boundaries). The stem counts forward from the Tiger month's stem,
    which is fixed by the year stem.

    Args:
        year: Gregorian year
        month: calendar month 1-12

    Raises:
        InvalidDate: month outside 1-12
    """
    branch_index = month_branch_index(month)
    year_stem_index = year_pillar(year).stem.index

    start_stem = TIGER_START_STEMS[year_stem_index]
    # Tiger is branch 2, so subtract 2 to count months from the Tiger month
    stem_index = (start_stem + branch_index - 2) % STEM_COUNT

    return Pillar(
        stem=HEAVENLY_STEMS[stem_index],
        branch=EARTHLY_BRANCHES[branch_index],
        position="month",
    )


def day_pillar(year: int, month: int, day: int) -> Pillar:
    """
    Compute the Day Pillar from the whole-day distance to the 1900-01-01 epoch.

    The distance is a difference of Julian Day Numbers, so it is an exact
    integer for dates on either side of the epoch and Python's modulo keeps
    the indices non-negative.
    """
    days_diff = day_number(year, month, day) - day_number(*DAY_EPOCH)
    return Pillar(
        stem=HEAVENLY_STEMS[(days_diff + DAY_EPOCH_STEM) % STEM_COUNT],
        branch=EARTHLY_BRANCHES[(days_diff + DAY_EPOCH_BRANCH) % BRANCH_COUNT],
        position="day",
    )


def hour_pillar(year: int, month: int, day: int, hour: int) -> Pillar:
    """
    Compute the Hour Pillar using Five Rats Escape (Wu Shu Dun) formula.

    The branch is the shi chen bucket holding ``hour``. The stem counts
    forward from the Zi hour's stem, which is fixed by the day stem.
    Hours 23 and 0 both fall in the Zi bucket and both use the stem of
    the given calendar date; the day does not roll over at 23:00.

    Args:
        year, month, day: calendar date
        hour: hour in 24h format (0-23)

    Raises:
        InvalidInput: hour outside 0-23
    """
    bucket = find_time_bucket(hour)
    day_stem_index = day_pillar(year, month, day).stem.index

    start_stem = RAT_START_STEMS[day_stem_index]
    stem_index = (start_stem + bucket.index) % STEM_COUNT

    return Pillar(
        stem=HEAVENLY_STEMS[stem_index],
        branch=EARTHLY_BRANCHES[bucket.index],
        position="hour",
        name=bucket.name,
    )


# ============================================================
# FULL CHART COMPUTATION
# ============================================================

def compute_pillars(birth: BirthInput) -> FourPillarsRecord:
    """Run the four derivations over already validated input."""
    yp = year_pillar(birth.year)
    dp = day_pillar(birth.year, birth.month, birth.day)
    mp = month_pillar(birth.year, birth.month)
    hp = hour_pillar(birth.year, birth.month, birth.day, birth.hour)
    return FourPillarsRecord(year=yp, month=mp, day=dp, hour=hp, input=birth)


def calculate_bazi(birth_date: str, birth_time: str, gender: Optional[str] = None) -> FourPillarsRecord:
    """
    Compute the Four Pillars for a birth date and time.

    Args:
        birth_date: "YYYY-MM-DD"
        birth_time: "HH:mm" or "HH" (local clock time, no timezone handling)
        gender: opaque tag, echoed back and otherwise unused

    Returns:
        FourPillarsRecord with the four pillars, the combined label,
        and the normalised input.

    Raises:
        InvalidInput: empty or malformed strings, hour out of range
        InvalidDate: the date does not exist
    """
    try:
        birth = BirthInput.parse(birth_date, birth_time, gender)
    except (InvalidInput, InvalidDate) as exc:
        logger.info("Rejected birth data %r %r: %s", birth_date, birth_time, exc)
        raise

    record = compute_pillars(birth)
    logger.debug("Computed %s for %s %s", record.bazi, birth_date, birth_time)
    return record
