"""
Fixed symbol tables for Four Pillars computation.

Holds:
- The 10 Heavenly Stems and 12 Earthly Branches, in cycle order
- The 12 shi chen time buckets that partition the day
- Lookup helpers by symbol and by pinyin

Every table here is an immutable module constant. Nothing in this module
depends on a date.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sizhu.errors import InvalidInput


STEM_COUNT = 10
BRANCH_COUNT = 12
SEXAGENARY_COUNT = 60


# ============================================================
# FUNDAMENTAL DATA STRUCTURES
# ============================================================

class Polarity(Enum):
    YANG = "yang"
    YIN = "yin"


class Element(Enum):
    WOOD = "wood"
    FIRE = "fire"
    EARTH = "earth"
    METAL = "metal"
    WATER = "water"


@dataclass(frozen=True)
class HeavenlyStem:
    chinese: str
    pinyin: str
    element: Element
    polarity: Polarity
    index: int  # 0-9 in the cycle

    def __str__(self):
        return f"{self.pinyin} ({self.polarity.value} {self.element.value})"


@dataclass(frozen=True)
class EarthlyBranch:
    chinese: str
    pinyin: str
    animal: str
    element: Element
    polarity: Polarity
    index: int  # 0-11 in the cycle

    def __str__(self):
        return f"{self.pinyin} ({self.animal})"


@dataclass(frozen=True)
class TimeBucket:
    """A two-hour shi chen window. ``start > end`` marks the bucket spanning midnight."""
    start: int
    end: int
    name: str
    index: int  # branch index of the bucket

    @property
    def wraps(self) -> bool:
        return self.start > self.end

    def contains(self, hour: int) -> bool:
        if self.wraps:
            return hour >= self.start or hour < self.end
        return self.start <= hour < self.end


# ============================================================
# STEM AND BRANCH DEFINITIONS
# ============================================================

HEAVENLY_STEMS = (
    HeavenlyStem("甲", "Jia", Element.WOOD, Polarity.YANG, 0),
    HeavenlyStem("乙", "Yi", Element.WOOD, Polarity.YIN, 1),
    HeavenlyStem("丙", "Bing", Element.FIRE, Polarity.YANG, 2),
    HeavenlyStem("丁", "Ding", Element.FIRE, Polarity.YIN, 3),
    HeavenlyStem("戊", "Wu", Element.EARTH, Polarity.YANG, 4),
    HeavenlyStem("己", "Ji", Element.EARTH, Polarity.YIN, 5),
    HeavenlyStem("庚", "Geng", Element.METAL, Polarity.YANG, 6),
    HeavenlyStem("辛", "Xin", Element.METAL, Polarity.YIN, 7),
    HeavenlyStem("壬", "Ren", Element.WATER, Polarity.YANG, 8),
    HeavenlyStem("癸", "Gui", Element.WATER, Polarity.YIN, 9),
)

EARTHLY_BRANCHES = (
    EarthlyBranch("子", "Zi", "Rat", Element.WATER, Polarity.YANG, 0),
    EarthlyBranch("丑", "Chou", "Ox", Element.EARTH, Polarity.YIN, 1),
    EarthlyBranch("寅", "Yin", "Tiger", Element.WOOD, Polarity.YANG, 2),
    EarthlyBranch("卯", "Mao", "Rabbit", Element.WOOD, Polarity.YIN, 3),
    EarthlyBranch("辰", "Chen", "Dragon", Element.EARTH, Polarity.YANG, 4),
    EarthlyBranch("巳", "Si", "Snake", Element.FIRE, Polarity.YIN, 5),
    EarthlyBranch("午", "Wu", "Horse", Element.FIRE, Polarity.YANG, 6),
    EarthlyBranch("未", "Wei", "Goat", Element.EARTH, Polarity.YIN, 7),
    EarthlyBranch("申", "Shen", "Monkey", Element.METAL, Polarity.YANG, 8),
    EarthlyBranch("酉", "You", "Rooster", Element.METAL, Polarity.YIN, 9),
    EarthlyBranch("戌", "Xu", "Dog", Element.EARTH, Polarity.YANG, 10),
    EarthlyBranch("亥", "Hai", "Pig", Element.WATER, Polarity.YIN, 11),
)

# Lookup helpers
STEM_BY_CHINESE = {s.chinese: s for s in HEAVENLY_STEMS}
STEM_BY_PINYIN = {s.pinyin: s for s in HEAVENLY_STEMS}
BRANCH_BY_CHINESE = {b.chinese: b for b in EARTHLY_BRANCHES}
BRANCH_BY_PINYIN = {b.pinyin: b for b in EARTHLY_BRANCHES}
BRANCH_BY_ANIMAL = {b.animal: b for b in EARTHLY_BRANCHES}


# ============================================================
# SHI CHEN (时辰) TIME BUCKETS
# ============================================================
#
# 23:00-00:59 = 子时 (Zi)    01:00-02:59 = 丑时 (Chou)
# 03:00-04:59 = 寅时 (Yin)   05:00-06:59 = 卯时 (Mao)
# 07:00-08:59 = 辰时 (Chen)  09:00-10:59 = 巳时 (Si)
# 11:00-12:59 = 午时 (Wu)    13:00-14:59 = 未时 (Wei)
# 15:00-16:59 = 申时 (Shen)  17:00-18:59 = 酉时 (You)
# 19:00-20:59 = 戌时 (Xu)    21:00-22:59 = 亥时 (Hai)

SHI_CHEN = (
    TimeBucket(23, 1, "子时", 0),
    TimeBucket(1, 3, "丑时", 1),
    TimeBucket(3, 5, "寅时", 2),
    TimeBucket(5, 7, "卯时", 3),
    TimeBucket(7, 9, "辰时", 4),
    TimeBucket(9, 11, "巳时", 5),
    TimeBucket(11, 13, "午时", 6),
    TimeBucket(13, 15, "未时", 7),
    TimeBucket(15, 17, "申时", 8),
    TimeBucket(17, 19, "酉时", 9),
    TimeBucket(19, 21, "戌时", 10),
    TimeBucket(21, 23, "亥时", 11),
)


def find_time_bucket(hour: int) -> TimeBucket:
    """
    Return the shi chen bucket containing a clock hour.

    Args:
        hour: hour in 24h format (0-23)

    Raises:
        InvalidInput: if the hour is outside [0, 24)
    """
    if not 0 <= hour < 24:
        raise InvalidInput(f"Hour must be between 0 and 23, got {hour}")
    for bucket in SHI_CHEN:
        if bucket.contains(hour):
            return bucket
    # Unreachable while SHI_CHEN covers the whole day
    raise InvalidInput(f"No time bucket covers hour {hour}")


def shi_chen_index(hour: int) -> int:
    """Branch index (0-11) of the bucket containing ``hour``."""
    return find_time_bucket(hour).index


def stem_at(index: int) -> HeavenlyStem:
    return HEAVENLY_STEMS[index % STEM_COUNT]


def branch_at(index: int) -> EarthlyBranch:
    return EARTHLY_BRANCHES[index % BRANCH_COUNT]


def parse_ganzhi(label: str) -> Optional[tuple]:
    """
    Split a two-character label like "甲子" into (stem, branch).

    Returns None when either character is not a known symbol.
    """
    label = label.strip()
    if len(label) != 2:
        return None
    stem = STEM_BY_CHINESE.get(label[0])
    branch = BRANCH_BY_CHINESE.get(label[1])
    if stem is None or branch is None:
        return None
    return stem, branch
