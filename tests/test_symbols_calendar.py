"""Tests for the symbol tables, time buckets, and calendar helpers."""

from __future__ import annotations

import unittest

from sizhu.astro_calendar import (
    date_from_day_number,
    day_number,
    day_of_week,
    days_between,
    is_valid_date,
    parse_birth_date,
    parse_birth_time,
    validate_date,
)
from sizhu.errors import InvalidDate, InvalidInput
from sizhu.symbols import (
    BRANCH_BY_PINYIN,
    EARTHLY_BRANCHES,
    HEAVENLY_STEMS,
    SHI_CHEN,
    Element,
    Polarity,
    branch_at,
    find_time_bucket,
    parse_ganzhi,
    shi_chen_index,
    stem_at,
)


class TestSymbolTables(unittest.TestCase):
    def test_table_sizes_and_order(self) -> None:
        self.assertEqual("".join(s.chinese for s in HEAVENLY_STEMS), "甲乙丙丁戊己庚辛壬癸")
        self.assertEqual("".join(b.chinese for b in EARTHLY_BRANCHES), "子丑寅卯辰巳午未申酉戌亥")
        self.assertEqual([s.index for s in HEAVENLY_STEMS], list(range(10)))
        self.assertEqual([b.index for b in EARTHLY_BRANCHES], list(range(12)))

    def test_stem_polarity_alternates(self) -> None:
        for stem in HEAVENLY_STEMS:
            expected = Polarity.YANG if stem.index % 2 == 0 else Polarity.YIN
            self.assertEqual(stem.polarity, expected)

    def test_lookups(self) -> None:
        self.assertEqual(BRANCH_BY_PINYIN["Wu"].animal, "Horse")
        self.assertEqual(stem_at(12).chinese, "丙")
        self.assertEqual(branch_at(-1).chinese, "亥")
        self.assertEqual(HEAVENLY_STEMS[0].element, Element.WOOD)

    def test_parse_ganzhi(self) -> None:
        stem, branch = parse_ganzhi(" 甲子 ")
        self.assertEqual((stem.index, branch.index), (0, 0))
        self.assertIsNone(parse_ganzhi("子甲"))
        self.assertIsNone(parse_ganzhi("甲"))


class TestTimeBuckets(unittest.TestCase):
    def test_exactly_one_wrapping_bucket(self) -> None:
        wrapping = [b for b in SHI_CHEN if b.wraps]
        self.assertEqual(len(wrapping), 1)
        self.assertEqual((wrapping[0].start, wrapping[0].end, wrapping[0].index), (23, 1, 0))

    def test_every_hour_matches_exactly_one_bucket(self) -> None:
        for hour in range(24):
            with self.subTest(hour=hour):
                matches = [b for b in SHI_CHEN if b.contains(hour)]
                self.assertEqual(len(matches), 1)
                self.assertIs(find_time_bucket(hour), matches[0])

    def test_bucket_boundaries(self) -> None:
        self.assertEqual(shi_chen_index(0), 0)
        self.assertEqual(shi_chen_index(1), 1)
        self.assertEqual(shi_chen_index(2), 1)
        self.assertEqual(shi_chen_index(11), 6)
        self.assertEqual(shi_chen_index(22), 11)
        self.assertEqual(shi_chen_index(23), 0)
        self.assertEqual(find_time_bucket(13).name, "未时")

    def test_hour_out_of_range(self) -> None:
        for hour in (-1, 24, 100):
            with self.subTest(hour=hour):
                with self.assertRaises(InvalidInput):
                    find_time_bucket(hour)


class TestDayNumbers(unittest.TestCase):
    def test_known_day_numbers(self) -> None:
        self.assertEqual(day_number(2000, 1, 1), 2451545)
        self.assertEqual(day_number(1900, 1, 1), 2415021)

    def test_round_trip_through_a_year(self) -> None:
        first = day_number(2024, 1, 1)
        for jdn in range(first, first + 366):
            y, m, d = date_from_day_number(jdn)
            with self.subTest(date=(y, m, d)):
                self.assertTrue(is_valid_date(y, m, d))
                self.assertEqual(day_number(y, m, d), jdn)
        self.assertEqual(date_from_day_number(first + 365), (2024, 12, 31))

    def test_days_between(self) -> None:
        self.assertEqual(days_between((1900, 1, 1), (1990, 1, 1)), 32872)
        self.assertEqual(days_between((1900, 1, 1), (1899, 12, 31)), -1)

    def test_invalid_triples(self) -> None:
        for triple in ((2021, 2, 29), (2023, 4, 31), (2023, 6, 0), (2023, 13, 1), (2023, 0, 1)):
            with self.subTest(triple=triple):
                self.assertFalse(is_valid_date(*triple))
                with self.assertRaises(InvalidDate):
                    validate_date(*triple)

    def test_day_of_week(self) -> None:
        self.assertEqual(day_of_week(2026, 2, 15)["day_name"], "Sunday")
        self.assertEqual(day_of_week(1990, 1, 1)["day_number"], 0)
        self.assertEqual(day_of_week(1990, 1, 1)["date"], "1990-01-01")


class TestParsing(unittest.TestCase):
    def test_parse_birth_date(self) -> None:
        self.assertEqual(parse_birth_date("1990-01-01"), (1990, 1, 1))
        self.assertEqual(parse_birth_date(" 2024-2-9 "), (2024, 2, 9))

    def test_parse_birth_date_rejects_bad_shapes(self) -> None:
        for value in ("", "   ", "1990-01", "1990-01-01-01", "1990-Jan-01", "1_990-01-01", "+1990-01-01", "1990-01-"):
            with self.subTest(value=value):
                with self.assertRaises(InvalidInput):
                    parse_birth_date(value)

    def test_parse_birth_time(self) -> None:
        self.assertEqual(parse_birth_time("12:30"), (12, 30))
        self.assertEqual(parse_birth_time("08"), (8, 0))
        self.assertEqual(parse_birth_time("8pm"), (8, 0))
        self.assertEqual(parse_birth_time("xx:45"), (0, 45))
        self.assertEqual(parse_birth_time("9:"), (9, 0))

    def test_parse_birth_time_rejects_empty(self) -> None:
        with self.assertRaises(InvalidInput):
            parse_birth_time("")


if __name__ == "__main__":
    unittest.main()
