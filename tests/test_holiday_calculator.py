# -*- coding: utf-8 -*-
"""节假日日期计算测试"""

from datetime import date

import pytest

from redday.models.catalog import FRI, MON, SAT, SUN, THU
from redday.models.rule import (
    Astronomical,
    EasterOffset,
    FixedDate,
    LunarMonthDay,
    NthWeekday,
    Rule,
    WeekdayInRange,
)
from redday.utils.holiday_calculator import (
    astronomical_date,
    calculate_date,
    easter_sunday,
    find_nth_weekday,
    find_weekday_in_range,
    lunar_to_gregorian,
    weekday_number,
)


def rule_of(schedule):
    return Rule(name="test", schedule=schedule, region="SE")


class TestWeekdayNumber:
    def test_sunday_is_one(self):
        assert weekday_number(date(2025, 6, 1)) == SUN

    def test_saturday_is_seven(self):
        assert weekday_number(date(2025, 6, 21)) == SAT


class TestFixed:
    def test_christmas_eve(self):
        assert calculate_date(rule_of(FixedDate(12, 24)), 2025) == date(2025, 12, 24)

    def test_leap_day(self):
        """2 月 29 日只在闰年存在"""
        rule = rule_of(FixedDate(2, 29))
        assert calculate_date(rule, 2024) == date(2024, 2, 29)
        assert calculate_date(rule, 2025) is None

    def test_impossible_date(self):
        assert calculate_date(rule_of(FixedDate(2, 30)), 2025) is None

    def test_missing_params(self):
        assert calculate_date(rule_of(FixedDate(None, 24)), 2025) is None


class TestEaster:
    @pytest.mark.parametrize("year, expected", [
        (2024, date(2024, 3, 31)),
        (2025, date(2025, 4, 20)),
        (2026, date(2026, 4, 5)),
        (2019, date(2019, 4, 21)),
        (2000, date(2000, 4, 23)),
    ])
    def test_reference_dates(self, year, expected):
        assert easter_sunday(year) == expected

    def test_always_sunday(self):
        for year in range(1900, 2100):
            assert weekday_number(easter_sunday(year)) == SUN

    def test_offsets(self):
        """耶稣受难日、耶稣升天节、圣灵降临节"""
        assert calculate_date(rule_of(EasterOffset(-2)), 2025) == date(2025, 4, 18)
        assert calculate_date(rule_of(EasterOffset(39)), 2025) == date(2025, 5, 29)
        assert calculate_date(rule_of(EasterOffset(49)), 2025) == date(2025, 6, 8)

    def test_missing_offset(self):
        assert calculate_date(rule_of(EasterOffset(None)), 2025) is None


class TestFloating:
    def test_midsummer_day_is_saturday_in_range(self):
        rule = rule_of(WeekdayInRange(6, SAT, 20, 26))
        for year in range(2000, 2031):
            result = calculate_date(rule, year)
            assert result.month == 6
            assert 20 <= result.day <= 26
            assert weekday_number(result) == SAT

    def test_midsummer_eve(self):
        rule = rule_of(WeekdayInRange(6, FRI, 19, 25))
        assert calculate_date(rule, 2025) == date(2025, 6, 20)
        assert calculate_date(rule, 2024) == date(2024, 6, 21)

    def test_short_range_without_weekday(self):
        """6 月 20-22 日在 2029 年不含周六"""
        assert find_weekday_in_range(2029, 6, SAT, 20, 22) is None

    def test_first_day_of_icelandic_summer(self):
        rule = rule_of(WeekdayInRange(4, THU, 19, 25))
        assert calculate_date(rule, 2025) == date(2025, 4, 24)


class TestNthWeekday:
    def test_last_sunday_of_may(self):
        rule = rule_of(NthWeekday(5, SUN, -1))
        assert calculate_date(rule, 2025) == date(2025, 5, 25)
        assert calculate_date(rule, 2024) == date(2024, 5, 26)

    def test_second_sunday_of_november(self):
        rule = rule_of(NthWeekday(11, SUN, 2))
        assert calculate_date(rule, 2025) == date(2025, 11, 9)
        assert calculate_date(rule, 2024) == date(2024, 11, 10)

    def test_us_holidays(self):
        assert find_nth_weekday(2024, 11, THU, 4) == date(2024, 11, 28)
        assert find_nth_weekday(2024, 1, MON, 3) == date(2024, 1, 15)
        assert find_nth_weekday(2024, 5, MON, -1) == date(2024, 5, 27)

    def test_fifth_occurrence_missing(self):
        """2025 年 2 月只有 4 个周一"""
        assert find_nth_weekday(2025, 2, MON, 5) is None

    def test_zero_ordinal(self):
        assert find_nth_weekday(2025, 2, MON, 0) is None


class TestLunar:
    @pytest.mark.parametrize("year, month, day, expected", [
        (2025, 1, 1, date(2025, 1, 29)),
        (2024, 1, 1, date(2024, 2, 10)),
        (2025, 8, 15, date(2025, 10, 6)),
        (2024, 8, 15, date(2024, 9, 17)),
    ])
    def test_known_dates(self, year, month, day, expected):
        assert calculate_date(rule_of(LunarMonthDay(month, day)), year) == expected

    def test_out_of_table_range(self):
        assert lunar_to_gregorian(1899, 1, 1) is None
        assert lunar_to_gregorian(2100, 1, 1) is None

    def test_invalid_lunar_month(self):
        assert lunar_to_gregorian(2025, 13, 1) is None


class TestAstronomical:
    @pytest.mark.parametrize("year, month, reference_day", [
        (2024, 3, 20), (2024, 6, 20), (2024, 9, 22), (2024, 12, 21),
        (2025, 3, 20), (2025, 6, 21), (2025, 9, 22), (2025, 12, 21),
        (2026, 3, 20), (2026, 6, 21), (2026, 9, 23), (2026, 12, 21),
    ])
    def test_within_one_day(self, year, month, reference_day):
        result = calculate_date(rule_of(Astronomical(month)), year)
        assert result.month == month
        assert abs(result.day - reference_day) <= 1

    def test_unsupported_month(self):
        assert astronomical_date(2025, 4) is None
