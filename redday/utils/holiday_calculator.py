# -*- coding: utf-8 -*-
"""
节假日日期计算工具
输入：规则 + 年份；输出：公历日期（无法计算时返回 None）

纯函数，无 I/O、无共享状态。
"""

import calendar
import math
from datetime import date, timedelta

from lunardate import LunarDate

from redday.models.rule import (
    Astronomical,
    EasterOffset,
    FixedDate,
    LunarMonthDay,
    NthWeekday,
    WeekdayInRange,
)

# lunardate 内置数据表覆盖的年份范围
LUNAR_MIN_YEAR = 1900
LUNAR_MAX_YEAR = 2099

# 天文事件近似公式的基准日（2000 年）
# 日期 = 基准 + 0.2422 * (年份 - 2000) - floor((年份 - 2000) / 4)
ASTRONOMICAL_BASE_DAY = {
    3: 20.2088,   # 春分
    6: 20.9126,   # 夏至
    9: 22.5444,   # 秋分
    12: 21.4800,  # 冬至
}


def weekday_number(day):
    """返回 1=周日 ... 7=周六 的星期编号"""
    return day.isoweekday() % 7 + 1


def easter_sunday(year):
    """
    计算复活节（格里高利历匿名算法）

    参考值: 2024-03-31, 2025-04-20, 2026-04-05
    """
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = (h + l - 7 * m + 114) % 31 + 1
    return date(year, month, day)


def find_weekday_in_range(year, month, weekday, range_start, range_end):
    """
    在当月 [range_start, range_end] 内从前往后找第一个指定星期几

    区间不足 7 天且不包含该星期几时返回 None
    """
    try:
        current = date(year, month, range_start)
    except ValueError:
        return None

    while current.month == month and current.day <= range_end:
        if weekday_number(current) == weekday:
            return current
        current += timedelta(days=1)
    return None


def find_nth_weekday(year, month, weekday, ordinal):
    """
    查找当月第 N 个星期几

    ordinal >= 1: 从 1 号往后数；当月不足 N 个时返回 None
    ordinal == -1: 从月末往前最多找 7 天
    """
    if ordinal == -1:
        try:
            current = date(year, month, calendar.monthrange(year, month)[1])
        except ValueError:
            return None
        for _ in range(7):
            if weekday_number(current) == weekday:
                return current
            current -= timedelta(days=1)
        return None

    if ordinal < 1:
        return None

    try:
        current = date(year, month, 1)
    except ValueError:
        return None

    count = 0
    while current.month == month:
        if weekday_number(current) == weekday:
            count += 1
            if count == ordinal:
                return current
        current += timedelta(days=1)
    return None


def lunar_to_gregorian(year, lunar_month, lunar_day):
    """
    将农历月日映射到公历年份中

    以公历 6 月 15 日所在的农历年为准（与该公历年重叠最多的农历年），
    不处理闰月。超出 lunardate 数据范围或日期不存在时返回 None。
    """
    if not LUNAR_MIN_YEAR <= year <= LUNAR_MAX_YEAR:
        return None

    try:
        lunar_year = LunarDate.fromSolarDate(year, 6, 15).year
        return LunarDate(lunar_year, lunar_month, lunar_day).toSolarDate()
    except (ValueError, IndexError):
        return None


def astronomical_date(year, month):
    """
    春分/夏至/秋分/冬至的近似日期，误差约一天，仅用于日历展示

    算法与清明节的节气公式同源：
    日 = 基准 + 0.2422 * Y - floor(Y / 4)，Y = 年份 - 2000，结果取整
    """
    base = ASTRONOMICAL_BASE_DAY.get(month)
    if base is None:
        return None

    y = year - 2000
    day = int(base + 0.2422 * y - math.floor(y / 4))

    try:
        return date(year, month, day)
    except ValueError:
        return None


def calculate_date(rule, year):
    """
    计算规则在指定年份的日期

    参数缺失或日期无法构造时返回 None（表示该年没有这个节日），不抛异常
    """
    schedule = rule.schedule

    try:
        if isinstance(schedule, FixedDate):
            if schedule.month is None or schedule.day is None:
                return None
            return date(year, schedule.month, schedule.day)

        if isinstance(schedule, EasterOffset):
            if schedule.days_offset is None:
                return None
            return easter_sunday(year) + timedelta(days=schedule.days_offset)

        if isinstance(schedule, WeekdayInRange):
            if None in (schedule.month, schedule.weekday, schedule.range_start, schedule.range_end):
                return None
            return find_weekday_in_range(
                year, schedule.month, schedule.weekday,
                schedule.range_start, schedule.range_end,
            )

        if isinstance(schedule, NthWeekday):
            if None in (schedule.month, schedule.weekday, schedule.ordinal):
                return None
            return find_nth_weekday(year, schedule.month, schedule.weekday, schedule.ordinal)

        if isinstance(schedule, LunarMonthDay):
            if schedule.month is None or schedule.day is None:
                return None
            return lunar_to_gregorian(year, schedule.month, schedule.day)

        if isinstance(schedule, Astronomical):
            if schedule.month is None:
                return None
            return astronomical_date(year, schedule.month)
    except (TypeError, ValueError, OverflowError):
        return None

    return None
