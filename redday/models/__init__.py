# -*- coding: utf-8 -*-
"""
redday.models 包初始化
"""

from redday.models.rule import (
    RuleType,
    Provenance,
    FixedDate,
    EasterOffset,
    WeekdayInRange,
    NthWeekday,
    LunarMonthDay,
    Astronomical,
    Rule,
    validate
)
from redday.models.catalog import default_rules, supported_regions
from redday.models.changelog import ChangeAction, ChangeSource, ChangeLogEntry

__all__ = [
    'RuleType',
    'Provenance',
    'FixedDate',
    'EasterOffset',
    'WeekdayInRange',
    'NthWeekday',
    'LunarMonthDay',
    'Astronomical',
    'Rule',
    'validate',
    'default_rules',
    'supported_regions',
    'ChangeAction',
    'ChangeSource',
    'ChangeLogEntry'
]
