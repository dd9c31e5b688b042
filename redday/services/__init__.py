# -*- coding: utf-8 -*-
"""
redday.services 包初始化
"""

from redday.services.persistence import JsonRuleStore, JsonlChangeLogStore, migrate_old_data_file
from redday.services.settings import SettingsStore
from redday.services.changelog import ChangeLog
from redday.services.holiday_cache import HolidayCacheManager, CacheEntry
from redday.services.rule_editor import RuleEditor

__all__ = [
    'JsonRuleStore',
    'JsonlChangeLogStore',
    'migrate_old_data_file',
    'SettingsStore',
    'ChangeLog',
    'HolidayCacheManager',
    'CacheEntry',
    'RuleEditor'
]
