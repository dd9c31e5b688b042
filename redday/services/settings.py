# -*- coding: utf-8 -*-
"""
设置模块
节假日显示开关、所选地区、缓存年份跨度，包含旧版单地区设置的迁移
"""

import json
import logging
import os
import threading

from redday.config import DEFAULT_CACHE_SPAN, DEFAULT_REGION, MAX_CACHE_SPAN, MAX_SELECTED_REGIONS
from redday.models.regions import normalize_regions, parse_regions
from redday.services.persistence import atomic_write_json

logger = logging.getLogger(__name__)

# 旧版只支持单个地区，保存为字符串
LEGACY_REGION_KEY = "holiday_region"

DEFAULT_SETTINGS = {
    "show_holidays": True,
    "holiday_regions": [DEFAULT_REGION],
    "holiday_cache_span": DEFAULT_CACHE_SPAN,
}


def migrate_legacy_region(values):
    """
    将旧版单地区设置迁移为地区列表

    只有在没有新格式地区列表时才使用旧值；旧键总会被移除
    """
    legacy = values.pop(LEGACY_REGION_KEY, None)
    if legacy is None:
        return values

    if not values.get("holiday_regions"):
        regions = normalize_regions([legacy])
        if regions:
            values["holiday_regions"] = regions
            logger.info(f"[设置] 旧版地区设置 {legacy!r} 已迁移为 {regions}")
    return values


class SettingsStore:
    """JSON 文件保存的设置；path 为 None 时只保存在内存中"""

    def __init__(self, path=None, initial=None):
        self.path = path
        self._lock = threading.RLock()
        self._values = dict(DEFAULT_SETTINGS)
        self._load()
        if initial:
            self._values.update(migrate_legacy_region(dict(initial)))

    def _load(self):
        if self.path is None or not os.path.exists(self.path):
            return
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                saved = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"[设置] 加载失败，使用默认设置: {e}")
            return

        migrated = LEGACY_REGION_KEY in saved
        self._values.update(migrate_legacy_region(saved))
        if migrated:
            self._save()

    def _save(self):
        if self.path is None:
            return
        try:
            atomic_write_json(self.path, self._values)
        except OSError as e:
            logger.error(f"[设置] 保存失败: {e}")

    def get(self, key, default=None):
        with self._lock:
            return self._values.get(key, default)

    def update(self, **values):
        with self._lock:
            self._values.update(migrate_legacy_region(values))
            self._save()

    def as_dict(self):
        with self._lock:
            return {
                "show_holidays": self.show_holidays(),
                "holiday_regions": self.regions(),
                "holiday_cache_span": self.cache_span(),
            }

    # ==================== 解释后的设置值 ====================

    def show_holidays(self):
        return bool(self.get("show_holidays", True))

    def regions(self):
        """所选地区（最多两个），为空时回退到默认地区"""
        raw = self.get("holiday_regions")
        if isinstance(raw, str):
            regions = parse_regions(raw, MAX_SELECTED_REGIONS)
        else:
            regions = normalize_regions(raw, MAX_SELECTED_REGIONS)
        return regions or [DEFAULT_REGION]

    def cache_span(self):
        try:
            span = int(self.get("holiday_cache_span", DEFAULT_CACHE_SPAN))
        except (TypeError, ValueError):
            return DEFAULT_CACHE_SPAN
        return min(max(span, 0), MAX_CACHE_SPAN)
