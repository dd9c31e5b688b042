# -*- coding: utf-8 -*-
"""
节假日规则变更日志服务
只追加：每种操作一个记录入口，不提供修改或删除

写入失败只记录日志，不会阻塞或回滚正在记录的规则修改。
"""

import itertools
import logging
import threading
import uuid
from datetime import datetime

from redday.config import APP_VERSION
from redday.exceptions import StorageError
from redday.models.changelog import ChangeAction, ChangeLogEntry, ChangeSource
from redday.models.rule import serialize_snapshot, snapshot

logger = logging.getLogger(__name__)

# 日期相关字段，变更描述中作为一组报告
DATE_FIELDS = (
    "type", "month", "day", "daysOffset", "weekday", "ordinal",
    "dayRangeStart", "dayRangeEnd",
)

REGION_NAMES = {
    "SE": "Sweden",
    "US": "United States",
    "VN": "Vietnam",
    "CUSTOM": "Custom",
    "ALL": "All Regions",
}


def region_name(code):
    return REGION_NAMES.get(code, code)


def describe_changes(before, after):
    """
    对比两份快照，生成变更摘要

    只报告跟踪的字段：名称、法定假日标记、日期规则（整组）、图标
    """
    changes = []

    if before.get("name") != after.get("name"):
        changes.append(f"name: '{before.get('name')}' → '{after.get('name')}'")

    if before.get("isBankHoliday") != after.get("isBankHoliday"):
        old_kind = "Holiday" if before.get("isBankHoliday") else "Observance"
        new_kind = "Holiday" if after.get("isBankHoliday") else "Observance"
        changes.append(f"type: {old_kind} → {new_kind}")

    if any(before.get(key) != after.get(key) for key in DATE_FIELDS):
        changes.append("date changed")

    if before.get("symbolName") != after.get("symbolName"):
        changes.append("icon changed")

    return ", ".join(changes) if changes else "minor changes"


class ChangeLog:
    """
    变更日志

    参数:
        store: 提供 append(entry) / load() 的日志存储
        clock: 返回当前时间的函数（测试时可注入）
    """

    def __init__(self, store, clock=datetime.now):
        self.store = store
        self.clock = clock
        self._lock = threading.Lock()
        self._sequence = itertools.count(self._next_sequence_start())

    def _next_sequence_start(self):
        try:
            entries = self.store.load()
        except StorageError as e:
            logger.warning(f"[变更日志] 读取失败: {e}")
            return 1
        return max((entry.sequence for entry in entries), default=0) + 1

    def _append(self, action, source, rule_id, rule_name, region, description,
                before_json=None, after_json=None, notes=None):
        with self._lock:
            entry = ChangeLogEntry(
                id=uuid.uuid4().hex,
                timestamp=self.clock(),
                sequence=next(self._sequence),
                action=ChangeAction(action),
                source=ChangeSource(source),
                rule_id=rule_id,
                rule_name=rule_name,
                region=region,
                description=description,
                before_json=before_json,
                after_json=after_json,
                notes=notes,
                app_version=APP_VERSION,
            )
            try:
                self.store.append(entry)
            except StorageError as e:
                logger.error(f"[变更日志] 写入失败 ({entry.action.value} {rule_id}): {e}")
                return None

        logger.debug(f"[变更日志] {entry.action.value} {rule_id}: {description}")
        return entry

    # ==================== 记录入口 ====================

    def log_created(self, rule, source=ChangeSource.USER, notes=None):
        return self._append(
            ChangeAction.CREATED, source, rule.rule_id, rule.name, rule.region,
            f"Created '{rule.name}' in {region_name(rule.region)}",
            after_json=serialize_snapshot(rule),
            notes=notes,
        )

    def log_modified(self, rule, before, source=ChangeSource.USER, notes=None):
        """before 为修改前的快照（dict）"""
        after = snapshot(rule)
        return self._append(
            ChangeAction.MODIFIED, source, rule.rule_id, rule.name, rule.region,
            f"Modified '{rule.name}': {describe_changes(before, after)}",
            before_json=serialize_snapshot(before),
            after_json=serialize_snapshot(after),
            notes=notes,
        )

    def log_deleted(self, rule, source=ChangeSource.USER, notes=None):
        return self._append(
            ChangeAction.DELETED, source, rule.rule_id, rule.name, rule.region,
            f"Deleted '{rule.name}' from {region_name(rule.region)}",
            before_json=serialize_snapshot(rule),
            notes=notes,
        )

    def log_enabled(self, rule, source=ChangeSource.USER):
        return self._append(
            ChangeAction.ENABLED, source, rule.rule_id, rule.name, rule.region,
            f"Enabled '{rule.name}'",
        )

    def log_disabled(self, rule, source=ChangeSource.USER):
        return self._append(
            ChangeAction.DISABLED, source, rule.rule_id, rule.name, rule.region,
            f"Disabled '{rule.name}'",
        )

    def log_reset(self, rule, before, source=ChangeSource.USER):
        return self._append(
            ChangeAction.RESET, source, rule.rule_id, rule.name, rule.region,
            f"Reset '{rule.name}' to default",
            before_json=serialize_snapshot(before),
            after_json=serialize_snapshot(rule),
        )

    def log_defaults_loaded(self, region, rules_count, source=ChangeSource.SYSTEM):
        return self._append(
            ChangeAction.DEFAULTS_LOADED, source, f"BATCH-{region}", "Load Defaults", region,
            f"Loaded {rules_count} default rules for {region_name(region)}",
        )

    def log_migration(self, description, affected_rules, region="ALL"):
        now = self.clock()
        return self._append(
            ChangeAction.MIGRATED, ChangeSource.SYSTEM, f"MIGRATION-{now.timestamp():.0f}",
            "System Migration", region,
            f"{description} ({affected_rules} rules)",
        )

    # ==================== 查询 ====================

    def _load_sorted(self):
        try:
            entries = self.store.load()
        except StorageError as e:
            logger.error(f"[变更日志] 读取失败: {e}")
            return []
        return sorted(entries, key=lambda entry: entry.sort_key, reverse=True)

    def fetch_all(self):
        """全部记录，最新的在前"""
        return self._load_sorted()

    def for_region(self, region):
        return [entry for entry in self._load_sorted() if entry.region == region]

    def for_rule(self, rule_id):
        return [entry for entry in self._load_sorted() if entry.rule_id == rule_id]

    def recent(self, limit):
        if limit <= 0:
            return []
        return self._load_sorted()[:limit]
