# -*- coding: utf-8 -*-
"""
用户编辑规则
流程：修改前快照 -> 写入存储 -> 记录变更日志 -> 重建缓存
"""

import logging
from datetime import datetime

from redday.exceptions import RuleNotFoundError, StorageError
from redday.models.changelog import ChangeSource
from redday.models.rule import (
    PARAM_FIELDS,
    Provenance,
    Rule,
    RuleType,
    parse_snapshot,
    schedule_from_params,
    snapshot,
)

logger = logging.getLogger(__name__)

# 用户可以直接修改的显示字段（存储格式键 -> 属性名）
DISPLAY_FIELDS = {
    "titleOverride": "title_override",
    "symbolName": "symbol_name",
    "iconColor": "icon_color",
    "category": "category",
    "notes": "notes",
    "localName": "local_name",
}


class RuleEditor:
    """
    参数:
        store: 规则存储
        changelog: ChangeLog
        cache: HolidayCacheManager，每次成功修改后重建
        clock: 返回当前时间的函数
    """

    def __init__(self, store, changelog, cache, clock=datetime.now):
        self.store = store
        self.changelog = changelog
        self.cache = cache
        self.clock = clock

    def _require(self, rule_id):
        rule = self.store.get(rule_id)
        if rule is None:
            raise RuleNotFoundError(rule_id)
        return rule

    def create_rule(self, data, source=ChangeSource.USER):
        """
        新建用户规则

        参数:
            data: 存储格式的字典，至少包含 name 和 type

        返回:
            新规则；同名规则已存在或保存失败时返回 None
        """
        # 新规则的标识由地区和名称生成，忽略请求中的 id
        rule = Rule.from_dict({key: value for key, value in data.items() if key != "id"})
        rule.provenance = Provenance.USER_CREATED
        rule.user_modified_at = self.clock()
        rule.default_snapshot = None

        try:
            if self.store.get(rule.rule_id) is not None:
                logger.warning(f"[规则编辑] 规则已存在: {rule.rule_id}")
                return None
            self.store.insert(rule)
        except StorageError as e:
            logger.error(f"[规则编辑] 新建规则失败: {e}")
            return None

        self.changelog.log_created(rule, source=source, notes=data.get("changeNote"))
        self.cache.rebuild()
        return rule

    def update_rule(self, rule_id, changes, source=ChangeSource.USER):
        """
        修改规则

        changes 使用存储格式的键；提供 type 或任一日期参数时整体重建日期规则。
        修改名称不会改变规则标识。
        """
        rule = self._require(rule_id)
        before = snapshot(rule)

        # 名称只是显示字段，标识不变，重新播种时仍能识别用户修改
        if changes.get("name"):
            rule.name = changes["name"]

        if "isBankHoliday" in changes:
            rule.is_bank_holiday = bool(changes["isBankHoliday"])

        for key, attr in DISPLAY_FIELDS.items():
            if key in changes:
                setattr(rule, attr, changes[key])

        if "type" in changes or any(key in changes for key in PARAM_FIELDS):
            params = rule.params()
            params.update({key: changes[key] for key in PARAM_FIELDS if key in changes})
            rule_type = RuleType(changes.get("type", rule.type))
            rule.schedule = schedule_from_params(rule_type, **params)

        rule.mark_user_modified(self.clock())

        try:
            self.store.save(rule)
        except StorageError as e:
            logger.error(f"[规则编辑] 保存规则失败: {e}")
            return None

        self.changelog.log_modified(rule, before, source=source, notes=changes.get("changeNote"))
        self.cache.rebuild()
        return rule

    def delete_rule(self, rule_id, source=ChangeSource.USER, notes=None):
        rule = self._require(rule_id)
        try:
            self.store.delete(rule_id)
        except StorageError as e:
            logger.error(f"[规则编辑] 删除规则失败: {e}")
            return False

        self.changelog.log_deleted(rule, source=source, notes=notes)
        self.cache.rebuild()
        return True

    def set_enabled(self, rule_id, enabled, source=ChangeSource.USER):
        """启用/停用（软删除）规则"""
        rule = self._require(rule_id)
        if rule.is_enabled == enabled:
            return rule

        rule.is_enabled = enabled
        try:
            self.store.save(rule)
        except StorageError as e:
            logger.error(f"[规则编辑] 保存规则失败: {e}")
            return None

        if enabled:
            self.changelog.log_enabled(rule, source=source)
        else:
            self.changelog.log_disabled(rule, source=source)
        self.cache.rebuild()
        return rule

    def reset_to_default(self, rule_id, source=ChangeSource.USER):
        """
        将用户修改过的内置规则恢复为默认值

        返回:
            恢复后的规则；不可恢复时返回 None
        """
        rule = self._require(rule_id)
        defaults = parse_snapshot(rule.default_snapshot) if rule.can_reset_to_default else None
        if defaults is None:
            logger.warning(f"[规则编辑] 无法恢复 {rule_id}：没有默认数据")
            return None

        before = snapshot(rule)

        rule.is_bank_holiday = bool(defaults.get("isBankHoliday", rule.is_bank_holiday))
        rule.title_override = defaults.get("titleOverride")
        rule.symbol_name = defaults.get("symbolName")
        rule.icon_color = defaults.get("iconColor")
        rule.schedule = schedule_from_params(
            defaults.get("type", rule.type),
            **{key: defaults.get(key) for key in PARAM_FIELDS}
        )
        rule.provenance = Provenance.SYSTEM
        rule.user_modified_at = None
        rule.is_enabled = True

        try:
            self.store.save(rule)
        except StorageError as e:
            logger.error(f"[规则编辑] 恢复默认失败: {e}")
            return None

        logger.info(f"[规则编辑] 已将 {rule_id} 恢复为默认值")
        self.changelog.log_reset(rule, before, source=source)
        self.cache.rebuild()
        return rule
