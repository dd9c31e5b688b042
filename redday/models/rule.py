# -*- coding: utf-8 -*-
"""
节假日规则模型
规则只保存"如何计算日期"，不保存具体日期
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

logger = logging.getLogger(__name__)


class RuleType(str, Enum):
    """规则类型，决定哪些参数有意义"""
    FIXED = "fixed"                    # 固定日期，如 12月24日
    EASTER_RELATIVE = "easterRelative" # 相对复活节偏移，如 -2 天
    FLOATING = "floating"              # 日期区间内的某个星期几，如 6月20-26日之间的周六
    NTH_WEEKDAY = "nthWeekday"         # 第 N 个星期几，-1 表示最后一个
    LUNAR = "lunar"                    # 农历月日
    ASTRONOMICAL = "astronomical"      # 春分/夏至/秋分/冬至


class Provenance(str, Enum):
    """规则来源，决定重新播种时是否允许覆盖"""
    SYSTEM = "system"                    # 内置默认规则
    USER_CUSTOMIZED = "user_customized"  # 内置规则被用户修改过
    USER_CREATED = "user_created"        # 用户新建


# 存储格式中的平铺参数名（与旧数据保持一致）
PARAM_FIELDS = (
    "month", "day", "daysOffset", "weekday", "ordinal",
    "dayRangeStart", "dayRangeEnd",
)

# 天文事件只能落在这四个月
ASTRONOMICAL_MONTHS = (3, 6, 9, 12)


# ==================== 日期规则（每种类型一个变体） ====================

@dataclass(frozen=True)
class FixedDate:
    month: int
    day: int

    rule_type = RuleType.FIXED

    def params(self):
        return {"month": self.month, "day": self.day}


@dataclass(frozen=True)
class EasterOffset:
    days_offset: int

    rule_type = RuleType.EASTER_RELATIVE

    def params(self):
        return {"daysOffset": self.days_offset}


@dataclass(frozen=True)
class WeekdayInRange:
    month: int
    weekday: int
    range_start: int
    range_end: int

    rule_type = RuleType.FLOATING

    def params(self):
        return {
            "month": self.month,
            "weekday": self.weekday,
            "dayRangeStart": self.range_start,
            "dayRangeEnd": self.range_end,
        }


@dataclass(frozen=True)
class NthWeekday:
    month: int
    weekday: int
    ordinal: int

    rule_type = RuleType.NTH_WEEKDAY

    def params(self):
        return {"month": self.month, "weekday": self.weekday, "ordinal": self.ordinal}


@dataclass(frozen=True)
class LunarMonthDay:
    month: int
    day: int

    rule_type = RuleType.LUNAR

    def params(self):
        return {"month": self.month, "day": self.day}


@dataclass(frozen=True)
class Astronomical:
    month: int

    rule_type = RuleType.ASTRONOMICAL

    def params(self):
        return {"month": self.month}


def schedule_from_params(rule_type, month=None, day=None, daysOffset=None,
                         weekday=None, ordinal=None, dayRangeStart=None,
                         dayRangeEnd=None):
    """
    根据规则类型和平铺参数构造对应的日期规则

    缺失的必填参数以 None 保留，由 validate() 报告、由计算器返回 None，
    不会在这里抛出异常。不属于该类型的参数会被丢弃。
    """
    rule_type = RuleType(rule_type)

    if rule_type is RuleType.FIXED:
        return FixedDate(month, day)
    if rule_type is RuleType.EASTER_RELATIVE:
        return EasterOffset(daysOffset)
    if rule_type is RuleType.FLOATING:
        return WeekdayInRange(month, weekday, dayRangeStart, dayRangeEnd)
    if rule_type is RuleType.NTH_WEEKDAY:
        return NthWeekday(month, weekday, ordinal)
    if rule_type is RuleType.LUNAR:
        return LunarMonthDay(month, day)
    return Astronomical(month)


def make_rule_id(region, name):
    """规则标识 = 地区代码 + 名称"""
    return f"{region}-{name}"


# ==================== 规则 ====================

@dataclass
class Rule:
    name: str
    schedule: object
    region: str = ""
    is_bank_holiday: bool = False
    title_override: str = None
    symbol_name: str = None
    icon_color: str = None
    category: str = None
    notes: str = None
    local_name: str = None
    provenance: Provenance = Provenance.SYSTEM
    user_modified_at: datetime = None
    is_enabled: bool = True
    default_snapshot: str = None
    rule_id: str = field(init=False)

    def __post_init__(self):
        self.provenance = Provenance(self.provenance)
        self.rule_id = make_rule_id(self.region, self.name)

        # 校验只做提示，不阻止构造
        error = validate(self)
        if error:
            logger.warning(f"[规则校验] '{self.name}': {error}")

    @property
    def type(self):
        return self.schedule.rule_type

    @property
    def is_user_owned(self):
        """用户拥有的规则在重新播种时不可被覆盖"""
        return self.provenance is not Provenance.SYSTEM

    @property
    def is_system_default(self):
        return self.provenance is not Provenance.USER_CREATED

    @property
    def can_reset_to_default(self):
        return (
            self.provenance is Provenance.USER_CUSTOMIZED
            and self.default_snapshot is not None
        )

    def params(self):
        """返回完整的平铺参数，未使用的参数为 None"""
        values = dict.fromkeys(PARAM_FIELDS)
        values.update(self.schedule.params())
        return values

    def rename(self, new_name):
        """旧名称迁移专用：修改名称并重新生成标识；用户编辑名称不改变标识"""
        self.name = new_name
        self.rule_id = make_rule_id(self.region, new_name)

    def mark_user_modified(self, when=None):
        """记录一次用户编辑"""
        if self.provenance is Provenance.SYSTEM:
            self.provenance = Provenance.USER_CUSTOMIZED
        self.user_modified_at = when or datetime.now()

    def to_dict(self):
        """序列化为存储格式"""
        data = snapshot(self)
        data.update({
            "category": self.category,
            "notes": self.notes,
            "localName": self.local_name,
            "provenance": self.provenance.value,
            "userModifiedAt": self.user_modified_at.isoformat() if self.user_modified_at else None,
            "isEnabled": self.is_enabled,
            "defaultSnapshot": self.default_snapshot,
        })
        return data

    @classmethod
    def from_dict(cls, data):
        """从存储格式还原，兼容只有 userModifiedAt 时间戳的旧记录"""
        params = {key: data.get(key) for key in PARAM_FIELDS}
        schedule = schedule_from_params(data.get("type", RuleType.FIXED.value), **params)

        modified_at = data.get("userModifiedAt")
        if modified_at:
            modified_at = datetime.fromisoformat(modified_at)

        provenance = data.get("provenance")
        if provenance is None:
            if modified_at is None:
                provenance = Provenance.SYSTEM
            elif data.get("isSystemDefault", False):
                provenance = Provenance.USER_CUSTOMIZED
            else:
                provenance = Provenance.USER_CREATED

        rule = cls(
            name=data["name"],
            schedule=schedule,
            region=data.get("region", ""),
            is_bank_holiday=bool(data.get("isBankHoliday", False)),
            title_override=data.get("titleOverride"),
            symbol_name=data.get("symbolName"),
            icon_color=data.get("iconColor"),
            category=data.get("category"),
            notes=data.get("notes"),
            local_name=data.get("localName"),
            provenance=provenance,
            user_modified_at=modified_at,
            is_enabled=data.get("isEnabled", True),
            default_snapshot=data.get("defaultSnapshot"),
        )
        # 标识创建后固定，以存储中的值为准
        if data.get("id"):
            rule.rule_id = data["id"]
        return rule

    def copy(self):
        return Rule.from_dict(self.to_dict())


# ==================== 校验 ====================

def validate(rule):
    """
    校验规则参数

    返回:
        None 表示合法，否则返回错误描述字符串
    """
    params = rule.params()
    month = params["month"]
    day = params["day"]
    weekday = params["weekday"]

    if month is not None and not 1 <= month <= 12:
        return f"Month must be between 1 and 12, got {month}"
    if day is not None and not 1 <= day <= 31:
        return f"Day must be between 1 and 31, got {day}"
    if weekday is not None and not 1 <= weekday <= 7:
        return f"Weekday must be between 1 and 7, got {weekday}"

    schedule = rule.schedule

    if isinstance(schedule, FixedDate):
        if month is None or day is None:
            return "Fixed holiday requires month and day"

    elif isinstance(schedule, EasterOffset):
        if schedule.days_offset is None:
            return "Easter-relative holiday requires daysOffset"

    elif isinstance(schedule, WeekdayInRange):
        if None in (month, weekday, schedule.range_start, schedule.range_end):
            return "Floating holiday requires month, weekday, dayRangeStart, and dayRangeEnd"
        if schedule.range_start > schedule.range_end:
            return f"dayRangeStart ({schedule.range_start}) must be <= dayRangeEnd ({schedule.range_end})"
        if schedule.range_end - schedule.range_start < 6:
            return (
                f"Day range {schedule.range_start}-{schedule.range_end} is shorter than a week; "
                f"weekday {weekday} may not occur in some years"
            )

    elif isinstance(schedule, NthWeekday):
        if None in (month, weekday, schedule.ordinal):
            return "Nth weekday holiday requires month, weekday, and ordinal"
        if schedule.ordinal not in (-1, 1, 2, 3, 4):
            return f"Ordinal must be 1-4 or -1 (last), got {schedule.ordinal}"

    elif isinstance(schedule, LunarMonthDay):
        if month is None or day is None:
            return "Lunar holiday requires month and day"

    elif isinstance(schedule, Astronomical):
        if month is None:
            return "Astronomical event requires month (3, 6, 9, or 12)"
        if month not in ASTRONOMICAL_MONTHS:
            return f"Astronomical event month must be 3, 6, 9, or 12 (got {month})"

    return None


# ==================== 快照（变更日志 / 恢复默认） ====================

def snapshot(rule):
    """按固定字段白名单生成规则快照"""
    data = {
        "id": rule.rule_id,
        "name": rule.name,
        "region": rule.region,
        "isBankHoliday": rule.is_bank_holiday,
        "titleOverride": rule.title_override,
        "symbolName": rule.symbol_name,
        "iconColor": rule.icon_color,
        "type": rule.type.value,
    }
    data.update(rule.params())
    return data


def serialize_snapshot(rule_or_snapshot):
    """序列化快照，键按字母序排列，两份快照可以直接做文本对比"""
    data = rule_or_snapshot
    if isinstance(rule_or_snapshot, Rule):
        data = snapshot(rule_or_snapshot)
    return json.dumps(data, sort_keys=True, ensure_ascii=False)


def parse_snapshot(text):
    """解析快照 JSON，失败返回 None"""
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError as e:
        logger.warning(f"[规则快照] 解析失败: {e}")
        return None
