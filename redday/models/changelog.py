# -*- coding: utf-8 -*-
"""
变更日志模型
每条记录创建后不可修改、不可删除
"""

from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum


class ChangeAction(str, Enum):
    CREATED = "CREATED"          # 新增规则
    MODIFIED = "MODIFIED"        # 编辑规则
    DELETED = "DELETED"          # 删除规则
    ENABLED = "ENABLED"          # 重新启用
    DISABLED = "DISABLED"        # 停用（软删除）
    RESET = "RESET"              # 恢复默认
    MIGRATED = "MIGRATED"        # 系统迁移
    DEFAULTS_LOADED = "DEFAULTS" # 加载默认规则


class ChangeSource(str, Enum):
    USER = "USER"        # 用户操作
    SYSTEM = "SYSTEM"    # 系统播种/迁移
    SYNC = "SYNC"        # 外部同步
    RESTORE = "RESTORE"  # 备份恢复


@dataclass(frozen=True)
class ChangeLogEntry:
    id: str
    timestamp: datetime
    sequence: int
    action: ChangeAction
    source: ChangeSource
    rule_id: str
    rule_name: str
    region: str
    description: str
    before_json: str = None
    after_json: str = None
    notes: str = None
    app_version: str = None

    @property
    def sort_key(self):
        return (self.timestamp, self.sequence)

    def to_dict(self):
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        data["action"] = self.action.value
        data["source"] = self.source.value
        return data

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data["id"],
            timestamp=datetime.fromisoformat(data["timestamp"]),
            sequence=int(data.get("sequence", 0)),
            action=ChangeAction(data["action"]),
            source=ChangeSource(data["source"]),
            rule_id=data["rule_id"],
            rule_name=data["rule_name"],
            region=data["region"],
            description=data["description"],
            before_json=data.get("before_json"),
            after_json=data.get("after_json"),
            notes=data.get("notes"),
            app_version=data.get("app_version"),
        )
