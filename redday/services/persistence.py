# -*- coding: utf-8 -*-
"""
数据持久化模块
负责规则与变更日志的保存、加载，包含旧数据文件的自动迁移逻辑
"""

import json
import logging
import os
import shutil
import threading

from redday.exceptions import StorageError
from redday.models.changelog import ChangeLogEntry
from redday.models.rule import Rule

logger = logging.getLogger(__name__)


def atomic_write_json(path, data):
    """使用临时文件进行原子写入"""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    tmp_file = path + ".tmp"
    with open(tmp_file, 'w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
        f.flush()
        os.fsync(f.fileno())  # 确保数据写入物理磁盘

    # 原子替换原文件
    os.replace(tmp_file, path)


def migrate_old_data_file(old_path, new_path):
    """
    自动迁移旧版本数据文件到新位置

    返回:
        True 表示发生了迁移
    """
    # 如果新路径已存在，无需迁移
    if os.path.exists(new_path) or not os.path.exists(old_path):
        return False

    try:
        os.makedirs(os.path.dirname(new_path), exist_ok=True)
        shutil.move(old_path, new_path)
        logger.info(f"[迁移] 数据文件已从 {old_path} 移动到 {new_path}")
        return True
    except OSError as e:
        logger.warning(f"[迁移] 数据文件迁移失败: {e}")

    # 迁移失败时尝试复制
    try:
        shutil.copy2(old_path, new_path)
        logger.info(f"[迁移] 数据文件已复制到 {new_path}（原文件保留）")
        return True
    except OSError as e:
        logger.error(f"[迁移] 数据文件复制也失败: {e}")
        return False


class JsonRuleStore:
    """
    规则存储：按标识读写的键值记录，支持按字段查询

    path 为 None 时只保存在内存中。返回的规则都是副本，
    修改后需要调用 save() 才会生效。
    """

    def __init__(self, path=None):
        self.path = path
        self._lock = threading.RLock()
        self._records = {}
        self._loaded = path is None

    def _ensure_loaded(self):
        if self._loaded:
            return
        if os.path.exists(self.path):
            try:
                with open(self.path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except (OSError, ValueError) as e:
                raise StorageError(f"加载规则失败: {e}") from e
            self._records = {record["id"]: record for record in data.get("rules", [])}
            logger.info(f"[规则存储] 成功加载 {len(self._records)} 条规则")
        self._loaded = True

    def _flush(self, records):
        if self.path is None:
            return
        try:
            atomic_write_json(self.path, {"rules": list(records.values())})
        except OSError as e:
            raise StorageError(f"保存规则失败: {e}") from e

    def _commit(self, records):
        """先写文件，写入成功后才替换内存中的记录，失败时内存保持原状"""
        self._flush(records)
        self._records = records

    def get(self, rule_id):
        with self._lock:
            self._ensure_loaded()
            record = self._records.get(rule_id)
            return Rule.from_dict(record) if record else None

    def all(self):
        with self._lock:
            self._ensure_loaded()
            return [Rule.from_dict(record) for record in self._records.values()]

    def query(self, **fields):
        """按属性过滤，如 query(region="SE")"""
        return [
            rule for rule in self.all()
            if all(getattr(rule, key) == value for key, value in fields.items())
        ]

    def insert(self, rule):
        self.insert_many([rule])

    def insert_many(self, rules):
        """批量插入，只写一次文件"""
        with self._lock:
            self._ensure_loaded()
            records = dict(self._records)
            for rule in rules:
                if rule.rule_id in records:
                    raise StorageError(f"规则已存在: {rule.rule_id}")
                records[rule.rule_id] = rule.to_dict()
            self._commit(records)

    def save(self, rule):
        """新增或覆盖"""
        self.save_many([rule])

    def save_many(self, rules):
        with self._lock:
            self._ensure_loaded()
            records = dict(self._records)
            for rule in rules:
                records[rule.rule_id] = rule.to_dict()
            self._commit(records)

    def rename(self, old_id, rule):
        """标识变更（旧名称迁移）：删除旧键，以新标识保存"""
        with self._lock:
            self._ensure_loaded()
            records = dict(self._records)
            records.pop(old_id, None)
            records[rule.rule_id] = rule.to_dict()
            self._commit(records)

    def delete(self, rule_id):
        with self._lock:
            self._ensure_loaded()
            if rule_id not in self._records:
                return False
            records = dict(self._records)
            del records[rule_id]
            self._commit(records)
            return True


class JsonlChangeLogStore:
    """
    变更日志存储：只追加的 JSON Lines 文件

    不提供修改和删除操作
    """

    def __init__(self, path=None):
        self.path = path
        self._lock = threading.Lock()
        self._memory = []

    def append(self, entry):
        with self._lock:
            if self.path is None:
                self._memory.append(entry)
                return
            try:
                directory = os.path.dirname(self.path)
                if directory:
                    os.makedirs(directory, exist_ok=True)
                with open(self.path, 'a', encoding='utf-8') as f:
                    f.write(json.dumps(entry.to_dict(), ensure_ascii=False) + "\n")
                    f.flush()
                    os.fsync(f.fileno())
            except OSError as e:
                raise StorageError(f"写入变更日志失败: {e}") from e

    def load(self):
        with self._lock:
            if self.path is None:
                return list(self._memory)
            if not os.path.exists(self.path):
                return []

            entries = []
            try:
                with open(self.path, 'r', encoding='utf-8') as f:
                    for line_no, line in enumerate(f, 1):
                        line = line.strip()
                        if not line:
                            continue
                        try:
                            entries.append(ChangeLogEntry.from_dict(json.loads(line)))
                        except (ValueError, KeyError) as e:
                            # 单行损坏不影响其余记录
                            logger.warning(f"[变更日志] 第 {line_no} 行解析失败: {e}")
            except OSError as e:
                raise StorageError(f"读取变更日志失败: {e}") from e
            return entries
