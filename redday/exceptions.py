# -*- coding: utf-8 -*-
"""
异常定义
"""


class ReddayError(Exception):
    """所有业务异常的基类"""


class StorageError(ReddayError):
    """规则/日志存储读写失败"""


class RuleNotFoundError(ReddayError):
    """按标识找不到规则"""

    def __init__(self, rule_id):
        super().__init__(f"规则不存在: {rule_id}")
        self.rule_id = rule_id
