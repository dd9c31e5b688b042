# -*- coding: utf-8 -*-
"""
节假日规则引擎 - Flask 应用工厂

启动流程：迁移旧数据文件 -> 打开存储 -> 播种/合并内置规则 -> 计算缓存 -> 注册路由
"""

import logging
import os

from flask import Flask

from redday.config import (
    CHANGELOG_FILE_NAME,
    DATA_DIR,
    OLD_RULES_FILE,
    RULES_FILE_NAME,
    SETTINGS_FILE_NAME,
)
from redday.routes import changelog_bp, holidays_bp, rules_bp, settings_bp
from redday.services import (
    ChangeLog,
    HolidayCacheManager,
    JsonlChangeLogStore,
    JsonRuleStore,
    RuleEditor,
    SettingsStore,
    migrate_old_data_file,
)
from redday.services.holiday_cache import configure_collation

logger = logging.getLogger(__name__)


def create_app(data_dir=None, today=None, settings=None):
    """
    创建 Flask 应用

    参数:
        data_dir: 数据目录，默认 config.DATA_DIR
        today: 返回当天日期的函数（测试时固定日期）
        settings: 初始设置，覆盖文件中保存的值
    """
    data_dir = data_dir or DATA_DIR
    configure_collation()
    rules_file = os.path.join(data_dir, RULES_FILE_NAME)

    # 只有默认数据目录才需要迁移根目录下的旧文件
    if data_dir == DATA_DIR:
        migrate_old_data_file(OLD_RULES_FILE, rules_file)

    rule_store = JsonRuleStore(rules_file)
    changelog = ChangeLog(JsonlChangeLogStore(os.path.join(data_dir, CHANGELOG_FILE_NAME)))
    settings_store = SettingsStore(os.path.join(data_dir, SETTINGS_FILE_NAME), initial=settings)

    cache_kwargs = {"today": today} if today is not None else {}
    cache = HolidayCacheManager(rule_store, settings_store, changelog, **cache_kwargs)
    editor = RuleEditor(rule_store, changelog, cache)

    app = Flask(__name__)
    app.json.ensure_ascii = False
    app.extensions["rule_store"] = rule_store
    app.extensions["changelog"] = changelog
    app.extensions["settings"] = settings_store
    app.extensions["holiday_cache"] = cache
    app.extensions["rule_editor"] = editor

    # 注册蓝图
    app.register_blueprint(holidays_bp)
    app.register_blueprint(rules_bp)
    app.register_blueprint(changelog_bp)
    app.register_blueprint(settings_bp)

    cache.initialize()
    logger.info(f"[启动] 数据目录: {data_dir}，已缓存年份: {sorted(cache.cached_years)}")
    return app


__all__ = ['create_app']
