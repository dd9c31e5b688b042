# -*- coding: utf-8 -*-
"""
全局配置模块
包含数据文件路径、缓存参数、服务端口等常量
"""

import os

# ==================== 版本 ====================
APP_VERSION = "1.0.0"

# ==================== 数据文件 ====================
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATA_DIR = os.environ.get("REDDAY_DATA_DIR", os.path.join(BASE_DIR, "data"))

RULES_FILE_NAME = "holiday_rules.json"
CHANGELOG_FILE_NAME = "holiday_changelog.jsonl"
SETTINGS_FILE_NAME = "settings.json"

# 旧版本的规则文件放在根目录，启动时自动迁移到 data/ 下
OLD_RULES_FILE = os.path.join(BASE_DIR, RULES_FILE_NAME)

# ==================== 节假日缓存 ====================
# 缓存窗口：当前年份前后各 N 年
DEFAULT_CACHE_SPAN = 2

# 最多同时选择的地区数量
MAX_SELECTED_REGIONS = 2

# 未配置地区时使用的默认地区
DEFAULT_REGION = "SE"

# 缓存年份跨度上限，防止一次重建计算过多年份
MAX_CACHE_SPAN = 10

# 节日名称排序使用的区域设置，空字符串表示使用系统环境（LANG / LC_ALL）
COLLATION_LOCALE = os.environ.get("REDDAY_LOCALE", "")

# ==================== 服务 ====================
SERVER_HOST = os.environ.get("REDDAY_HOST", "0.0.0.0")
SERVER_PORT = int(os.environ.get("REDDAY_PORT", "5000"))
