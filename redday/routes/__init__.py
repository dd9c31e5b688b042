# -*- coding: utf-8 -*-
"""
redday.routes 包初始化
"""

from redday.routes.holidays import holidays_bp
from redday.routes.rules import rules_bp
from redday.routes.changelog import changelog_bp
from redday.routes.settings import settings_bp

__all__ = [
    'holidays_bp',
    'rules_bp',
    'changelog_bp',
    'settings_bp'
]
