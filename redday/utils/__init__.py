# -*- coding: utf-8 -*-
"""
redday.utils 包初始化
"""

from redday.utils.holiday_calculator import calculate_date, easter_sunday

__all__ = [
    'calculate_date',
    'easter_sunday'
]
