# -*- coding: utf-8 -*-
"""
节假日查询路由
展示层只读访问已发布的缓存
"""

from datetime import date

from flask import Blueprint, current_app, jsonify, request

holidays_bp = Blueprint('holidays', __name__)


def _parse_day(value):
    return date.fromisoformat(value) if value else None


@holidays_bp.route('/api/holidays')
def list_holidays():
    """获取日期区间内的节日，默认当年"""
    cache = current_app.extensions["holiday_cache"]

    try:
        start = _parse_day(request.args.get('start'))
        end = _parse_day(request.args.get('end'))
        focus_year = request.args.get('focus_year', type=int)
    except ValueError:
        return jsonify({"success": False, "message": "日期格式应为 YYYY-MM-DD"}), 400

    year = cache.today().year
    start = start or date(year, 1, 1)
    end = end or date(year, 12, 31)
    if start > end:
        return jsonify({"success": False, "message": "开始日期不能晚于结束日期"}), 400

    # 翻到缓存窗口以外的年份时扩展缓存
    if focus_year is not None:
        cache.ensure_year(focus_year)
    else:
        cache.ensure_year(start.year)
        cache.ensure_year(end.year)

    data = [
        {"date": day.isoformat(), "holidays": [entry.to_dict() for entry in entries]}
        for day, entries in cache.holidays_between(start, end)
    ]
    return jsonify({"success": True, "data": data, "count": len(data)})


@holidays_bp.route('/api/holidays/<day>')
def holidays_on_day(day):
    """获取某一天的节日"""
    cache = current_app.extensions["holiday_cache"]
    try:
        target = date.fromisoformat(day)
    except ValueError:
        return jsonify({"success": False, "message": "日期格式应为 YYYY-MM-DD"}), 400

    cache.ensure_year(target.year)
    entries = cache.holidays_on(target)
    return jsonify({
        "success": True,
        "date": target.isoformat(),
        "is_bank_holiday": any(entry.is_bank_holiday for entry in entries),
        "data": [entry.to_dict() for entry in entries],
    })
