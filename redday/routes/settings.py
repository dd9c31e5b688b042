# -*- coding: utf-8 -*-
"""
设置相关路由
节假日显示开关、所选地区、缓存年份跨度；修改后立即重建缓存
"""

from flask import Blueprint, current_app, jsonify, request

from redday.config import MAX_CACHE_SPAN

settings_bp = Blueprint('settings', __name__)

SETTING_KEYS = ("show_holidays", "holiday_regions", "holiday_region", "holiday_cache_span")


def _check_values(values):
    """返回错误描述，合法时返回 None"""
    if "show_holidays" in values and not isinstance(values["show_holidays"], bool):
        return "show_holidays 必须是 true 或 false"

    if "holiday_cache_span" in values:
        span = values["holiday_cache_span"]
        # bool 是 int 的子类，需要单独排除
        if isinstance(span, bool) or not isinstance(span, int):
            return "holiday_cache_span 必须是整数"
        if not 0 <= span <= MAX_CACHE_SPAN:
            return f"holiday_cache_span 必须在 0 到 {MAX_CACHE_SPAN} 之间"

    return None


@settings_bp.route('/api/settings', methods=['GET', 'POST'])
def handle_settings():
    """获取或更新节假日设置"""
    settings = current_app.extensions["settings"]

    if request.method == 'POST':
        req_data = request.get_json(silent=True) or {}
        values = {key: req_data[key] for key in SETTING_KEYS if key in req_data}

        error = _check_values(values)
        if error:
            return jsonify({"success": False, "message": error}), 400

        settings.update(**values)
        current_app.extensions["holiday_cache"].rebuild()

    return jsonify({"success": True, "settings": settings.as_dict()})
