# -*- coding: utf-8 -*-
"""
变更日志路由（只读）
"""

from flask import Blueprint, current_app, jsonify, request

changelog_bp = Blueprint('changelog', __name__)


@changelog_bp.route('/api/changelog')
def get_changelog():
    """获取变更日志，最新的在前；可按地区、规则过滤或限制条数"""
    changelog = current_app.extensions["changelog"]

    region = request.args.get('region')
    rule_id = request.args.get('rule_id')
    limit = request.args.get('limit', type=int)

    if rule_id:
        entries = changelog.for_rule(rule_id)
    elif region:
        entries = changelog.for_region(region.upper())
    else:
        entries = changelog.fetch_all()

    if limit is not None:
        entries = entries[:max(limit, 0)]

    return jsonify({"success": True, "data": [entry.to_dict() for entry in entries]})
