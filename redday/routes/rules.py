# -*- coding: utf-8 -*-
"""
规则管理路由
包含规则列表、新建、修改、删除、启用/停用、恢复默认、加载默认规则
"""

from flask import Blueprint, current_app, jsonify, request

from redday.exceptions import RuleNotFoundError, StorageError
from redday.models.rule import validate

rules_bp = Blueprint('rules', __name__)


def _editor():
    return current_app.extensions["rule_editor"]


def _rule_json(rule):
    data = rule.to_dict()
    data["validationError"] = validate(rule)
    data["canResetToDefault"] = rule.can_reset_to_default
    return data


@rules_bp.errorhandler(RuleNotFoundError)
def handle_not_found(e):
    return jsonify({"success": False, "message": str(e)}), 404


@rules_bp.route('/api/rules', methods=['GET'])
def list_rules():
    """获取规则列表，可按地区过滤"""
    store = current_app.extensions["rule_store"]
    region = request.args.get('region')
    try:
        rules = store.query(region=region.upper()) if region is not None else store.all()
    except StorageError as e:
        return jsonify({"success": False, "message": str(e)}), 500

    rules.sort(key=lambda rule: (rule.region, rule.name))
    return jsonify({"success": True, "data": [_rule_json(rule) for rule in rules]})


@rules_bp.route('/api/rules', methods=['POST'])
def create_rule():
    """新建用户规则"""
    req_data = request.get_json(silent=True) or {}
    if not req_data.get('name') or not req_data.get('type'):
        return jsonify({"success": False, "message": "name 和 type 为必填项"}), 400

    try:
        rule = _editor().create_rule(req_data)
    except (TypeError, ValueError) as e:
        return jsonify({"success": False, "message": f"规则参数错误: {e}"}), 400

    if rule is None:
        return jsonify({"success": False, "message": "规则已存在或保存失败"}), 409
    return jsonify({"success": True, "data": _rule_json(rule)}), 201


@rules_bp.route('/api/rules/<rule_id>', methods=['PUT'])
def update_rule(rule_id):
    """修改规则"""
    req_data = request.get_json(silent=True) or {}
    try:
        rule = _editor().update_rule(rule_id, req_data)
    except (TypeError, ValueError) as e:
        return jsonify({"success": False, "message": f"规则参数错误: {e}"}), 400

    if rule is None:
        return jsonify({"success": False, "message": "保存失败"}), 500
    return jsonify({"success": True, "data": _rule_json(rule)})


@rules_bp.route('/api/rules/<rule_id>', methods=['DELETE'])
def delete_rule(rule_id):
    if not _editor().delete_rule(rule_id):
        return jsonify({"success": False, "message": "删除失败"}), 500
    return jsonify({"success": True})


@rules_bp.route('/api/rules/<rule_id>/enable', methods=['POST'])
def enable_rule(rule_id):
    rule = _editor().set_enabled(rule_id, True)
    if rule is None:
        return jsonify({"success": False, "message": "保存失败"}), 500
    return jsonify({"success": True, "data": _rule_json(rule)})


@rules_bp.route('/api/rules/<rule_id>/disable', methods=['POST'])
def disable_rule(rule_id):
    rule = _editor().set_enabled(rule_id, False)
    if rule is None:
        return jsonify({"success": False, "message": "保存失败"}), 500
    return jsonify({"success": True, "data": _rule_json(rule)})


@rules_bp.route('/api/rules/<rule_id>/reset', methods=['POST'])
def reset_rule(rule_id):
    """恢复默认值"""
    rule = _editor().reset_to_default(rule_id)
    if rule is None:
        return jsonify({"success": False, "message": "该规则无法恢复默认"}), 400
    return jsonify({"success": True, "data": _rule_json(rule)})


@rules_bp.route('/api/rules/defaults/<region>', methods=['POST'])
def load_defaults(region):
    """为地区补齐缺失的默认规则"""
    cache = current_app.extensions["holiday_cache"]
    inserted = cache.load_defaults(region)
    return jsonify({"success": True, "inserted": inserted})
