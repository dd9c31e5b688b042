# -*- coding: utf-8 -*-
"""
地区选择
处理用户选择的地区代码：规范化、去重、数量上限，以及 NORDIC 统一地区展开
"""

from redday.config import MAX_SELECTED_REGIONS

NORDIC_CODE = "NORDIC"
NORDIC_COUNTRIES = ("SE", "NO", "DK", "FI", "IS", "GL", "FO")


def normalize_regions(codes, max_count=MAX_SELECTED_REGIONS):
    """去空白、转大写、去重，并截断到 max_count 个"""
    seen = set()
    output = []

    for raw in codes or []:
        code = str(raw).strip().upper()
        if not code or code in seen:
            continue
        seen.add(code)
        output.append(code)
        if len(output) >= max_count:
            break

    return output


def parse_regions(raw_value, max_count=MAX_SELECTED_REGIONS):
    """解析逗号分隔的存储格式，如 "SE,US" """
    if not raw_value:
        return []
    return normalize_regions(raw_value.split(","), max_count)


def format_regions(codes):
    return ",".join(codes)


def expand_regions(codes):
    """将 NORDIC 展开为各北欧国家，查询规则时使用"""
    result = []
    for code in codes:
        if code == NORDIC_CODE:
            result.extend(NORDIC_COUNTRIES)
        else:
            result.append(code)
    return result
