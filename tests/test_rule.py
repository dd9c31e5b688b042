# -*- coding: utf-8 -*-
"""规则模型与校验测试"""

import json
from datetime import datetime

import pytest

from redday.models.catalog import (
    LEGACY_NAME_MIGRATIONS,
    default_rules,
    supported_regions,
)
from redday.models.regions import expand_regions, format_regions, normalize_regions, parse_regions
from redday.models.rule import (
    Astronomical,
    FixedDate,
    NthWeekday,
    Provenance,
    Rule,
    RuleType,
    WeekdayInRange,
    parse_snapshot,
    schedule_from_params,
    serialize_snapshot,
    snapshot,
    validate,
)


class TestValidate:
    def test_month_out_of_range(self):
        rule = Rule(name="x", schedule=FixedDate(13, 1))
        assert validate(rule) == "Month must be between 1 and 12, got 13"

    def test_fixed_requires_day(self):
        rule = Rule(name="x", schedule=FixedDate(5, None))
        assert validate(rule) == "Fixed holiday requires month and day"

    def test_floating_range_reversed(self):
        rule = Rule(name="x", schedule=WeekdayInRange(6, 7, 26, 20))
        assert validate(rule) == "dayRangeStart (26) must be <= dayRangeEnd (20)"

    def test_floating_range_shorter_than_week(self):
        rule = Rule(name="x", schedule=WeekdayInRange(6, 7, 20, 22))
        assert "shorter than a week" in validate(rule)

    def test_ordinal(self):
        rule = Rule(name="x", schedule=NthWeekday(5, 1, 5))
        assert validate(rule) == "Ordinal must be 1-4 or -1 (last), got 5"

    def test_astronomical_month(self):
        rule = Rule(name="x", schedule=Astronomical(4))
        assert validate(rule) == "Astronomical event month must be 3, 6, 9, or 12 (got 4)"

    def test_invalid_rule_still_constructed(self):
        """校验只产生警告，不阻止构造"""
        rule = Rule(name="x", schedule=FixedDate(0, 0), region="SE")
        assert rule.rule_id == "SE-x"

    def test_catalog_rules_are_valid(self):
        for rule in default_rules():
            assert validate(rule) is None, rule.rule_id


class TestScheduleFromParams:
    def test_drops_unrelated_params(self):
        schedule = schedule_from_params("nthWeekday", month=11, day=24, weekday=1, ordinal=2)
        assert schedule == NthWeekday(11, 1, 2)
        assert schedule.rule_type is RuleType.NTH_WEEKDAY

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            schedule_from_params("weekly", month=1)


class TestRule:
    def test_identity_follows_name(self):
        rule = Rule(name="holiday.julafton", schedule=FixedDate(12, 24), region="SE")
        assert rule.rule_id == "SE-holiday.julafton"
        rule.rename("holiday.juldagen")
        assert rule.rule_id == "SE-holiday.juldagen"

    def test_params_are_flat(self):
        rule = Rule(name="x", schedule=FixedDate(12, 24))
        params = rule.params()
        assert params["month"] == 12
        assert params["day"] == 24
        assert params["weekday"] is None

    def test_mark_user_modified(self):
        rule = Rule(name="x", schedule=FixedDate(1, 1))
        when = datetime(2025, 1, 2, 3, 4, 5)
        rule.mark_user_modified(when)
        assert rule.provenance is Provenance.USER_CUSTOMIZED
        assert rule.user_modified_at == when
        assert rule.is_user_owned

    def test_user_created_stays_user_created(self):
        rule = Rule(name="x", schedule=FixedDate(1, 1), provenance=Provenance.USER_CREATED)
        rule.mark_user_modified()
        assert rule.provenance is Provenance.USER_CREATED
        assert not rule.is_system_default

    def test_dict_round_trip(self):
        rule = Rule(
            name="holiday.mors_dag", schedule=NthWeekday(5, 1, -1), region="SE",
            category="family", notes="sista söndagen i maj",
        )
        restored = Rule.from_dict(rule.to_dict())
        assert restored == rule

    def test_stored_identity_kept(self):
        """名称被用户修改后，标识仍以存储的值为准"""
        rule = Rule(name="holiday.julafton", schedule=FixedDate(12, 24), region="SE")
        rule.name = "Min julafton"

        restored = Rule.from_dict(rule.to_dict())
        assert restored.rule_id == "SE-holiday.julafton"
        assert restored.name == "Min julafton"

    def test_legacy_record_provenance(self):
        """旧记录没有 provenance 字段，按修改时间和系统标记推断"""
        base = {"name": "x", "region": "SE", "type": "fixed", "month": 1, "day": 1}
        assert Rule.from_dict(base).provenance is Provenance.SYSTEM

        customized = dict(base, userModifiedAt="2024-05-01T10:00:00", isSystemDefault=True)
        assert Rule.from_dict(customized).provenance is Provenance.USER_CUSTOMIZED

        created = dict(base, userModifiedAt="2024-05-01T10:00:00")
        assert Rule.from_dict(created).provenance is Provenance.USER_CREATED

    def test_can_reset_to_default(self):
        rule = default_rules("SE")[0]
        assert not rule.can_reset_to_default
        rule.mark_user_modified()
        assert rule.can_reset_to_default


class TestSnapshot:
    def test_whitelisted_fields(self):
        rule = Rule(name="x", schedule=FixedDate(1, 1), region="SE", notes="private")
        data = snapshot(rule)
        assert "notes" not in data
        assert data["type"] == "fixed"
        assert data["id"] == "SE-x"

    def test_serialization_is_deterministic(self):
        rule = Rule(name="x", schedule=FixedDate(1, 1), region="SE")
        text = serialize_snapshot(rule)
        assert text == serialize_snapshot(snapshot(rule))
        assert list(json.loads(text)) == sorted(json.loads(text))

    def test_parse_failure(self):
        assert parse_snapshot("{not json") is None
        assert parse_snapshot(None) is None


class TestCatalog:
    def test_regions(self):
        regions = supported_regions()
        for code in ("SE", "US", "VN", "DE", "GB", "JP", "CN"):
            assert code in regions

    def test_fresh_objects(self):
        first = default_rules("SE")
        second = default_rules("SE")
        assert first[0] is not second[0]
        first[0].rename("changed")
        assert second[0].name != "changed"

    def test_blank_region_is_sweden(self):
        assert [rule.rule_id for rule in default_rules("")] == [rule.rule_id for rule in default_rules("SE")]

    def test_unknown_region(self):
        assert default_rules("XX") == []

    def test_system_rules_carry_snapshot(self):
        for rule in default_rules("US"):
            assert rule.provenance is Provenance.SYSTEM
            assert parse_snapshot(rule.default_snapshot)["name"] == rule.name

    def test_legacy_names_target_catalog_rules(self):
        ids = {rule.rule_id for rule in default_rules("SE")}
        for new_name in LEGACY_NAME_MIGRATIONS["SE"].values():
            assert f"SE-{new_name}" in ids


class TestRegions:
    def test_normalize(self):
        assert normalize_regions([" se", "US", "se", "vn"]) == ["SE", "US"]

    def test_parse_and_format(self):
        assert parse_regions("SE, us") == ["SE", "US"]
        assert parse_regions("") == []
        assert format_regions(["SE", "US"]) == "SE,US"

    def test_expand_nordic(self):
        expanded = expand_regions(["NORDIC", "US"])
        assert expanded[:3] == ["SE", "NO", "DK"]
        assert "US" in expanded
        assert "NORDIC" not in expanded
