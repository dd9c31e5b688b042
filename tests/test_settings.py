# -*- coding: utf-8 -*-
"""设置与旧数据迁移测试"""

import json

import pytest

from redday.config import MAX_CACHE_SPAN
from redday.exceptions import StorageError
from redday.models.rule import FixedDate, Rule
from redday.services.persistence import JsonRuleStore, migrate_old_data_file
from redday.services.settings import SettingsStore
from tests.conftest import FlakyRuleStore


class TestSettings:
    def test_defaults(self):
        settings = SettingsStore()
        assert settings.show_holidays() is True
        assert settings.regions() == ["SE"]
        assert settings.cache_span() == 2

    def test_legacy_single_region(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"holiday_region": "us"}), encoding='utf-8')

        settings = SettingsStore(str(path))

        assert settings.regions() == ["US"]
        saved = json.loads(path.read_text(encoding='utf-8'))
        assert "holiday_region" not in saved
        assert saved["holiday_regions"] == ["US"]

    def test_new_format_wins_over_legacy(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({
            "holiday_region": "US",
            "holiday_regions": ["SE", "VN"],
        }), encoding='utf-8')

        assert SettingsStore(str(path)).regions() == ["SE", "VN"]

    def test_at_most_two_regions(self):
        settings = SettingsStore()
        settings.update(holiday_regions=["se", "us", "vn"])
        assert settings.regions() == ["SE", "US"]

    def test_comma_separated_regions(self):
        settings = SettingsStore(initial={"holiday_regions": "SE, us"})
        assert settings.regions() == ["SE", "US"]

    def test_empty_regions_fall_back(self):
        settings = SettingsStore(initial={"holiday_regions": []})
        assert settings.regions() == ["SE"]

    def test_cache_span_interpretation(self):
        settings = SettingsStore()
        settings.update(holiday_cache_span="abc")
        assert settings.cache_span() == 2
        settings.update(holiday_cache_span=-3)
        assert settings.cache_span() == 0
        settings.update(holiday_cache_span=100000)
        assert settings.cache_span() == MAX_CACHE_SPAN

    def test_saved_and_reloaded(self, tmp_path):
        path = str(tmp_path / "settings.json")
        SettingsStore(path).update(show_holidays=False, holiday_regions=["VN"])

        reloaded = SettingsStore(path)
        assert reloaded.show_holidays() is False
        assert reloaded.regions() == ["VN"]

    def test_corrupt_file_uses_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{oops", encoding='utf-8')
        assert SettingsStore(str(path)).regions() == ["SE"]


class TestRuleStore:
    def test_persisted(self, tmp_path):
        path = str(tmp_path / "rules.json")
        JsonRuleStore(path).insert(Rule(name="x", schedule=FixedDate(1, 1), region="SE"))

        reloaded = JsonRuleStore(path)
        assert reloaded.get("SE-x").schedule == FixedDate(1, 1)
        assert [rule.rule_id for rule in reloaded.query(region="SE")] == ["SE-x"]

    def test_duplicate_insert(self):
        store = JsonRuleStore()
        rule = Rule(name="x", schedule=FixedDate(1, 1), region="SE")
        store.insert(rule)
        with pytest.raises(StorageError):
            store.insert(rule)

    def test_returned_rules_are_copies(self):
        store = JsonRuleStore()
        store.insert(Rule(name="x", schedule=FixedDate(1, 1), region="SE"))
        store.get("SE-x").is_bank_holiday = True
        assert store.get("SE-x").is_bank_holiday is False

    def test_failed_write_rolls_back(self, tmp_path):
        path = str(tmp_path / "rules.json")
        store = FlakyRuleStore(path)
        store.insert(Rule(name="x", schedule=FixedDate(1, 1), region="SE"))

        store.fail_writes = True
        with pytest.raises(StorageError):
            store.save(Rule(name="x", schedule=FixedDate(2, 2), region="SE"))
        with pytest.raises(StorageError):
            store.delete("SE-x")
        with pytest.raises(StorageError):
            store.insert(Rule(name="y", schedule=FixedDate(3, 3), region="SE"))

        assert store.get("SE-x").schedule == FixedDate(1, 1)
        assert store.get("SE-y") is None
        assert JsonRuleStore(path).get("SE-x").schedule == FixedDate(1, 1)

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text("not json", encoding='utf-8')
        with pytest.raises(StorageError):
            JsonRuleStore(str(path)).all()

    def test_migrate_old_data_file(self, tmp_path):
        old = tmp_path / "holiday_rules.json"
        new = tmp_path / "data" / "holiday_rules.json"
        old.write_text('{"rules": []}', encoding='utf-8')

        assert migrate_old_data_file(str(old), str(new)) is True
        assert new.exists()
        assert not old.exists()
        assert migrate_old_data_file(str(old), str(new)) is False
