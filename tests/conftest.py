# -*- coding: utf-8 -*-
"""
测试公共 fixture
"""

from datetime import date, datetime, timedelta
from types import SimpleNamespace

import pytest

from redday import create_app
from redday.exceptions import StorageError
from redday.services import (
    ChangeLog,
    HolidayCacheManager,
    JsonlChangeLogStore,
    JsonRuleStore,
    RuleEditor,
    SettingsStore,
)

TODAY = date(2025, 6, 1)


def fixed_today():
    return TODAY


class FlakyRuleStore(JsonRuleStore):
    """内存规则存储；fail_writes 为 True 时所有写入都失败"""

    def __init__(self, path=None):
        super().__init__(path)
        self.fail_writes = False

    def _flush(self, records):
        if self.fail_writes:
            raise StorageError("disk full")
        super()._flush(records)


class TickingClock:
    """每次调用前进一秒，保证变更日志时间戳递增"""

    def __init__(self, start=datetime(2025, 6, 1, 12, 0, 0)):
        self.current = start

    def __call__(self):
        self.current += timedelta(seconds=1)
        return self.current


def build_engine(regions=("SE",), catalog=None, store=None, settings=None):
    store = store if store is not None else FlakyRuleStore()
    settings = settings if settings is not None else SettingsStore(
        initial={"holiday_regions": list(regions)},
    )
    changelog = ChangeLog(JsonlChangeLogStore(), clock=TickingClock())
    kwargs = {"catalog": catalog} if catalog is not None else {}
    cache = HolidayCacheManager(store, settings, changelog, today=fixed_today, **kwargs)
    editor = RuleEditor(store, changelog, cache, clock=TickingClock())
    return SimpleNamespace(
        store=store, settings=settings, changelog=changelog, cache=cache, editor=editor,
    )


@pytest.fixture
def engine():
    """已播种并计算过缓存的内存引擎（地区 SE，今天 2025-06-01）"""
    eng = build_engine()
    eng.cache.initialize()
    return eng


@pytest.fixture
def app(tmp_path):
    app = create_app(data_dir=str(tmp_path), today=fixed_today)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
