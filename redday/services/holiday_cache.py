# -*- coding: utf-8 -*-
"""
节假日缓存服务
规则播种/合并 -> 规则存储 -> 多年份计算 -> 发布只读的 日期->节日 映射

所有写操作（播种、迁移、重建）在同一把锁下串行执行；
发布的映射构建完成后不再修改，重建时整体替换引用，读取方无需加锁。
"""

import locale
import logging
import threading
import unicodedata
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime
from types import MappingProxyType

from redday.config import COLLATION_LOCALE
from redday.exceptions import StorageError
from redday.models.catalog import CATALOG_VERSION, LEGACY_NAME_MIGRATIONS, default_rules
from redday.models.changelog import ChangeSource
from redday.models.regions import expand_regions, format_regions
from redday.models.rule import Provenance, make_rule_id, snapshot
from redday.utils.holiday_calculator import calculate_date

logger = logging.getLogger(__name__)

EMPTY_CACHE = MappingProxyType({})

# 规则上显式的图标分类
CATEGORY_ICONS = {
    "christmas": "gift.fill",
    "new_year": "sparkles",
    "easter": "sun.max.fill",
    "midsummer": "leaf.fill",
    "national": "flag.fill",
    "valentine": "heart.fill",
    "all_saints": "candle.fill",
    "epiphany": "star.circle.fill",
    "ascension": "cloud.sun.fill",
    "pentecost": "flame.fill",
    "family": "heart.circle.fill",
    "walpurgis": "flame",
    "labor": "figure.walk",
    "season": "sun.horizon.fill",
}

# 没有分类的旧数据按名称关键字匹配（按顺序，先匹配先得）
KEYWORD_ICONS = (
    (("christmas", "jul"), "gift.fill"),
    (("new-year", "nyar", "nyår"), "sparkles"),
    (("easter", "påsk", "pask"), "sun.max.fill"),
    (("midsommar", "midsummer"), "leaf.fill"),
    (("national", "sverige"), "flag.fill"),
    (("valentin", "hjärtan"), "heart.fill"),
    (("saints", "helgon"), "candle.fill"),
    (("epiphany", "tretton"), "star.circle.fill"),
    (("ascension", "himmelsfärd"), "cloud.sun.fill"),
    (("pentecost", "pingst"), "flame.fill"),
    (("mother", "mors", "father", "fars"), "heart.circle.fill"),
    (("walpurgis", "valborg"), "flame"),
    (("labor", "första maj", "may-day"), "figure.walk"),
)

BANK_HOLIDAY_ICON = "flag.fill"
OBSERVANCE_ICON = "star"


def keyword_icon(name):
    """按名称关键字查找图标，找不到返回 None"""
    if not name:
        return None
    lowered = name.lower()
    for keywords, icon in KEYWORD_ICONS:
        if any(keyword in lowered for keyword in keywords):
            return icon
    return None


def resolve_icon(rule):
    """图标优先级：规则自带图标 > 分类 > 名称关键字 > 默认（法定假日旗帜，其余星星）"""
    symbol = (rule.symbol_name or "").strip()
    if symbol:
        return symbol

    icon = CATEGORY_ICONS.get((rule.category or "").strip().lower())
    if icon:
        return icon

    icon = keyword_icon(rule.name)
    if icon:
        return icon

    return BANK_HOLIDAY_ICON if rule.is_bank_holiday else OBSERVANCE_ICON


def normalize_day(value):
    """去掉时间部分，作为缓存键"""
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class CacheEntry:
    rule_id: str
    region: str
    name: str
    title_override: str
    is_bank_holiday: bool
    icon: str
    icon_color: str = None
    notes: str = None
    is_custom: bool = False

    @property
    def display_name(self):
        """标题覆盖优先，否则使用名称（本地化键由展示层翻译）"""
        override = (self.title_override or "").strip()
        return override or self.name

    def to_dict(self):
        return {
            "id": self.rule_id,
            "region": self.region,
            "name": self.name,
            "displayName": self.display_name,
            "titleOverride": self.title_override,
            "isBankHoliday": self.is_bank_holiday,
            "iconName": self.icon,
            "iconColor": self.icon_color,
            "notes": self.notes,
            "isCustom": self.is_custom,
        }


def configure_collation(name=COLLATION_LOCALE):
    """
    设置名称排序使用的区域规则（LC_COLLATE）

    返回:
        True 表示设置成功；区域不可用时保留当前设置并返回 False
    """
    try:
        applied = locale.setlocale(locale.LC_COLLATE, name)
    except locale.Error as e:
        logger.warning(f"[节假日缓存] 无法设置排序区域 {name!r}，使用当前区域: {e}")
        return False
    logger.debug(f"[节假日缓存] 排序区域: {applied}")
    return True


def fold_name(name):
    """去掉重音符号并忽略大小写，如 "Ärztetag" -> "arztetag" """
    decomposed = unicodedata.normalize("NFKD", name.casefold())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def entry_sort_key(entry):
    """
    法定假日在前，其次按显示名称排序

    名称先按去重音、忽略大小写的形式比较，相同时再按原形式比较；
    两级都经过 locale.strxfrm，遵循当前 LC_COLLATE 区域规则
    """
    name = entry.display_name
    return (
        not entry.is_bank_holiday,
        locale.strxfrm(fold_name(name)),
        locale.strxfrm(name.casefold()),
    )


def make_entry(rule):
    return CacheEntry(
        rule_id=rule.rule_id,
        region=rule.region,
        name=rule.name,
        title_override=rule.title_override,
        is_bank_holiday=rule.is_bank_holiday,
        icon=resolve_icon(rule),
        icon_color=rule.icon_color,
        notes=rule.notes,
        is_custom=rule.provenance is Provenance.USER_CREATED or rule.name.startswith("custom."),
    )


class HolidayCacheManager:
    """
    节假日缓存管理

    参数:
        store: 规则存储
        settings: SettingsStore
        changelog: ChangeLog，可为 None（不记录）
        today: 返回当天日期的函数
        catalog: 返回内置默认规则的函数，签名同 default_rules(region=None)
    """

    def __init__(self, store, settings, changelog=None, today=date.today, catalog=default_rules):
        self.store = store
        self.settings = settings
        self.changelog = changelog
        self.today = today
        self.catalog = catalog

        self._write_lock = threading.RLock()
        self._published = EMPTY_CACHE
        self._cached_years = frozenset()
        self._last_focus_year = None

    # ==================== 读取 ====================

    @property
    def cache(self):
        """当前发布的只读映射: date -> tuple[CacheEntry]"""
        return self._published

    @property
    def cached_years(self):
        return self._cached_years

    def holidays_on(self, day):
        return self._published.get(normalize_day(day), ())

    def holidays_between(self, start, end):
        """[start, end] 内的节日，按日期排序"""
        start, end = normalize_day(start), normalize_day(end)
        cache = self._published
        return [(day, cache[day]) for day in sorted(cache) if start <= day <= end]

    def is_bank_holiday(self, day):
        return any(entry.is_bank_holiday for entry in self.holidays_on(day))

    # ==================== 生命周期 ====================

    def initialize(self):
        """启动时调用：播种默认规则，然后计算缓存"""
        with self._write_lock:
            self.seed()
            return self.rebuild()

    def year_window(self, span, focus_year=None):
        current_year = self.today().year
        years = set(range(current_year - span, current_year + span + 1))
        if focus_year is not None:
            years.update(range(focus_year - span, focus_year + span + 1))
        return frozenset(years)

    def rebuild(self, focus_year=None):
        """
        重新计算并发布缓存

        focus_year: 用户翻到离今天较远的年份时传入，额外缓存该年份前后的窗口；
        会被记住，后续不带参数的重建仍包含该窗口
        """
        with self._write_lock:
            if focus_year is not None:
                self._last_focus_year = focus_year
            effective_focus = focus_year if focus_year is not None else self._last_focus_year

            if not self.settings.show_holidays():
                self._publish({}, frozenset())
                logger.debug("[节假日缓存] 设置中已关闭节假日显示，缓存已清空")
                return self._published

            regions = self.settings.regions()
            selected = set(expand_regions(regions))
            years = self.year_window(self.settings.cache_span(), effective_focus)

            try:
                all_rules = self.store.all()
            except StorageError as e:
                logger.error(f"[节假日缓存] 读取规则失败，保留上次缓存: {e}")
                return self._published

            rules = [
                rule for rule in all_rules
                if rule.is_enabled and (not rule.region or rule.region in selected)
            ]
            entries = {rule.rule_id: make_entry(rule) for rule in rules}

            buckets = defaultdict(list)
            for year in sorted(years):
                for rule in rules:
                    day = calculate_date(rule, year)
                    if day is None:
                        continue
                    buckets[normalize_day(day)].append(entries[rule.rule_id])

            published = {
                day: tuple(sorted(items, key=entry_sort_key))
                for day, items in buckets.items()
            }
            self._publish(published, years)

            logger.info(
                f"[节假日缓存] 计算了 {len(published)} 个节日日期，"
                f"年份 {min(years)}-{max(years)}，地区: {format_regions(regions)}"
            )
            return self._published

    def ensure_year(self, year):
        """需要显示的年份不在缓存中时，以该年份为焦点扩展缓存"""
        if year in self._cached_years or not self.settings.show_holidays():
            return self._published
        return self.rebuild(focus_year=year)

    def _publish(self, mapping, years):
        # 整体替换引用，不修改已发布的映射
        self._published = MappingProxyType(mapping) if mapping else EMPTY_CACHE
        self._cached_years = frozenset(years)

    # ==================== 播种与迁移 ====================

    def seed(self):
        """迁移旧名称，然后非破坏性地合并内置规则"""
        with self._write_lock:
            self.migrate_legacy_names()
            return self.merge_catalog()

    def merge_catalog(self):
        """
        将内置规则合并到存储中

        - 存储中没有的规则：插入
        - 用户拥有的规则：整条跳过，用户修改永远优先
        - 系统规则：日期相关字段与目录不同则覆盖

        返回:
            (插入数, 更新数)
        """
        with self._write_lock:
            logger.debug(f"[节假日缓存] 合并内置规则 v{CATALOG_VERSION}（非破坏性）...")
            try:
                existing = {rule.rule_id: rule for rule in self.store.all()}
            except StorageError as e:
                logger.error(f"[节假日缓存] 读取规则失败，跳过播种: {e}")
                return 0, 0

            to_insert = []
            to_save = []
            updated = []

            for default in self.catalog():
                current = existing.get(default.rule_id)
                if current is None:
                    to_insert.append(default)
                    continue

                if current.is_user_owned:
                    continue

                before = snapshot(current)
                changed = False

                if current.schedule != default.schedule:
                    current.schedule = default.schedule
                    changed = True
                if current.is_bank_holiday != default.is_bank_holiday:
                    current.is_bank_holiday = default.is_bank_holiday
                    changed = True

                dirty = changed
                if not current.category and default.category:
                    current.category = default.category
                    dirty = True
                if current.default_snapshot != default.default_snapshot:
                    current.default_snapshot = default.default_snapshot
                    dirty = True

                if dirty:
                    to_save.append(current)
                if changed:
                    updated.append((current, before))

            if not to_insert and not to_save:
                logger.debug("[节假日缓存] 没有需要播种的规则")
                return 0, 0

            try:
                # 一次写入：要么全部生效，要么全部不生效，审计记录与存储保持一致
                self.store.save_many(to_insert + to_save)
            except StorageError as e:
                logger.error(f"[节假日缓存] 保存规则失败，跳过播种: {e}")
                return 0, 0

            logger.info(f"[节假日缓存] 播种了 {len(to_insert)} 条规则（更新 {len(updated)} 条）")

            if self.changelog is not None:
                for rule, before in updated:
                    self.changelog.log_modified(rule, before, source=ChangeSource.SYSTEM)

                inserted_by_region = defaultdict(int)
                for rule in to_insert:
                    inserted_by_region[rule.region or "ALL"] += 1
                for region, count in sorted(inserted_by_region.items()):
                    self.changelog.log_defaults_loaded(region, count, source=ChangeSource.SYSTEM)

            return len(to_insert), len(updated)

    def migrate_legacy_names(self):
        """
        一次性迁移：旧版字面名称 -> 稳定键

        新键已存在时，把旧记录的显示字段（标题、图标、图标颜色）补到新记录的空白字段上，
        转移用户修改标记，然后删除旧记录；否则直接原地改名。

        返回:
            迁移的规则数
        """
        total = 0
        with self._write_lock:
            for region, mapping in LEGACY_NAME_MIGRATIONS.items():
                try:
                    migrated = self._migrate_region(region, mapping)
                except StorageError as e:
                    logger.error(f"[迁移] {region} 旧名称迁移失败: {e}")
                    continue

                if migrated and self.changelog is not None:
                    self.changelog.log_migration(
                        "Renamed legacy holiday names to stable keys", migrated, region=region,
                    )
                total += migrated
        return total

    def _migrate_region(self, region, mapping):
        rules = self.store.query(region=region)
        by_id = {rule.rule_id: rule for rule in rules}
        migrated = 0

        for rule in rules:
            # 用户改过名称的旧规则仍可通过标识中的旧名称识别
            id_name = rule.rule_id[len(region) + 1:]
            new_name = mapping.get(rule.name) or mapping.get(id_name)
            if new_name is None:
                continue

            new_id = make_rule_id(region, new_name)
            if new_id == rule.rule_id:
                continue
            survivor = by_id.get(new_id)

            if survivor is not None:
                for attr in ("title_override", "symbol_name", "icon_color"):
                    old_value = (getattr(rule, attr) or "").strip()
                    if not (getattr(survivor, attr) or "").strip() and old_value:
                        setattr(survivor, attr, old_value)
                if rule.is_user_owned and not survivor.is_user_owned:
                    survivor.provenance = Provenance.USER_CUSTOMIZED
                    survivor.user_modified_at = rule.user_modified_at

                self.store.save(survivor)
                self.store.delete(rule.rule_id)
                logger.info(f"[迁移] 合并 {rule.rule_id} -> {new_id}")
            else:
                old_id = rule.rule_id
                if rule.name in mapping:
                    rule.rename(new_name)
                else:
                    rule.rule_id = new_id
                self.store.rename(old_id, rule)
                by_id[new_id] = rule
                logger.info(f"[迁移] 重命名 {old_id} -> {new_id}")

            migrated += 1

        return migrated

    def load_defaults(self, region):
        """
        为某个地区补齐缺失的默认规则（用户触发，不修改已有规则）

        返回:
            插入的规则数
        """
        with self._write_lock:
            logger.info(f"[节假日缓存] 加载默认规则: {region}")
            defaults = self.catalog(region)
            if not defaults:
                logger.warning(f"[节假日缓存] 没有 {region} 的默认规则")
                return 0

            try:
                existing_ids = {rule.rule_id for rule in self.store.query(region=defaults[0].region)}
                missing = [rule for rule in defaults if rule.rule_id not in existing_ids]
                if missing:
                    self.store.insert_many(missing)
            except StorageError as e:
                logger.error(f"[节假日缓存] 加载 {region} 默认规则失败: {e}")
                return 0

            if missing:
                logger.info(f"[节假日缓存] 为 {region} 加载了 {len(missing)} 条默认规则")
                if self.changelog is not None:
                    self.changelog.log_defaults_loaded(
                        defaults[0].region, len(missing), source=ChangeSource.USER,
                    )
            else:
                logger.debug(f"[节假日缓存] {region} 的默认规则都已存在")

            self.rebuild()
            return len(missing)
