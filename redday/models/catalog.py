# -*- coding: utf-8 -*-
"""
内置节假日规则目录
按地区列出默认规则；哪些节日存在属于编辑数据，这里只负责提供
"""

from redday.models.rule import (
    Astronomical,
    EasterOffset,
    FixedDate,
    LunarMonthDay,
    NthWeekday,
    Provenance,
    Rule,
    WeekdayInRange,
    serialize_snapshot,
)

# 目录数据变化时递增
CATALOG_VERSION = 3

# 星期编号: 1=周日 2=周一 ... 7=周六
SUN, MON, TUE, WED, THU, FRI, SAT = range(1, 8)
LAST = -1


# 每条: (名称, 是否法定假日, 日期规则, 图标分类)
BUILTIN_RULES = {
    # 瑞典：名称使用 "holiday." 本地化键，由展示层翻译
    "SE": [
        # 法定假日 (röda dagar)
        ("holiday.nyarsdagen", True, FixedDate(1, 1), "new_year"),
        ("holiday.trettondedag_jul", True, FixedDate(1, 6), "epiphany"),
        ("holiday.forsta_maj", True, FixedDate(5, 1), "labor"),
        ("holiday.sveriges_nationaldag", True, FixedDate(6, 6), "national"),
        ("holiday.juldagen", True, FixedDate(12, 25), "christmas"),
        ("holiday.annandag_jul", True, FixedDate(12, 26), "christmas"),
        ("holiday.langfredagen", True, EasterOffset(-2), "easter"),
        ("holiday.paskdagen", True, EasterOffset(0), "easter"),
        ("holiday.annandag_pask", True, EasterOffset(1), "easter"),
        ("holiday.kristi_himmelsfardsdag", True, EasterOffset(39), "ascension"),
        ("holiday.pingstdagen", True, EasterOffset(49), "pentecost"),
        ("holiday.midsommardagen", True, WeekdayInRange(6, SAT, 20, 26), "midsummer"),
        ("holiday.alla_helgons_dag", True, NthWeekday(11, SAT, 1), "all_saints"),
        # 非法定节日
        ("holiday.nyarsafton", False, FixedDate(12, 31), "new_year"),
        ("holiday.julafton", False, FixedDate(12, 24), "christmas"),
        ("holiday.midsommarafton", False, WeekdayInRange(6, FRI, 19, 25), "midsummer"),
        ("holiday.alla_hjartans_dag", False, FixedDate(2, 14), "valentine"),
        ("holiday.internationella_kvinnodagen", False, FixedDate(3, 8), None),
        ("holiday.mors_dag", False, NthWeekday(5, SUN, LAST), "family"),
        ("holiday.fars_dag", False, NthWeekday(11, SUN, 2), "family"),
        # 天文事件
        ("holiday.virdagjamning", False, Astronomical(3), "season"),
        ("holiday.sommarsolstand", False, Astronomical(6), "season"),
        ("holiday.hostdagjamning", False, Astronomical(9), "season"),
        ("holiday.vintersolstand", False, Astronomical(12), "season"),
    ],
    "US": [
        ("New Year's Day", True, FixedDate(1, 1), None),
        ("Martin Luther King Jr. Day", True, NthWeekday(1, MON, 3), None),
        ("Presidents' Day", True, NthWeekday(2, MON, 3), None),
        ("Memorial Day", True, NthWeekday(5, MON, LAST), None),
        ("Juneteenth", True, FixedDate(6, 19), None),
        ("Independence Day", True, FixedDate(7, 4), None),
        ("Labor Day", True, NthWeekday(9, MON, 1), None),
        ("Columbus Day", True, NthWeekday(10, MON, 2), None),
        ("Veterans Day", True, FixedDate(11, 11), None),
        ("Thanksgiving Day", True, NthWeekday(11, THU, 4), None),
        ("Christmas Day", True, FixedDate(12, 25), None),
        ("Valentine's Day", False, FixedDate(2, 14), None),
        ("St. Patrick's Day", False, FixedDate(3, 17), None),
        ("Mother's Day", False, NthWeekday(5, SUN, 2), None),
        ("Father's Day", False, NthWeekday(6, SUN, 3), None),
        ("Halloween", False, FixedDate(10, 31), None),
    ],
    "VN": [
        ("Tết Dương lịch", True, FixedDate(1, 1), None),
        ("Tết Nguyên Đán", True, LunarMonthDay(1, 1), None),
        ("Giỗ Tổ Hùng Vương", True, LunarMonthDay(3, 10), None),
        ("Ngày Thống nhất", True, FixedDate(4, 30), None),
        ("Quốc tế Lao động", True, FixedDate(5, 1), None),
        ("Quốc khánh", True, FixedDate(9, 2), None),
        ("Tết Trung Thu", False, LunarMonthDay(8, 15), None),
        ("Ngày Quốc tế Phụ nữ", False, FixedDate(3, 8), None),
        ("Ngày Phụ nữ Việt Nam", False, FixedDate(10, 20), None),
        ("Ngày Nhà giáo Việt Nam", False, FixedDate(11, 20), None),
        ("Tết Đoan Ngọ", False, LunarMonthDay(5, 5), None),
        ("Lễ Vu Lan", False, LunarMonthDay(7, 15), None),
        ("Ngày Valentine", False, FixedDate(2, 14), None),
    ],
    "DE": [
        ("Neujahrstag", True, FixedDate(1, 1), None),
        ("Karfreitag", True, EasterOffset(-2), None),
        ("Ostermontag", True, EasterOffset(1), None),
        ("Tag der Arbeit", True, FixedDate(5, 1), None),
        ("Christi Himmelfahrt", True, EasterOffset(39), None),
        ("Pfingstmontag", True, EasterOffset(50), None),
        ("Tag der Deutschen Einheit", True, FixedDate(10, 3), None),
        ("Weihnachtstag", True, FixedDate(12, 25), None),
        ("Zweiter Weihnachtstag", True, FixedDate(12, 26), None),
    ],
    "GB": [
        ("New Year's Day", True, FixedDate(1, 1), None),
        ("Good Friday", True, EasterOffset(-2), None),
        ("Easter Monday", True, EasterOffset(1), None),
        ("Early May Bank Holiday", True, NthWeekday(5, MON, 1), None),
        ("Spring Bank Holiday", True, NthWeekday(5, MON, LAST), None),
        ("Summer Bank Holiday", True, NthWeekday(8, MON, LAST), None),
        ("Christmas Day", True, FixedDate(12, 25), None),
        ("Boxing Day", True, FixedDate(12, 26), None),
    ],
    "FR": [
        ("Jour de l'An", True, FixedDate(1, 1), None),
        ("Lundi de Pâques", True, EasterOffset(1), None),
        ("Fête du Travail", True, FixedDate(5, 1), None),
        ("Victoire 1945", True, FixedDate(5, 8), None),
        ("Ascension", True, EasterOffset(39), None),
        ("Lundi de Pentecôte", True, EasterOffset(50), None),
        ("Fête Nationale", True, FixedDate(7, 14), None),
        ("Assomption", True, FixedDate(8, 15), None),
        ("Toussaint", True, FixedDate(11, 1), None),
        ("Armistice", True, FixedDate(11, 11), None),
        ("Noël", True, FixedDate(12, 25), None),
    ],
    "IT": [
        ("Capodanno", True, FixedDate(1, 1), None),
        ("Epifania", True, FixedDate(1, 6), None),
        ("Lunedì dell'Angelo", True, EasterOffset(1), None),
        ("Festa della Liberazione", True, FixedDate(4, 25), None),
        ("Festa del Lavoro", True, FixedDate(5, 1), None),
        ("Festa della Repubblica", True, FixedDate(6, 2), None),
        ("Ferragosto", True, FixedDate(8, 15), None),
        ("Tutti i Santi", True, FixedDate(11, 1), None),
        ("Immacolata Concezione", True, FixedDate(12, 8), None),
        ("Natale", True, FixedDate(12, 25), None),
        ("Santo Stefano", True, FixedDate(12, 26), None),
    ],
    "NL": [
        ("Nieuwjaarsdag", True, FixedDate(1, 1), None),
        ("Tweede Paasdag", True, EasterOffset(1), None),
        ("Koningsdag", True, FixedDate(4, 27), None),
        ("Bevrijdingsdag", True, FixedDate(5, 5), None),
        ("Hemelvaartsdag", True, EasterOffset(39), None),
        ("Tweede Pinksterdag", True, EasterOffset(50), None),
        ("Eerste Kerstdag", True, FixedDate(12, 25), None),
        ("Tweede Kerstdag", True, FixedDate(12, 26), None),
    ],
    "JP": [
        ("元日", True, FixedDate(1, 1), None),
        ("成人の日", True, NthWeekday(1, MON, 2), None),
        ("建国記念の日", True, FixedDate(2, 11), None),
        ("天皇誕生日", True, FixedDate(2, 23), None),
        ("春分の日", True, Astronomical(3), "season"),
        ("昭和の日", True, FixedDate(4, 29), None),
        ("憲法記念日", True, FixedDate(5, 3), None),
        ("みどりの日", True, FixedDate(5, 4), None),
        ("こどもの日", True, FixedDate(5, 5), None),
        ("海の日", True, NthWeekday(7, MON, 3), None),
        ("山の日", True, FixedDate(8, 11), None),
        ("敬老の日", True, NthWeekday(9, MON, 3), None),
        ("秋分の日", True, Astronomical(9), "season"),
        ("スポーツの日", True, NthWeekday(10, MON, 2), None),
        ("文化の日", True, FixedDate(11, 3), None),
        ("勤労感謝の日", True, FixedDate(11, 23), None),
        ("節分", False, FixedDate(2, 3), None),
        ("バレンタインデー", False, FixedDate(2, 14), "valentine"),
        ("ひな祭り", False, FixedDate(3, 3), None),
        ("ホワイトデー", False, FixedDate(3, 14), None),
        ("七夕", False, FixedDate(7, 7), None),
        ("お盆", False, FixedDate(8, 15), None),
        ("七五三", False, FixedDate(11, 15), None),
        ("大晦日", False, FixedDate(12, 31), "new_year"),
    ],
    "HK": [
        ("New Year's Day", True, FixedDate(1, 1), None),
        ("Lunar New Year", True, LunarMonthDay(1, 1), "new_year"),
        ("Ching Ming Festival", True, FixedDate(4, 4), None),
        ("Good Friday", True, EasterOffset(-2), None),
        ("Easter Monday", True, EasterOffset(1), None),
        ("Labour Day", True, FixedDate(5, 1), "labor"),
        ("Buddha's Birthday", True, LunarMonthDay(4, 8), None),
        ("Tuen Ng Festival", True, LunarMonthDay(5, 5), None),
        ("HKSAR Establishment Day", True, FixedDate(7, 1), None),
        ("Mid-Autumn Festival", True, LunarMonthDay(8, 15), None),
        ("National Day", True, FixedDate(10, 1), None),
        ("Chung Yeung Festival", True, LunarMonthDay(9, 9), None),
        ("Christmas Day", True, FixedDate(12, 25), None),
        ("Boxing Day", True, FixedDate(12, 26), None),
    ],
    "CN": [
        ("元旦", True, FixedDate(1, 1), "new_year"),
        ("春节", True, LunarMonthDay(1, 1), "new_year"),
        ("清明节", True, FixedDate(4, 4), None),
        ("劳动节", True, FixedDate(5, 1), "labor"),
        ("端午节", True, LunarMonthDay(5, 5), None),
        ("中秋节", True, LunarMonthDay(8, 15), None),
        ("国庆节", True, FixedDate(10, 1), "national"),
    ],
    "TH": [
        ("วันขึ้นปีใหม่", True, FixedDate(1, 1), "new_year"),
        ("วันมาฆบูชา", True, LunarMonthDay(3, 15), None),
        ("วันจักรี", True, FixedDate(4, 6), None),
        ("วันสงกรานต์", True, FixedDate(4, 13), None),
        ("วันแรงงาน", True, FixedDate(5, 1), "labor"),
        ("วันฉัตรมงคล", True, FixedDate(5, 4), None),
        ("วันวิสาขบูชา", True, LunarMonthDay(4, 15), None),
        ("วันเฉลิมพระชนมพรรษา", True, FixedDate(6, 3), None),
        ("วันอาสาฬหบูชา", True, LunarMonthDay(6, 15), None),
        ("วันเข้าพรรษา", True, LunarMonthDay(6, 16), None),
        ("วันเฉลิมพระชนมพรรษา ร.10", True, FixedDate(7, 28), None),
        ("วันแม่แห่งชาติ", True, FixedDate(8, 12), "family"),
        ("วันคล้ายวันสวรรคต ร.9", True, FixedDate(10, 13), None),
        ("วันปิยมหาราช", True, FixedDate(10, 23), None),
        ("วันพ่อแห่งชาติ", True, FixedDate(12, 5), "family"),
        ("วันรัฐธรรมนูญ", True, FixedDate(12, 10), None),
        ("วันสิ้นปี", True, FixedDate(12, 31), "new_year"),
    ],
    "NO": [
        ("Nyttårsdag", True, FixedDate(1, 1), "new_year"),
        ("Skjærtorsdag", True, EasterOffset(-3), "easter"),
        ("Langfredag", True, EasterOffset(-2), "easter"),
        ("Første påskedag", True, EasterOffset(0), "easter"),
        ("Andre påskedag", True, EasterOffset(1), "easter"),
        ("Arbeidernes dag", True, FixedDate(5, 1), "labor"),
        ("Grunnlovsdagen", True, FixedDate(5, 17), "national"),
        ("Kristi himmelfartsdag", True, EasterOffset(39), "ascension"),
        ("Første pinsedag", True, EasterOffset(49), "pentecost"),
        ("Andre pinsedag", True, EasterOffset(50), "pentecost"),
        ("Første juledag", True, FixedDate(12, 25), "christmas"),
        ("Andre juledag", True, FixedDate(12, 26), "christmas"),
        ("Julaften", False, FixedDate(12, 24), "christmas"),
        ("Nyttårsaften", False, FixedDate(12, 31), "new_year"),
        ("Morsdag", False, NthWeekday(2, SUN, 2), "family"),
        ("Farsdag", False, NthWeekday(11, SUN, 2), "family"),
    ],
    "DK": [
        ("Nytårsdag", True, FixedDate(1, 1), "new_year"),
        ("Skærtorsdag", True, EasterOffset(-3), "easter"),
        ("Langfredag", True, EasterOffset(-2), "easter"),
        ("Påskedag", True, EasterOffset(0), "easter"),
        ("2. Påskedag", True, EasterOffset(1), "easter"),
        ("Kristi himmelfartsdag", True, EasterOffset(39), "ascension"),
        ("Pinsedag", True, EasterOffset(49), "pentecost"),
        ("2. Pinsedag", True, EasterOffset(50), "pentecost"),
        ("Grundlovsdag", True, FixedDate(6, 5), "national"),
        ("Juledag", True, FixedDate(12, 25), "christmas"),
        ("2. Juledag", True, FixedDate(12, 26), "christmas"),
        ("Juleaftensdag", False, FixedDate(12, 24), "christmas"),
        ("Nytårsaften", False, FixedDate(12, 31), "new_year"),
        ("Mors dag", False, NthWeekday(5, SUN, 2), "family"),
        ("Valdemarsdag", False, FixedDate(6, 15), None),
    ],
    "FI": [
        ("Uudenvuodenpäivä", True, FixedDate(1, 1), "new_year"),
        ("Loppiainen", True, FixedDate(1, 6), "epiphany"),
        ("Pitkäperjantai", True, EasterOffset(-2), "easter"),
        ("Pääsiäispäivä", True, EasterOffset(0), "easter"),
        ("2. pääsiäispäivä", True, EasterOffset(1), "easter"),
        ("Vappu", True, FixedDate(5, 1), "labor"),
        ("Helatorstai", True, EasterOffset(39), "ascension"),
        ("Helluntaipäivä", True, EasterOffset(49), "pentecost"),
        ("Juhannuspäivä", True, WeekdayInRange(6, SAT, 20, 26), "midsummer"),
        ("Itsenäisyyspäivä", True, FixedDate(12, 6), "national"),
        ("Joulupäivä", True, FixedDate(12, 25), "christmas"),
        ("Tapaninpäivä", True, FixedDate(12, 26), "christmas"),
        ("Jouluaatto", False, FixedDate(12, 24), "christmas"),
        ("Uudenvuodenaatto", False, FixedDate(12, 31), "new_year"),
        ("Juhannusaatto", False, WeekdayInRange(6, FRI, 19, 25), "midsummer"),
        ("Äitienpäivä", False, NthWeekday(5, SUN, 2), "family"),
        ("Isänpäivä", False, NthWeekday(11, SUN, 2), "family"),
    ],
    "IS": [
        ("Nýársdagur", True, FixedDate(1, 1), "new_year"),
        ("Skírdagur", True, EasterOffset(-3), "easter"),
        ("Föstudagurinn langi", True, EasterOffset(-2), "easter"),
        ("Páskadagur", True, EasterOffset(0), "easter"),
        ("Annar í páskum", True, EasterOffset(1), "easter"),
        ("Sumardagurinn fyrsti", True, WeekdayInRange(4, THU, 19, 25), "season"),
        ("Verkalýðsdagurinn", True, FixedDate(5, 1), "labor"),
        ("Uppstigningardagur", True, EasterOffset(39), "ascension"),
        ("Hvítasunnudagur", True, EasterOffset(49), "pentecost"),
        ("Annar í hvítasunnu", True, EasterOffset(50), "pentecost"),
        ("Þjóðhátíðardagur", True, FixedDate(6, 17), "national"),
        ("Verslunarmannahelgi", True, NthWeekday(8, MON, 1), None),
        ("Jóladagur", True, FixedDate(12, 25), "christmas"),
        ("Annar í jólum", True, FixedDate(12, 26), "christmas"),
        ("Aðfangadagur", False, FixedDate(12, 24), "christmas"),
        ("Gamlársdagur", False, FixedDate(12, 31), "new_year"),
        ("Dagur íslenskrar tungu", False, FixedDate(11, 16), None),
        ("Mæðradagurinn", False, NthWeekday(5, SUN, 2), "family"),
        ("Feðradagurinn", False, NthWeekday(11, SUN, 2), "family"),
    ],
}


# 旧版瑞典规则使用字面名称，迁移为稳定的本地化键
LEGACY_NAME_MIGRATIONS = {
    "SE": {
        "Nyårsdagen": "holiday.nyarsdagen",
        "Trettondedag jul": "holiday.trettondedag_jul",
        "Första maj": "holiday.forsta_maj",
        "Sveriges nationaldag": "holiday.sveriges_nationaldag",
        "Juldagen": "holiday.juldagen",
        "Annandag jul": "holiday.annandag_jul",
        "Nyårsafton": "holiday.nyarsafton",
        "Julafton": "holiday.julafton",
        "Alla hjärtans dag": "holiday.alla_hjartans_dag",
        "Internationella kvinnodagen": "holiday.internationella_kvinnodagen",
        "Långfredagen": "holiday.langfredagen",
        "Påskdagen": "holiday.paskdagen",
        "Annandag påsk": "holiday.annandag_pask",
        "Kristi himmelsfärdsdag": "holiday.kristi_himmelsfardsdag",
        "Pingstdagen": "holiday.pingstdagen",
        "Midsommardagen": "holiday.midsommardagen",
        "Midsommarafton": "holiday.midsommarafton",
        "Alla helgons dag": "holiday.alla_helgons_dag",
        "Mors dag": "holiday.mors_dag",
        "Fars dag": "holiday.fars_dag",
        "Vårdagjämningen": "holiday.virdagjamning",
        "Sommarsolståndet": "holiday.sommarsolstand",
        "Höstdagjämningen": "holiday.hostdagjamning",
        "Vintersolståndet": "holiday.vintersolstand",
    },
}


def supported_regions():
    """内置目录覆盖的地区代码"""
    return sorted(BUILTIN_RULES)


def _system_rule(region, name, is_bank_holiday, schedule, category):
    rule = Rule(
        name=name,
        schedule=schedule,
        region=region,
        is_bank_holiday=is_bank_holiday,
        category=category,
        provenance=Provenance.SYSTEM,
    )
    # 保存原始值，用于"恢复默认"
    rule.default_snapshot = serialize_snapshot(rule)
    return rule


def default_rules(region=None):
    """
    生成内置默认规则（每次返回新对象）

    参数:
        region: 地区代码；None 表示全部地区，"" 视为 SE
    """
    if region is None:
        regions = supported_regions()
    else:
        regions = [region.strip().upper() or "SE"]

    rules = []
    for code in regions:
        for name, is_bank_holiday, schedule, category in BUILTIN_RULES.get(code, []):
            rules.append(_system_rule(code, name, is_bank_holiday, schedule, category))
    return rules
