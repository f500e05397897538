"""Pillar calculator tests against reference charts."""

import pytest

from bazi_engine.bazi import (
    FIVE_RATS, FIVE_TIGERS, annual_pillar, day_pillar, four_pillars, hour_branch_index,
    hour_pillar, month_pillar, year_pillar,
)
from bazi_engine.cycle import HEAVENLY_STEMS, STEM_BY_CHINESE
from bazi_engine.errors import InvalidDateError

# (date, time, expected year / month / day / hour)
CHARTS = [
    ((2000, 2, 29), (8, 30), ("庚辰", "戊寅", "丁巳", "甲辰")),
    ((1995, 12, 5), (14, 0), ("乙亥", "丁亥", "庚午", "癸未")),
    ((1996, 1, 24), (10, 15), ("乙亥", "己丑", "庚申", "辛巳")),
    ((1990, 1, 3), (0, 30), ("己巳", "丙子", "戊辰", "壬子")),
    ((2024, 2, 10), (12, 0), ("甲辰", "丙寅", "甲辰", "庚午")),
    ((2000, 1, 1), (6, 0), ("己卯", "丙子", "戊午", "乙卯")),
    ((2023, 12, 31), (20, 45), ("癸卯", "甲子", "癸亥", "壬戌")),
    ((2024, 2, 2), (12, 0), ("癸卯", "乙丑", "丙申", "甲午")),
]


class TestFourPillars:
    @pytest.mark.parametrize("ymd,hm,expected", CHARTS, ids=["%04d-%02d-%02d" % c[0] for c in CHARTS])
    def test_reference_chart(self, ymd, hm, expected):
        chart = four_pillars(*ymd, *hm)
        assert tuple(str(p) for p in chart.pillars) == expected

    def test_str(self):
        assert str(four_pillars(2000, 2, 29, 8, 30)) == "庚辰 戊寅 丁巳 甲辰"


class TestYearPillar:
    def test_epoch_year(self):
        assert str(year_pillar(1900, 6, 1)) == "庚子"

    def test_li_chun_boundary(self):
        assert str(year_pillar(2024, 2, 3)) == "癸卯"
        assert str(year_pillar(2024, 2, 4)) == "甲辰"

    def test_annual_pillar_ignores_li_chun(self):
        assert str(annual_pillar(2024)) == "甲辰"
        assert str(annual_pillar(1996)) == "丙子"
        assert str(annual_pillar(1997)) == "丁丑"

    @pytest.mark.parametrize("year", range(1900, 2030, 11))
    def test_year_parity(self, year):
        p = year_pillar(year, 6, 1)
        assert p.stem.index % 2 == p.branch.index % 2


class TestMonthPillar:
    def test_month_before_li_chun_uses_previous_year_stem(self):
        # 2024-02-03 is still in the Gui Mao year's Ox month
        assert str(month_pillar(2024, 2, 3)) == "乙丑"

    def test_explicit_year_stem(self):
        assert str(month_pillar(2000, 2, 29, year_stem=STEM_BY_CHINESE["庚"])) == "戊寅"

    def test_year_stem_as_character(self):
        assert month_pillar(2000, 2, 29, year_stem="庚") == month_pillar(2000, 2, 29)

    @pytest.mark.parametrize("bad", ["X", "甲子", 3])
    def test_unknown_year_stem(self, bad):
        with pytest.raises(ValueError):
            month_pillar(2000, 2, 29, year_stem=bad)

    @pytest.mark.parametrize("day", [1, 2, 3])
    def test_first_days_of_february_stay_in_ox_month(self, day):
        assert str(month_pillar(2024, 2, day)) == "乙丑"

    @pytest.mark.parametrize("year", range(1900, 2101, 13))
    def test_branch_depends_only_on_slot(self, year):
        assert month_pillar(year, 5, 20).branch.chinese == "巳"
        assert month_pillar(year, 1, 2).branch.chinese == "子"

    def test_five_tiger_rows_start_on_yang_stem(self):
        assert [row[0] for row in FIVE_TIGERS[:5]] == ["丙", "戊", "庚", "壬", "甲"]
        assert FIVE_TIGERS[:5] == FIVE_TIGERS[5:]


class TestDayPillar:
    def test_epoch_day(self):
        assert str(day_pillar(1900, 1, 1)) == "甲戌"

    def test_consecutive_days_advance_one(self):
        assert day_pillar(2000, 3, 1).index == (day_pillar(2000, 2, 29).index + 1) % 60

    @pytest.mark.parametrize("ymd", [(1949, 10, 1), (1986, 6, 19), (2008, 8, 8), (2050, 7, 4)])
    def test_matches_julian_day(self, ymd):
        swe = pytest.importorskip("swisseph")
        jdn = int(swe.julday(*ymd, 12.0))
        assert day_pillar(*ymd).index == (jdn + 49) % 60


class TestHourPillar:
    @pytest.mark.parametrize("hour,minute,branch", [
        (0, 0, 0), (0, 59, 0), (1, 0, 1), (8, 30, 4), (12, 59, 6),
        (21, 0, 11), (22, 59, 11), (23, 0, 0), (23, 30, 0),
    ])
    def test_branch_index(self, hour, minute, branch):
        assert hour_branch_index(hour, minute) == branch

    def test_late_zi_hour_uses_given_day_stem(self):
        assert str(hour_pillar(STEM_BY_CHINESE["丁"], 23, 30)) == "庚子"

    @pytest.mark.parametrize("stem", HEAVENLY_STEMS, ids=[s.pinyin for s in HEAVENLY_STEMS])
    def test_rat_hour_stem(self, stem):
        # 甲己还加甲，乙庚丙作初，丙辛从戊起，丁壬庚子居，戊癸壬子是真途
        expected = "甲丙戊庚壬"[stem.index % 5]
        assert hour_pillar(stem, 0, 0).stem.chinese == expected
        assert FIVE_RATS[stem.index][0] == expected

    def test_invalid_time(self):
        with pytest.raises(InvalidDateError):
            hour_pillar(STEM_BY_CHINESE["甲"], 24, 0)

    def test_day_stem_as_character(self):
        assert str(hour_pillar("甲", 8, 0)) == "戊辰"

    @pytest.mark.parametrize("bad", ["X", "", None, 0])
    def test_unknown_day_stem(self, bad):
        with pytest.raises(ValueError):
            hour_pillar(bad, 8, 0)


class TestValidation:
    @pytest.mark.parametrize("fn", [year_pillar, month_pillar, day_pillar])
    def test_before_epoch(self, fn):
        with pytest.raises(InvalidDateError):
            fn(1899, 12, 31)

    def test_bad_day(self):
        with pytest.raises(InvalidDateError):
            four_pillars(2023, 2, 29, 12, 0)
