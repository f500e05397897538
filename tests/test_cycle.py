"""Sexagenary cycle table tests."""

import pytest

from bazi_engine.cycle import (
    BRANCH_BY_CHINESE, EARTHLY_BRANCHES, HEAVENLY_STEMS, SIXTY_JIAZI, STEM_BY_CHINESE,
    Pillar, Polarity, as_stem, index_of, parse_pillar, pillar_at, shift,
)


class TestTable:
    def test_sixty_distinct_pillars(self):
        assert len({str(p) for p in SIXTY_JIAZI}) == 60

    def test_known_positions(self):
        assert str(pillar_at(0)) == "甲子"
        assert str(pillar_at(10)) == "甲戌"
        assert str(pillar_at(36)) == "庚子"
        assert str(pillar_at(59)) == "癸亥"

    @pytest.mark.parametrize("index", range(60))
    def test_round_trip(self, index):
        assert index_of(pillar_at(index)) == index
        assert index_of(str(pillar_at(index))) == index

    @pytest.mark.parametrize("index", range(60))
    def test_stem_and_branch_derive_from_index(self, index):
        p = pillar_at(index)
        assert p.stem.index == index % 10
        assert p.branch.index == index % 12
        assert p.stem.index % 2 == p.branch.index % 2

    def test_polarity_alternates(self):
        assert [s.polarity for s in HEAVENLY_STEMS[:2]] == [Polarity.YANG, Polarity.YIN]
        assert all(s.polarity == (Polarity.YANG if s.index % 2 == 0 else Polarity.YIN)
                   for s in HEAVENLY_STEMS)


class TestLookupErrors:
    @pytest.mark.parametrize("bad", [-1, 60, 1.5, True, "0"])
    def test_pillar_at_out_of_domain(self, bad):
        with pytest.raises(ValueError):
            pillar_at(bad)

    @pytest.mark.parametrize("bad", ["甲丑", "子甲", "", "甲子甲", None])
    def test_index_of_unknown(self, bad):
        with pytest.raises(ValueError):
            index_of(bad)

    def test_mismatched_parity_rejected(self):
        with pytest.raises(ValueError):
            Pillar(STEM_BY_CHINESE["甲"], BRANCH_BY_CHINESE["丑"])

    def test_as_stem(self):
        assert as_stem("壬") is STEM_BY_CHINESE["壬"]
        assert as_stem(HEAVENLY_STEMS[3]) is HEAVENLY_STEMS[3]

    @pytest.mark.parametrize("bad", ["子", "Jia", 0, None, []])
    def test_as_stem_unknown(self, bad):
        with pytest.raises(ValueError):
            as_stem(bad)


class TestPillar:
    def test_direct_construction_matches_cycle(self):
        p = Pillar(STEM_BY_CHINESE["戊"], BRANCH_BY_CHINESE["寅"])
        assert p.index == 14
        assert p == pillar_at(14)

    def test_parse(self):
        assert parse_pillar("庚辰").index == 16

    def test_shift_wraps(self):
        assert str(shift(pillar_at(59), 1)) == "甲子"
        assert str(shift(pillar_at(0), -1)) == "癸亥"

    def test_to_dict(self):
        d = parse_pillar("丁巳").to_dict()
        assert d["pillar"] == "丁巳"
        assert d["stem"]["pinyin"] == "Ding"
        assert d["branch"]["animal"] == "Snake"
        assert d["stem"]["polarity"] == "yin"

    def test_hour_windows(self):
        assert EARTHLY_BRANCHES[0].hour_window == (23, 1)
        assert EARTHLY_BRANCHES[4].hour_window == (7, 9)
        assert EARTHLY_BRANCHES[11].hour_window == (21, 23)
