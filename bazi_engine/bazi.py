"""
BaZi (Four Pillars of Destiny) pillar calculators.

Handles:
- Year Pillar (with Li Chun year boundary)
- Month Pillar (solar term slot + Five Tigers table)
- Day Pillar (day count from the 1900 epoch)
- Hour Pillar (Five Rats table)
- Annual (Liu Nian) pillar for any calendar year

Every function is pure and validates its inputs.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from bazi_engine.calendar_utils import (
    EPOCH_YEAR, before_start_of_spring, days_since_epoch, month_slot,
    validate_date, validate_time,
)
from bazi_engine.cycle import (
    EARTHLY_BRANCHES, STEM_BY_CHINESE, HeavenlyStem, Pillar, as_stem, pillar_at,
)

logger = logging.getLogger(__name__)

# 1900 was Geng Zi (庚子), index 36 in the cycle
YEAR_BASE_INDEX = 36
# 1900-01-01 was a Jia Xu (甲戌) day, index 10 in the cycle
DAY_BASE_INDEX = 10


# ============================================================
# STEM DERIVATION TABLES
# ============================================================

# Five Tigers Escape (五虎遁): month stems for slots 0-11 (Tiger ... Ox),
# one row per year stem in cycle order.
# 甲己之年丙作首，乙庚之岁戊为头，丙辛必定寻庚起，丁壬壬位顺行流，戊癸何方发，甲寅之上好追求
FIVE_TIGERS = (
    "丙丁戊己庚辛壬癸甲乙丙丁",  # 甲
    "戊己庚辛壬癸甲乙丙丁戊己",  # 乙
    "庚辛壬癸甲乙丙丁戊己庚辛",  # 丙
    "壬癸甲乙丙丁戊己庚辛壬癸",  # 丁
    "甲乙丙丁戊己庚辛壬癸甲乙",  # 戊
    "丙丁戊己庚辛壬癸甲乙丙丁",  # 己
    "戊己庚辛壬癸甲乙丙丁戊己",  # 庚
    "庚辛壬癸甲乙丙丁戊己庚辛",  # 辛
    "壬癸甲乙丙丁戊己庚辛壬癸",  # 壬
    "甲乙丙丁戊己庚辛壬癸甲乙",  # 癸
)

# Five Rats Escape (五鼠遁): hour stems for branches Zi ... Hai,
# one row per day stem in cycle order.
# 甲己还加甲，乙庚丙作初，丙辛从戊起，丁壬庚子居，戊癸何方发，壬子是真途
FIVE_RATS = (
    "甲乙丙丁戊己庚辛壬癸甲乙",  # 甲
    "丙丁戊己庚辛壬癸甲乙丙丁",  # 乙
    "戊己庚辛壬癸甲乙丙丁戊己",  # 丙
    "庚辛壬癸甲乙丙丁戊己庚辛",  # 丁
    "壬癸甲乙丙丁戊己庚辛壬癸",  # 戊
    "甲乙丙丁戊己庚辛壬癸甲乙",  # 己
    "丙丁戊己庚辛壬癸甲乙丙丁",  # 庚
    "戊己庚辛壬癸甲乙丙丁戊己",  # 辛
    "庚辛壬癸甲乙丙丁戊己庚辛",  # 壬
    "壬癸甲乙丙丁戊己庚辛壬癸",  # 癸
)


# ============================================================
# PILLAR COMPUTATION
# ============================================================

def year_pillar(year: int, month: int, day: int) -> Pillar:
    """
    Compute the Year Pillar.

    The BaZi year starts at Li Chun (Start of Spring, fixed at Feb 4).
    If born before Li Chun, use previous year's pillar.
    """
    validate_date(year, month, day)
    effective_year = year - 1 if before_start_of_spring(month, day) else year
    pillar = annual_pillar(effective_year)
    logger.debug("year pillar for %04d-%02d-%02d: %s (sexagenary year %d)",
                 year, month, day, pillar, effective_year)
    return pillar


def month_pillar(year: int, month: int, day: int,
                 year_stem: Optional[Union[HeavenlyStem, str]] = None) -> Pillar:
    """
    Compute the Month Pillar using the Five Tigers Escape (Wu Hu Dun) table.

    The month branch is fixed by the solar term interval the date falls in
    (slot 0 = Yin/Tiger). The month stem comes from the year stem.

    Args:
        year, month, day: Gregorian birth date
        year_stem: stem of the year pillar (or its character); computed from
            the date when omitted
    """
    validate_date(year, month, day)
    if year_stem is None:
        year_stem = year_pillar(year, month, day).stem
    year_stem = as_stem(year_stem)

    slot = month_slot(year, month, day)
    stem = STEM_BY_CHINESE[FIVE_TIGERS[year_stem.index][slot]]
    branch = EARTHLY_BRANCHES[(slot + 2) % 12]

    pillar = Pillar(stem=stem, branch=branch)
    logger.debug("month pillar for %04d-%02d-%02d: %s (slot %d)", year, month, day, pillar, slot)
    return pillar


def day_pillar(year: int, month: int, day: int) -> Pillar:
    """
    Compute the Day Pillar from the day count since 1900-01-01.

    The 60-day cycle has run unbroken for millennia, so the day pillar is
    a fixed offset from any day number.
    """
    validate_date(year, month, day)
    pillar = pillar_at((days_since_epoch(year, month, day) + DAY_BASE_INDEX) % 60)
    logger.debug("day pillar for %04d-%02d-%02d: %s", year, month, day, pillar)
    return pillar


def hour_branch_index(hour: int, minute: int = 0) -> int:
    """
    Map clock time to an hour branch (shi chen) index.

    Chinese hours are 2-hour blocks:
    23:00-00:59 = Zi (Rat)      = branch 0
    01:00-02:59 = Chou (Ox)     = branch 1
    03:00-04:59 = Yin (Tiger)   = branch 2
    ...
    21:00-22:59 = Hai (Pig)     = branch 11
    """
    total_hours = hour + minute / 60
    # 23:00 onward is the next day's Zi hour
    if total_hours >= 23:
        total_hours -= 24
    return int((total_hours + 1) // 2) % 12


def hour_pillar(day_stem: Union[HeavenlyStem, str], hour: int, minute: int = 0) -> Pillar:
    """
    Compute the Hour Pillar using the Five Rats Escape (Wu Shu Dun) table.

    Args:
        day_stem: stem of the day pillar, or its character such as "甲"
        hour: hour in 24h format
        minute: minute of the hour
    """
    day_stem = as_stem(day_stem)
    validate_time(hour, minute)
    branch_index = hour_branch_index(hour, minute)
    stem = STEM_BY_CHINESE[FIVE_RATS[day_stem.index][branch_index]]
    pillar = Pillar(stem=stem, branch=EARTHLY_BRANCHES[branch_index])
    logger.debug("hour pillar for %s day at %02d:%02d: %s", day_stem, hour, minute, pillar)
    return pillar


# ============================================================
# ANNUAL PILLAR
# ============================================================

def annual_pillar(year: int) -> Pillar:
    """Compute the annual (Liu Nian) pillar for a calendar year."""
    return pillar_at((year - EPOCH_YEAR + YEAR_BASE_INDEX) % 60)


# ============================================================
# FOUR PILLARS
# ============================================================

@dataclass(frozen=True)
class BaziChart:
    year: Pillar
    month: Pillar
    day: Pillar
    hour: Pillar

    @property
    def pillars(self) -> list[Pillar]:
        return [self.year, self.month, self.day, self.hour]

    def __str__(self):
        return " ".join(str(p) for p in self.pillars)


def four_pillars(year: int, month: int, day: int, hour: int, minute: int = 0) -> BaziChart:
    """Compute all four pillars for a birth instant."""
    validate_date(year, month, day)
    validate_time(hour, minute)

    yp = year_pillar(year, month, day)
    mp = month_pillar(year, month, day, year_stem=yp.stem)
    dp = day_pillar(year, month, day)
    # hour stem depends on the day stem
    hp = hour_pillar(dp.stem, hour, minute)

    return BaziChart(year=yp, month=mp, day=dp, hour=hp)
