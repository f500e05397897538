"""
Luck Pillar (大运 Da Yun) computation.

Handles:
- Luck direction from year stem polarity and gender
- Start age from the distance to the nearest Jie solar term
- The 10-step luck pillar sequence walked from the month pillar
- Mapping an age to its luck pillar, and the 100-year life timeline
"""

import logging
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Union

from bazi_engine.bazi import annual_pillar
from bazi_engine.calendar_utils import (
    LESSER_COLD, SOLAR_TERMS, START_OF_SPRING, SolarTermBoundary,
    validate_date,
)
from bazi_engine.cycle import HeavenlyStem, Pillar, Polarity, shift
from bazi_engine.errors import InvalidGenderError

logger = logging.getLogger(__name__)

# Label for ages before the first luck pillar starts
PRE_CYCLE = "童限"

LUCK_STEPS = 10
YEARS_PER_STEP = 10
# Traditional rule: 3 days between birth and the solar term = 1 year of age
DAYS_PER_YEAR_OF_AGE = 3


class Gender(Enum):
    MALE = "male"
    FEMALE = "female"


class LuckDirection(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"

    @property
    def step(self) -> int:
        return 1 if self is LuckDirection.FORWARD else -1


_GENDER_ALIASES = {
    "male": Gender.MALE, "m": Gender.MALE, "man": Gender.MALE, "男": Gender.MALE, "乾": Gender.MALE,
    "female": Gender.FEMALE, "f": Gender.FEMALE, "woman": Gender.FEMALE, "女": Gender.FEMALE, "坤": Gender.FEMALE,
}


def parse_gender(value: Union[Gender, str]) -> Gender:
    """Accept a Gender or a common spelling of it ("male", "Female", "男", ...)."""
    if isinstance(value, Gender):
        return value
    if isinstance(value, str):
        gender = _GENDER_ALIASES.get(value.strip().lower())
        if gender is not None:
            return gender
    raise InvalidGenderError(f"Unknown gender: {value!r} (expected male or female)")


# ============================================================
# DIRECTION AND START AGE
# ============================================================

def stem_polarity(stem: HeavenlyStem) -> Polarity:
    """Jia, Bing, Wu, Geng, Ren are yang; the rest are yin."""
    return Polarity.YANG if stem.index % 2 == 0 else Polarity.YIN


def luck_direction(year_stem: HeavenlyStem, gender: Union[Gender, str]) -> LuckDirection:
    """
    Direction of the luck pillar walk.

    - Yang stem year + Male OR Yin stem year + Female → count FORWARD
    - Yang stem year + Female OR Yin stem year + Male → count BACKWARD
    """
    gender = parse_gender(gender)
    yang = stem_polarity(year_stem) is Polarity.YANG
    if (yang and gender is Gender.MALE) or (not yang and gender is Gender.FEMALE):
        return LuckDirection.FORWARD
    return LuckDirection.BACKWARD


def start_age(year: int, month: int, day: int) -> tuple[int, SolarTermBoundary]:
    """
    Compute the luck pillar start age from the nearest Jie solar term.

    The previous boundary is the last one strictly before the birth date,
    the next boundary the first one on or after it. The closer of the two
    wins, ties going to the next boundary. Comparison is date-only.

    Returns:
        (start_age, solar term the age was measured against)
    """
    validate_date(year, month, day)
    birth = date(year, month, day)

    # the birth year's boundaries plus the Xiao Han that closes its December
    candidates = [(term, term.on(year)) for term in SOLAR_TERMS]
    candidates.append((LESSER_COLD, LESSER_COLD.on(year + 1)))

    previous = upcoming = None
    for term, when in candidates:
        if when < birth:
            if previous is None or when > previous[1]:
                previous = (term, when)
        elif upcoming is None or when < upcoming[1]:
            upcoming = (term, when)

    if previous is None:
        previous = (LESSER_COLD, LESSER_COLD.on(year - 1))
    if upcoming is None:
        upcoming = (START_OF_SPRING, START_OF_SPRING.on(year + 1))

    days_to_previous = (birth - previous[1]).days
    days_to_upcoming = (upcoming[1] - birth).days
    if days_to_upcoming <= days_to_previous:
        term, days = upcoming[0], days_to_upcoming
    else:
        term, days = previous[0], days_to_previous

    age = days // DAYS_PER_YEAR_OF_AGE
    logger.debug("start age for %04d-%02d-%02d: %d (%d days to %s)",
                 year, month, day, age, days, term.name)
    return age, term


# ============================================================
# LUCK PILLAR SEQUENCE
# ============================================================

@dataclass(frozen=True)
class LuckPillar:
    step_number: int
    age_range_start: int
    age_range_end: int
    pillar: Pillar

    def to_dict(self):
        return {
            "step_number": self.step_number,
            "age_range_start": self.age_range_start,
            "age_range_end": self.age_range_end,
            "pillar": str(self.pillar),
        }


def first_luck_pillar(month_pillar: Pillar, direction: LuckDirection) -> Pillar:
    """The first luck pillar is the month pillar's neighbour in the walk direction."""
    return shift(month_pillar, direction.step)


def luck_sequence(month_pillar: Pillar, direction: LuckDirection,
                  start_age: int, steps: int = LUCK_STEPS) -> list[LuckPillar]:
    """
    Walk the 60-cycle from the month pillar, one position per decade.

    Step k (1-based) sits k positions from the month pillar and covers
    ages [start_age + 10(k-1), start_age + 10(k-1) + 9].
    """
    pillars = []
    for k in range(1, steps + 1):
        age_start = start_age + (k - 1) * YEARS_PER_STEP
        pillars.append(LuckPillar(
            step_number=k,
            age_range_start=age_start,
            age_range_end=age_start + YEARS_PER_STEP - 1,
            pillar=shift(month_pillar, direction.step * k),
        ))
    return pillars


@dataclass(frozen=True)
class LuckCycle:
    start_age: int
    direction: LuckDirection
    start_term: SolarTermBoundary
    sequence: tuple[LuckPillar, ...]

    @property
    def first_pillar(self) -> Pillar:
        return self.sequence[0].pillar

    def pillar_for_age(self, age: int) -> Union[Pillar, str]:
        """
        Luck pillar governing ``age``, or PRE_CYCLE before the start age.

        Ages past the last listed step keep walking the cycle.
        """
        if age < self.start_age:
            return PRE_CYCLE
        step = (age - self.start_age) // YEARS_PER_STEP
        return shift(self.first_pillar, self.direction.step * step)

    def to_dict(self):
        return {
            "start_age": self.start_age,
            "luck_direction": self.direction.value,
            "start_term": self.start_term.name,
            "first_luck_pillar": str(self.first_pillar),
            "luck_sequence": [lp.to_dict() for lp in self.sequence],
        }


def compute_luck_cycle(year_pillar: Pillar, month_pillar: Pillar, gender: Union[Gender, str],
                       year: int, month: int, day: int) -> LuckCycle:
    """
    Compute the Da Yun luck cycle.

    Args:
        year_pillar: natal year pillar (its stem fixes the polarity)
        month_pillar: natal month pillar (the walk starts next to it)
        gender: Gender or "male"/"female"
        year, month, day: Gregorian birth date

    Returns:
        LuckCycle with start age, direction and the 10-step sequence
    """
    direction = luck_direction(year_pillar.stem, gender)
    age, term = start_age(year, month, day)
    sequence = tuple(luck_sequence(month_pillar, direction, age))
    logger.debug("luck cycle: %s from %s, start age %d, first pillar %s",
                 direction.value, month_pillar, age, sequence[0].pillar)
    return LuckCycle(start_age=age, direction=direction, start_term=term, sequence=sequence)


# ============================================================
# LIFE TIMELINE
# ============================================================

@dataclass(frozen=True)
class TimelineEntry:
    age: int  # nominal age (虚岁), 1 in the birth year
    year: int
    da_yun: str
    gan_zhi: str

    def to_dict(self):
        return {"age": self.age, "year": self.year, "da_yun": self.da_yun, "gan_zhi": self.gan_zhi}


def life_timeline(birth_year: int, cycle: LuckCycle, years: int = 100) -> list[TimelineEntry]:
    """
    One entry per nominal age 1..years, pairing the luck pillar in force
    with that calendar year's annual pillar.

    Nominal ages start at 1, so a start age of 0 is walked from age 1 and
    the first luck pillar covers ages 1-10.
    """
    if cycle.start_age < 1:
        cycle = replace(cycle, start_age=1)
    entries = []
    for age in range(1, years + 1):
        year = birth_year + age - 1
        entries.append(TimelineEntry(
            age=age,
            year=year,
            da_yun=str(cycle.pillar_for_age(age)),
            gan_zhi=str(annual_pillar(year)),
        ))
    return entries
