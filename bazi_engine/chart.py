"""
Chart creation entry point.
Computes the Four Pillars, the Da Yun luck cycle and the lunar date
for one birth instant.

Usage from Python:
    from bazi_engine.chart import compute_bazi_chart
    chart = compute_bazi_chart(2000, 2, 29, 8, 30, "male")
    chart.to_dict()
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from bazi_engine.bazi import BaziChart, four_pillars
from bazi_engine.calendar_utils import validate_date, validate_time
from bazi_engine.errors import InvalidDateError
from bazi_engine.luck import Gender, LuckCycle, TimelineEntry, compute_luck_cycle, life_timeline, parse_gender
from bazi_engine.lunar import LunarConverter, LunarDate, solar_to_lunar

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BirthChart:
    gender: Gender
    pillars: BaziChart
    luck: LuckCycle
    lunar_date: LunarDate
    timeline: tuple[TimelineEntry, ...] = ()

    def to_dict(self):
        result = {
            "gender": self.gender.value,
            "year_pillar": str(self.pillars.year),
            "month_pillar": str(self.pillars.month),
            "day_pillar": str(self.pillars.day),
            "hour_pillar": str(self.pillars.hour),
            **self.luck.to_dict(),
            "lunar_date": self.lunar_date.to_dict(),
            "pillar_details": {
                "year": self.pillars.year.to_dict(),
                "month": self.pillars.month.to_dict(),
                "day": self.pillars.day.to_dict(),
                "hour": self.pillars.hour.to_dict(),
            },
        }
        if self.timeline:
            result["timeline"] = [entry.to_dict() for entry in self.timeline]
        return result


def compute_bazi_chart(year: int, month: int, day: int, hour: int, minute: int,
                       gender: Union[Gender, str],
                       lunar_converter: Optional[LunarConverter] = None,
                       timeline_years: int = 0) -> BirthChart:
    """
    Compute a full BaZi chart from birth data.

    Args:
        year: Gregorian year, 1900 or later
        month, day: Gregorian month and day
        hour, minute: local clock time
        gender: "male" or "female" (or a Gender); sets the luck direction
        lunar_converter: override for the lunar calendar collaborator
        timeline_years: when > 0, also build the year-by-year timeline for
            nominal ages 1..timeline_years

    Returns:
        BirthChart; fails as a whole with InvalidDateError, InvalidGenderError
        or ExternalConversionError.
    """
    validate_date(year, month, day)
    validate_time(hour, minute)
    gender = parse_gender(gender)
    if isinstance(timeline_years, bool) or not isinstance(timeline_years, int) or timeline_years < 0:
        raise InvalidDateError(f"timeline_years must be a non-negative integer, got {timeline_years!r}")

    pillars = four_pillars(year, month, day, hour, minute)
    luck = compute_luck_cycle(pillars.year, pillars.month, gender, year, month, day)
    lunar_date = solar_to_lunar(year, month, day, converter=lunar_converter)

    timeline = ()
    if timeline_years > 0:
        timeline = tuple(life_timeline(year, luck, years=timeline_years))

    logger.info("chart for %04d-%02d-%02d %02d:%02d %s: %s, start age %d %s",
                year, month, day, hour, minute, gender.value, pillars,
                luck.start_age, luck.direction.value)

    return BirthChart(gender=gender, pillars=pillars, luck=luck,
                      lunar_date=lunar_date, timeline=timeline)
