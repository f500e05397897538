"""
Calendar utilities for BaZi calculations.
Handles Gregorian day-count arithmetic, the fixed solar term table,
and validation of birth input.
"""

from dataclasses import dataclass
from datetime import date

from bazi_engine.errors import InvalidDateError

EPOCH_YEAR = 1900
# the start-age scan looks one calendar year past the birth year
MAX_YEAR = 9998


# ============================================================
# DAY-COUNT ARITHMETIC
# ============================================================

def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given Gregorian month."""
    if month == 2:
        return 29 if is_leap_year(year) else 28
    if month in (4, 6, 9, 11):
        return 30
    return 31


def days_since_epoch(year: int, month: int, day: int) -> int:
    """
    Count days from 1900-01-01 (day 0) to the given date.

    Sums whole years from the epoch, then whole months of the target
    year, then the day offset within the month.
    """
    days = sum(366 if is_leap_year(y) else 365 for y in range(EPOCH_YEAR, year))
    days += sum(days_in_month(year, m) for m in range(1, month))
    return days + day - 1


# ============================================================
# SOLAR TERM BOUNDARIES
# ============================================================
#
# The 12 Jie (节) solar terms mark BaZi month boundaries. Dates are fixed
# approximations; the real crossings drift by a day or two year to year.
#
# Li Chun   (2/4)  → Tiger month   (slot 0)
# Jing Zhe  (3/6)  → Rabbit month  (slot 1)
# Qing Ming (4/5)  → Dragon month  (slot 2)
# Li Xia    (5/6)  → Snake month   (slot 3)
# Mang Zhong(6/6)  → Horse month   (slot 4)
# Xiao Shu  (7/7)  → Goat month    (slot 5)
# Li Qiu    (8/7)  → Monkey month  (slot 6)
# Bai Lu    (9/8)  → Rooster month (slot 7)
# Han Lu    (10/8) → Dog month     (slot 8)
# Li Dong   (11/7) → Pig month     (slot 9)
# Da Xue    (12/7) → Rat month     (slot 10)
# Xiao Han  (1/6)  → Ox month      (slot 11)

@dataclass(frozen=True)
class SolarTermBoundary:
    name: str
    pinyin: str
    month: int
    day: int
    slot: int  # month slot that starts at this boundary; branch index = (slot + 2) % 12

    def on(self, year: int) -> date:
        """Date of this boundary in the given calendar year."""
        return date(year, self.month, self.day)


SOLAR_TERMS = (
    SolarTermBoundary("立春", "Li Chun", 2, 4, 0),
    SolarTermBoundary("惊蛰", "Jing Zhe", 3, 6, 1),
    SolarTermBoundary("清明", "Qing Ming", 4, 5, 2),
    SolarTermBoundary("立夏", "Li Xia", 5, 6, 3),
    SolarTermBoundary("芒种", "Mang Zhong", 6, 6, 4),
    SolarTermBoundary("小暑", "Xiao Shu", 7, 7, 5),
    SolarTermBoundary("立秋", "Li Qiu", 8, 7, 6),
    SolarTermBoundary("白露", "Bai Lu", 9, 8, 7),
    SolarTermBoundary("寒露", "Han Lu", 10, 8, 8),
    SolarTermBoundary("立冬", "Li Dong", 11, 7, 9),
    SolarTermBoundary("大雪", "Da Xue", 12, 7, 10),
    SolarTermBoundary("小寒", "Xiao Han", 1, 6, 11),
)

START_OF_SPRING = SOLAR_TERMS[0]
GREATER_SNOW = SOLAR_TERMS[10]
LESSER_COLD = SOLAR_TERMS[11]


def before_start_of_spring(month: int, day: int) -> bool:
    """True if the date falls before Li Chun, i.e. in the previous sexagenary year."""
    return (month, day) < (START_OF_SPRING.month, START_OF_SPRING.day)


def month_slot(year: int, month: int, day: int) -> int:
    """
    Determine the BaZi month slot (0 = Tiger month after Li Chun).

    Keeps the latest of the birth year's 12 boundaries that falls on or
    before the birth date, so 2/1-2/3 still sit in the Ox month opened by
    that January's Xiao Han. Dates in 1/1-1/5 precede every boundary of
    their calendar year and belong to the previous Da Xue interval (Rat month).
    """
    birth = date(year, month, day)
    slot = GREATER_SNOW.slot
    latest = None
    for term in SOLAR_TERMS:
        when = term.on(year)
        if when <= birth and (latest is None or when > latest):
            latest, slot = when, term.slot
    return slot


# ============================================================
# INPUT VALIDATION
# ============================================================

def _require_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidDateError(f"{name} must be an integer, got {value!r}")
    return value


def validate_date(year, month, day) -> None:
    """Raise InvalidDateError unless (year, month, day) is a supported Gregorian date."""
    _require_int("year", year)
    _require_int("month", month)
    _require_int("day", day)
    if not EPOCH_YEAR <= year <= MAX_YEAR:
        raise InvalidDateError(f"year must be between {EPOCH_YEAR} and {MAX_YEAR}, got {year}")
    if not 1 <= month <= 12:
        raise InvalidDateError(f"month must be between 1 and 12, got {month}")
    last_day = days_in_month(year, month)
    if not 1 <= day <= last_day:
        raise InvalidDateError(f"day must be between 1 and {last_day} for {year}-{month:02d}, got {day}")


def validate_time(hour, minute) -> None:
    """Raise InvalidDateError unless hour is 0-23 and minute is 0-59."""
    _require_int("hour", hour)
    _require_int("minute", minute)
    if not 0 <= hour <= 23:
        raise InvalidDateError(f"hour must be between 0 and 23, got {hour}")
    if not 0 <= minute <= 59:
        raise InvalidDateError(f"minute must be between 0 and 59, got {minute}")
