"""
Lunar date adapter.

Wraps the external lunar calendar converter (lunar_python by default)
and repackages its answer without reinterpreting it.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Callable, Optional

from lunar_python import Solar

from bazi_engine.errors import ExternalConversionError

logger = logging.getLogger(__name__)

# (year, month, day) -> (lunar_year, lunar_month, lunar_day, is_leap, display)
LunarConverter = Callable[[int, int, int], tuple]


@dataclass(frozen=True)
class LunarDate:
    year: int
    month: int
    day: int
    is_leap: bool
    display: str

    def to_dict(self):
        return asdict(self)


def lunar_python_converter(year: int, month: int, day: int) -> tuple:
    """Convert with lunar_python. Leap months come back as negative month numbers."""
    lunar = Solar.fromYmd(year, month, day).getLunar()
    lunar_month = lunar.getMonth()
    return lunar.getYear(), abs(lunar_month), lunar.getDay(), lunar_month < 0, lunar.toString()


def solar_to_lunar(year: int, month: int, day: int,
                   converter: Optional[LunarConverter] = None) -> LunarDate:
    """
    Look up the lunar date of a Gregorian day.

    Args:
        year, month, day: Gregorian date (validated by the caller)
        converter: replacement for the lunar_python converter

    Raises:
        ExternalConversionError: the converter failed or returned a malformed result
    """
    converter = converter or lunar_python_converter
    try:
        lunar_year, lunar_month, lunar_day, is_leap, display = converter(year, month, day)
    except ExternalConversionError:
        raise
    except Exception as e:
        logger.warning("lunar conversion failed for %04d-%02d-%02d: %s", year, month, day, e)
        raise ExternalConversionError(
            f"Lunar conversion failed for {year:04d}-{month:02d}-{day:02d}: {e}"
        ) from e

    return LunarDate(
        year=lunar_year,
        month=lunar_month,
        day=lunar_day,
        is_leap=bool(is_leap),
        display=display,
    )
