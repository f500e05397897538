"""Lunar date adapter tests."""

import pytest

from bazi_engine.errors import ExternalConversionError
from bazi_engine.lunar import LunarDate, solar_to_lunar


class TestLunarPython:
    def test_regular_month(self):
        lunar = solar_to_lunar(2000, 2, 29)
        assert (lunar.year, lunar.month, lunar.day, lunar.is_leap) == (2000, 1, 25, False)
        assert "正月廿五" in lunar.display

    def test_leap_month(self):
        # 2023 had a leap second month starting on March 22
        lunar = solar_to_lunar(2023, 4, 1)
        assert (lunar.year, lunar.month, lunar.day, lunar.is_leap) == (2023, 2, 11, True)

    def test_new_year(self):
        lunar = solar_to_lunar(2024, 2, 10)
        assert (lunar.year, lunar.month, lunar.day) == (2024, 1, 1)


class TestConverterBoundary:
    def test_result_is_passed_through(self, stub_lunar):
        lunar = solar_to_lunar(1990, 1, 3, converter=stub_lunar)
        assert lunar == LunarDate(1990, 1, 3, False, "stub 1990-1-3")
        assert stub_lunar.calls == [(1990, 1, 3)]

    def test_failure_wrapped(self):
        def broken(year, month, day):
            raise KeyError("table missing")

        with pytest.raises(ExternalConversionError) as excinfo:
            solar_to_lunar(2000, 1, 1, converter=broken)
        assert isinstance(excinfo.value.__cause__, KeyError)

    def test_malformed_result_wrapped(self):
        with pytest.raises(ExternalConversionError):
            solar_to_lunar(2000, 1, 1, converter=lambda y, m, d: (y, m))

    def test_own_error_propagates_unchanged(self):
        error = ExternalConversionError("service down")

        def failing(year, month, day):
            raise error

        with pytest.raises(ExternalConversionError) as excinfo:
            solar_to_lunar(2000, 1, 1, converter=failing)
        assert excinfo.value is error
