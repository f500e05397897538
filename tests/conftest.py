"""Shared fixtures for the BaZi engine tests."""

import pytest


@pytest.fixture
def stub_lunar():
    """Lunar converter that records its calls instead of calling lunar_python."""
    calls = []

    def converter(year, month, day):
        calls.append((year, month, day))
        return year, month, day, False, f"stub {year}-{month}-{day}"

    converter.calls = calls
    return converter
