"""
Error types raised by the BaZi engine.

Every calculator validates its inputs and fails fast with one of these.
The date and gender errors are also ValueErrors so callers that only
know about ValueError keep working.
"""


class BaziError(Exception):
    """Base class for all engine errors."""


class InvalidDateError(BaziError, ValueError):
    """Year, month, day, hour or minute outside the supported range."""


class InvalidGenderError(BaziError, ValueError):
    """Gender value that is neither male nor female."""


class ExternalConversionError(BaziError, RuntimeError):
    """The lunar calendar converter failed."""
