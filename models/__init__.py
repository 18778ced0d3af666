"""
Data models package for the Resource Availability Resolver.

This package exports the three core pillars of the data architecture:
1. Default (WeeklyPattern)
2. Override (AvailabilityException, ExceptionType, create/update inputs)
3. Output (AvailabilityResult, AvailabilitySource, AvailabilitySummary)
"""

from .pattern import (
    WeeklyPattern,
    DAY_NAMES,
    DEFAULT_CURRENCY
)

from .exception import (
    AvailabilityException,
    ExceptionType,
    ExceptionCreate,
    ExceptionUpdate
)

from .availability import (
    AvailabilityResult,
    AvailabilitySource,
    AvailabilitySummary
)

__all__ = [
    # --- Default Models ---
    "WeeklyPattern",
    "DAY_NAMES",
    "DEFAULT_CURRENCY",

    # --- Override Models ---
    "AvailabilityException",
    "ExceptionType",
    "ExceptionCreate",
    "ExceptionUpdate",

    # --- Output Models ---
    "AvailabilityResult",
    "AvailabilitySource",
    "AvailabilitySummary",
]
