"""
Availability output models for the Resource Availability Resolver.

This module defines the 'Output' of the resolver:
per-day results and range summaries. Neither is ever persisted.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from .pattern import DEFAULT_CURRENCY


class AvailabilitySource(str, Enum):
    """Which rule produced a result."""
    WEEKLY_PATTERN = "weekly_pattern"
    EXCEPTION = "exception"


class AvailabilityResult(BaseModel):
    """Resolved availability of one resource on one calendar date."""

    date: str = Field(description="Normalized YYYY-MM-DD")
    hours_available: Decimal = Field(ge=0)
    hourly_rate: Decimal = Field(ge=0)
    currency: str = Field(default=DEFAULT_CURRENCY)
    is_working_day: bool
    source: AvailabilitySource
    day_of_week: int = Field(ge=0, le=6, description="0=Monday, 6=Sunday")
    notes: Optional[str] = None

    model_config = ConfigDict(frozen=True, json_schema_extra={
        "example": {
            "date": "2024-01-15",
            "hours_available": "8",
            "hourly_rate": "50",
            "currency": "USD",
            "is_working_day": True,
            "source": "weekly_pattern",
            "day_of_week": 0,
            "notes": None
        }
    })


class AvailabilitySummary(BaseModel):
    """Aggregate view over a resolved date range."""
    total_days: int = Field(ge=0)
    working_days: int = Field(ge=0)
    total_hours: Decimal = Field(description="Sum over working days only")
    exceptions_count: int = Field(ge=0, description="Active exceptions dated inside the range")
    average_hours_per_working_day: Decimal

    model_config = ConfigDict(frozen=True)
