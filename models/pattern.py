"""
Weekly work pattern data models for the Resource Availability Resolver.

This module defines the 'Default' side of availability:
the recurring schedule a resource follows when no date-specific
exception applies.
"""

from decimal import Decimal
from datetime import datetime, date, time
from typing import Optional, Union
from pydantic import BaseModel, Field, model_validator, ConfigDict

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

DEFAULT_CURRENCY = "USD"
CURRENCY_PATTERN = r"^[A-Z]{3}$"


class WeeklyPattern(BaseModel):
    """
    One day of a resource's recurring week.
    A resource has at most one pattern per day_of_week.
    """

    # --- Identity ---
    resource_id: Optional[Union[int, str]] = Field(default=None, description="Owning resource")
    day_of_week: int = Field(ge=0, le=6, description="0=Monday, 6=Sunday")

    # --- Availability ---
    is_active: bool = Field(description="Whether this weekday is a working day at all")
    total_work_hours: Optional[Decimal] = Field(
        default=None,
        ge=0,
        le=24,
        description="Hours worked on this weekday (None resolves as 0)"
    )
    work_start_time: Optional[time] = Field(default=None, description="Shift start")
    work_end_time: Optional[time] = Field(default=None, description="Shift end")

    # --- Pricing ---
    hourly_rate: Optional[Decimal] = Field(default=None, ge=0, description="None resolves as 0")
    currency: str = Field(default=DEFAULT_CURRENCY, pattern=CURRENCY_PATTERN)

    @model_validator(mode='after')
    def derive_hours_from_shift(self):
        """Inactive days may carry a placeholder 00:00-00:00 shift, so only active days are checked."""
        if self.work_start_time is None or self.work_end_time is None or not self.is_active:
            return self

        if self.work_end_time <= self.work_start_time:
            raise ValueError("End time must be strictly after start time")

        if self.total_work_hours is None:
            anchor = date(2000, 1, 1)
            span = datetime.combine(anchor, self.work_end_time) - datetime.combine(anchor, self.work_start_time)
            self.total_work_hours = Decimal(int(span.total_seconds())) / Decimal(3600)
        return self

    @property
    def day_name(self) -> str:
        return DAY_NAMES[self.day_of_week]

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "resource_id": 1,
            "day_of_week": 0,
            "is_active": True,
            "total_work_hours": "8.00",
            "work_start_time": "09:00:00",
            "work_end_time": "17:00:00",
            "hourly_rate": "50.00",
            "currency": "USD"
        }
    })
