"""
Availability exception data models for the Resource Availability Resolver.

This module defines the 'Override' side of availability:
1. AvailabilityException (a stored date-specific override)
2. ExceptionCreate (caller-side input validation for new overrides)
3. ExceptionUpdate (partial update of an existing override)
"""

from enum import Enum
from decimal import Decimal
from datetime import date, time, datetime, timezone
from typing import Optional, Union
from pydantic import BaseModel, Field, field_validator, model_validator, ConfigDict

from .pattern import DEFAULT_CURRENCY, CURRENCY_PATTERN

MAX_HOURS_PER_DAY = Decimal("24")
MAX_HOURLY_RATE = Decimal("999999.99")
MAX_NOTES_LENGTH = 1000


class ExceptionType(str, Enum):
    """Categories of date-specific overrides."""
    HOLIDAY = "holiday"
    VACATION = "vacation"
    CUSTOM = "custom"
    NON_WORKING = "non-working"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _has_two_decimals_at_most(value: Decimal) -> bool:
    return value == value.quantize(Decimal("0.01"))


class AvailabilityException(BaseModel):
    """
    A date-specific override of the weekly pattern for one resource.
    Inactive exceptions are invisible to resolution.
    """

    # --- Identity ---
    id: str = Field(description="Opaque unique identifier")
    resource_id: Union[int, str] = Field(description="Owning resource")
    exception_date: date = Field(description="Calendar date the override applies to")

    # --- Override Values ---
    is_active: bool = Field(default=True)
    hours_available: Decimal = Field(ge=0, le=MAX_HOURS_PER_DAY)
    hourly_rate: Decimal = Field(ge=0)
    currency: str = Field(default=DEFAULT_CURRENCY, pattern=CURRENCY_PATTERN)
    exception_type: ExceptionType

    # --- Informational ---
    notes: Optional[str] = Field(default=None, max_length=MAX_NOTES_LENGTH)
    start_time_utc: Optional[time] = Field(default=None, description="Not used in hour arithmetic")
    end_time_utc: Optional[time] = Field(default=None, description="Not used in hour arithmetic")

    created_at: datetime = Field(default_factory=_utc_now)
    updated_at: Optional[datetime] = Field(default=None)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "id": "5b0c8c1e-4a7e-4f43-9d56-0d3f2b1a7c11",
            "resource_id": 1,
            "exception_date": "2024-01-16",
            "is_active": True,
            "hours_available": "0.00",
            "hourly_rate": "50.00",
            "currency": "USD",
            "exception_type": "holiday",
            "notes": "New Year"
        }
    })


class ExceptionCreate(BaseModel):
    """
    Input for creating an exception.
    Enforces the business rules the resolver itself never re-checks.
    """
    resource_id: int = Field(gt=0)
    exception_date: date
    start_time_utc: Optional[time] = None
    end_time_utc: Optional[time] = None
    hours_available: Decimal = Field(ge=0, le=MAX_HOURS_PER_DAY)
    hourly_rate: Decimal = Field(gt=0, le=MAX_HOURLY_RATE)
    currency: str = Field(default=DEFAULT_CURRENCY, pattern=CURRENCY_PATTERN)
    is_active: bool = True
    exception_type: ExceptionType
    notes: Optional[str] = Field(default=None, max_length=MAX_NOTES_LENGTH)

    @field_validator('hours_available', 'hourly_rate')
    @classmethod
    def validate_precision(cls, v):
        if not _has_two_decimals_at_most(v):
            raise ValueError("At most 2 decimal places are allowed")
        return v

    @field_validator('notes')
    @classmethod
    def strip_notes(cls, v):
        return v.strip() if v is not None else v

    @model_validator(mode='after')
    def validate_rules(self):
        if self.hours_available == 0 and self.exception_type != ExceptionType.NON_WORKING:
            raise ValueError('Exception type must be "non-working" when hours available is 0')

        if self.start_time_utc and self.end_time_utc and self.end_time_utc <= self.start_time_utc:
            raise ValueError("End time must be after start time")
        return self

    def to_exception(self, exception_id: str) -> AvailabilityException:
        """Build the stored form once the persistence layer has assigned an id."""
        return AvailabilityException(id=exception_id, **self.model_dump())


class ExceptionUpdate(BaseModel):
    """Partial update for an existing exception. Unset fields keep their prior values."""
    exception_date: Optional[date] = None
    start_time_utc: Optional[time] = None
    end_time_utc: Optional[time] = None
    hours_available: Optional[Decimal] = Field(default=None, ge=0, le=MAX_HOURS_PER_DAY)
    hourly_rate: Optional[Decimal] = Field(default=None, ge=0)
    currency: Optional[str] = Field(default=None, pattern=CURRENCY_PATTERN)
    is_active: Optional[bool] = None
    exception_type: Optional[ExceptionType] = None
    notes: Optional[str] = Field(default=None, max_length=MAX_NOTES_LENGTH)
    updated_at: Optional[datetime] = None

    @model_validator(mode='after')
    def validate_rules(self):
        if (self.hours_available is not None and self.hours_available == 0
                and self.exception_type is not None
                and self.exception_type != ExceptionType.NON_WORKING):
            raise ValueError('Exception type must be "non-working" when hours available is 0')
        return self

    def changes(self) -> dict:
        """Fields explicitly provided with a value."""
        return self.model_dump(exclude_unset=True, exclude_none=True)
