"""
Timeline rows for presentation layers.

Cost is the caller's concern, not the resolver's: rows built here add
cost = hours_available * hourly_rate on top of each resolved day.
"""

from decimal import Decimal
from enum import Enum
from typing import Iterable, List, Optional

from pydantic import BaseModel, Field

from models import AvailabilityResult, AvailabilitySource
from .dates import DateLike
from .resolver import AvailabilityResolver


class AvailabilityStatus(str, Enum):
    """Filter on the kind of day."""
    WORKING = "working"
    NON_WORKING = "non-working"
    EXCEPTION = "exception"


class TimelineDay(AvailabilityResult):
    """A resolved day with its computed cost."""
    cost: Decimal = Field(ge=0)

    @classmethod
    def from_result(cls, result: AvailabilityResult) -> "TimelineDay":
        return cls(
            **result.model_dump(),
            cost=result.hours_available * result.hourly_rate
        )


class TimelineFilters(BaseModel):
    status: Optional[AvailabilityStatus] = None
    min_hours: Optional[Decimal] = Field(default=None, ge=0)
    max_hours: Optional[Decimal] = Field(default=None, ge=0)


def build_timeline(
    resolver: AvailabilityResolver,
    start_date: DateLike,
    end_date: DateLike
) -> List[TimelineDay]:
    return [TimelineDay.from_result(r) for r in resolver.resolve_range(start_date, end_date)]


def filter_timeline(
    days: Iterable[TimelineDay],
    filters: Optional[TimelineFilters] = None
) -> List[TimelineDay]:
    """Keep the days matching every supplied filter."""
    days = list(days)
    if filters is None:
        return days

    if filters.status == AvailabilityStatus.WORKING:
        days = [d for d in days if d.is_working_day]
    elif filters.status == AvailabilityStatus.NON_WORKING:
        days = [d for d in days if not d.is_working_day]
    elif filters.status == AvailabilityStatus.EXCEPTION:
        days = [d for d in days if d.source == AvailabilitySource.EXCEPTION]

    if filters.min_hours is not None:
        days = [d for d in days if d.hours_available >= filters.min_hours]
    if filters.max_hours is not None:
        days = [d for d in days if d.hours_available <= filters.max_hours]

    return days


def total_cost(days: Iterable[TimelineDay]) -> Decimal:
    return sum((d.cost for d in days), Decimal("0"))
