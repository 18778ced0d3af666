"""
Sample data generator for the Resource Availability Resolver.

Produces the standard working week (Mon-Fri 09:00-17:00, weekends off)
and a small deterministic set of exceptions around a start date, so the
runner and the tests have realistic input without a database.
"""

import logging
from datetime import date, time, timedelta
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from models import ExceptionCreate, ExceptionType, WeeklyPattern, DEFAULT_CURRENCY

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

WORKDAY_START = time(9, 0)
WORKDAY_END = time(17, 0)


def parse_batch(items: Iterable[Dict[str, Any]], model_class: Type[ModelT]) -> List[ModelT]:
    """Validate raw dicts into models, skipping (and logging) the invalid ones."""
    valid_items = []
    for i, item in enumerate(items):
        try:
            valid_items.append(model_class(**item))
        except ValidationError as e:
            logger.warning(f"Skipping invalid item {i} in batch: {e.json()}")
            continue
    return valid_items


def default_weekly_patterns(
    resource_id: Union[int, str],
    currency: str = DEFAULT_CURRENCY,
    hourly_rate: Optional[Union[Decimal, str]] = None
) -> List[WeeklyPattern]:
    """Monday to Friday active 09:00-17:00; Saturday and Sunday inactive."""
    patterns = []
    for day in range(7):
        is_weekday = day < 5
        patterns.append(WeeklyPattern(
            resource_id=resource_id,
            day_of_week=day,
            is_active=is_weekday,
            work_start_time=WORKDAY_START if is_weekday else None,
            work_end_time=WORKDAY_END if is_weekday else None,
            total_work_hours=None if is_weekday else Decimal("0"),
            hourly_rate=hourly_rate,
            currency=currency
        ))
    return patterns


def sample_exceptions(
    resource_id: int,
    start: date,
    hourly_rate: Union[Decimal, str] = "50.00",
    currency: str = DEFAULT_CURRENCY
) -> List[ExceptionCreate]:
    """
    Overrides relative to start: a non-working public holiday on day 1,
    a custom half day on day 3, and five non-working vacation days from day 7.
    Zero-hour samples are typed non-working, as ExceptionCreate requires.
    """
    raw = [
        {
            "exception_date": start + timedelta(days=1),
            "hours_available": "0",
            "exception_type": ExceptionType.NON_WORKING,
            "notes": "Public holiday"
        },
        {
            "exception_date": start + timedelta(days=3),
            "hours_available": "4",
            "exception_type": ExceptionType.CUSTOM,
            "start_time_utc": time(9, 0),
            "end_time_utc": time(13, 0),
            "notes": "Half day"
        },
    ]
    raw.extend(
        {
            "exception_date": start + timedelta(days=offset),
            "hours_available": "0",
            "exception_type": ExceptionType.NON_WORKING,
            "notes": "Vacation"
        }
        for offset in range(7, 12)
    )

    for item in raw:
        item.update(resource_id=resource_id, hourly_rate=hourly_rate, currency=currency)
    return parse_batch(raw, ExceptionCreate)


class DataGenerator:
    """Bundles the default week and sample exceptions for one resource."""

    def __init__(
        self,
        currency: str = DEFAULT_CURRENCY,
        hourly_rate: Union[Decimal, str] = "50.00"
    ):
        self.currency = currency
        self.hourly_rate = Decimal(hourly_rate)

    def generate_resource(
        self,
        resource_id: int,
        start_date: Optional[date] = None
    ) -> Tuple[List[WeeklyPattern], List[ExceptionCreate]]:
        if start_date is None:
            start_date = date.today()

        patterns = default_weekly_patterns(resource_id, self.currency, self.hourly_rate)
        exceptions = sample_exceptions(resource_id, start_date, self.hourly_rate, self.currency)
        logger.info(f"Generated {len(patterns)} patterns and {len(exceptions)} exceptions for resource {resource_id}")
        return patterns, exceptions
