from datetime import datetime, timezone

import pytest

from availability import AvailabilityResolver
from models import AvailabilityException, WeeklyPattern

CREATED = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_pattern(day_of_week, hours=8, rate=50, is_active=True, currency="USD"):
    return WeeklyPattern(
        resource_id=1,
        day_of_week=day_of_week,
        is_active=is_active,
        total_work_hours=hours,
        hourly_rate=rate,
        currency=currency,
    )


def make_exception(exception_id, exception_date, hours="4", rate="75",
                   is_active=True, exception_type="custom", notes=None):
    return AvailabilityException(
        id=exception_id,
        resource_id=1,
        exception_date=exception_date,
        hours_available=hours,
        hourly_rate=rate,
        currency="USD",
        is_active=is_active,
        exception_type=exception_type,
        notes=notes,
        created_at=CREATED,
    )


@pytest.fixture
def monday_pattern():
    return make_pattern(0)


@pytest.fixture
def weekday_patterns():
    """Monday to Friday, 8 hours at 50."""
    return [make_pattern(day) for day in range(5)]


@pytest.fixture
def resolver():
    return AvailabilityResolver()


@pytest.fixture
def week_resolver(weekday_patterns):
    holiday = make_exception("4", "2024-01-16", hours="0", rate="50",
                             exception_type="holiday", notes="New Year")
    return AvailabilityResolver(weekday_patterns, [holiday])
