"""
The Resource Availability Resolver.

This module implements the core rule evaluation.
Availability for a date is decided by three rules, strictly in order:
1. Active Exception (first match in iteration order) - a dated override always wins.
2. Weekly Pattern (active entry for the weekday) - the resource's default week.
3. Closed-World Default - no data means a day off, never an error.
"""

import logging
from decimal import Decimal
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from models import (
    AvailabilityException,
    AvailabilityResult,
    AvailabilitySource,
    AvailabilitySummary,
    ExceptionUpdate,
    WeeklyPattern,
    DEFAULT_CURRENCY,
)
from .dates import DateLike, iter_dates, native_day_index, parse_date, to_monday_based
from .errors import InvalidDateError
from .state import AvailabilityState, ExceptionInput, PatternInput

logger = logging.getLogger(__name__)

NO_PATTERN_NOTE = "No availability pattern found"
ZERO = Decimal("0")


class AvailabilityResolver:
    """
    Resolves per-day availability for a single resource.
    Built per request from the caller's patterns and exceptions; holds no I/O.
    """

    def __init__(
        self,
        work_schedules: Optional[Iterable[PatternInput]] = None,
        exceptions: Optional[Iterable[ExceptionInput]] = None
    ):
        self.state = AvailabilityState(work_schedules, exceptions)

    @property
    def work_schedules(self) -> Tuple[WeeklyPattern, ...]:
        return tuple(self.state.work_schedules)

    @property
    def exceptions(self) -> Tuple[AvailabilityException, ...]:
        return tuple(self.state.exceptions)

    # --- Resolution ---

    def resolve_day(self, date: DateLike) -> AvailabilityResult:
        """
        Resolve availability for one date.

        Raises:
            InvalidDateError: If date cannot be parsed.
        """
        day = parse_date(date)
        normalized = day.isoformat()
        day_of_week = to_monday_based(native_day_index(day))

        # 1. Exception (highest priority)
        exception = self.state.find_active_exception(day)
        if exception is not None:
            hours = exception.hours_available
            logger.debug(f"{normalized}: exception {exception.id} ({exception.exception_type.value})")
            return AvailabilityResult(
                date=normalized,
                hours_available=hours,
                hourly_rate=exception.hourly_rate,
                currency=exception.currency or DEFAULT_CURRENCY,
                is_working_day=hours > 0,
                source=AvailabilitySource.EXCEPTION,
                day_of_week=day_of_week,
                notes=exception.notes or None
            )

        # 2. Weekly pattern (fallback)
        pattern = self.state.find_weekly_pattern(day_of_week)
        if pattern is not None:
            hours = pattern.total_work_hours or ZERO
            logger.debug(f"{normalized}: weekly pattern for {pattern.day_name}")
            return AvailabilityResult(
                date=normalized,
                hours_available=hours,
                hourly_rate=pattern.hourly_rate or ZERO,
                currency=pattern.currency or DEFAULT_CURRENCY,
                is_working_day=pattern.is_active and hours > 0,
                source=AvailabilitySource.WEEKLY_PATTERN,
                day_of_week=day_of_week
            )

        # 3. Default (non-working)
        logger.debug(f"{normalized}: no pattern, defaulting to non-working")
        return AvailabilityResult(
            date=normalized,
            hours_available=ZERO,
            hourly_rate=ZERO,
            currency=DEFAULT_CURRENCY,
            is_working_day=False,
            source=AvailabilitySource.WEEKLY_PATTERN,
            day_of_week=day_of_week,
            notes=NO_PATTERN_NOTE
        )

    def resolve_range(self, start_date: DateLike, end_date: DateLike) -> List[AvailabilityResult]:
        """
        Resolve every date from start_date to end_date inclusive, ascending.
        A reversed range is empty rather than an error.
        """
        start = parse_date(start_date)
        end = parse_date(end_date)
        return [self.resolve_day(day) for day in iter_dates(start, end)]

    # --- Aggregation ---

    def total_available_hours(self, start_date: DateLike, end_date: DateLike) -> Decimal:
        """Sum of hours over every resolved day; non-working days add 0."""
        results = self.resolve_range(start_date, end_date)
        return sum((r.hours_available for r in results), ZERO)

    def summarize(self, start_date: DateLike, end_date: DateLike) -> AvailabilitySummary:
        results = self.resolve_range(start_date, end_date)
        working_days = [r for r in results if r.is_working_day]
        total_hours = sum((r.hours_available for r in working_days), ZERO)
        exceptions_count = len(self.exceptions_in_range(start_date, end_date))

        return AvailabilitySummary(
            total_days=len(results),
            working_days=len(working_days),
            total_hours=total_hours,
            exceptions_count=exceptions_count,
            average_hours_per_working_day=total_hours / len(working_days) if working_days else ZERO
        )

    # --- Exception Queries ---

    def has_exception(self, date: DateLike) -> bool:
        try:
            day = parse_date(date)
        except InvalidDateError:
            return False
        return self.state.find_active_exception(day) is not None

    def exceptions_in_range(self, start_date: DateLike, end_date: DateLike) -> List[AvailabilityException]:
        """Active exceptions dated within the inclusive range, compared as dates."""
        try:
            start = parse_date(start_date)
            end = parse_date(end_date)
        except InvalidDateError as e:
            logger.warning(f"Ignoring exception range query: {e}")
            return []
        return self.state.active_exceptions_between(start, end)

    # --- Mutations (in-memory mirror of external writes) ---

    def update_work_schedules(self, work_schedules: Iterable[PatternInput]) -> None:
        self.state.replace_work_schedules(work_schedules)

    def update_exceptions(self, exceptions: Iterable[ExceptionInput]) -> None:
        self.state.replace_exceptions(exceptions)

    def add_exception(self, exception: ExceptionInput) -> None:
        self.state.append_exception(exception)

    def remove_exception(self, exception_id: str) -> bool:
        return self.state.remove_exception(exception_id)

    def update_exception(
        self,
        exception_id: str,
        updates: Union[ExceptionUpdate, Mapping[str, Any]]
    ) -> bool:
        return self.state.patch_exception(exception_id, updates)
