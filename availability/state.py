"""
Resolver State Management.

This module acts as the 'Memory' of the resolver.
It owns the in-memory copies of:
1. The weekly patterns (replaced wholesale).
2. The availability exceptions (replaced, appended, patched, removed).

The caller's storage stays the system of record; these collections only
mirror writes so later resolutions reflect them without a re-fetch.
"""

import logging
from datetime import date as date_type, datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional, Union

from models import AvailabilityException, ExceptionUpdate, WeeklyPattern

logger = logging.getLogger(__name__)

PatternInput = Union[WeeklyPattern, Mapping[str, Any]]
ExceptionInput = Union[AvailabilityException, Mapping[str, Any]]


def _as_pattern(item: PatternInput) -> WeeklyPattern:
    if isinstance(item, WeeklyPattern):
        return item
    return WeeklyPattern.model_validate(item)


def _as_exception(item: ExceptionInput) -> AvailabilityException:
    if isinstance(item, AvailabilityException):
        return item
    return AvailabilityException.model_validate(item)


class AvailabilityState:
    """
    Maintains the mutable collections a resolver evaluates against.
    Iteration order is insertion order; lookups return the first match.

    Plain mappings are validated into models as they come in, so a mapping
    breaking a model constraint (lower-case currency, more than 24 hours,
    an active shift ending before it starts) raises pydantic's ValidationError.
    Models handed over already built are taken as they are.
    """

    def __init__(
        self,
        work_schedules: Optional[Iterable[PatternInput]] = None,
        exceptions: Optional[Iterable[ExceptionInput]] = None
    ):
        self.work_schedules: List[WeeklyPattern] = []
        self.exceptions: List[AvailabilityException] = []
        self.replace_work_schedules(work_schedules or [])
        self.replace_exceptions(exceptions or [])

    # --- Replacement ---

    def replace_work_schedules(self, patterns: Iterable[PatternInput]) -> None:
        self.work_schedules = [_as_pattern(p) for p in patterns]

    def replace_exceptions(self, exceptions: Iterable[ExceptionInput]) -> None:
        self.exceptions = [_as_exception(e) for e in exceptions]

    # --- Exception Mutations ---

    def append_exception(self, exception: ExceptionInput) -> AvailabilityException:
        """Append without any uniqueness check; duplicates resolve first-match."""
        stored = _as_exception(exception)
        self.exceptions.append(stored)
        return stored

    def remove_exception(self, exception_id: str) -> bool:
        index = self._index_of(exception_id)
        if index is None:
            return False
        del self.exceptions[index]
        return True

    def patch_exception(
        self,
        exception_id: str,
        updates: Union[ExceptionUpdate, Mapping[str, Any]]
    ) -> bool:
        """
        Merge the provided fields into the exception with this id.
        id, resource_id and created_at never change; updated_at is refreshed
        unless the update carries its own.
        """
        index = self._index_of(exception_id)
        if index is None:
            return False

        if not isinstance(updates, ExceptionUpdate):
            updates = ExceptionUpdate.model_validate(updates)

        changes = updates.changes()
        changes.setdefault("updated_at", datetime.now(timezone.utc))
        self.exceptions[index] = self.exceptions[index].model_copy(update=changes)
        return True

    # --- Query Methods (Used by the resolver) ---

    def find_active_exception(
        self,
        day: date_type,
        exclude_id: Optional[str] = None
    ) -> Optional[AvailabilityException]:
        """First active exception for the date, in iteration order."""
        for exception in self.exceptions:
            if exception.id == exclude_id:
                continue
            if exception.exception_date == day and exception.is_active:
                return exception
        return None

    def find_weekly_pattern(self, day_of_week: int) -> Optional[WeeklyPattern]:
        """First active pattern for a Monday-based weekday."""
        for pattern in self.work_schedules:
            if pattern.day_of_week == day_of_week and pattern.is_active:
                return pattern
        return None

    def active_exceptions_between(self, start: date_type, end: date_type) -> List[AvailabilityException]:
        return [
            e for e in self.exceptions
            if e.is_active and start <= e.exception_date <= end
        ]

    def get_exception(self, exception_id: str) -> Optional[AvailabilityException]:
        index = self._index_of(exception_id)
        return None if index is None else self.exceptions[index]

    def _index_of(self, exception_id: str) -> Optional[int]:
        for index, exception in enumerate(self.exceptions):
            if exception.id == exception_id:
                return index
        logger.debug(f"Exception {exception_id} not found")
        return None
