"""
Availability resolution package.

Exports the resolver, its error types and the storage collaborators.
"""

from .errors import InvalidDateError, ExceptionConflictError, UnreadableResourceError
from .dates import to_monday_based, parse_date, normalize_date
from .resolver import AvailabilityResolver
from .repository import AvailabilityRepository, JsonFileRepository

__all__ = [
    "AvailabilityResolver",
    "InvalidDateError",
    "ExceptionConflictError",
    "UnreadableResourceError",
    "to_monday_based",
    "parse_date",
    "normalize_date",
    "AvailabilityRepository",
    "JsonFileRepository",
]
