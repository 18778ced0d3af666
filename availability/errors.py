"""
Error types.

Absence of scheduling data is never an error; the resolver's only hard
failure is a date it cannot read. Conflicts belong to storage.
"""

from typing import Any


class InvalidDateError(ValueError):
    """Raised when a supplied value cannot be parsed as a calendar date."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Invalid date format: {value!r}")


class ExceptionConflictError(ValueError):
    """Raised by storage when a resource already has an active exception on a date."""

    def __init__(self, resource_id: Any, exception_date: Any):
        self.resource_id = resource_id
        self.exception_date = exception_date
        super().__init__(f"Resource {resource_id} already has an exception on {exception_date}")


class UnreadableResourceError(ValueError):
    """Raised by storage when writing to a resource whose stored data failed validation."""

    def __init__(self, resource_id: Any, path: Any):
        self.resource_id = resource_id
        self.path = path
        super().__init__(f"Stored data for resource {resource_id} in {path} is invalid; repair it before writing")
