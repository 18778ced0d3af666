"""
Storage collaborators for the resolver.

The resolver never fetches or persists anything itself. Callers load
patterns and exceptions through an AvailabilityRepository, build a
resolver, and mirror their writes into it.
"""

import json
import logging
import uuid
from datetime import date as date_type
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol, Union

from pydantic import ValidationError

from models import AvailabilityException, ExceptionCreate, ExceptionUpdate, WeeklyPattern
from .errors import ExceptionConflictError, UnreadableResourceError
from .state import AvailabilityState

logger = logging.getLogger(__name__)

ResourceId = Union[int, str]


class AvailabilityRepository(Protocol):
    """What a resolver's caller needs from storage."""

    def load_weekly_patterns(self, resource_id: ResourceId) -> List[WeeklyPattern]: ...

    def load_active_exceptions(
        self,
        resource_id: ResourceId,
        start: Optional[date_type] = None,
        end: Optional[date_type] = None
    ) -> List[AvailabilityException]: ...

    def persist_exception(self, exception: ExceptionCreate) -> str: ...

    def delete_exception(self, exception_id: str) -> bool: ...

    def patch_exception(self, exception_id: str, updates: Union[ExceptionUpdate, Mapping[str, Any]]) -> bool: ...


class JsonFileRepository:
    """
    Keeps every resource's patterns and exceptions in one JSON document:
    {"resources": {"<id>": {"weekly_patterns": [...], "exceptions": [...]}}}
    Each write is saved immediately. Resources that fail validation on load are
    kept on disk as they were and refuse writes until the file is repaired.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.resources: Dict[str, AvailabilityState] = {}
        # Raw payloads that failed validation; written back untouched on save
        self.unreadable: Dict[str, Any] = {}
        self._load()

    # --- Reads ---

    def load_weekly_patterns(self, resource_id: ResourceId) -> List[WeeklyPattern]:
        return list(self._state(resource_id).work_schedules)

    def load_active_exceptions(
        self,
        resource_id: ResourceId,
        start: Optional[date_type] = None,
        end: Optional[date_type] = None
    ) -> List[AvailabilityException]:
        return [
            e for e in self._state(resource_id).exceptions
            if e.is_active
            and (start is None or e.exception_date >= start)
            and (end is None or e.exception_date <= end)
        ]

    def has_resource(self, resource_id: ResourceId) -> bool:
        key = str(resource_id)
        return key in self.resources or key in self.unreadable

    # --- Writes ---

    def save_weekly_patterns(self, resource_id: ResourceId, patterns: List[WeeklyPattern]) -> None:
        self._state(resource_id, create=True).replace_work_schedules(patterns)
        self._save()

    def persist_exception(self, exception: ExceptionCreate) -> str:
        """
        Store a new exception and return its generated id.

        Raises:
            ExceptionConflictError: If the resource already has an active exception on that date.
        """
        state = self._state(exception.resource_id, create=True)
        if exception.is_active and state.find_active_exception(exception.exception_date) is not None:
            raise ExceptionConflictError(exception.resource_id, exception.exception_date)

        exception_id = str(uuid.uuid4())
        state.append_exception(exception.to_exception(exception_id))
        self._save()
        logger.info(f"Stored exception {exception_id} for resource {exception.resource_id} on {exception.exception_date}")
        return exception_id

    def delete_exception(self, exception_id: str) -> bool:
        for state in self.resources.values():
            if state.remove_exception(exception_id):
                self._save()
                return True
        return False

    def patch_exception(self, exception_id: str, updates: Union[ExceptionUpdate, Mapping[str, Any]]) -> bool:
        """
        Apply a partial update to a stored exception.

        Raises:
            ExceptionConflictError: If the exception would end up active on a date
                where the resource already has another active exception.
        """
        if not isinstance(updates, ExceptionUpdate):
            updates = ExceptionUpdate.model_validate(updates)

        for state in self.resources.values():
            current = state.get_exception(exception_id)
            if current is None:
                continue

            changes = updates.changes()
            day = changes.get('exception_date', current.exception_date)
            if changes.get('is_active', current.is_active):
                clash = state.find_active_exception(day, exclude_id=exception_id)
                if clash is not None:
                    raise ExceptionConflictError(current.resource_id, day)

            state.patch_exception(exception_id, updates)
            self._save()
            return True
        return False

    # --- Persistence ---

    def _state(self, resource_id: ResourceId, create: bool = False) -> AvailabilityState:
        key = str(resource_id)
        if create and key in self.unreadable:
            raise UnreadableResourceError(resource_id, self.path)
        if key not in self.resources:
            if not create:
                return AvailabilityState()
            self.resources[key] = AvailabilityState()
        return self.resources[key]

    def _load(self) -> None:
        try:
            with open(self.path, 'r') as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.info(f"{self.path} does not exist yet, starting empty")
            return

        for key, payload in data.get('resources', {}).items():
            try:
                self.resources[key] = AvailabilityState(
                    payload.get('weekly_patterns', []),
                    payload.get('exceptions', [])
                )
            except ValidationError as e:
                logger.warning(f"Skipping invalid resource {key} in {self.path}: {e.json()}")
                self.unreadable[key] = payload

        logger.info(f"Loaded {len(self.resources)} resources from {self.path}")

    def _save(self) -> None:
        resources = dict(self.unreadable)
        resources.update(
            (key, {
                "weekly_patterns": [p.model_dump(mode='json') for p in state.work_schedules],
                "exceptions": [e.model_dump(mode='json') for e in state.exceptions],
            })
            for key, state in self.resources.items()
        )
        serializable = {"resources": resources}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w') as f:
            json.dump(serializable, f, indent=2)
