"""In-memory assignment collection and its mutation rules."""

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Callable, Iterator

from .assignments import PRIORITIES, Assignment, parse_due_date, parse_due_time

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    """Raised when an assignment is missing a required field."""

    pass


class StoreChange(Enum):
    """Kind of mutation reported to store listeners."""

    ADDED = "added"
    TOGGLED = "toggled"
    DELETED = "deleted"
    EDITED = "edited"
    REPLACED = "replaced"


@dataclass(frozen=True)
class EditResult:
    """Outcome of an edit: the old record is gone and a new one replaces it."""

    old_id: str
    new_id: str


Listener = Callable[[StoreChange, "AssignmentStore"], None]


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AssignmentStore:
    """
    Ordered, in-memory collection of assignments.

    Owns the canonical list. Views and the reminder scheduler only read
    snapshots; every mutation goes through this class and is announced
    to subscribed listeners after it has been applied.
    """

    def __init__(
        self,
        assignments: list[Assignment] | None = None,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._assignments: list[Assignment] = list(assignments or [])
        self._id_factory = id_factory or _new_id
        self._clock = clock or _utcnow
        self._listeners: list[Listener] = []
        self.loaded = assignments is not None

    def __len__(self) -> int:
        return len(self._assignments)

    def __iter__(self) -> Iterator[Assignment]:
        return iter(list(self._assignments))

    def snapshot(self) -> list[Assignment]:
        """Shallow copy of the collection, in insertion order."""
        return list(self._assignments)

    def get(self, assignment_id: str) -> Assignment | None:
        return next((a for a in self._assignments if a.id == assignment_id), None)

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def mark_loaded(self) -> None:
        self.loaded = True

    def add(
        self,
        title: str,
        course: str,
        due_date: str | date,
        due_time: str | time | None = None,
        priority: str = "medium",
        description: str = "",
    ) -> Assignment:
        """Validate and append a new assignment. Raises ValidationError."""
        assignment = self._build(title, course, due_date, due_time, priority, description)
        self._assignments.append(assignment)
        self._notify(StoreChange.ADDED)
        return assignment

    def toggle_complete(self, assignment_id: str) -> bool:
        """Flip completion. Unknown ids are ignored."""
        assignment = self.get(assignment_id)
        if assignment is None:
            logger.debug(f"Toggle ignored, no assignment {assignment_id}")
            return False
        assignment.completed = not assignment.completed
        self._notify(StoreChange.TOGGLED)
        return True

    def delete(self, assignment_id: str) -> bool:
        """Remove an assignment. Unknown ids are ignored."""
        if not self._remove(assignment_id):
            logger.debug(f"Delete ignored, no assignment {assignment_id}")
            return False
        self._notify(StoreChange.DELETED)
        return True

    def edit(self, assignment_id: str, **changes) -> EditResult:
        """
        Replace an assignment with a new one built from the old fields
        overlaid with `changes`.

        The replacement gets a fresh id and creation timestamp. Fields are
        validated before the old record is removed.
        """
        old = self.get(assignment_id)
        fields = {}
        if old is not None:
            fields = {
                "title": old.title,
                "course": old.course,
                "due_date": old.due_date,
                "due_time": old.due_time,
                "priority": old.priority,
                "description": old.description,
            }
        fields.update(changes)
        replacement = self._build(
            fields.get("title", ""),
            fields.get("course", ""),
            fields.get("due_date", ""),
            fields.get("due_time"),
            fields.get("priority", "medium"),
            fields.get("description", ""),
        )
        self._remove(assignment_id)
        self._assignments.append(replacement)
        self._notify(StoreChange.EDITED)
        return EditResult(old_id=assignment_id, new_id=replacement.id)

    def replace_all(self, assignments: list[Assignment]) -> None:
        """Swap in a whole collection, e.g. one loaded from storage."""
        self._assignments = list(assignments)
        self.loaded = True
        self._notify(StoreChange.REPLACED)

    def _build(self, title, course, due_date, due_time, priority, description) -> Assignment:
        title = (title or "").strip()
        course = (course or "").strip()
        if isinstance(due_date, str):
            due_date = due_date.strip()
        if not title or not course or not due_date:
            raise ValidationError("Please fill in all required fields.")

        try:
            parsed_date = parse_due_date(due_date)
        except ValueError:
            raise ValidationError(f"Invalid due date: {due_date!r}") from None
        try:
            parsed_time = parse_due_time(due_time)
        except ValueError:
            raise ValidationError(f"Invalid due time: {due_time!r}") from None

        priority = priority or "medium"
        if priority not in PRIORITIES:
            raise ValidationError(f"Invalid priority: {priority!r}")

        return Assignment(
            id=self._fresh_id(),
            title=title,
            course=course,
            description=(description or "").strip(),
            due_date=parsed_date,
            due_time=parsed_time,
            priority=priority,
            completed=False,
            created_at=self._clock(),
        )

    def _fresh_id(self) -> str:
        taken = {a.id for a in self._assignments}
        new_id = self._id_factory()
        while new_id in taken:
            new_id = self._id_factory()
        return new_id

    def _remove(self, assignment_id: str) -> bool:
        before = len(self._assignments)
        self._assignments = [a for a in self._assignments if a.id != assignment_id]
        return len(self._assignments) != before

    def _notify(self, change: StoreChange) -> None:
        for listener in list(self._listeners):
            try:
                listener(change, self)
            except Exception:
                logger.exception(f"Store listener failed after {change.value}")
