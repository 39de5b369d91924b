"""Pure assignment domain logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

PRIORITY_RANK = {"low": 1, "medium": 2, "high": 3}
PRIORITIES = tuple(PRIORITY_RANK)

DEFAULT_DUE_TIME = time(23, 59)
DUE_SOON_WINDOW = timedelta(hours=24)


def priority_rank(priority: str) -> int:
    """Rank of a priority label; unknown labels rank below "low"."""
    return PRIORITY_RANK.get(priority, 0)


def parse_due_date(value: str | date) -> date:
    """Parse a YYYY-MM-DD date. Raises ValueError on bad input."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip())


def parse_due_time(value: str | time | None) -> time:
    """Parse an HH:MM time, defaulting to 23:59 when empty."""
    if value is None:
        return DEFAULT_DUE_TIME
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    value = value.strip()
    if not value:
        return DEFAULT_DUE_TIME
    try:
        return datetime.strptime(value, "%H:%M").time()
    except ValueError:
        return time.fromisoformat(value).replace(second=0, microsecond=0)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, including the trailing-Z form browsers write."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


@dataclass
class Assignment:
    """A graded task with a due date/time and priority."""

    id: str
    title: str
    course: str
    due_date: date
    due_time: time
    priority: str
    completed: bool
    created_at: datetime
    description: str = ""

    @property
    def due_at(self) -> datetime:
        """The due instant, as a naive local datetime."""
        return datetime.combine(self.due_date, self.due_time)

    @property
    def priority_rank(self) -> int:
        return priority_rank(self.priority)

    def is_overdue(self, now: datetime | None = None) -> bool:
        """Pending and past its due instant."""
        now = now or datetime.now()
        return not self.completed and self.due_at < now

    def is_due_today(self, now: datetime | None = None) -> bool:
        """Due on the calendar date of `now`, completed or not."""
        now = now or datetime.now()
        return self.due_date == now.date()

    def is_due_soon(self, now: datetime | None = None) -> bool:
        """Pending and due within the next 24 hours."""
        now = now or datetime.now()
        return not self.completed and now < self.due_at <= now + DUE_SOON_WINDOW

    def due_class(self, now: datetime | None = None) -> str:
        """Display class for the due line. "today" wins over "soon"."""
        now = now or datetime.now()
        if self.is_due_today(now):
            return "due-today"
        if self.is_due_soon(now):
            return "due-soon"
        return ""

    def to_dict(self) -> dict:
        """Serialize to the persisted record shape."""
        return {
            "id": self.id,
            "title": self.title,
            "course": self.course,
            "description": self.description,
            "dueDate": self.due_date.isoformat(),
            "dueTime": self.due_time.strftime("%H:%M"),
            "priority": self.priority,
            "completed": self.completed,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Assignment":
        """Create an Assignment from a persisted record."""
        return cls(
            id=str(data["id"]),
            title=data["title"],
            course=data["course"],
            description=data.get("description") or "",
            due_date=parse_due_date(data["dueDate"]),
            due_time=parse_due_time(data.get("dueTime")),
            priority=str(data.get("priority") or ""),
            completed=bool(data.get("completed", False)),
            created_at=parse_timestamp(data["createdAt"]),
        )


def to_document(assignments: list[Assignment]) -> dict:
    """Wrap assignments in the persisted document shape."""
    return {"events": [a.to_dict() for a in assignments]}


def from_document(document: dict) -> list[Assignment]:
    """
    Parse a persisted document.

    Raises ValueError if the document is not a mapping with an `events`
    list, or if any record in it is malformed.
    """
    if not isinstance(document, dict):
        raise ValueError("Document must be a mapping")
    events = document.get("events")
    if not isinstance(events, list):
        raise ValueError("Document has no events list")
    try:
        return [Assignment.from_dict(record) for record in events]
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise ValueError(f"Malformed assignment record: {e}") from e
