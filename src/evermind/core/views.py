"""Read-only projections of the assignment collection - no I/O."""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum

from .assignments import Assignment

DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


class ViewStatus(Enum):
    """Whether a view has data, is empty, or the store hasn't loaded yet."""

    NOT_LOADED = "not_loaded"
    EMPTY = "empty"
    READY = "ready"


class ListFilter(str, Enum):
    """Filters for the full assignment list."""

    ALL = "all"
    PENDING = "pending"
    COMPLETED = "completed"
    OVERDUE = "overdue"


def _status(items: list, loaded: bool) -> ViewStatus:
    if not loaded:
        return ViewStatus.NOT_LOADED
    return ViewStatus.READY if items else ViewStatus.EMPTY


@dataclass
class TodayView:
    """Assignments due today, highest priority first."""

    date: date
    assignments: list[Assignment]
    status: ViewStatus

    @property
    def is_empty(self) -> bool:
        return self.status is ViewStatus.EMPTY


@dataclass
class ListView:
    """Filtered assignments, due-soonest first."""

    filter: ListFilter
    assignments: list[Assignment]
    status: ViewStatus

    @property
    def is_empty(self) -> bool:
        return self.status is ViewStatus.EMPTY


@dataclass
class WeekDay:
    """One day slot of the week grid."""

    date: date
    assignments: list[Assignment] = field(default_factory=list)
    is_today: bool = False

    @property
    def name(self) -> str:
        return DAY_NAMES[self.date.weekday()]


@dataclass
class WeekView:
    """A Monday-to-Sunday grid of assignments."""

    start: date
    days: list[WeekDay]
    status: ViewStatus

    @property
    def end(self) -> date:
        return self.start + timedelta(days=6)

    @property
    def is_empty(self) -> bool:
        return self.status is ViewStatus.EMPTY

    def range_label(self) -> str:
        """Human-readable range, e.g. "Mar 10 - 16, 2025"."""
        start_month = self.start.strftime("%b")
        end_month = self.end.strftime("%b")
        if start_month == end_month:
            return f"{start_month} {self.start.day} - {self.end.day}, {self.start.year}"
        return f"{start_month} {self.start.day} - {end_month} {self.end.day}, {self.start.year}"


def week_start(anchor: date) -> date:
    """Monday of the week containing `anchor` (Sunday belongs to the week before)."""
    return anchor - timedelta(days=anchor.weekday())


def shift_week(anchor: date, direction: int) -> date:
    """Move an anchor by whole weeks; negative goes back."""
    return anchor + timedelta(days=7 * direction)


def today_view(
    assignments: list[Assignment],
    now: datetime | None = None,
    loaded: bool = True,
) -> TodayView:
    """
    Assignments due on today's date, sorted by priority (descending).

    Pure function - no I/O. Ties keep collection order.
    """
    now = now or datetime.now()
    today = now.date()
    due_today = [a for a in assignments if a.due_date == today]
    due_today = sorted(due_today, key=lambda a: -a.priority_rank)
    return TodayView(date=today, assignments=due_today, status=_status(due_today, loaded))


def filter_assignments(
    assignments: list[Assignment],
    list_filter: ListFilter,
    today: date,
) -> list[Assignment]:
    """Apply a list filter. Overdue here compares dates only."""
    match list_filter:
        case ListFilter.PENDING:
            return [a for a in assignments if not a.completed]
        case ListFilter.COMPLETED:
            return [a for a in assignments if a.completed]
        case ListFilter.OVERDUE:
            return [a for a in assignments if not a.completed and a.due_date < today]
        case _:
            return list(assignments)


def sort_by_due(assignments: list[Assignment]) -> list[Assignment]:
    """Sort by due instant (ascending) then priority (descending)."""
    return sorted(assignments, key=lambda a: (a.due_at, -a.priority_rank))


def list_view(
    assignments: list[Assignment],
    now: datetime | None = None,
    list_filter: ListFilter | str = ListFilter.ALL,
    loaded: bool = True,
) -> ListView:
    """
    Filtered, sorted full list.

    Pure function - no I/O.
    """
    now = now or datetime.now()
    list_filter = ListFilter(list_filter)
    items = sort_by_due(filter_assignments(assignments, list_filter, now.date()))
    return ListView(filter=list_filter, assignments=items, status=_status(items, loaded))


def week_view(
    assignments: list[Assignment],
    anchor: date,
    now: datetime | None = None,
    loaded: bool = True,
) -> WeekView:
    """
    Seven day slots, Monday first, for the week containing `anchor`.

    Pure function - no I/O. Slot contents keep collection order.
    """
    now = now or datetime.now()
    start = week_start(anchor)
    days = []
    for offset in range(7):
        day = start + timedelta(days=offset)
        days.append(
            WeekDay(
                date=day,
                assignments=[a for a in assignments if a.due_date == day],
                is_today=day == now.date(),
            )
        )
    matched = [a for d in days for a in d.assignments]
    return WeekView(start=start, days=days, status=_status(matched, loaded))
