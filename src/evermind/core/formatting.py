"""Plain-text rendering of assignment projections - no I/O."""

from datetime import datetime

from .assignments import Assignment
from .views import ListView, TodayView, ViewStatus, WeekView

EMPTY_TODAY = "No assignments due today. Great job staying on top of your work!"
EMPTY_LIST = "No assignments found. Add your first assignment to get started."
EMPTY_WEEK = "No assignments this week."
NOT_LOADED = "Loading assignments..."


def format_due(assignment: Assignment, now: datetime | None = None) -> str:
    """
    Due line with urgency markers, e.g. "Mon, Mar 10, 2025 at 11:59 PM - DUE TODAY!".

    Pure function - no I/O.
    """
    now = now or datetime.now()
    due = assignment.due_at
    hour = due.hour % 12 or 12
    suffix = "AM" if due.hour < 12 else "PM"
    text = f"{due.strftime('%a, %b')} {due.day}, {due.year} at {hour}:{due.minute:02d} {suffix}"

    if assignment.is_overdue(now):
        text += " - OVERDUE!"
    if assignment.is_due_today(now):
        text += " - DUE TODAY!"
    if assignment.is_due_soon(now):
        text += " - DUE SOON!"
    return text


def format_assignment_line(assignment: Assignment, now: datetime | None = None) -> str:
    """Format a single assignment for a list."""
    now = now or datetime.now()
    check = "x" if assignment.completed else " "
    priority = assignment.priority.capitalize() or "No"
    line = (
        f"[{check}] {assignment.title} ({assignment.course}) "
        f"[{priority} Priority] {format_due(assignment, now)}  #{assignment.id}"
    )
    if assignment.description:
        line += f"\n      {assignment.description}"
    return line


def _format_items(assignments: list[Assignment], status: ViewStatus, empty_msg: str, now: datetime) -> str:
    if status is ViewStatus.NOT_LOADED:
        return NOT_LOADED
    if status is ViewStatus.EMPTY:
        return empty_msg
    return "\n".join(format_assignment_line(a, now) for a in assignments)


def format_today(view: TodayView, now: datetime | None = None) -> str:
    now = now or datetime.now()
    return _format_items(view.assignments, view.status, EMPTY_TODAY, now)


def format_list(view: ListView, now: datetime | None = None) -> str:
    now = now or datetime.now()
    return _format_items(view.assignments, view.status, EMPTY_LIST, now)


def format_week(view: WeekView) -> str:
    """Week grid as one block per day, today marked with '*'."""
    if view.status is ViewStatus.NOT_LOADED:
        return NOT_LOADED

    lines = [f"### {view.range_label()}"]
    for day in view.days:
        marker = "*" if day.is_today else " "
        lines.append(f"{marker}{day.name} {day.date.day:2d}")
        for a in day.assignments:
            done = " (done)" if a.completed else ""
            lines.append(f"    - [{a.priority}] {a.title} - {a.course}{done}")
    if view.is_empty:
        lines.append(EMPTY_WEEK)
    return "\n".join(lines)


def assignment_to_json(assignment: Assignment, now: datetime | None = None) -> dict:
    """Persisted record plus computed due flags, for --json output."""
    now = now or datetime.now()
    data = assignment.to_dict()
    data["overdue"] = assignment.is_overdue(now)
    data["dueToday"] = assignment.is_due_today(now)
    data["dueSoon"] = assignment.is_due_soon(now)
    return data
