"""Functional core - pure business logic with no I/O."""

from .assignments import Assignment, priority_rank, to_document, from_document
from .store import AssignmentStore, EditResult, StoreChange, ValidationError
from .views import (
    ListFilter,
    ViewStatus,
    TodayView,
    ListView,
    WeekView,
    today_view,
    list_view,
    week_view,
    week_start,
    shift_week,
)
from .reminders import Reminder, plan_reminders, reminder_at

__all__ = [
    # Assignments
    "Assignment",
    "priority_rank",
    "to_document",
    "from_document",
    # Store
    "AssignmentStore",
    "EditResult",
    "StoreChange",
    "ValidationError",
    # Views
    "ListFilter",
    "ViewStatus",
    "TodayView",
    "ListView",
    "WeekView",
    "today_view",
    "list_view",
    "week_view",
    "week_start",
    "shift_week",
    # Reminders
    "Reminder",
    "plan_reminders",
    "reminder_at",
]
