"""Pure reminder planning - which assignments get a reminder, and when."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from .assignments import Assignment

REMINDER_LEAD = timedelta(hours=24)
PLANNING_HORIZON = timedelta(hours=24)
REMINDER_TITLE = "Assignment Reminder - EverMind"


@dataclass(frozen=True)
class Reminder:
    """A one-shot notification intent for a single assignment."""

    assignment_id: str
    fire_at: datetime
    delay: timedelta
    title: str
    body: str


def reminder_at(assignment: Assignment) -> datetime:
    """Reminder instant: 24 hours before the due instant."""
    return assignment.due_at - REMINDER_LEAD


def reminder_body(assignment: Assignment) -> str:
    return f"{assignment.title} for {assignment.course} is due tomorrow!"


def plan_reminders(
    assignments: list[Assignment],
    now: datetime | None = None,
) -> list[Reminder]:
    """
    Reminders to schedule for pending assignments.

    An assignment qualifies when its reminder instant lies in the next 24
    hours, strictly after `now`. Pure function - no I/O.
    """
    now = now or datetime.now()
    reminders = []
    for assignment in assignments:
        if assignment.completed:
            continue
        fire_at = reminder_at(assignment)
        delay = fire_at - now
        if timedelta(0) < delay <= PLANNING_HORIZON:
            reminders.append(
                Reminder(
                    assignment_id=assignment.id,
                    fire_at=fire_at,
                    delay=delay,
                    title=REMINDER_TITLE,
                    body=reminder_body(assignment),
                )
            )
    return reminders
