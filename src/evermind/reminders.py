"""Reminder timers - one APScheduler job per pending assignment."""

import logging
from datetime import datetime
from typing import Callable

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.date import DateTrigger

from .core.assignments import Assignment
from .core.reminders import Reminder, plan_reminders
from .ports.notifier import Notifier

logger = logging.getLogger(__name__)

JOB_PREFIX = "reminder:"


def job_id(assignment_id: str) -> str:
    return f"{JOB_PREFIX}{assignment_id}"


class ReminderScheduler:
    """
    Keyed registry of one-shot reminder timers.

    Safe to call `reschedule` after every change: each assignment has at
    most one timer, replaced on recompute and cancelled once it no longer
    qualifies.
    """

    def __init__(
        self,
        notifier: Notifier,
        scheduler: BackgroundScheduler | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.notifier = notifier
        if scheduler is None:
            scheduler = BackgroundScheduler()
        self.scheduler = scheduler
        self._clock = clock or datetime.now
        self._scheduled: dict[str, Reminder] = {}

    def scheduled_ids(self) -> list[str]:
        """Assignment ids that currently have a pending reminder."""
        return sorted(self._scheduled)

    def reminder_for(self, assignment_id: str) -> Reminder | None:
        return self._scheduled.get(assignment_id)

    def reschedule(self, assignments: list[Assignment]) -> list[Reminder]:
        """Recompute all timers from the current assignments."""
        if not (self.notifier.is_enabled() and self.notifier.is_permitted()):
            self.cancel_all()
            return []

        reminders = plan_reminders(assignments, self._clock())
        wanted = {r.assignment_id for r in reminders}

        for assignment_id in list(self._scheduled):
            if assignment_id not in wanted:
                self.cancel(assignment_id)

        for reminder in reminders:
            existing = self._scheduled.get(reminder.assignment_id)
            if existing and (existing.fire_at, existing.body) == (reminder.fire_at, reminder.body):
                continue
            self._schedule(reminder)

        if reminders:
            logger.info(f"{len(reminders)} reminder(s) scheduled")
        return reminders

    def cancel(self, assignment_id: str) -> None:
        """Drop the timer for one assignment, if any."""
        if self._scheduled.pop(assignment_id, None) is None:
            return
        try:
            self.scheduler.remove_job(job_id(assignment_id))
        except JobLookupError:
            # Already fired
            pass

    def cancel_all(self) -> None:
        for assignment_id in list(self._scheduled):
            self.cancel(assignment_id)

    def start(self) -> None:
        self.scheduler.start()

    def shutdown(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)

    def _schedule(self, reminder: Reminder) -> None:
        self.cancel(reminder.assignment_id)
        self.scheduler.add_job(
            self._fire,
            DateTrigger(run_date=reminder.fire_at),
            args=[reminder],
            id=job_id(reminder.assignment_id),
            replace_existing=True,
            misfire_grace_time=None,
        )
        self._scheduled[reminder.assignment_id] = reminder
        logger.debug(f"Reminder for {reminder.assignment_id} at {reminder.fire_at:%Y-%m-%d %H:%M}")

    def _fire(self, reminder: Reminder) -> None:
        self._scheduled.pop(reminder.assignment_id, None)
        try:
            self.notifier.fire(reminder.title, reminder.body)
            logger.info(f"Reminder sent for {reminder.assignment_id}")
        except Exception as e:
            logger.error(f"Failed to send reminder for {reminder.assignment_id}: {e}")
