"""EverMind CLI - assignment tracker."""

import json
import logging
import sys
import time
from datetime import datetime

import click
from apscheduler.triggers.interval import IntervalTrigger

from .config import load_config
from .core.formatting import (
    assignment_to_json,
    format_assignment_line,
    format_list,
    format_today,
    format_week,
)
from .core.store import ValidationError
from .core.views import ListFilter, shift_week
from .workflows import Planner, build_planner

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _warn(text: str) -> None:
    click.echo(f"Warning: {text}", err=True)


def _planner() -> Planner:
    planner = build_planner(load_config(), on_message=_warn)
    planner.start()
    return planner


def _resolve_id(planner: Planner, prefix: str) -> str:
    """Accept a full id or an unambiguous prefix of one."""
    matches = [a.id for a in planner.store if a.id.startswith(prefix)]
    if prefix in matches:
        return prefix
    if len(matches) == 1:
        return matches[0]
    if matches:
        click.echo(f"Error: '{prefix}' matches {len(matches)} assignments", err=True)
        sys.exit(1)
    return prefix


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2))


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
@click.version_option()
def main(verbose: bool):
    """EverMind - Assignment Tracker CLI."""
    logging.basicConfig(format=LOG_FORMAT, level=logging.DEBUG if verbose else logging.WARNING)


@main.command()
@click.argument("title")
@click.option("-c", "--course", required=True, help="Course code")
@click.option("-d", "--due", "due_date", required=True, help="Due date (YYYY-MM-DD)")
@click.option("-t", "--time", "due_time", default=None, help="Due time (HH:MM, default 23:59)")
@click.option(
    "-p",
    "--priority",
    type=click.Choice(["low", "medium", "high"]),
    default="medium",
    show_default=True,
)
@click.option("--description", default="", help="Notes")
def add(title: str, course: str, due_date: str, due_time: str | None, priority: str, description: str):
    """Add an assignment."""
    planner = _planner()
    try:
        assignment = planner.add(
            title=title,
            course=course,
            due_date=due_date,
            due_time=due_time,
            priority=priority,
            description=description,
        )
    except ValidationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo("Assignment added successfully!")
    click.echo(format_assignment_line(assignment))


@main.command("list")
@click.option(
    "-f",
    "--filter",
    "list_filter",
    type=click.Choice([f.value for f in ListFilter]),
    default=ListFilter.ALL.value,
    show_default=True,
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_assignments(list_filter: str, as_json: bool):
    """List assignments, due-soonest first."""
    planner = _planner()
    view = planner.assignments(list_filter)
    now = datetime.now()
    if as_json:
        _echo_json([assignment_to_json(a, now) for a in view.assignments])
    else:
        click.echo(format_list(view, now))


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def today(as_json: bool):
    """Show assignments due today."""
    planner = _planner()
    view = planner.today()
    now = datetime.now()
    if as_json:
        _echo_json([assignment_to_json(a, now) for a in view.assignments])
    else:
        click.echo(f"### {view.date.strftime('%A, %B')} {view.date.day}, {view.date.year}")
        click.echo(format_today(view, now))


@main.command()
@click.option("-o", "--offset", default=0, help="Weeks from this week (negative for past)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def week(offset: int, as_json: bool):
    """Show the Monday-to-Sunday week grid."""
    planner = _planner()
    planner.week_anchor = shift_week(planner.week_anchor, offset)
    view = planner.week()
    if as_json:
        _echo_json(
            {
                "start": view.start.isoformat(),
                "end": view.end.isoformat(),
                "days": [
                    {
                        "date": d.date.isoformat(),
                        "name": d.name,
                        "isToday": d.is_today,
                        "assignments": [a.to_dict() for a in d.assignments],
                    }
                    for d in view.days
                ],
            }
        )
    else:
        click.echo(format_week(view))


@main.command()
@click.argument("assignment_id")
def done(assignment_id: str):
    """Toggle an assignment between complete and pending."""
    planner = _planner()
    assignment_id = _resolve_id(planner, assignment_id)
    if planner.toggle_complete(assignment_id):
        assignment = planner.store.get(assignment_id)
        state = "complete" if assignment.completed else "pending"
        click.echo(f"Marked {assignment.title} as {state}.")
    else:
        click.echo(f"No assignment {assignment_id}.")


@main.command()
@click.argument("assignment_id")
@click.option("-y", "--yes", is_flag=True, help="Skip confirmation")
def delete(assignment_id: str, yes: bool):
    """Delete an assignment."""
    planner = _planner()
    assignment_id = _resolve_id(planner, assignment_id)
    assignment = planner.store.get(assignment_id)
    if assignment is None:
        click.echo(f"No assignment {assignment_id}.")
        return
    if not yes and not click.confirm(f"Are you sure you want to delete '{assignment.title}'?"):
        click.echo("Cancelled.")
        return
    planner.delete(assignment_id)
    click.echo(f"Deleted {assignment.title}.")


@main.command()
@click.argument("assignment_id")
@click.option("--title", default=None)
@click.option("-c", "--course", default=None)
@click.option("-d", "--due", "due_date", default=None, help="Due date (YYYY-MM-DD)")
@click.option("-t", "--time", "due_time", default=None, help="Due time (HH:MM)")
@click.option("-p", "--priority", type=click.Choice(["low", "medium", "high"]), default=None)
@click.option("--description", default=None)
def edit(assignment_id: str, **fields):
    """Replace an assignment with an edited copy (it gets a new id)."""
    planner = _planner()
    assignment_id = _resolve_id(planner, assignment_id)
    if planner.store.get(assignment_id) is None:
        click.echo(f"No assignment {assignment_id}.")
        return
    changes = {k: v for k, v in fields.items() if v is not None}
    try:
        result = planner.edit(assignment_id, **changes)
    except ValidationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Replaced {result.old_id} with {result.new_id}.")
    click.echo(format_assignment_line(planner.store.get(result.new_id)))


@main.command()
def sync():
    """Load from the backend and push the merged list back."""
    planner = _planner()
    session = planner.sync
    if session.user is None:
        click.echo(f"Offline: {len(planner.store)} assignment(s) in local cache.")
        return
    if session.push():
        click.echo(f"Synced {len(planner.store)} assignment(s) for {session.user.name or session.user.id}.")
    else:
        sys.exit(1)


@main.command()
def whoami():
    """Show the signed-in backend user."""
    planner = _planner()
    user = planner.sync.user
    if user is None:
        click.echo("Not logged in.")
        return
    email = f" <{user.email}>" if user.email else ""
    click.echo(f"{user.name or user.id}{email}")


@main.command()
def remind():
    """Run reminders in the foreground until interrupted."""
    config = load_config()
    planner = build_planner(config, on_message=_warn)
    planner.start()

    if not (planner.reminders.notifier.is_enabled() and planner.reminders.notifier.is_permitted()):
        click.echo("Notifications are disabled. Set NOTIFICATIONS_ENABLED=true in evermind.conf", err=True)
        sys.exit(1)

    logging.getLogger().setLevel(logging.INFO)

    # Picks up changes made by other sessions
    planner.reminders.scheduler.add_job(
        planner.start,
        IntervalTrigger(minutes=config.reminder_refresh_minutes),
        id="reminder_refresh",
        replace_existing=True,
    )
    planner.reminders.start()
    click.echo(f"Watching {len(planner.store)} assignment(s). Ctrl+C to stop.")

    try:
        while True:
            time.sleep(1)
    except (KeyboardInterrupt, SystemExit):
        planner.reminders.shutdown()
