"""Shared workflow layer between the CLI and the reminder daemon.

`Planner` wires the store to its collaborators: every mutation refreshes
the views, recomputes reminders and is mirrored by the sync bridge.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable

from .adapters.console_notifier import ConsoleNotifier
from .adapters.evermind_api import EverMindAPIAdapter
from .adapters.json_cache import JsonFileCache
from .adapters.offline import AnonymousIdentity, NullRemoteStore
from .adapters.telegram_notifier import TelegramNotifier
from .config import Config
from .core.assignments import Assignment
from .core.store import AssignmentStore, EditResult, StoreChange
from .core.views import (
    ListFilter,
    ListView,
    TodayView,
    WeekView,
    list_view,
    shift_week,
    today_view,
    week_view,
)
from .ports.notifier import Notifier
from .reminders import ReminderScheduler
from .sync import SessionResult, SyncBridge

logger = logging.getLogger(__name__)


@dataclass
class Views:
    """All three projections, recomputed together."""

    today: TodayView
    assignments: ListView
    week: WeekView


class Planner:
    """
    The assignment engine for one session.

    Mutations go to the store; views are recomputed on demand and after
    every change (passed to `on_render` when given).
    """

    def __init__(
        self,
        store: AssignmentStore,
        sync: SyncBridge,
        reminders: ReminderScheduler,
        clock: Callable[[], datetime] | None = None,
        on_render: Callable[[Views], None] | None = None,
    ):
        self.store = store
        self.sync = sync
        self.reminders = reminders
        self._clock = clock or datetime.now
        self.on_render = on_render
        self.list_filter = ListFilter.ALL
        self.week_anchor: date = self._clock().date()
        store.subscribe(self._on_change)

    def start(self) -> SessionResult:
        """Load assignments and arm reminders."""
        result = self.sync.start_session()
        self.reminders.reschedule(self.store.snapshot())
        self._render()
        return result

    # Mutations

    def add(self, **fields) -> Assignment:
        return self.store.add(**fields)

    def toggle_complete(self, assignment_id: str) -> bool:
        return self.store.toggle_complete(assignment_id)

    def delete(self, assignment_id: str) -> bool:
        return self.store.delete(assignment_id)

    def edit(self, assignment_id: str, **changes) -> EditResult:
        return self.store.edit(assignment_id, **changes)

    # Views

    def today(self) -> TodayView:
        return today_view(self.store.snapshot(), self._clock(), loaded=self.store.loaded)

    def assignments(self, list_filter: ListFilter | str | None = None) -> ListView:
        if list_filter is not None:
            self.list_filter = ListFilter(list_filter)
        return list_view(self.store.snapshot(), self._clock(), self.list_filter, loaded=self.store.loaded)

    def week(self) -> WeekView:
        return week_view(self.store.snapshot(), self.week_anchor, self._clock(), loaded=self.store.loaded)

    def navigate_week(self, direction: int) -> WeekView:
        """Move the week grid forward (positive) or back (negative)."""
        self.week_anchor = shift_week(self.week_anchor, direction)
        return self.week()

    def views(self) -> Views:
        return Views(today=self.today(), assignments=self.assignments(), week=self.week())

    def _render(self) -> None:
        if self.on_render is not None:
            self.on_render(self.views())

    def _on_change(self, change: StoreChange, store: AssignmentStore) -> None:
        self.reminders.reschedule(store.snapshot())
        self._render()


def get_notifier(config: Config) -> Notifier:
    """Resolve the notification channel from config."""
    if config.notifier == "telegram":
        return TelegramNotifier(
            config.telegram_bot_token,
            config.telegram_chat_id,
            enabled=config.notifications_enabled,
        )
    return ConsoleNotifier(enabled=config.notifications_enabled)


def build_planner(
    config: Config,
    on_message: Callable[[str], None] | None = None,
    on_render: Callable[[Views], None] | None = None,
) -> Planner:
    """Assemble a Planner, online or offline depending on config."""
    store = AssignmentStore()
    cache = JsonFileCache(config.cache_path)

    if config.is_offline:
        identity, remote = AnonymousIdentity(), NullRemoteStore()
    else:
        api = EverMindAPIAdapter.from_config(config)
        identity, remote = api, api

    sync = SyncBridge(store, identity, remote, cache, on_message=on_message)
    reminders = ReminderScheduler(get_notifier(config))
    return Planner(store, sync, reminders, on_render=on_render)
