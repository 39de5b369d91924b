"""Keeps the assignment store, the local cache and the backend in step."""

import logging
from dataclasses import dataclass
from typing import Callable

from .core.assignments import from_document, to_document
from .core.store import AssignmentStore, StoreChange
from .ports.identity import IdentityProvider, User
from .ports.local_cache import LocalCache
from .ports.remote_store import RemoteStore, SyncError

logger = logging.getLogger(__name__)


@dataclass
class SessionResult:
    """What `start_session` found."""

    user: User | None
    source: str  # "remote", "cache" or "empty"


class SyncBridge:
    """
    Loads assignments at session start and mirrors every change.

    The backend is the source of truth when a session starts; after that
    local changes win and are pushed as full snapshots. Failures never
    undo a local change.

    Pushes run synchronously inside the store listener, so a mutation
    returns only after its push settles. A slow backend therefore delays
    the caller by up to the remote adapter's request timeout.
    """

    def __init__(
        self,
        store: AssignmentStore,
        identity: IdentityProvider,
        remote: RemoteStore,
        cache: LocalCache,
        on_message: Callable[[str], None] | None = None,
    ):
        self.store = store
        self.identity = identity
        self.remote = remote
        self.cache = cache
        self.on_message = on_message or (lambda text: None)
        self.user: User | None = None
        store.subscribe(self._on_change)

    def start_session(self) -> SessionResult:
        """Populate the store from the cache, then from the backend if signed in."""
        source = "empty"
        cached = self.cache.read()
        if cached is not None:
            self.store.replace_all(cached)
            source = "cache"

        self.user = self.identity.current_user()
        if self.user is not None and self._load_remote(self.user):
            source = "remote"

        self.store.mark_loaded()
        logger.info(f"Session started from {source} with {len(self.store)} assignment(s)")
        return SessionResult(user=self.user, source=source)

    def push(self) -> bool:
        """Write the cache and push a full snapshot. Returns False on failure."""
        assignments = self.store.snapshot()
        try:
            self.cache.write(assignments)
        except OSError as e:
            logger.warning(f"Failed to write local cache: {e}")

        if self.user is None:
            return True

        try:
            self.remote.save(self.user.id, to_document(assignments))
        except SyncError as e:
            logger.warning(f"Push failed: {e}")
            self.on_message(str(e))
            return False
        logger.debug(f"Pushed {len(assignments)} assignment(s)")
        return True

    def _load_remote(self, user: User) -> bool:
        try:
            document = self.remote.load(user.id)
        except SyncError as e:
            logger.warning(f"Load failed, keeping local copy: {e}")
            return False

        if document is None:
            logger.info(f"No stored assignments for user {user.id}")
            return False

        try:
            assignments = from_document(document)
        except ValueError as e:
            logger.warning(f"Ignoring malformed remote document: {e}")
            return False

        self.store.replace_all(assignments)
        try:
            self.cache.write(assignments)
        except OSError as e:
            logger.warning(f"Failed to write local cache: {e}")
        return True

    def _on_change(self, change: StoreChange, store: AssignmentStore) -> None:
        if change is StoreChange.REPLACED:
            return
        self.push()
