"""Remote document store interface."""

from typing import Protocol


class SyncError(Exception):
    """Raised when the remote store cannot be read or written."""

    pass


class RemoteStore(Protocol):
    """Interface for a per-user document store holding `{"events": [...]}`."""

    def load(self, user_id: str) -> dict | None:
        """Fetch the user's document. Returns None if none exists. Raises SyncError."""
        ...

    def save(self, user_id: str, document: dict) -> None:
        """Replace the user's document. Raises SyncError."""
        ...
