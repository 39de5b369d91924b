"""Ports - interfaces/protocols for external dependencies."""

from .identity import IdentityProvider, User
from .remote_store import RemoteStore, SyncError
from .notifier import Notifier
from .local_cache import LocalCache

__all__ = [
    "IdentityProvider",
    "User",
    "RemoteStore",
    "SyncError",
    "Notifier",
    "LocalCache",
]
