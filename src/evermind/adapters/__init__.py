"""Adapters - I/O implementations of ports."""

from .evermind_api import EverMindAPIAdapter
from .json_cache import JsonFileCache
from .offline import AnonymousIdentity, NullRemoteStore
from .console_notifier import ConsoleNotifier
from .telegram_notifier import TelegramNotifier

__all__ = [
    "EverMindAPIAdapter",
    "JsonFileCache",
    "AnonymousIdentity",
    "NullRemoteStore",
    "ConsoleNotifier",
    "TelegramNotifier",
]
