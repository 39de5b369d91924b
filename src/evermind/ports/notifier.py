"""Notification interface."""

from typing import Protocol


class Notifier(Protocol):
    """Interface for delivering reminder notifications."""

    def is_enabled(self) -> bool:
        """Whether the user has switched notifications on."""
        ...

    def is_permitted(self) -> bool:
        """Whether the channel is able to deliver notifications."""
        ...

    def fire(self, title: str, body: str) -> None:
        """Deliver a notification now."""
        ...
