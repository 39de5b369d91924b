"""Identity/session interface."""

from dataclasses import dataclass
from typing import Protocol


@dataclass
class User:
    """The signed-in user, as reported by the session backend."""

    id: str
    name: str = ""
    email: str = ""
    avatar: str | None = None


class IdentityProvider(Protocol):
    """Interface for asking who, if anyone, is signed in."""

    def current_user(self) -> User | None:
        """The authenticated user, or None. Never raises."""
        ...
