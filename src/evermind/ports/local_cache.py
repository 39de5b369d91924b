"""Local assignment cache interface."""

from typing import Protocol

from evermind.core.assignments import Assignment


class LocalCache(Protocol):
    """Interface for the offline copy of the assignment list."""

    def read(self) -> list[Assignment] | None:
        """Read cached assignments. Returns None if nothing is cached."""
        ...

    def write(self, assignments: list[Assignment]) -> None:
        """Overwrite the cache with the full list."""
        ...
