"""JSON file cache adapter."""

import json
import logging
from pathlib import Path

from evermind.core.assignments import Assignment, from_document, to_document

logger = logging.getLogger(__name__)


class JsonFileCache:
    """
    File-based assignment cache.

    Implements LocalCache protocol. Stores the same `{"events": [...]}`
    document the backend keeps.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def read(self) -> list[Assignment] | None:
        """Read cached assignments. Returns None if missing or unreadable."""
        try:
            if not self.path.exists():
                return None
            return from_document(json.loads(self.path.read_text()))
        except (OSError, json.JSONDecodeError, ValueError) as e:
            logger.warning(f"Ignoring unreadable cache {self.path}: {e}")
            return None

    def write(self, assignments: list[Assignment]) -> None:
        """Overwrite the cache with the full list."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(to_document(assignments), indent=2))
        tmp.replace(self.path)
