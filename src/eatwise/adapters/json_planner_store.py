"""File-backed key-value store for planner state."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from eatwise.services.planner import KeyValueStore

_logger = logging.getLogger(__name__)


@dataclass
class JsonFileKeyValueStore(KeyValueStore):
    """Store string values in a single JSON object on disk.

    Reads tolerate a missing or corrupt file by behaving as if it were empty.
    """

    path: Path

    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            _logger.warning("Unreadable planner store %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}
