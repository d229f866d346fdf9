"""
In-Memory Storage Implementation

Values are stored as JSON text so that what comes back from load() is
exactly what a file-backed store would return. Used by tests and by the
"memory" storage backend.
"""

import json
from typing import Any, Optional

from taskbudget.services.storage.interface import (
    KeyValueStore,
    MalformedDataError,
)


class InMemoryStore(KeyValueStore):
    """
    Dict-backed store.

    Setting `available = False` makes every save fail, which simulates a
    full or blocked storage medium.
    """

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})
        self.available = True
        self.save_count = 0

    def load(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise MalformedDataError(f"Could not decode value under {key!r}: {e}") from e

    def save(self, key: str, value: Any) -> bool:
        if not self.available:
            return False
        try:
            self._data[key] = json.dumps(value)
        except (TypeError, ValueError):
            return False
        self.save_count += 1
        return True

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def put_raw(self, key: str, raw: str) -> None:
        """Store raw text under a key, bypassing JSON encoding."""
        self._data[key] = raw

    def raw(self, key: str) -> Optional[str]:
        """Raw stored text for a key."""
        return self._data.get(key)
