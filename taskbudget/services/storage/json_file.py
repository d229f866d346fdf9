"""
JSON File Storage Implementation

Each key is stored as `<directory>/<key>.json`. Writes go to a temporary
file in the same directory first and are then moved over the target, so
a crash mid-write leaves the previous value intact.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional, Union

import structlog

from taskbudget.services.storage.interface import (
    KeyValueStore,
    MalformedDataError,
    StorageUnavailableError,
)


class JsonFileStore(KeyValueStore):
    """File-per-key JSON store rooted at a directory."""

    def __init__(self, directory: Union[str, Path]):
        self._directory = Path(directory)
        self._logger = structlog.get_logger(__name__)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        """File path used for a key."""
        return self._directory / f"{key}.json"

    def load(self, key: str) -> Optional[Any]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedDataError(f"Could not decode {path}: {e}") from e
        except OSError as e:
            raise StorageUnavailableError(f"Could not read {path}: {e}") from e

    def save(self, key: str, value: Any) -> bool:
        path = self.path_for(key)
        tmp_name = None
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._directory, prefix=f".{key}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f, indent=2)
            os.replace(tmp_name, path)
            return True
        except (OSError, TypeError, ValueError) as e:
            self._logger.warning("storage_save_failed", key=key, path=str(path), error=str(e))
            if tmp_name and os.path.exists(tmp_name):
                try:
                    os.remove(tmp_name)
                except OSError:
                    pass
            return False

    def delete(self, key: str) -> bool:
        path = self.path_for(key)
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            self._logger.warning("storage_delete_failed", key=key, error=str(e))
            return False
