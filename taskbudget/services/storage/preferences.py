"""
View preference storage.

The last selected view lives under its own key, independent of the data
blob. The repository never reads it.
"""

from typing import Optional

import structlog

from taskbudget.services.storage.interface import KeyValueStore, StorageError

VIEWS = ("dashboard", "tasks", "budget", "goals")
DEFAULT_VIEW = "dashboard"


class ViewPreferenceStore:
    """Loads and saves the active view name."""

    def __init__(self, store: KeyValueStore, key: str = "active-view"):
        self._store = store
        self._key = key
        self._logger = structlog.get_logger(__name__)

    def load_active_view(self) -> str:
        """Saved view name, or the dashboard if none is saved or it is unknown."""
        try:
            value: Optional[object] = self._store.load(self._key)
        except StorageError as e:
            self._logger.warning("view_preference_unreadable", key=self._key, error=str(e))
            return DEFAULT_VIEW
        if isinstance(value, str) and value in VIEWS:
            return value
        return DEFAULT_VIEW

    def save_active_view(self, view: str) -> bool:
        """
        Persist the active view.

        Raises:
            ValueError: If the view name is not one of VIEWS
        """
        if view not in VIEWS:
            raise ValueError(f"Unknown view: {view}. Allowed: {VIEWS}")
        return self._store.save(self._key, view)
