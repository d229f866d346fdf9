"""
Application wiring for the Task & Budget Planner

This module builds the components in a fixed order:
1. Settings
2. Logging
3. Key/value store (per settings, or injected)
4. Activity logger
5. Repository, then load-or-seed

By the time create_app_components() returns, the repository holds
either the saved data or the seed, so the first query never sees an
uninitialized state.
"""

from datetime import datetime
from typing import NamedTuple, Optional

from taskbudget.activity import ActivityLogger, configure_logging
from taskbudget.config import Settings, StorageSettings, get_settings
from taskbudget.models.calendar import Clock, current_month_year
from taskbudget.models.outcomes import MonthlySummary
from taskbudget.queries import monthly_summary
from taskbudget.repository import Repository
from taskbudget.services.storage import (
    InMemoryStore,
    JsonFileStore,
    KeyValueStore,
    ViewPreferenceStore,
)


class AppComponents(NamedTuple):
    repository: Repository
    store: KeyValueStore
    view_preferences: ViewPreferenceStore
    activity_logger: ActivityLogger
    loaded_saved_data: bool


def build_store(storage_settings: StorageSettings) -> KeyValueStore:
    """Store backend selected by configuration."""
    if storage_settings.backend == "memory":
        return InMemoryStore()
    return JsonFileStore(storage_settings.data_dir)


def create_app_components(
    settings: Optional[Settings] = None,
    store: Optional[KeyValueStore] = None,
    clock: Optional[Clock] = None,
    activity_logger: Optional[ActivityLogger] = None,
) -> AppComponents:
    """
    Factory function to create all application components.

    Args:
        settings: Root settings. Loaded from the environment if None.
        store: Storage backend. Built from the storage settings if None.
        clock: Source of "now" for defaults and the seed dataset.
               Wall-clock time if None.
        activity_logger: Logger for mutation events

    Returns:
        AppComponents with an initialized repository
    """
    settings = settings or get_settings()
    clock = clock or datetime.now
    app_settings = settings.app
    storage_settings = settings.storage

    configure_logging(app_settings.effective_log_level)

    store = store or build_store(storage_settings)
    activity_logger = activity_logger or ActivityLogger()

    repository = Repository(
        store=store,
        settings=app_settings,
        data_key=storage_settings.data_key,
        clock=clock,
        activity_logger=activity_logger,
    )
    loaded = repository.load_or_seed()

    view_preferences = ViewPreferenceStore(store, key=storage_settings.view_key)

    return AppComponents(
        repository=repository,
        store=store,
        view_preferences=view_preferences,
        activity_logger=activity_logger,
        loaded_saved_data=loaded,
    )


def current_month_summary(repository: Repository, clock: Clock = datetime.now) -> MonthlySummary:
    """Dashboard figures for the clock's current month."""
    month, year = current_month_year(clock)
    return monthly_summary(repository.snapshot(), month, year)
