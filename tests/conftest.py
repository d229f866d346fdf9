"""
Shared fixtures.

All repositories run against an in-memory store and a fixed clock
(15 June 2024, 09:30), so seed dates and defaults are predictable.
"""

from datetime import datetime

import pytest

from taskbudget.activity import ActivityLogger
from taskbudget.config import AppSettings, get_settings
from taskbudget.models import AppData
from taskbudget.repository import DEFAULT_DATA_KEY, Repository
from taskbudget.services.storage import InMemoryStore


FIXED_NOW = datetime(2024, 6, 15, 9, 30)


def fixed_clock() -> datetime:
    return FIXED_NOW


@pytest.fixture(autouse=True)
def clean_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock():
    return fixed_clock


@pytest.fixture
def app_settings():
    return AppSettings(_env_file=None, undo_capacity=3)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def activity():
    return ActivityLogger(keep_history=True)


def make_repository(store, settings, activity=None) -> Repository:
    return Repository(
        store=store,
        settings=settings,
        data_key=DEFAULT_DATA_KEY,
        clock=fixed_clock,
        activity_logger=activity or ActivityLogger(keep_history=True),
    )


@pytest.fixture
def seeded_repo(store, app_settings, activity):
    """Repository bootstrapped from an empty store, i.e. holding the seed."""
    repo = make_repository(store, app_settings, activity)
    repo.load_or_seed()
    return repo


@pytest.fixture
def empty_repo(store, app_settings, activity):
    """Repository bootstrapped from a saved, empty data blob."""
    store.save(DEFAULT_DATA_KEY, AppData().to_snapshot())
    repo = make_repository(store, app_settings, activity)
    repo.load_or_seed()
    return repo
