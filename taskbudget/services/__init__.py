"""Services package."""

from taskbudget.services.storage import (
    InMemoryStore,
    JsonFileStore,
    KeyValueStore,
    MalformedDataError,
    StorageError,
    StorageUnavailableError,
    ViewPreferenceStore,
)

__all__ = [
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "MalformedDataError",
    "StorageError",
    "StorageUnavailableError",
    "ViewPreferenceStore",
]
