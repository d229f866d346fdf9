"""
Storage Services Package

Provides the abstract key/value interface and concrete implementations.
JSON files on disk are the default backend; the in-memory store backs
tests and throwaway sessions.
"""

from taskbudget.services.storage.interface import (
    KeyValueStore,
    MalformedDataError,
    StorageError,
    StorageUnavailableError,
)
from taskbudget.services.storage.json_file import JsonFileStore
from taskbudget.services.storage.memory import InMemoryStore
from taskbudget.services.storage.preferences import (
    DEFAULT_VIEW,
    VIEWS,
    ViewPreferenceStore,
)

__all__ = [
    # Interface
    "KeyValueStore",
    # Exceptions
    "MalformedDataError",
    "StorageError",
    "StorageUnavailableError",
    # Implementations
    "InMemoryStore",
    "JsonFileStore",
    # View preference
    "DEFAULT_VIEW",
    "VIEWS",
    "ViewPreferenceStore",
]
