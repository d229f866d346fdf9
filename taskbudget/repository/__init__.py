"""Repository package: entity collections, undo buffer and seed data."""

from taskbudget.repository.collection import EntityCollection
from taskbudget.repository.repository import DEFAULT_DATA_KEY, Repository, kind_of
from taskbudget.repository.seed import build_seed_data
from taskbudget.repository.undo import UndoBuffer

__all__ = [
    "DEFAULT_DATA_KEY",
    "EntityCollection",
    "Repository",
    "UndoBuffer",
    "build_seed_data",
    "kind_of",
]
