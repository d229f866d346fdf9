"""
Undo Buffer

Holds entities removed by delete until they are restored or dropped.

DESIGN DECISION: The buffer is bounded per entity kind. When a kind is
full, the oldest deleted entity is evicted and is gone for good. The
buffer is never persisted; reloading the data discards pending undos.
"""

from collections import deque
from typing import Optional

from taskbudget.models.entities import Entity, EntityKind


class UndoBuffer:
    """Per-kind FIFO of deleted entities with a fixed capacity."""

    def __init__(self, capacity: int = 20):
        if capacity < 1:
            raise ValueError(f"Undo capacity must be at least 1, got {capacity}")
        self._capacity = capacity
        self._entries: dict[EntityKind, deque[Entity]] = {
            kind: deque() for kind in EntityKind
        }

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._entries.values())

    def push(self, kind: EntityKind, entity: Entity) -> Optional[Entity]:
        """
        Hold a deleted entity.

        Returns:
            The entity evicted to make room, or None
        """
        entries = self._entries[kind]
        evicted = None
        if len(entries) >= self._capacity:
            evicted = entries.popleft()
        entries.append(entity)
        return evicted

    def pop(self, kind: EntityKind, entity_id: str) -> Optional[Entity]:
        """Take a held entity out of the buffer, or None if it is not held."""
        entries = self._entries[kind]
        for entity in entries:
            if entity.id == entity_id:
                entries.remove(entity)
                return entity
        return None

    def contains(self, kind: EntityKind, entity_id: str) -> bool:
        return any(entity.id == entity_id for entity in self._entries[kind])

    def pending(self, kind: EntityKind) -> tuple[Entity, ...]:
        """Held entities of one kind, oldest deletion first."""
        return tuple(self._entries[kind])

    def clear(self) -> None:
        for entries in self._entries.values():
            entries.clear()
