"""
Indexed entity collection.

Members are kept in an insertion-ordered dict keyed by id, so lookup,
replacement and removal are O(1) while iteration still follows display
order (creation order, restored entities at the end).
"""

from typing import Generic, Iterable, Iterator, Optional, TypeVar

from taskbudget.models.entities import Entity

E = TypeVar("E", bound=Entity)


class EntityCollection(Generic[E]):
    """Ordered, id-indexed collection of one entity kind."""

    def __init__(self, items: Iterable[E] = ()):
        self._items: dict[str, E] = {}
        for item in items:
            self.append(item)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._items

    def __iter__(self) -> Iterator[E]:
        return iter(self._items.values())

    def get(self, entity_id: str) -> Optional[E]:
        return self._items.get(entity_id)

    def append(self, entity: E) -> None:
        """
        Add an entity at the end.

        Raises:
            ValueError: If an entity with the same id is already present
        """
        if entity.id in self._items:
            raise ValueError(f"Duplicate id in collection: {entity.id}")
        self._items[entity.id] = entity

    def replace(self, entity: E) -> bool:
        """Swap in a new version of an existing member, keeping its position."""
        if entity.id not in self._items:
            return False
        self._items[entity.id] = entity
        return True

    def remove(self, entity_id: str) -> Optional[E]:
        return self._items.pop(entity_id, None)

    def snapshot(self) -> tuple[E, ...]:
        """Immutable view of the members in display order."""
        return tuple(self._items.values())
