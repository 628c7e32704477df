"""
Entity: a single node of the genealogy.

Two types live here:
- Entity, the default payload carried by a node (identifier plus
  free-form properties).
- EntityRecord, the store-internal arena slot that pairs a payload with
  its parent and child adjacency sets.

Any object exposing an ``id`` attribute can stand in for Entity as a
payload; the store builds payloads through a factory taking the
identifier.
"""

from typing import Any, Dict, Hashable, Optional, Protocol, runtime_checkable

from genealogy.core.adjacency import AdjacencySet


@runtime_checkable
class Identified(Protocol):
    """Anything usable as a payload: it must report its own identifier."""

    @property
    def id(self) -> Hashable: ...


class Entity:
    """
    Default payload type.

    Holds the identifier the entity was created under and a property bag
    for caller data (e.g. the mutation that produced this strain).
    """

    def __init__(self, entity_id: Hashable, properties: Optional[Dict[str, Any]] = None):
        """
        Initialize an Entity.

        Args:
            entity_id: Identifier, unique within one store
            properties: Key-value properties
        """
        self._id = entity_id
        self.properties = properties or {}

    @property
    def id(self) -> Hashable:
        return self._id

    def set_property(self, key: str, value: Any) -> None:
        """Set or update a property value."""
        self.properties[key] = value

    def get_property(self, key: str, default: Any = None) -> Any:
        """Get a property value."""
        return self.properties.get(key, default)

    def has_property(self, key: str) -> bool:
        """Check if property exists."""
        return key in self.properties

    def __repr__(self) -> str:
        props = ', '.join(f"{k}={v}" for k, v in list(self.properties.items())[:3])
        if len(self.properties) > 3:
            props += '...'
        if props:
            return f"Entity(id={self._id!r}, {props})"
        return f"Entity(id={self._id!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)


class EntityRecord:
    """
    Arena slot owned by the store.

    Adjacency sets hold slot numbers of other records, never the records
    themselves, so a record can be dropped from the arena without
    chasing references.
    """

    __slots__ = ('slot', 'key', 'payload', 'parents', 'children')

    def __init__(self, slot: int, key: Hashable, payload: Any):
        self.slot = slot
        self.key = key
        self.payload = payload
        self.parents = AdjacencySet()
        self.children = AdjacencySet()

    @property
    def id(self) -> Hashable:
        return self.key

    def detach_all(self) -> None:
        """Drop every edge reference held by this record."""
        self.parents.clear()
        self.children.clear()

    def __repr__(self) -> str:
        return (
            f"EntityRecord(slot={self.slot}, id={self.id!r}, "
            f"parents={len(self.parents)}, children={len(self.children)})"
        )
