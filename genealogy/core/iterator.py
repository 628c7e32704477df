"""
ChildrenIterator: bidirectional cursor over one entity's children.

A cursor is a position inside a child set. ``children_begin`` yields
position 0 and ``children_end`` yields the position one past the last
child; walking from one to the other visits the children in identifier
order.

Cursors are bound to the child set as it was when they were created.
Adding or removing a child of the same entity invalidates every cursor
obtained earlier; using one afterwards raises IteratorInvalidated.
"""

from typing import Any, Callable, Hashable

from genealogy.core.adjacency import AdjacencySet
from genealogy.exceptions import IteratorInvalidated


class ChildrenIterator:
    """
    Cursor over a child set.

    Supports:
    - Dereference through ``payload`` and ``id``
    - Stepping with ``advance()`` / ``retreat()``
    - The Python iterator protocol (yields payloads up to the end)
    - Equality by position

    Example:
        it = store.children_begin("A")
        end = store.children_end("A")
        while it != end:
            print(it.payload)
            it.advance()
    """

    __slots__ = ('_owner_id', '_children', '_resolve', '_position', '_version')

    def __init__(
        self,
        owner_id: Hashable,
        children: AdjacencySet,
        resolve: Callable[[int], Any],
        position: int
    ):
        """
        Args:
            owner_id: Identifier of the entity whose children are walked
            children: The entity's child set
            resolve: Maps an arena slot to its payload
            position: Starting index, 0 to len(children) inclusive
        """
        self._owner_id = owner_id
        self._children = children
        self._resolve = resolve
        self._position = position
        self._version = children.version

    def _check(self) -> None:
        if self._children.version != self._version:
            raise IteratorInvalidated(
                self._owner_id,
                f"children of {self._owner_id!r} changed after iterator was created",
            )

    @property
    def position(self) -> int:
        return self._position

    @property
    def payload(self) -> Any:
        """Payload of the child at the current position."""
        self._check()
        if not 0 <= self._position < len(self._children):
            raise IndexError("dereferencing children iterator out of range")
        return self._resolve(self._children.slot_at(self._position))

    @property
    def id(self) -> Hashable:
        """Identifier of the child at the current position."""
        self._check()
        if not 0 <= self._position < len(self._children):
            raise IndexError("dereferencing children iterator out of range")
        return self._children.key_at(self._position)

    def advance(self) -> "ChildrenIterator":
        """Step forward one child (prefix increment)."""
        self._check()
        if self._position >= len(self._children):
            raise IndexError("advancing children iterator past the end")
        self._position += 1
        return self

    def retreat(self) -> "ChildrenIterator":
        """Step back one child (prefix decrement)."""
        self._check()
        if self._position <= 0:
            raise IndexError("retreating children iterator before the beginning")
        self._position -= 1
        return self

    def copy(self) -> "ChildrenIterator":
        clone = ChildrenIterator(self._owner_id, self._children, self._resolve, self._position)
        clone._version = self._version
        return clone

    def __iter__(self) -> "ChildrenIterator":
        return self

    def __next__(self) -> Any:
        self._check()
        if self._position >= len(self._children):
            raise StopIteration
        payload = self._resolve(self._children.slot_at(self._position))
        self._position += 1
        return payload

    def __eq__(self, other) -> bool:
        if not isinstance(other, ChildrenIterator):
            return NotImplemented
        return self._children is other._children and self._position == other._position

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"ChildrenIterator(owner={self._owner_id!r}, "
            f"position={self._position}/{len(self._children)})"
        )
