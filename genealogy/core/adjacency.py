"""
AdjacencySet: ordered edge storage for one side of one entity.

Each entity record owns two of these, one for parents and one for
children. Members are arena slot numbers; they are kept sorted by the
identifier of the entity living in that slot so children can be walked
in identifier order.
"""

from typing import Dict, Hashable, Iterator, List
import bisect


class AdjacencySet:
    """
    Sorted set of arena slots.

    Membership tests are O(1) through a slot -> key map; ordered access
    goes through two parallel sorted lists (keys and slots), maintained
    with bisect. Keys are entity identifiers and are unique within one
    store, so a key locates exactly one position.

    Every structural change bumps ``version``; iterators compare it to
    detect that they went stale.
    """

    __slots__ = ('_members', '_keys', '_slots', 'version')

    def __init__(self):
        self._members: Dict[int, Hashable] = {}
        self._keys: List[Hashable] = []
        self._slots: List[int] = []
        self.version = 0

    def add(self, slot: int, key: Hashable) -> bool:
        """
        Insert a slot under its identifier.

        Returns:
            True if inserted, False if the slot was already a member
        """
        if slot in self._members:
            return False

        index = bisect.bisect_left(self._keys, key)
        self._keys.insert(index, key)
        self._slots.insert(index, slot)
        self._members[slot] = key
        self.version += 1
        return True

    def discard(self, slot: int) -> bool:
        """
        Remove a slot if present.

        Returns:
            True if removed, False if it was not a member
        """
        if slot not in self._members:
            return False

        key = self._members.pop(slot)
        index = bisect.bisect_left(self._keys, key)
        del self._keys[index]
        del self._slots[index]
        self.version += 1
        return True

    def clear(self) -> None:
        if not self._members:
            return
        self._members.clear()
        self._keys.clear()
        self._slots.clear()
        self.version += 1

    def slot_at(self, index: int) -> int:
        return self._slots[index]

    def key_at(self, index: int) -> Hashable:
        return self._keys[index]

    def keys(self) -> List[Hashable]:
        """Identifiers of the members, ascending."""
        return list(self._keys)

    def __contains__(self, slot: int) -> bool:
        return slot in self._members

    def __iter__(self) -> Iterator[int]:
        return iter(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __bool__(self) -> bool:
        return bool(self._slots)

    def __repr__(self) -> str:
        return f"AdjacencySet({self._keys!r})"
