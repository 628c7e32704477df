"""
GenealogyStore: the main genealogy interface.

Holds a directed acyclic graph of entities descending from one stem
entity. Entities are created below existing ones, may gain further
parents, and are removed together with every descendant left without a
parent.
"""

from typing import Any, Callable, Dict, Hashable, Iterable, Iterator, List, Optional, Set

import logging

import structlog

from genealogy.config.settings import GenealogySettings
from genealogy.core.entity import Entity, EntityRecord, Identified
from genealogy.core.iterator import ChildrenIterator
from genealogy.core.removal import RemovalPlan
from genealogy.exceptions import (
    AlreadyExists,
    CannotRemoveStem,
    IdentifierMismatch,
    NotFound,
)

# Routed through stdlib logging so events stay silent until configured
logger = structlog.wrap_logger(logging.getLogger(__name__))


def _as_id_list(ids: Any) -> List[Hashable]:
    """
    Accept a single identifier or an iterable of identifiers.

    Strings and bytes count as single identifiers; any other iterable
    (list, tuple, set, generator, dict keys...) is expanded, so a tuple
    identifier has to be wrapped in a list.
    """
    if isinstance(ids, (str, bytes)) or not isinstance(ids, Iterable):
        return [ids]
    return list(ids)


class GenealogyStore:
    """
    Mutation ancestry of a single stem entity.

    Storage is an arena of EntityRecords keyed by integer slots, plus an
    identifier -> slot index. Slots are handed out from a counter and are
    never reused, so adjacency sets can refer to records by slot alone.

    Guarantees after every successful call:
    - the stem is the only entity without parents and is never removed
    - every other entity has at least one parent
    - parent and child sets mirror each other

    Every failing call leaves the store exactly as it was.

    Identifiers must be hashable and totally ordered; children are
    reported in identifier order. Single-threaded use only.

    Note:
        connect() does not check whether the new edge closes a cycle.
        Linking an entity below one of its own descendants is the
        caller's responsibility to avoid.
    """

    def __init__(
        self,
        stem_id: Hashable,
        payload_factory: Callable[[Hashable], Any] = Entity,
        settings: Optional[GenealogySettings] = None
    ):
        """
        Initialize a store holding only the stem.

        Args:
            stem_id: Identifier of the stem entity
            payload_factory: Builds the payload for a new identifier; the
                payload must expose that identifier as ``id``
            settings: Store settings (read from the environment if None)
        """
        self.settings = settings or GenealogySettings()
        self._payload_factory = payload_factory

        # Entity storage (slot -> record) and identifier index (id -> slot)
        self._records: Dict[int, EntityRecord] = {}
        self._index: Dict[Hashable, int] = {}
        self._next_slot = 0

        self._stem_id = stem_id
        self._insert_record(stem_id, self._build_payload(stem_id))

    # ========================================
    # Internal helpers
    # ========================================

    def _build_payload(self, entity_id: Hashable) -> Any:
        payload = self._payload_factory(entity_id)
        if self.settings.validate_payload_ids:
            if not isinstance(payload, Identified):
                raise TypeError(
                    f"payload for {entity_id!r} has no 'id' attribute: {payload!r}"
                )
            if payload.id != entity_id:
                raise IdentifierMismatch(entity_id, payload.id)
        return payload

    def _insert_record(self, entity_id: Hashable, payload: Any) -> EntityRecord:
        record = EntityRecord(self._next_slot, entity_id, payload)
        self._next_slot += 1
        self._records[record.slot] = record
        self._index[entity_id] = record.slot
        return record

    def _drop_record(self, record: EntityRecord) -> None:
        del self._index[record.key]
        del self._records[record.slot]

    def _record(self, entity_id: Hashable) -> EntityRecord:
        slot = self._index.get(entity_id)
        if slot is None:
            raise NotFound(entity_id)
        return self._records[slot]

    def _payload_at(self, slot: int) -> Any:
        return self._records[slot].payload

    def _attach(self, child: EntityRecord, parents: Iterable[EntityRecord]) -> List[EntityRecord]:
        """
        Add a parent -> child edge for every parent record.

        Existing edges are skipped. ``parents`` may resolve lazily; if it
        raises (NotFound for a missing parent), every edge added so far is
        taken back before the error propagates.

        Returns:
            Parents that gained a new edge
        """
        added: List[EntityRecord] = []
        try:
            for parent in parents:
                if parent.children.add(child.slot, child.key):
                    added.append(parent)
                    child.parents.add(parent.slot, parent.key)
        except BaseException:
            for parent in added:
                parent.children.discard(child.slot)
                child.parents.discard(parent.slot)
            logger.debug("connect_rolled_back", child=child.key, undone=len(added))
            raise
        return added

    # ========================================
    # Queries
    # ========================================

    @property
    def stem_id(self) -> Hashable:
        """Identifier of the stem entity."""
        return self._stem_id

    def exists(self, entity_id: Hashable) -> bool:
        """Check if an entity is in the store."""
        return entity_id in self._index

    def lookup(self, entity_id: Hashable) -> Any:
        """
        Get the payload of an entity.

        The payload is shared with the store; treat it as read-only.

        Raises:
            NotFound: if the entity is absent
        """
        return self._record(entity_id).payload

    def parents_of(self, entity_id: Hashable) -> Set[Hashable]:
        """
        Get identifiers of an entity's parents.

        Returns a fresh set; it is empty only for the stem.

        Raises:
            NotFound: if the entity is absent
        """
        return set(self._record(entity_id).parents.keys())

    def children_begin(self, entity_id: Hashable) -> ChildrenIterator:
        """
        Iterator at the first child of an entity (ordered by identifier).

        Raises:
            NotFound: if the entity is absent
        """
        record = self._record(entity_id)
        return ChildrenIterator(entity_id, record.children, self._payload_at, 0)

    def children_end(self, entity_id: Hashable) -> ChildrenIterator:
        """
        Iterator one past the last child of an entity.

        Raises:
            NotFound: if the entity is absent
        """
        record = self._record(entity_id)
        return ChildrenIterator(
            entity_id, record.children, self._payload_at, len(record.children)
        )

    def children(self, entity_id: Hashable) -> List[Any]:
        """
        Payloads of an entity's children, ordered by identifier.

        Raises:
            NotFound: if the entity is absent
        """
        return [self._payload_at(slot) for slot in self._record(entity_id).children]

    # ========================================
    # Mutations
    # ========================================

    def create(self, entity_id: Hashable, parent_ids: Any) -> None:
        """
        Create a new entity below existing parents.

        Args:
            entity_id: Identifier for the new entity
            parent_ids: Parent identifier, or an iterable of them. An
                empty collection makes the call a no-op.

        Raises:
            AlreadyExists: if entity_id is already in the store
            NotFound: if any parent is absent (nothing is created)

        Example:
            store = GenealogyStore("stem")
            store.create("A", ["stem"])
            store.create("B", "stem")
            store.create("C", ["A", "B"])
        """
        parents = _as_id_list(parent_ids)
        if not parents:
            return

        if entity_id in self._index:
            raise AlreadyExists(entity_id)

        # Resolved before the new record is indexed, so it cannot parent itself
        parent_records = [self._record(parent_id) for parent_id in parents]

        record = self._insert_record(entity_id, self._build_payload(entity_id))
        try:
            self._attach(record, parent_records)
        except BaseException:
            self._drop_record(record)
            raise

        logger.debug("entity_created", entity=entity_id, parents=len(record.parents))

    def connect(self, child_id: Hashable, parent_ids: Any) -> None:
        """
        Add edges from one or more existing parents to an existing child.

        Edges that already exist are left alone.

        Args:
            child_id: Identifier of the child
            parent_ids: Parent identifier, or an iterable of them

        Raises:
            NotFound: if the child or any parent is absent (no edge is
                added)
        """
        child = self._record(child_id)
        added = self._attach(
            child, (self._record(parent_id) for parent_id in _as_id_list(parent_ids))
        )
        if added:
            logger.debug("edges_connected", child=child_id, added=len(added))

    def remove(self, entity_id: Hashable) -> List[Hashable]:
        """
        Remove an entity and every descendant left without parents.

        Args:
            entity_id: Identifier of the entity to remove

        Returns:
            Identifiers of all removed entities, starting with entity_id

        Raises:
            CannotRemoveStem: if entity_id is the stem
            NotFound: if the entity is absent
        """
        if entity_id == self._stem_id:
            raise CannotRemoveStem(entity_id)

        record = self._record(entity_id)
        plan = RemovalPlan.prepare(self._records, record.slot)
        removed = plan.commit(self._records, self._index)

        logger.debug("cascade_removed", entity=entity_id, removed=len(removed))
        return removed

    def clear(self) -> None:
        """Remove every entity except the stem."""
        for record in self._records.values():
            record.detach_all()

        stem = self._record(self._stem_id)
        dropped = len(self._records) - 1
        self._records = {stem.slot: stem}
        self._index = {stem.key: stem.slot}

        logger.debug("store_cleared", removed=dropped)

    # ========================================
    # Utility & Statistics
    # ========================================

    def stats(self) -> Dict[str, int]:
        """Get store statistics."""
        return {
            'total_entities': len(self._records),
            'total_edges': sum(len(r.children) for r in self._records.values()),
        }

    def __contains__(self, entity_id: Hashable) -> bool:
        return self.exists(entity_id)

    def __getitem__(self, entity_id: Hashable) -> Any:
        return self.lookup(entity_id)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(sorted(self._index))

    def __repr__(self) -> str:
        stats = self.stats()
        return (
            f"GenealogyStore(stem={self._stem_id!r}, "
            f"entities={stats['total_entities']}, "
            f"edges={stats['total_edges']})"
        )
