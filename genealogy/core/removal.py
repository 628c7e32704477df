"""
Cascading removal of an entity and every descendant it orphans.

Removal runs in two phases:

1. prepare() walks the graph read-only. A breadth-first pass from the
   start entity counts, for each child it meets, how many of that child's
   parents are already doomed; the child is queued the moment the count
   reaches its parent total, so it joins the doomed set exactly once and
   only after all of its parents did. The pass then records, as plain
   data, every edge that surviving entities must drop.

2. commit() applies the recorded detachments, clears the adjacency of
   every doomed record and drops the records from the arena.

Nothing touches the store before commit(), so an error raised while
preparing leaves the graph as it was.
"""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from typing import Deque, Dict, Hashable, List, Set, Tuple

from genealogy.core.adjacency import AdjacencySet
from genealogy.core.entity import EntityRecord


@dataclass
class RemovalPlan:
    """
    Staged removal, built by prepare() and applied by commit().

    Attributes:
        root: Slot of the entity the caller asked to remove
        doomed: Slots to remove, in the order the BFS reached them
        detachments: (adjacency set, slot) pairs to discard on surviving
            records
    """

    root: int
    doomed: List[int] = field(default_factory=list)
    detachments: List[Tuple[AdjacencySet, int]] = field(default_factory=list)

    @classmethod
    def prepare(cls, records: Dict[int, EntityRecord], root: int) -> "RemovalPlan":
        """
        Compute the removal set and the edges to detach.

        Args:
            records: The store's arena (slot -> record)
            root: Slot of a present, non-stem entity

        Returns:
            A plan ready to commit
        """
        plan = cls(root=root)
        doomed_set: Set[int] = {root}
        removed_parents: Dict[int, int] = defaultdict(int)
        queue: Deque[int] = deque([root])

        while queue:
            current = queue.popleft()
            plan.doomed.append(current)

            for child in records[current].children:
                if child in doomed_set:
                    continue
                removed_parents[child] += 1
                # Every parent of the child is going away
                if removed_parents[child] == len(records[child].parents):
                    doomed_set.add(child)
                    queue.append(child)

        # Surviving children forget their doomed parents
        for slot in plan.doomed:
            for child in records[slot].children:
                if child not in doomed_set:
                    plan.detachments.append((records[child].parents, slot))

        # Only the root has parents outside the doomed set
        for parent in records[root].parents:
            plan.detachments.append((records[parent].children, root))

        return plan

    def commit(
        self,
        records: Dict[int, EntityRecord],
        index: Dict[Hashable, int]
    ) -> List[Hashable]:
        """
        Apply the plan.

        Args:
            records: The store's arena (slot -> record)
            index: The store's identifier -> slot map

        Returns:
            Identifiers of the removed entities, in BFS order
        """
        for adjacency, slot in self.detachments:
            adjacency.discard(slot)

        for slot in self.doomed:
            records[slot].detach_all()

        removed = []
        for slot in self.doomed:
            record = records.pop(slot)
            del index[record.id]
            removed.append(record.id)

        return removed

    def __len__(self) -> int:
        return len(self.doomed)
