"""
Basic Genealogy Demo

Builds a small mutation ancestry, walks it, and shows how removing a
strain cascades to descendants that lose their last parent.
"""

from genealogy import Entity, GenealogyStore, NotFound, CannotRemoveStem
from genealogy.config import configure_logging


class Strain(Entity):
    """Entity carrying the mutation that produced it."""

    MUTATIONS = {
        "B.1": "D614G",
        "B.1.1.7": "N501Y",
        "B.1.351": "E484K",
        "P.1": "K417T",
        "X.1": "recombinant",
    }

    def __init__(self, strain_id):
        super().__init__(strain_id, {"mutation": self.MUTATIONS.get(strain_id, "-")})


def print_tree(store, entity_id, depth=0):
    strain = store[entity_id]
    print(f"{'  ' * depth}{entity_id} [{strain.get_property('mutation')}]")
    it = store.children_begin(entity_id)
    end = store.children_end(entity_id)
    while it != end:
        print_tree(store, it.id, depth + 1)
        it.advance()


def demo_genealogy():
    print("=" * 70)
    print("GENEALOGY STORE - MUTATION ANCESTRY DEMO")
    print("=" * 70)
    print()

    configure_logging(verbose=True)

    store = GenealogyStore("A", payload_factory=Strain)

    print("1. BUILDING THE ANCESTRY")
    print("-" * 70)
    store.create("B.1", "A")
    store.create("B.1.1.7", ["B.1"])
    store.create("B.1.351", ["B.1"])
    store.create("P.1", ["B.1"])
    store.create("X.1", ["B.1.1.7", "P.1"])
    print_tree(store, store.stem_id)
    print(f"\nParents of X.1: {sorted(store.parents_of('X.1'))}")
    print(f"Store: {store}")
    print()

    print("2. FAILURES LEAVE THE STORE UNTOUCHED")
    print("-" * 70)
    try:
        store.create("Y.1", ["B.1.351", "Z.9"])
    except NotFound as exc:
        print(f"create failed: {exc}; Y.1 exists: {store.exists('Y.1')}")
    try:
        store.remove("A")
    except CannotRemoveStem as exc:
        print(f"remove failed: {exc}")
    print()

    print("3. CASCADING REMOVAL")
    print("-" * 70)
    print(f"remove('B.1.1.7') -> {store.remove('B.1.1.7')}")
    print(f"Parents of X.1 now: {sorted(store.parents_of('X.1'))}")
    print(f"remove('P.1') -> {store.remove('P.1')}")
    print(f"remove('B.1') -> {store.remove('B.1')}")
    print_tree(store, store.stem_id)
    print(f"Store: {store}")


if __name__ == "__main__":
    demo_genealogy()
