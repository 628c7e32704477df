"""Tests for the sorted slot set backing parent and child edges."""

from genealogy.core.adjacency import AdjacencySet


class TestAdjacencySet:
    def test_keeps_identifier_order(self) -> None:
        adj = AdjacencySet()
        adj.add(7, "c")
        adj.add(3, "a")
        adj.add(5, "b")
        assert adj.keys() == ["a", "b", "c"]
        assert list(adj) == [3, 5, 7]

    def test_add_is_idempotent(self) -> None:
        adj = AdjacencySet()
        assert adj.add(1, "x") is True
        assert adj.add(1, "x") is False
        assert len(adj) == 1

    def test_discard(self) -> None:
        adj = AdjacencySet()
        adj.add(1, "x")
        adj.add(2, "y")
        assert adj.discard(1) is True
        assert adj.discard(1) is False
        assert 1 not in adj
        assert adj.keys() == ["y"]
        assert adj.slot_at(0) == 2

    def test_positional_access(self) -> None:
        adj = AdjacencySet()
        adj.add(10, 2)
        adj.add(11, 1)
        assert adj.key_at(0) == 1
        assert adj.slot_at(0) == 11

    def test_version_bumps_only_on_change(self) -> None:
        adj = AdjacencySet()
        v0 = adj.version
        adj.add(1, "x")
        v1 = adj.version
        assert v1 > v0
        adj.add(1, "x")
        adj.discard(99)
        assert adj.version == v1
        adj.clear()
        assert adj.version > v1
        v2 = adj.version
        adj.clear()
        assert adj.version == v2

    def test_clear_empties(self) -> None:
        adj = AdjacencySet()
        adj.add(1, "x")
        adj.clear()
        assert not adj
        assert len(adj) == 0
        assert adj.keys() == []

    def test_none_key_can_be_discarded(self) -> None:
        adj = AdjacencySet()
        adj.add(4, None)
        assert adj.discard(4) is True
        assert len(adj) == 0
