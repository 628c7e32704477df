"""Tests for the default payload and the arena record."""

from genealogy.core.entity import Entity, EntityRecord, Identified


class TestEntity:
    def test_id_and_properties(self) -> None:
        e = Entity("A", {"mutation": "D614G"})
        assert e.id == "A"
        assert e.get_property("mutation") == "D614G"
        assert e.has_property("mutation")
        assert e.get_property("missing", 0) == 0

    def test_set_property(self) -> None:
        e = Entity(1)
        e.set_property("host", "bat")
        assert e.properties == {"host": "bat"}

    def test_equality_by_id(self) -> None:
        assert Entity("A", {"x": 1}) == Entity("A")
        assert Entity("A") != Entity("B")
        assert hash(Entity("A")) == hash(Entity("A"))

    def test_satisfies_identified(self) -> None:
        assert isinstance(Entity("A"), Identified)
        assert not isinstance(object(), Identified)

    def test_repr(self) -> None:
        assert repr(Entity("A")) == "Entity(id='A')"
        assert "k=v" in repr(Entity("A", {"k": "v"}))


class TestEntityRecord:
    def test_starts_detached(self) -> None:
        record = EntityRecord(0, "A", Entity("A"))
        assert record.id == "A"
        assert len(record.parents) == 0
        assert len(record.children) == 0

    def test_detach_all(self) -> None:
        record = EntityRecord(0, "A", Entity("A"))
        record.parents.add(1, "P")
        record.children.add(2, "C")
        record.detach_all()
        assert not record.parents
        assert not record.children
