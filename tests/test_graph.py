import pytest

from exam_builder.composition import graph
from exam_builder.core.errors import InvalidLink, InvalidOrder, OutOfRange
from exam_builder.db.models.enums import EntityKind


class TestInsertAt:
    def test_appends_by_default(self):
        assert graph.insert_at(["a", "b"], "c") == ["a", "b", "c"]

    def test_inserts_at_position(self):
        assert graph.insert_at(["a", "b"], "c", 0) == ["c", "a", "b"]
        assert graph.insert_at(["a", "b"], "c", 2) == ["a", "b", "c"]

    def test_rejects_position_past_end(self):
        with pytest.raises(OutOfRange):
            graph.insert_at(["a"], "c", 2)

    def test_does_not_mutate_input(self):
        ids = ["a", "b"]
        graph.insert_at(ids, "c", 1)
        assert ids == ["a", "b"]


class TestCheckPermutation:
    def test_accepts_permutation(self):
        assert graph.check_permutation(["a", "b", "c"], ["c", "a", "b"]) == ["c", "a", "b"]

    @pytest.mark.parametrize("proposed", [
        ["a", "b"],            # drop
        ["a", "b", "c", "d"],  # add
        ["a", "a", "b"],       # duplicate
        ["a", "b", "x"],       # swap in a stranger
    ])
    def test_rejects_anything_else(self, proposed):
        with pytest.raises(InvalidOrder):
            graph.check_permutation(["a", "b", "c"], proposed)


class TestCreatesCycle:
    TREE = {"test": ["listening"], "listening": ["part"], "part": ["q1", "q2"]}

    def children_of(self, node):
        return self.TREE.get(node, [])

    def test_self_link_is_a_cycle(self):
        assert graph.creates_cycle("part", "part", self.children_of)

    def test_linking_ancestor_under_descendant(self):
        assert graph.creates_cycle("part", "test", self.children_of)
        assert graph.creates_cycle("q1", "listening", self.children_of)

    def test_fresh_child_is_fine(self):
        assert not graph.creates_cycle("listening", "other-part", self.children_of)


def test_containment_field():
    assert graph.containment_field(EntityKind.TEST, EntityKind.READING) == "reading_ids"
    assert graph.containment_field(EntityKind.WRITING, EntityKind.WRITING_TASK) == "child_ids"
    with pytest.raises(InvalidLink):
        graph.containment_field(EntityKind.LISTENING, EntityKind.READING_PART)


def test_list_fields():
    assert graph.list_fields(EntityKind.TEST) == ["listening_ids", "reading_ids", "writing_ids"]
    assert graph.list_fields(EntityKind.READING) == ["child_ids"]
    assert graph.list_fields(EntityKind.READING_PART) == []
