import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from exam_builder.composition import CompositionManager
from exam_builder.core.errors import (
    AlreadyLinked,
    CreatedButUnlinked,
    CycleDetected,
    InvalidLink,
    InvalidOrder,
    NotFound,
    OutOfRange,
    RequestTokenReused,
    StaleVersion,
)
from exam_builder.core.prefill import ParentRef
from exam_builder.db.models import Question
from exam_builder.db.models.enums import EntityKind
from exam_builder.db.session import Base
from exam_builder.store import EntityStore


@pytest.fixture
def listening(make):
    return make(EntityKind.LISTENING, title="Listening A")


@pytest.fixture
def parts(make):
    return [make(EntityKind.LISTENING_PART, label=f"PART_{i}") for i in range(1, 4)]


@pytest.fixture
def linked(manager, listening, parts):
    for part_id in parts:
        manager.link(listening, part_id)
    return listening


class TestLink:
    def test_link_appends_and_sets_owner(self, manager, store, listening, parts):
        assert manager.link(listening, parts[0]) == [parts[0]]
        assert manager.link(listening, parts[1]) == [parts[0], parts[1]]
        assert store.get(EntityKind.LISTENING_PART, parts[0]).section_id == listening

    def test_link_at_position(self, manager, linked, make):
        extra = make(EntityKind.LISTENING_PART, label="PART_4")
        children = manager.link(linked, extra, position=1)
        assert children[1] == extra
        assert len(children) == 4

    def test_link_past_the_end_is_out_of_range(self, manager, linked, make):
        extra = make(EntityKind.LISTENING_PART, label="PART_4")
        with pytest.raises(OutOfRange):
            manager.link(linked, extra, position=9)

    def test_link_then_unlink_round_trips(self, manager, linked, parts, make):
        before = manager.children(linked)
        extra = make(EntityKind.LISTENING_PART, label="PART_4")
        manager.link(linked, extra, position=1)
        assert manager.unlink(linked, extra) == before
        assert manager.children(linked) == before

    def test_unknown_ids(self, manager, listening, parts):
        with pytest.raises(NotFound):
            manager.link("missing", parts[0])
        with pytest.raises(NotFound):
            manager.link(listening, "missing")

    def test_already_linked(self, manager, linked, parts):
        with pytest.raises(AlreadyLinked):
            manager.link(linked, parts[0])

    def test_child_owned_by_another_parent(self, manager, linked, parts, make):
        other = make(EntityKind.LISTENING, title="Listening B")
        with pytest.raises(AlreadyLinked):
            manager.link(other, parts[0])
        assert manager.children(other) == []

    def test_wrong_kinds_are_rejected(self, manager, listening, make):
        reading_part = make(EntityKind.READING_PART, label="PART_1")
        with pytest.raises(InvalidLink):
            manager.link(listening, reading_part)

    def test_cycles_are_rejected(self, manager, linked, parts, make):
        test_id = make(EntityKind.TEST, title="Mock 1")
        manager.link(test_id, linked)
        with pytest.raises(CycleDetected):
            manager.link(parts[0], linked)
        with pytest.raises(CycleDetected):
            manager.link(linked, test_id)
        with pytest.raises(CycleDetected):
            manager.link(test_id, test_id)

    def test_sections_go_into_the_list_for_their_kind(self, manager, make):
        test_id = make(EntityKind.TEST, title="Mock 1")
        reading = make(EntityKind.READING, title="Reading")
        writing = make(EntityKind.WRITING, title="Writing")
        manager.link(test_id, reading)
        manager.link(test_id, writing)
        assert manager.children(test_id, EntityKind.READING) == [reading]
        assert manager.children(test_id, EntityKind.WRITING) == [writing]
        assert manager.children(test_id, EntityKind.LISTENING) == []


class TestIdempotentLink:
    def test_retry_with_same_token_is_a_no_op(self, manager, listening, parts):
        first = manager.link(listening, parts[0], request_token="tok-1")
        again = manager.link(listening, parts[0], request_token="tok-1")
        assert first == again == [parts[0]]

    def test_retry_without_token_is_already_linked(self, manager, listening, parts):
        manager.link(listening, parts[0], request_token="tok-1")
        with pytest.raises(AlreadyLinked):
            manager.link(listening, parts[0])

    def test_token_reused_for_other_link(self, manager, listening, parts):
        manager.link(listening, parts[0], request_token="tok-1")
        with pytest.raises(RequestTokenReused):
            manager.link(listening, parts[1], request_token="tok-1")

    def test_failed_link_does_not_burn_token(self, manager, listening, parts):
        with pytest.raises(OutOfRange):
            manager.link(listening, parts[0], position=5, request_token="tok-1")
        assert manager.link(listening, parts[0], request_token="tok-1") == [parts[0]]


class TestUnlink:
    def test_unlink_keeps_the_child(self, manager, store, linked, parts):
        assert manager.unlink(linked, parts[1]) == [parts[0], parts[2]]
        part = store.get(EntityKind.LISTENING_PART, parts[1])
        assert part.section_id is None

    def test_unlink_pair_not_linked(self, manager, listening, parts):
        with pytest.raises(NotFound):
            manager.unlink(listening, parts[0])

    def test_unlink_incompatible_kinds_is_not_found(self, manager, listening, make):
        test_id = make(EntityKind.TEST, title="Mock")
        with pytest.raises(NotFound):
            manager.unlink(listening, test_id)


class TestReorder:
    def test_permutation(self, manager, linked, parts):
        wanted = [parts[2], parts[0], parts[1]]
        assert manager.reorder(linked, wanted) == wanted
        assert manager.children(linked) == wanted

    @pytest.mark.parametrize("mangle", [
        lambda p: p[:2],
        lambda p: p + ["stranger"],
        lambda p: [p[0], p[0], p[1]],
    ])
    def test_non_permutation_leaves_state(self, manager, linked, parts, mangle):
        with pytest.raises(InvalidOrder):
            manager.reorder(linked, mangle(list(parts)))
        assert manager.children(linked) == parts

    def test_test_lists_pick_matching_kind(self, manager, make):
        test_id = make(EntityKind.TEST, title="Mock")
        readings = [make(EntityKind.READING, title=f"R{i}") for i in range(3)]
        for reading in readings:
            manager.link(test_id, reading)
        wanted = list(reversed(readings))
        assert manager.reorder(test_id, wanted) == wanted
        assert manager.reorder(test_id, readings, kind=EntityKind.READING) == readings

    def test_parts_have_no_linked_children(self, manager, parts):
        with pytest.raises(InvalidLink):
            manager.reorder(parts[0], [])


class TestDelete:
    def test_detach_and_delete(self, manager, store, linked, parts):
        assert manager.detach_and_delete(linked, parts[0]) == parts[1:]
        with pytest.raises(NotFound):
            store.get(EntityKind.LISTENING_PART, parts[0])

    def test_detach_and_delete_unlinked_pair_deletes_nothing(self, manager, store, listening, parts):
        with pytest.raises(NotFound):
            manager.detach_and_delete(listening, parts[0])
        assert store.get(EntityKind.LISTENING_PART, parts[0]).id == parts[0]

    def test_deleting_section_detaches_parts(self, manager, store, linked, parts):
        test_id = store.create(EntityKind.TEST, {"title": "Mock"})
        store.db.commit()
        manager.link(test_id, linked)

        manager.delete(linked)

        assert manager.children(test_id) == []
        for part_id in parts:
            assert store.get(EntityKind.LISTENING_PART, part_id).section_id is None

    def test_deleting_part_cascades_questions(self, manager, ordering, store, linked, parts):
        ordering.insert(parts[0], {"prompt": "Q1"})
        ordering.insert(parts[0], {"prompt": "Q2"})

        manager.delete(parts[0])

        assert store.db.query(Question).count() == 0
        assert manager.children(linked) == parts[1:]

    def test_delete_checks_kind(self, manager, listening):
        with pytest.raises(NotFound):
            manager.delete(listening, kind=EntityKind.READING)


class TestCreateAndLink:
    def test_prefilled_parent(self, manager, store, listening):
        part = manager.create_and_link(
            EntityKind.LISTENING_PART, {"label": "PART_1"},
            ParentRef(EntityKind.LISTENING, listening))
        assert part.section_id == listening
        assert manager.children(listening) == [part.id]

    def test_no_parent(self, manager):
        part = manager.create_and_link(EntityKind.LISTENING_PART, {"label": "PART_1"})
        assert part.section_id is None

    def test_link_failure_leaves_entity_unlinked(self, manager, store):
        missing = ParentRef(EntityKind.LISTENING, "8d6f2a5e-3f0a-4c7e-9d51-2b8a4f1c0e77")
        with pytest.raises(CreatedButUnlinked) as excinfo:
            manager.create_and_link(EntityKind.LISTENING_PART, {"label": "PART_2"}, missing)

        error = excinfo.value
        assert error.cause.code == "not_found"
        part = store.get(EntityKind.LISTENING_PART, error.child_id)
        assert part.section_id is None
        assert error.to_dict()["id"] == error.child_id

    def test_prefill_of_the_wrong_kind(self, manager, store, make):
        reading = make(EntityKind.READING, title="Reading")
        with pytest.raises(CreatedButUnlinked) as excinfo:
            manager.create_and_link(
                EntityKind.LISTENING_PART, {"label": "PART_1"},
                ParentRef(EntityKind.LISTENING, reading))

        error = excinfo.value
        assert error.cause.code == "invalid_link"
        assert error.cause.extra["parent_kind"] == "reading"
        assert store.get(EntityKind.LISTENING_PART, error.child_id).section_id is None
        assert manager.children(reading) == []


class TestVersions:
    def test_expected_version_mismatch(self, manager, listening, parts):
        with pytest.raises(StaleVersion):
            manager.link(listening, parts[0], expected_version=42)
        assert manager.children(listening) == []

    def test_version_bumps_on_link(self, manager, store, listening, parts):
        before = store.get(EntityKind.LISTENING, listening).version
        manager.link(listening, parts[0], expected_version=before)
        assert store.get(EntityKind.LISTENING, listening).version == before + 1

    def test_concurrent_writer_wins(self, tmp_path):
        engine = create_engine(f"sqlite:///{tmp_path / 'builder.db'}")
        Base.metadata.create_all(bind=engine)
        Session = sessionmaker(bind=engine, autocommit=False, autoflush=False)
        first, second = Session(), Session()
        try:
            store_a = EntityStore(first)
            with store_a.transaction():
                section_id = store_a.create(EntityKind.READING, {"title": "Reading"})
                part_id = store_a.create(EntityKind.READING_PART, {"label": "PART_1"})

            # Session A reads version 1, session B writes version 2
            store_a.get(EntityKind.READING, section_id)
            store_b = EntityStore(second)
            with store_b.transaction():
                store_b.update(EntityKind.READING, section_id, {"title": "Renamed"}, version=1)

            with pytest.raises(StaleVersion):
                CompositionManager(store_a).link(section_id, part_id)
        finally:
            first.close()
            second.close()
            engine.dispose()
