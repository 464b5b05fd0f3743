from datetime import datetime

import pytest

from exam_builder.api.parts import services as part_services
from exam_builder.api.sections import services as section_services
from exam_builder.db.models.enums import EntityKind, PartKind

OLD = datetime(2024, 1, 1)


@pytest.fixture
def older_linked_part(make, manager):
    listening = make(EntityKind.LISTENING, title="Listening")
    part = make(EntityKind.LISTENING_PART, label="PART_1",
                created_at=OLD)
    manager.link(listening, part)
    return part


@pytest.fixture
def newer_unlinked_parts(make, older_linked_part):
    return [make(EntityKind.LISTENING_PART, label=f"PART_{i}") for i in range(2, 5)]


class TestLinkedFilter:
    def test_linked_filter_runs_before_limit(self, store, older_linked_part, newer_unlinked_parts):
        parts = store.list(EntityKind.LISTENING_PART, linked=True, limit=2)
        assert [p.id for p in parts] == [older_linked_part]

    def test_unlinked_filter(self, store, older_linked_part, newer_unlinked_parts):
        parts = store.list(EntityKind.LISTENING_PART, linked=False)
        assert {p.id for p in parts} == set(newer_unlinked_parts)

    def test_part_service_passes_filter_through(self, store, older_linked_part, newer_unlinked_parts):
        parts = part_services.get_parts(store, PartKind.LISTENING, linked=True, limit=2)
        assert [p.id for p in parts] == [older_linked_part]

    def test_section_service_passes_filter_through(self, store, make, manager):
        test_id = make(EntityKind.TEST, title="Mock")
        linked = make(EntityKind.READING, title="Old",
                      created_at=OLD)
        manager.link(test_id, linked)
        for i in range(3):
            make(EntityKind.READING, title=f"New {i}")

        sections = section_services.get_sections(store, EntityKind.READING, linked=True, limit=1)
        assert [s.id for s in sections] == [linked]


def test_list_without_filter_is_newest_first(store, make):
    old = make(EntityKind.WRITING, title="Old", created_at=OLD)
    new = make(EntityKind.WRITING, title="New")
    assert [s.id for s in store.list(EntityKind.WRITING)] == [new, old]
