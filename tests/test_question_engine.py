import pytest

from exam_builder.core.errors import InvalidRange, NotFound, OutOfRange, OverlappingGroup, StaleVersion
from exam_builder.db.models import QuestionGroup
from exam_builder.db.models.enums import EntityKind


@pytest.fixture
def part(make):
    return make(EntityKind.READING_PART, label="PART_1")


@pytest.fixture
def filled(ordering, part):
    """Part with eight questions, prompts Q0..Q7."""
    for i in range(8):
        ordering.insert(part, {"prompt": f"Q{i}"})
    return part


def prompts(listing):
    return [q.prompt for q in listing.questions]


def test_inserts_are_contiguous(ordering, filled):
    listing = ordering.list(filled)
    assert [q.position for q in listing.questions] == list(range(8))
    assert prompts(listing) == [f"Q{i}" for i in range(8)]


def test_insert_at_position_shifts_rest(ordering, filled):
    question = ordering.insert(filled, {"prompt": "new"}, position=2)
    assert question.position == 2
    listing = ordering.list(filled)
    assert prompts(listing)[:4] == ["Q0", "Q1", "new", "Q2"]
    assert [q.position for q in listing.questions] == list(range(9))


def test_insert_out_of_range(ordering, filled):
    with pytest.raises(OutOfRange):
        ordering.insert(filled, {"prompt": "late"}, position=12)
    assert len(ordering.list(filled).questions) == 8


def test_remove_recompacts(ordering, filled):
    third = ordering.list(filled).questions[3].id
    listing = ordering.remove(filled, third)
    assert prompts(listing) == ["Q0", "Q1", "Q2", "Q4", "Q5", "Q6", "Q7"]
    assert [q.position for q in listing.questions] == list(range(7))


def test_remove_unknown_question(ordering, filled):
    with pytest.raises(NotFound):
        ordering.remove(filled, "not-a-question")


def test_move(ordering, filled):
    first = ordering.list(filled).questions[0].id
    listing = ordering.move(filled, first, 5)
    assert prompts(listing) == ["Q1", "Q2", "Q3", "Q4", "Q5", "Q0", "Q6", "Q7"]


def test_group_range(ordering, filled):
    span = ordering.group_range(filled, 2, 5, "Choose TWO letters")
    assert (span.start, span.end) == (2, 5)
    listing = ordering.list(filled)
    assert [(g.start, g.end, g.prompt) for g in listing.groups] == [(2, 5, "Choose TWO letters")]
    assert {q.group_id for q in listing.questions[2:6]} == {span.id}


def test_overlapping_group_changes_nothing(ordering, filled):
    ordering.group_range(filled, 2, 5, "first")
    before = ordering.list(filled)
    with pytest.raises(OverlappingGroup):
        ordering.group_range(filled, 4, 7, "second")
    after = ordering.list(filled)
    assert [(g.start, g.end) for g in after.groups] == [(2, 5)]
    assert after.version == before.version


def test_invalid_range(ordering, filled):
    with pytest.raises(InvalidRange):
        ordering.group_range(filled, 5, 2, "backwards")
    with pytest.raises(InvalidRange):
        ordering.group_range(filled, 0, 8, "too far")


def test_removing_grouped_questions_shrinks_group(ordering, filled, db_session):
    span = ordering.group_range(filled, 1, 2, "pair")
    listing = ordering.list(filled)
    ordering.remove(filled, listing.questions[1].id)
    assert [(g.start, g.end) for g in ordering.list(filled).groups] == [(1, 1)]

    listing = ordering.remove(filled, ordering.list(filled).questions[1].id)
    assert listing.groups == []
    assert db_session.get(QuestionGroup, span.id) is None


def test_ungroup(ordering, filled):
    span = ordering.group_range(filled, 0, 3, "table")
    listing = ordering.ungroup(filled, span.id)
    assert listing.groups == []
    assert all(q.group_id is None for q in listing.questions)


def test_each_edit_bumps_part_version(ordering, store, part):
    start = store.get(EntityKind.READING_PART, part).version
    ordering.insert(part, {"prompt": "Q0"})
    ordering.insert(part, {"prompt": "Q1"})
    assert ordering.list(part).version == start + 2


def test_stale_expected_version(ordering, filled):
    version = ordering.list(filled).version
    with pytest.raises(StaleVersion):
        ordering.insert(filled, {"prompt": "late"}, expected_version=version - 1)
    assert len(ordering.list(filled).questions) == 8


def test_writing_task_has_no_questions(ordering, make):
    task = make(EntityKind.WRITING_TASK, label="TASK_1")
    with pytest.raises(NotFound):
        ordering.list(task)
