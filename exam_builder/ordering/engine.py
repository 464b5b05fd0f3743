import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from exam_builder.core.errors import NotFound
from exam_builder.db.models import Part, Question, QuestionGroup
from exam_builder.db.models.base import new_id
from exam_builder.db.models.enums import EntityKind
from exam_builder.ordering.layout import QuestionLayout, Slot
from exam_builder.store import EntityStore

logger = logging.getLogger(__name__)

QUESTION_PARENTS = (EntityKind.LISTENING_PART, EntityKind.READING_PART)


@dataclass
class GroupSpan:
    id: str
    prompt: str
    start: int
    end: int


@dataclass
class QuestionListing:
    part_id: str
    version: int
    questions: List[Question]
    groups: List[GroupSpan]


class QuestionOrderingEngine:
    """Ordered questions inside one part.

    Each operation loads the part's layout, computes the new layout in
    memory, then writes positions and groups back in one transaction that
    also bumps the part's version.
    """

    def __init__(self, store: EntityStore):
        self.store = store

    def list(self, part_id: str) -> QuestionListing:
        part = self._part(part_id)
        return self._listing(part, self._layout(part))

    def insert(self, part_id: str, payload: dict, position: Optional[int] = None,
               expected_version: Optional[int] = None) -> Question:
        with self.store.transaction():
            part = self._part(part_id)
            question_id = new_id()
            layout = self._layout(part).insert(question_id, position)
            question = Question(id=question_id, part_id=part.id,
                                position=layout.positions()[question_id], **payload)
            part.questions.append(question)
            self._apply(part, layout, expected_version)
            logger.info("QUESTION_INSERT part=%s question=%s position=%s", part_id, question_id, question.position)
        return question

    def remove(self, part_id: str, question_id: str, expected_version: Optional[int] = None) -> QuestionListing:
        with self.store.transaction():
            part = self._part(part_id)
            layout = self._layout(part).remove(question_id)
            question = next(q for q in part.questions if q.id == question_id)
            part.questions.remove(question)
            self._apply(part, layout, expected_version)
            logger.info("QUESTION_REMOVE part=%s question=%s", part_id, question_id)
        return self.list(part_id)

    def move(self, part_id: str, question_id: str, new_position: int,
             expected_version: Optional[int] = None) -> QuestionListing:
        with self.store.transaction():
            part = self._part(part_id)
            layout = self._layout(part).move(question_id, new_position)
            self._apply(part, layout, expected_version)
            logger.info("QUESTION_MOVE part=%s question=%s position=%s", part_id, question_id, new_position)
        return self.list(part_id)

    def group_range(self, part_id: str, start: int, end: int, prompt: str,
                    expected_version: Optional[int] = None) -> GroupSpan:
        group_id = new_id()
        with self.store.transaction():
            part = self._part(part_id)
            layout = self._layout(part).group_range(start, end, group_id, prompt)
            self._apply(part, layout, expected_version)
            logger.info("QUESTION_GROUP part=%s group=%s range=%d..%d", part_id, group_id, start, end)
        return GroupSpan(id=group_id, prompt=prompt, start=start, end=end)

    def ungroup(self, part_id: str, group_id: str, expected_version: Optional[int] = None) -> QuestionListing:
        with self.store.transaction():
            part = self._part(part_id)
            layout = self._layout(part).ungroup(group_id)
            self._apply(part, layout, expected_version)
            logger.info("QUESTION_UNGROUP part=%s group=%s", part_id, group_id)
        return self.list(part_id)

    # ---------------------------
    # Helpers
    # ---------------------------

    def _part(self, part_id: str) -> Part:
        kind, record = self.store.find(part_id)
        if kind not in QUESTION_PARENTS:
            raise NotFound(f"Part {part_id} not found", id=part_id)
        return record

    @staticmethod
    def _layout(part: Part) -> QuestionLayout:
        questions = sorted(part.questions, key=lambda q: q.position)
        return QuestionLayout(
            [Slot(q.id, q.group_id) for q in questions],
            {group.id: group.prompt for group in part.groups},
        )

    def _apply(self, part: Part, layout: QuestionLayout, expected_version: Optional[int]):
        groups = {group.id: group for group in part.groups}
        for group_id, prompt in layout.prompts.items():
            if group_id not in groups:
                groups[group_id] = QuestionGroup(id=group_id, prompt=prompt)
                part.groups.append(groups[group_id])

        by_id = {q.id: q for q in part.questions}
        for index, slot in enumerate(layout.slots):
            question = by_id[slot.question_id]
            question.position = index
            question.group = groups[slot.group_id] if slot.group_id else None

        for group_id, group in groups.items():
            if group_id not in layout.prompts:
                part.groups.remove(group)

        # Touch the part so concurrent edits of the same list collide on its version
        self.store.update(
            EntityKind(f"{part.kind}_part"), part.id,
            {"updated_at": datetime.now(timezone.utc)},
            version=part.version if expected_version is None else expected_version,
        )

    @staticmethod
    def _listing(part: Part, layout: QuestionLayout) -> QuestionListing:
        by_id = {q.id: q for q in part.questions}
        spans = [
            GroupSpan(id=group_id, prompt=layout.prompts[group_id], start=start, end=end)
            for group_id, (start, end) in sorted(layout.group_ranges().items(), key=lambda item: item[1])
        ]
        return QuestionListing(
            part_id=part.id,
            version=part.version,
            questions=[by_id[i] for i in layout.ids],
            groups=spans,
        )
