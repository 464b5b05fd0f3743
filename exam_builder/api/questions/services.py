from typing import Optional

from exam_builder.db.models.enums import EntityKind
from exam_builder.ordering import QuestionOrderingEngine
from exam_builder.store import EntityStore
from . import schemas

def _listing(listing) -> schemas.QuestionListingOut:
    return schemas.QuestionListingOut.model_validate(listing)

def list_questions(engine: QuestionOrderingEngine, part_id: str):
    return _listing(engine.list(part_id))

def insert_question(engine: QuestionOrderingEngine, part_id: str, question: schemas.QuestionCreate):
    payload = question.model_dump(mode="json", exclude={"position", "version"})
    return engine.insert(part_id, payload, position=question.position, expected_version=question.version)

def remove_question(engine: QuestionOrderingEngine, part_id: str, question_id: str, version: Optional[int] = None):
    return _listing(engine.remove(part_id, question_id, expected_version=version))

def move_question(engine: QuestionOrderingEngine, part_id: str, question_id: str, move: schemas.QuestionMove):
    return _listing(engine.move(part_id, question_id, move.position, expected_version=move.version))

def group_questions(engine: QuestionOrderingEngine, part_id: str, group: schemas.GroupCreate):
    span = engine.group_range(part_id, group.start, group.end, group.prompt, expected_version=group.version)
    return schemas.GroupOut.model_validate(span)

def ungroup_questions(engine: QuestionOrderingEngine, part_id: str, group_id: str, version: Optional[int] = None):
    return _listing(engine.ungroup(part_id, group_id, expected_version=version))

def get_question(store: EntityStore, question_id: str):
    return store.get(EntityKind.QUESTION, question_id)

def update_question(store: EntityStore, question_id: str, question: schemas.QuestionUpdate):
    patch = question.model_dump(mode="json", exclude_unset=True)
    version = patch.pop("version", None)
    with store.transaction():
        store.update(EntityKind.QUESTION, question_id, patch, version=version)
    return store.get(EntityKind.QUESTION, question_id)
