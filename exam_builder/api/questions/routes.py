from typing import Optional

from fastapi import APIRouter, Depends

from exam_builder.api.deps import get_engine, get_store
from exam_builder.core.security import require_builder
from exam_builder.db.models.user import User
from exam_builder.ordering import QuestionOrderingEngine
from exam_builder.store import EntityStore
from . import schemas, services

# Mounted under /parts/{part_id}/questions
part_router = APIRouter()

# Mounted under /questions
router = APIRouter()


@part_router.get("/", response_model=schemas.QuestionListingOut)
def list_questions(
    part_id: str,
    engine: QuestionOrderingEngine = Depends(get_engine),
    current_user: User = Depends(require_builder)
):
    return services.list_questions(engine, part_id)

@part_router.post("/", response_model=schemas.QuestionOut, status_code=201)
def insert_question(
    part_id: str,
    question: schemas.QuestionCreate,
    engine: QuestionOrderingEngine = Depends(get_engine),
    current_user: User = Depends(require_builder)
):
    return services.insert_question(engine, part_id, question)

@part_router.delete("/{question_id}", response_model=schemas.QuestionListingOut)
def remove_question(
    part_id: str,
    question_id: str,
    version: Optional[int] = None,
    engine: QuestionOrderingEngine = Depends(get_engine),
    current_user: User = Depends(require_builder)
):
    return services.remove_question(engine, part_id, question_id, version)

@part_router.post("/{question_id}/move", response_model=schemas.QuestionListingOut)
def move_question(
    part_id: str,
    question_id: str,
    move: schemas.QuestionMove,
    engine: QuestionOrderingEngine = Depends(get_engine),
    current_user: User = Depends(require_builder)
):
    return services.move_question(engine, part_id, question_id, move)

@part_router.post("/groups", response_model=schemas.GroupOut, status_code=201)
def group_questions(
    part_id: str,
    group: schemas.GroupCreate,
    engine: QuestionOrderingEngine = Depends(get_engine),
    current_user: User = Depends(require_builder)
):
    return services.group_questions(engine, part_id, group)

@part_router.delete("/groups/{group_id}", response_model=schemas.QuestionListingOut)
def ungroup_questions(
    part_id: str,
    group_id: str,
    version: Optional[int] = None,
    engine: QuestionOrderingEngine = Depends(get_engine),
    current_user: User = Depends(require_builder)
):
    return services.ungroup_questions(engine, part_id, group_id, version)


@router.get("/{question_id}", response_model=schemas.QuestionOut)
def read_question(
    question_id: str,
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(require_builder)
):
    return services.get_question(store, question_id)

@router.put("/{question_id}", response_model=schemas.QuestionOut)
def update_question(
    question_id: str,
    question: schemas.QuestionUpdate,
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(require_builder)
):
    return services.update_question(store, question_id, question)
