from typing import Optional

from fastapi import APIRouter, Depends, Query

from exam_builder.api.deps import get_manager, get_store, prefill_param
from exam_builder.composition import CompositionManager
from exam_builder.config import settings
from exam_builder.core.prefill import ParentRef
from exam_builder.core.security import require_builder
from exam_builder.db.models.enums import EntityKind
from exam_builder.db.models.user import User
from exam_builder.store import EntityStore
from . import schemas, services

router = APIRouter()

@router.post("/", response_model=schemas.WritingTaskOut, status_code=201)
def create_writing_task(
    task: schemas.WritingTaskCreate,
    parent: Optional[ParentRef] = Depends(prefill_param("writingId", EntityKind.WRITING)),
    manager: CompositionManager = Depends(get_manager),
    current_user: User = Depends(require_builder)
):
    return services.create_writing_task(manager, task, parent)

@router.get("/", response_model=list[schemas.WritingTaskOut])
def read_writing_tasks(
    writing_id: Optional[str] = None,
    limit: int = Query(settings.DEFAULT_LIST_LIMIT, ge=1),
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(require_builder)
):
    return services.get_writing_tasks(store, writing_id, limit)

@router.get("/{task_id}", response_model=schemas.WritingTaskOut)
def read_writing_task(
    task_id: str,
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(require_builder)
):
    return services.get_writing_task(store, task_id)

@router.put("/{task_id}", response_model=schemas.WritingTaskOut)
def update_writing_task(
    task_id: str,
    task: schemas.WritingTaskUpdate,
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(require_builder)
):
    return services.update_writing_task(store, task_id, task)

@router.delete("/{task_id}")
def delete_writing_task(
    task_id: str,
    manager: CompositionManager = Depends(get_manager),
    current_user: User = Depends(require_builder)
):
    services.delete_writing_task(manager, task_id)
    return {"message": "Writing task deleted"}
