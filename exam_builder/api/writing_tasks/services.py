from typing import Optional

from exam_builder.composition import CompositionManager
from exam_builder.core.prefill import ParentRef
from exam_builder.db.models.enums import EntityKind
from exam_builder.store import EntityStore
from . import schemas

def create_writing_task(manager: CompositionManager, task: schemas.WritingTaskCreate,
                        parent: Optional[ParentRef] = None):
    return manager.create_and_link(EntityKind.WRITING_TASK, task.model_dump(), parent)

def get_writing_tasks(store: EntityStore, writing_id: Optional[str] = None, limit: Optional[int] = None):
    return store.list(EntityKind.WRITING_TASK, parent_id=writing_id, limit=limit)

def get_writing_task(store: EntityStore, task_id: str):
    return store.get(EntityKind.WRITING_TASK, task_id)

def update_writing_task(store: EntityStore, task_id: str, task: schemas.WritingTaskUpdate):
    patch = task.model_dump(exclude_unset=True)
    version = patch.pop("version", None)
    with store.transaction():
        store.update(EntityKind.WRITING_TASK, task_id, patch, version=version)
    return store.get(EntityKind.WRITING_TASK, task_id)

def delete_writing_task(manager: CompositionManager, task_id: str):
    manager.delete(task_id, kind=EntityKind.WRITING_TASK)
