from typing import Optional

from fastapi import HTTPException

from exam_builder.composition import CompositionManager
from exam_builder.core.prefill import ParentRef
from exam_builder.db.models.enums import EntityKind, PartKind, PART_LABELS
from exam_builder.store import EntityStore
from . import schemas

def _check_label(part_kind: PartKind, label: Optional[str]):
    if label is not None and label not in PART_LABELS[part_kind]:
        raise HTTPException(
            status_code=422,
            detail=f"{part_kind.value} parts are labelled {', '.join(PART_LABELS[part_kind])}",
        )

def create_part(manager: CompositionManager, part_kind: PartKind, part: schemas.PartCreate,
                parent: Optional[ParentRef] = None):
    _check_label(part_kind, part.label)
    return manager.create_and_link(EntityKind(f"{part_kind.value}_part"), part.model_dump(), parent)

def get_parts(store: EntityStore, part_kind: PartKind, linked: Optional[bool] = None, limit: Optional[int] = None):
    return store.list(EntityKind(f"{part_kind.value}_part"), limit=limit, linked=linked)

def get_part(store: EntityStore, part_kind: PartKind, part_id: str):
    return store.get(EntityKind(f"{part_kind.value}_part"), part_id)

def update_part(store: EntityStore, part_kind: PartKind, part_id: str, part: schemas.PartUpdate):
    patch = part.model_dump(exclude_unset=True)
    version = patch.pop("version", None)
    _check_label(part_kind, patch.get("label"))
    kind = EntityKind(f"{part_kind.value}_part")
    with store.transaction():
        store.update(kind, part_id, patch, version=version)
    return store.get(kind, part_id)

def delete_part(manager: CompositionManager, part_kind: PartKind, part_id: str):
    manager.delete(part_id, kind=EntityKind(f"{part_kind.value}_part"))
