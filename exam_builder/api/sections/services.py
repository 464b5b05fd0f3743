from typing import Optional

from exam_builder.composition import CompositionManager
from exam_builder.core.prefill import ParentRef
from exam_builder.db.models.enums import EntityKind
from exam_builder.store import EntityStore
from . import schemas

CHILD_KINDS = {
    EntityKind.LISTENING: EntityKind.LISTENING_PART,
    EntityKind.READING: EntityKind.READING_PART,
    EntityKind.WRITING: EntityKind.WRITING_TASK,
}

def create_section(manager: CompositionManager, kind: EntityKind, section: schemas.SectionCreate,
                   parent: Optional[ParentRef] = None):
    return manager.create_and_link(kind, section.model_dump(), parent)

def get_sections(store: EntityStore, kind: EntityKind, linked: Optional[bool] = None, limit: Optional[int] = None):
    return store.list(kind, limit=limit, linked=linked)

def get_section(store: EntityStore, kind: EntityKind, section_id: str):
    return store.get(kind, section_id)

def get_children(store: EntityStore, kind: EntityKind, section_id: str):
    store.get(kind, section_id)
    return store.list(CHILD_KINDS[kind], parent_id=section_id)

def update_section(store: EntityStore, kind: EntityKind, section_id: str, section: schemas.SectionUpdate):
    patch = section.model_dump(exclude_unset=True)
    version = patch.pop("version", None)
    with store.transaction():
        store.update(kind, section_id, patch, version=version)
    return store.get(kind, section_id)

def delete_section(manager: CompositionManager, kind: EntityKind, section_id: str):
    manager.delete(section_id, kind=kind)
