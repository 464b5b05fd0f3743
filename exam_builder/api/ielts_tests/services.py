from typing import List, Optional

from exam_builder.composition import CompositionManager
from exam_builder.db.models import IeltsTest
from exam_builder.db.models.enums import EntityKind, SectionKind
from exam_builder.store import EntityStore
from . import schemas

def create_test(store: EntityStore, test: schemas.TestCreate) -> IeltsTest:
    with store.transaction():
        test_id = store.create(EntityKind.TEST, test.model_dump(mode="json"))
    return store.get(EntityKind.TEST, test_id)

def get_tests(store: EntityStore, status: Optional[str] = None, mode: Optional[str] = None,
              limit: Optional[int] = None) -> List[IeltsTest]:
    return store.list(EntityKind.TEST, filters={"status": status, "mode": mode}, limit=limit)

def get_test(store: EntityStore, test_id: str) -> IeltsTest:
    return store.get(EntityKind.TEST, test_id)

def get_sections(store: EntityStore, test_id: str, kind: SectionKind):
    store.get(EntityKind.TEST, test_id)
    return store.list(EntityKind(kind.value), parent_id=test_id)

def update_test(store: EntityStore, test_id: str, test: schemas.TestUpdate) -> IeltsTest:
    patch = test.model_dump(mode="json", exclude_unset=True)
    version = patch.pop("version", None)
    with store.transaction():
        store.update(EntityKind.TEST, test_id, patch, version=version)
    return store.get(EntityKind.TEST, test_id)

def delete_test(manager: CompositionManager, test_id: str):
    manager.delete(test_id, kind=EntityKind.TEST)
