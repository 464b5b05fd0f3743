from typing import Optional

from fastapi import APIRouter, Depends, Query

from exam_builder.api.deps import get_manager, get_store
from exam_builder.composition import CompositionManager
from exam_builder.config import settings
from exam_builder.core.security import require_builder
from exam_builder.db.models.enums import SectionKind, TestMode, TestStatus
from exam_builder.db.models.user import User
from exam_builder.store import EntityStore
from . import schemas, services

router = APIRouter()

@router.post("/", response_model=schemas.TestOut, status_code=201)
def create_test(
    test: schemas.TestCreate,
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(require_builder)
):
    return services.create_test(store, test)

@router.get("/", response_model=list[schemas.TestOut])
def read_tests(
    status: Optional[TestStatus] = None,
    mode: Optional[TestMode] = None,
    limit: int = Query(settings.DEFAULT_LIST_LIMIT, ge=1),
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(require_builder)
):
    return services.get_tests(
        store,
        status.value if status else None,
        mode.value if mode else None,
        limit,
    )

@router.get("/{test_id}", response_model=schemas.TestOut)
def read_test(
    test_id: str,
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(require_builder)
):
    return services.get_test(store, test_id)

@router.get("/{test_id}/sections/{kind}", response_model=list[schemas.SectionSummary])
def read_test_sections(
    test_id: str,
    kind: SectionKind,
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(require_builder)
):
    return services.get_sections(store, test_id, kind)

@router.put("/{test_id}", response_model=schemas.TestOut)
def update_test(
    test_id: str,
    test: schemas.TestUpdate,
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(require_builder)
):
    return services.update_test(store, test_id, test)

@router.delete("/{test_id}")
def delete_test(
    test_id: str,
    manager: CompositionManager = Depends(get_manager),
    current_user: User = Depends(require_builder)
):
    services.delete_test(manager, test_id)
    return {"message": "Test deleted"}
