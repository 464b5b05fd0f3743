from typing import Optional

from fastapi import APIRouter, Depends, Header

from exam_builder.api.deps import get_manager
from exam_builder.composition import CompositionManager
from exam_builder.core.security import require_builder
from exam_builder.db.models.enums import EntityKind
from exam_builder.db.models.link_request import TOKEN_MAX_LENGTH as IDEMPOTENCY_KEY_MAX
from exam_builder.db.models.user import User
from . import schemas

router = APIRouter()

@router.get("/{parent_id}", response_model=schemas.LinkOut)
def read_links(
    parent_id: str,
    manager: CompositionManager = Depends(get_manager),
    current_user: User = Depends(require_builder)
):
    return {"parent_id": parent_id, "child_ids": manager.children(parent_id)}

@router.post("/", response_model=schemas.LinkOut)
def link(
    payload: schemas.LinkCreate,
    idempotency_key: Optional[str] = Header(None, alias="Idempotency-Key", max_length=IDEMPOTENCY_KEY_MAX),
    manager: CompositionManager = Depends(get_manager),
    current_user: User = Depends(require_builder)
):
    child_ids = manager.link(
        payload.parent_id,
        payload.child_id,
        position=payload.position,
        request_token=idempotency_key,
        expected_version=payload.version,
    )
    return {"parent_id": payload.parent_id, "child_ids": child_ids}

@router.delete("/", response_model=schemas.LinkOut)
def unlink(
    payload: schemas.LinkDelete,
    manager: CompositionManager = Depends(get_manager),
    current_user: User = Depends(require_builder)
):
    child_ids = manager.unlink(payload.parent_id, payload.child_id, expected_version=payload.version)
    return {"parent_id": payload.parent_id, "child_ids": child_ids}

@router.put("/{parent_id}/order", response_model=schemas.LinkOut)
def reorder(
    parent_id: str,
    payload: schemas.ReorderRequest,
    manager: CompositionManager = Depends(get_manager),
    current_user: User = Depends(require_builder)
):
    kind = EntityKind(payload.kind.value) if payload.kind else None
    child_ids = manager.reorder(parent_id, payload.child_ids, kind=kind, expected_version=payload.version)
    return {"parent_id": parent_id, "child_ids": child_ids}

@router.post("/detach-delete", response_model=schemas.LinkOut)
def detach_and_delete(
    payload: schemas.LinkDelete,
    manager: CompositionManager = Depends(get_manager),
    current_user: User = Depends(require_builder)
):
    child_ids = manager.detach_and_delete(payload.parent_id, payload.child_id, expected_version=payload.version)
    return {"parent_id": payload.parent_id, "child_ids": child_ids}
