from typing import Optional

from fastapi import APIRouter, Depends, Request

from exam_builder.core.security import require_builder
from exam_builder.db.models.user import User
from exam_builder.navigation import NavigationCarrier, page_to_route, registry, sidebar_key
from . import schemas

router = APIRouter()


def get_carrier(current_user: User = Depends(require_builder)) -> NavigationCarrier:
    return registry.for_session(current_user.id)


@router.post("/navigate", response_model=schemas.NavigateOut)
def navigate(payload: schemas.NavigateRequest, carrier: NavigationCarrier = Depends(get_carrier)):
    path = carrier.navigate(payload.from_path, payload.to, context=payload.context, data=payload.data)
    return {
        "path": path,
        "sidebar_key": sidebar_key(path),
        "screen_token": carrier.screen_token(),
        "depth": carrier.depth,
    }

@router.post("/back", response_model=schemas.BackOut)
def back(payload: schemas.BackRequest, carrier: NavigationCarrier = Depends(get_carrier)):
    result = carrier.back(payload.current_path)
    return {
        "path": result.path,
        "context": result.context,
        "restored": result.restored,
        "screen_token": carrier.screen_token(),
    }

@router.get("/peek", response_model=Optional[schemas.FrameOut])
def peek(carrier: NavigationCarrier = Depends(get_carrier)):
    return carrier.peek()

@router.get("/routes/{page_id}", response_model=schemas.RouteOut)
def resolve_route(page_id: str, request: Request, current_user: User = Depends(require_builder)):
    path = page_to_route(page_id, dict(request.query_params))
    return {"path": path, "sidebar_key": sidebar_key(path)}
