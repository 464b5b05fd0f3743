from typing import Any, Dict, Optional

from pydantic import BaseModel

class NavigateRequest(BaseModel):
    from_path: str
    to: str  # path or builder page id
    data: Dict[str, str] = {}
    context: Dict[str, Any] = {}

class NavigateOut(BaseModel):
    path: str
    sidebar_key: str
    screen_token: int
    depth: int

class BackRequest(BaseModel):
    current_path: str

class BackOut(BaseModel):
    path: Optional[str] = None
    context: Dict[str, Any] = {}
    restored: bool
    screen_token: int

class FrameOut(BaseModel):
    from_path: str
    to_path: str
    context: Dict[str, Any]

    model_config = {
        "from_attributes": True
    }

class RouteOut(BaseModel):
    path: str
    sidebar_key: str
