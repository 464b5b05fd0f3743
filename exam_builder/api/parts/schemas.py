from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel

class PartBase(BaseModel):
    label: str
    title: Optional[str] = None
    payload_ref: Optional[str] = None
    answers: Dict[str, str] = {}

class PartCreate(PartBase):
    pass

class PartUpdate(BaseModel):
    label: Optional[str] = None
    title: Optional[str] = None
    payload_ref: Optional[str] = None
    answers: Optional[Dict[str, str]] = None
    version: Optional[int] = None

class PartOut(PartBase):
    id: str
    kind: str
    section_id: Optional[str] = None
    version: int
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }
