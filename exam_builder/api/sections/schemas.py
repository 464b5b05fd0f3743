from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

class SectionBase(BaseModel):
    title: str
    description: Optional[str] = None
    payload_ref: Optional[str] = None

class SectionCreate(SectionBase):
    pass

class SectionUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    payload_ref: Optional[str] = None
    version: Optional[int] = None

class SectionOut(SectionBase):
    id: str
    kind: str
    test_id: Optional[str] = None
    child_ids: List[str]
    version: int
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }
