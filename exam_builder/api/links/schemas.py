from typing import List, Optional

from pydantic import BaseModel, Field

from exam_builder.db.models.enums import SectionKind

class LinkCreate(BaseModel):
    parent_id: str
    child_id: str
    position: Optional[int] = Field(None, ge=0)
    version: Optional[int] = None  # parent version

class LinkDelete(BaseModel):
    parent_id: str
    child_id: str
    version: Optional[int] = None

class ReorderRequest(BaseModel):
    child_ids: List[str]
    kind: Optional[SectionKind] = None  # which list of a test
    version: Optional[int] = None

class LinkOut(BaseModel):
    parent_id: str
    child_ids: List[str]
