from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from exam_builder.db.models.enums import SectionKind, TestMode, TestStatus

class TestBase(BaseModel):
    title: str
    mode: TestMode = TestMode.PRACTICE
    status: TestStatus = TestStatus.DRAFT
    category: Optional[str] = None

class TestCreate(TestBase):
    pass

class TestUpdate(BaseModel):
    title: Optional[str] = None
    mode: Optional[TestMode] = None
    status: Optional[TestStatus] = None
    category: Optional[str] = None
    version: Optional[int] = None

class TestOut(TestBase):
    id: str
    version: int
    listening_ids: List[str]
    reading_ids: List[str]
    writing_ids: List[str]
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }

class SectionSummary(BaseModel):
    id: str
    kind: SectionKind
    title: str
    version: int

    model_config = {
        "from_attributes": True
    }
