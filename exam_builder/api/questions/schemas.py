from typing import Any, List, Optional

from pydantic import BaseModel, Field

from exam_builder.db.models.enums import QuestionType

class QuestionBase(BaseModel):
    type: QuestionType = QuestionType.COMPLETION
    prompt: Optional[str] = None
    options: List[Any] = []
    answer_key: Optional[Any] = None

class QuestionCreate(QuestionBase):
    position: Optional[int] = None
    version: Optional[int] = None  # part version

class QuestionUpdate(BaseModel):
    type: Optional[QuestionType] = None
    prompt: Optional[str] = None
    options: Optional[List[Any]] = None
    answer_key: Optional[Any] = None
    version: Optional[int] = None

class QuestionOut(QuestionBase):
    id: str
    part_id: str
    position: int
    group_id: Optional[str] = None
    version: int

    model_config = {
        "from_attributes": True
    }

class QuestionMove(BaseModel):
    position: int
    version: Optional[int] = None

class GroupCreate(BaseModel):
    start: int
    end: int
    prompt: str = Field(..., min_length=1)
    version: Optional[int] = None

class GroupOut(BaseModel):
    id: str
    prompt: str
    start: int
    end: int

    model_config = {
        "from_attributes": True
    }

class QuestionListingOut(BaseModel):
    part_id: str
    version: int
    questions: List[QuestionOut]
    groups: List[GroupOut]

    model_config = {
        "from_attributes": True
    }
