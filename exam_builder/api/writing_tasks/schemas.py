from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

class WritingTaskBase(BaseModel):
    label: Literal["TASK_1", "TASK_2"]
    prompt: Optional[str] = None
    instructions: Optional[str] = None
    min_words: Optional[int] = Field(None, ge=0)
    suggested_time: Optional[int] = Field(None, ge=0)  # minutes

class WritingTaskCreate(WritingTaskBase):
    pass

class WritingTaskUpdate(BaseModel):
    label: Optional[Literal["TASK_1", "TASK_2"]] = None
    prompt: Optional[str] = None
    instructions: Optional[str] = None
    min_words: Optional[int] = Field(None, ge=0)
    suggested_time: Optional[int] = Field(None, ge=0)
    version: Optional[int] = None

class WritingTaskOut(WritingTaskBase):
    id: str
    writing_id: Optional[str] = None
    version: int
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }
