from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class SubtaskCreate(BaseModel):
    id: Optional[int] = None     # already saved items are skipped
    title: str = Field(min_length=1)
    completed: bool = False

class SubtaskBulkCreate(BaseModel):
    subtasks: list[SubtaskCreate]

class SubtaskUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    completed: Optional[bool] = None
    position: Optional[int] = Field(default=None, ge=0)

class SubtaskOut(BaseModel):
    id: int
    task_id: int
    user_id: int
    title: str
    completed: bool
    position: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }
