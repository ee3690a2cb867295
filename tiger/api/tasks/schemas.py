from typing import Literal, Optional
from datetime import datetime
from pydantic import Field, field_validator

from tiger.api.schemas import RecurrenceIn, RecurrenceUpdate, RecurrenceOut, UtcDatetime, reject_null

Priority = Literal["low", "medium", "high"]


class TaskCreate(RecurrenceIn):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    priority: Priority = "medium"
    completed: bool = False
    all_day: bool = False
    due_date: Optional[UtcDatetime] = None         # 🗓 Due Date


class TaskUpdate(RecurrenceUpdate):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    priority: Optional[Priority] = None
    completed: Optional[bool] = None
    all_day: Optional[bool] = None
    due_date: Optional[UtcDatetime] = None

    @field_validator("title", "priority", "all_day")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class TaskOut(RecurrenceOut):
    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    priority: str
    all_day: bool
    due_date: Optional[datetime] = None
    parent_task_id: Optional[int] = None

    has_subtasks: bool = False
    total_subtasks: int = 0
    completed_subtasks: int = 0

    model_config = {
        "from_attributes": True
    }
