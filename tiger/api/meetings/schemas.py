from typing import Optional
from datetime import datetime
from pydantic import Field, field_validator, model_validator

from tiger.api.schemas import RecurrenceIn, RecurrenceUpdate, RecurrenceOut, UtcDatetime, reject_null


class MeetingCreate(RecurrenceIn):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    start_time: UtcDatetime
    end_time: UtcDatetime
    location: Optional[str] = None
    attendees: Optional[str] = None     # comma separated emails or names
    completed: bool = False

    @model_validator(mode="after")
    def check_times(self):
        if self.end_time < self.start_time:
            raise ValueError("end_time must not be before start_time")
        return self


class MeetingUpdate(RecurrenceUpdate):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    start_time: Optional[UtcDatetime] = None
    end_time: Optional[UtcDatetime] = None
    location: Optional[str] = None
    attendees: Optional[str] = None
    completed: Optional[bool] = None

    @field_validator("title", "start_time", "end_time")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class MeetingOut(RecurrenceOut):
    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime
    location: Optional[str] = None
    attendees: Optional[str] = None
    parent_meeting_id: Optional[int] = None

    model_config = {
        "from_attributes": True
    }
