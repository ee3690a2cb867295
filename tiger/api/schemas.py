"""Request fields shared by every recurring record, and the translation of a
partial update body into the typed edits the recurrence engine consumes.
"""
from datetime import datetime, timezone
from typing import Annotated, Literal, Optional

from pydantic import AfterValidator, BaseModel, Field

from tiger.core.errors import ValidationError
from tiger.core.recurrence import (
    RECURRENCE_FIELDS,
    AnchorEdit,
    CompletionEdit,
    ContentEdit,
    Edit,
    OccurrenceAdapter,
    RecurrenceEdit,
)


def to_utc_naive(value: Optional[datetime]) -> Optional[datetime]:
    # Stored datetimes are naive UTC
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(to_utc_naive)]

RecurrencePattern = Literal["daily", "weekly", "monthly", "yearly"]


class RecurrenceIn(BaseModel):
    is_recurring: bool = False
    recurrence_pattern: Optional[RecurrencePattern] = None
    recurrence_interval: Optional[int] = Field(default=None, ge=1)
    recurrence_end_date: Optional[UtcDatetime] = None


class RecurrenceUpdate(BaseModel):
    is_recurring: Optional[bool] = None
    recurrence_pattern: Optional[RecurrencePattern] = None
    recurrence_interval: Optional[int] = Field(default=None, ge=1)
    recurrence_end_date: Optional[UtcDatetime] = None

    # 🔁 Apply content changes to every generated occurrence too
    update_all_recurring: bool = False


class RecurrenceOut(BaseModel):
    is_recurring: bool
    recurrence_pattern: Optional[str] = None
    recurrence_interval: Optional[int] = None
    recurrence_end_date: Optional[datetime] = None
    completed: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def build_edits(update: BaseModel, adapter: OccurrenceAdapter) -> list[Edit]:
    """Split the fields explicitly set on ``update`` into engine edits."""
    data = update.model_dump(exclude_unset=True)
    propagate = bool(data.pop("update_all_recurring", False))

    # an explicit null for these means "leave as is"
    for key in ("is_recurring", "completed"):
        if key in data and data[key] is None:
            del data[key]

    edits: list[Edit] = []

    recurrence = {k: data.pop(k) for k in RECURRENCE_FIELDS if k in data}
    if recurrence:
        edits.append(RecurrenceEdit(recurrence))

    anchor = {k: data.pop(k) for k in adapter.anchor_fields if k in data}
    if anchor:
        edits.append(AnchorEdit(anchor))

    if "completed" in data:
        edits.append(CompletionEdit(bool(data.pop("completed"))))

    content = {k: data.pop(k) for k in adapter.content_fields if k in data}
    if content or propagate:
        edits.append(ContentEdit(content, propagate))

    if data:
        raise ValidationError(f"Fields cannot be updated on a {adapter.kind}: {', '.join(sorted(data))}")
    return edits


def reject_null(value):
    if value is None:
        raise ValueError("may not be null")
    return value
