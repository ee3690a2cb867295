"""Recurrence engine: occurrence generation and edit resolution.

Everything here is free of storage concerns. A recurring *parent* record is
expanded into a bounded batch of *child* records (occurrences), one per
step of its pattern. Tasks, appointments and meetings share the algorithm;
what differs between them is described by an ``OccurrenceAdapter``.

Month and year steps use ``dateutil.relativedelta`` so that a parent
anchored on Jan 31 recurs on the last valid day of shorter months
(Feb 28/29, Apr 30) instead of overflowing into the following month.
Each occurrence is computed from the parent anchor (``anchor + k * step``)
rather than from the previous occurrence, so a clamped month does not drag
every later occurrence to an earlier day.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Union

from dateutil.relativedelta import relativedelta

from tiger.core.errors import ValidationError

logger = logging.getLogger(__name__)

DAILY = "daily"
WEEKLY = "weekly"
MONTHLY = "monthly"
YEARLY = "yearly"

VALID_PATTERNS = (DAILY, WEEKLY, MONTHLY, YEARLY)

DEFAULT_MAX_OCCURRENCES = 10

RECURRENCE_FIELDS = (
    "is_recurring",
    "recurrence_pattern",
    "recurrence_interval",
    "recurrence_end_date",
)

_STEPS = {
    DAILY: lambda n: relativedelta(days=n),
    WEEKLY: lambda n: relativedelta(weeks=n),
    MONTHLY: lambda n: relativedelta(months=n),
    YEARLY: lambda n: relativedelta(years=n),
}


def advance(anchor: datetime, pattern: str, interval: int) -> datetime:
    """Move ``anchor`` forward by ``interval`` units of ``pattern``."""
    try:
        step = _STEPS[pattern]
    except KeyError:
        raise ValidationError(f"Invalid recurrence pattern: {pattern!r}") from None
    return anchor + step(interval)


@dataclass(frozen=True)
class RecurrenceRule:
    pattern: str
    interval: int = 1
    end_date: Optional[datetime] = None

    def validate(self, anchor: Optional[datetime] = None) -> "RecurrenceRule":
        if self.pattern not in VALID_PATTERNS:
            raise ValidationError(
                "Recurrence pattern must be one of: " + ", ".join(VALID_PATTERNS)
            )
        if self.interval is None or self.interval < 1:
            raise ValidationError("Recurrence interval must be a positive integer")
        if anchor is not None and self.end_date is not None and self.end_date < anchor:
            raise ValidationError("Recurrence end date is before the first occurrence")
        return self

    def anchors(self, start: datetime, max_count: int = DEFAULT_MAX_OCCURRENCES) -> list[datetime]:
        """Anchors of the next ``max_count`` occurrences after ``start``, cut at ``end_date``."""
        result = []
        for k in range(1, max_count + 1):
            current = advance(start, self.pattern, self.interval * k)
            if self.end_date is not None and current > self.end_date:
                break
            result.append(current)
        return result


# ---------------------------------------------------------------------------
# Entity adapters
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class OccurrenceAdapter:
    """How the engine reads and writes one kind of occurrence-bearing record.

    ``anchor_fields`` lists the instant(s) recurrence advances; the first is
    the primary anchor and any others (an end time) keep their offset from
    it. ``content_fields`` are copied from parent to child at generation
    time and are the only fields content propagation may touch.
    """

    kind: str
    model: type
    parent_key: str
    anchor_fields: tuple[str, ...]
    content_fields: tuple[str, ...]

    @property
    def primary_anchor(self) -> str:
        return self.anchor_fields[0]

    def get_anchor(self, record) -> dict[str, Optional[datetime]]:
        return {name: getattr(record, name) for name in self.anchor_fields}

    def set_anchor(self, record, anchor: dict[str, Optional[datetime]]) -> None:
        for name, value in anchor.items():
            if name not in self.anchor_fields:
                raise ValidationError(f"{name} is not an anchor field of {self.kind}")
            setattr(record, name, value)

    def get_rule(self, record) -> Optional[RecurrenceRule]:
        if not record.is_recurring:
            return None
        return RecurrenceRule(
            pattern=record.recurrence_pattern,
            interval=record.recurrence_interval or 1,
            end_date=record.recurrence_end_date,
        )

    def clone_content(self, record) -> dict[str, Any]:
        return {name: getattr(record, name) for name in self.content_fields}

    def get_parent_id(self, record) -> Optional[int]:
        return getattr(record, self.parent_key)

    def is_child(self, record) -> bool:
        return self.get_parent_id(record) is not None

    def validate_anchor(self, record) -> None:
        anchor = self.get_anchor(record)
        start = anchor[self.primary_anchor]
        for name in self.anchor_fields[1:]:
            value = anchor[name]
            if start is not None and value is not None and value < start:
                raise ValidationError(f"{name} must not be before {self.primary_anchor}")


# ---------------------------------------------------------------------------
# Edit descriptions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ContentEdit:
    fields: dict[str, Any]
    propagate: bool = False


@dataclass(frozen=True)
class AnchorEdit:
    anchor: dict[str, Optional[datetime]]


@dataclass(frozen=True)
class RecurrenceEdit:
    """Partial change to the recurrence fields; keys are a subset of ``RECURRENCE_FIELDS``."""

    changes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CompletionEdit:
    completed: bool


Edit = Union[ContentEdit, AnchorEdit, RecurrenceEdit, CompletionEdit]


def resolve_recurrence(record, edit: RecurrenceEdit) -> dict[str, Any]:
    """Merge ``edit`` over the record's current recurrence fields.

    Returns the full, consistent set of recurrence columns to write. A
    recurring result has a valid pattern and an interval of at least 1
    (defaulting to 1); a non-recurring result has every other field null.
    """
    changes = edit.changes
    is_recurring = bool(changes.get("is_recurring", record.is_recurring))
    if not is_recurring:
        return {
            "is_recurring": False,
            "recurrence_pattern": None,
            "recurrence_interval": None,
            "recurrence_end_date": None,
        }

    pattern = changes.get("recurrence_pattern", record.recurrence_pattern)
    interval = changes.get("recurrence_interval", record.recurrence_interval)
    if interval is None:
        interval = 1
    end_date = changes.get("recurrence_end_date", record.recurrence_end_date)
    RecurrenceRule(pattern=pattern, interval=interval, end_date=end_date).validate()
    return {
        "is_recurring": True,
        "recurrence_pattern": pattern,
        "recurrence_interval": interval,
        "recurrence_end_date": end_date,
    }


def validate_parent(record, adapter: OccurrenceAdapter) -> None:
    """Check the recurrence invariants of a parent against its current anchor."""
    adapter.validate_anchor(record)
    rule = adapter.get_rule(record)
    if rule is None:
        return
    start = getattr(record, adapter.primary_anchor)
    if start is None:
        raise ValidationError(
            f"A recurring {adapter.kind} needs {adapter.primary_anchor} to be set"
        )
    rule.validate(anchor=start)


def generate_occurrences(parent, adapter: OccurrenceAdapter, max_count: int = DEFAULT_MAX_OCCURRENCES) -> list:
    """Build (but do not persist) the next ``max_count`` children of ``parent``.

    Children carry the parent's content fields, the parent's id in the
    parent key, ``completed=False`` and no recurrence state of their own.
    """
    rule = adapter.get_rule(parent)
    if rule is None:
        return []
    validate_parent(parent, adapter)

    anchor = adapter.get_anchor(parent)
    start = anchor[adapter.primary_anchor]
    content = adapter.clone_content(parent)

    children = []
    for current in rule.anchors(start, max_count):
        shift = current - start
        child_anchor = {adapter.primary_anchor: current}
        for name in adapter.anchor_fields[1:]:
            value = anchor[name]
            child_anchor[name] = value + shift if value is not None else None

        child = adapter.model(
            **content,
            **child_anchor,
            user_id=parent.user_id,
            completed=False,
            is_recurring=False,
            recurrence_pattern=None,
            recurrence_interval=None,
            recurrence_end_date=None,
        )
        setattr(child, adapter.parent_key, parent.id)
        children.append(child)

    logger.debug("Generated %d %s occurrences for parent %s", len(children), adapter.kind, parent.id)
    return children
