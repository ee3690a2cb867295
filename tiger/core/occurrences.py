"""Storage side of the recurrence engine.

These functions read and write through a SQLAlchemy session but never
commit: callers wrap them in ``tiger.db.session.transaction`` so that a
parent update and the delete/regenerate of its children land together or
not at all.
"""

import logging
from typing import Any, Iterable

from sqlalchemy.orm import Session

from tiger.core.errors import NotFoundError, ValidationError
from tiger.core.recurrence import (
    RECURRENCE_FIELDS,
    AnchorEdit,
    CompletionEdit,
    ContentEdit,
    Edit,
    OccurrenceAdapter,
    RecurrenceEdit,
    generate_occurrences,
    resolve_recurrence,
    validate_parent,
)

logger = logging.getLogger(__name__)


# -------------------------------
# Storage collaborator
# -------------------------------
def get_owned(db: Session, adapter: OccurrenceAdapter, record_id: int, user_id: int):
    model = adapter.model
    record = db.query(model).filter(model.id == record_id, model.user_id == user_id).first()
    if record is None:
        raise NotFoundError(f"{adapter.kind.capitalize()} not found")
    return record


def list_owned(db: Session, adapter: OccurrenceAdapter, user_id: int):
    model = adapter.model
    return (
        db.query(model)
        .filter(model.user_id == user_id)
        .order_by(getattr(model, adapter.primary_anchor), model.id)
        .all()
    )


def children_query(db: Session, adapter: OccurrenceAdapter, parent):
    model = adapter.model
    return db.query(model).filter(
        getattr(model, adapter.parent_key) == parent.id,
        model.user_id == parent.user_id,
    )


def list_children(db: Session, adapter: OccurrenceAdapter, parent):
    return children_query(db, adapter, parent).order_by(getattr(adapter.model, adapter.primary_anchor)).all()


def delete_children(db: Session, adapter: OccurrenceAdapter, parent) -> int:
    # ORM deletes so per-record cascades (a task's subtasks) still run
    children = children_query(db, adapter, parent).all()
    for child in children:
        db.delete(child)
    db.flush()
    return len(children)


def insert_children(db: Session, children: Iterable) -> None:
    children = list(children)
    if children:
        db.add_all(children)
        db.flush()


def materialize(db: Session, adapter: OccurrenceAdapter, parent, max_count: int) -> list:
    children = generate_occurrences(parent, adapter, max_count)
    insert_children(db, children)
    return children


def regenerate(db: Session, adapter: OccurrenceAdapter, parent, max_count: int) -> list:
    removed = delete_children(db, adapter, parent)
    children = materialize(db, adapter, parent, max_count) if parent.is_recurring else []
    logger.info(
        "Regenerated %s %s: removed %d occurrences, created %d",
        adapter.kind, parent.id, removed, len(children),
    )
    return children


# -------------------------------
# Engine operations
# -------------------------------
def create_record(db: Session, adapter: OccurrenceAdapter, values: dict[str, Any], user_id: int, max_count: int):
    """Insert a new parent and, when it recurs, its first batch of occurrences."""
    values = dict(values)
    recurrence = {k: values.pop(k) for k in RECURRENCE_FIELDS if k in values}
    if values.get(adapter.parent_key) is not None:
        raise ValidationError("Occurrences are generated from their parent and cannot be created directly")

    values.setdefault("completed", False)
    record = adapter.model(**values, user_id=user_id, is_recurring=False)
    for key, value in resolve_recurrence(record, RecurrenceEdit(recurrence)).items():
        setattr(record, key, value)
    validate_parent(record, adapter)

    db.add(record)
    db.flush()

    if record.is_recurring:
        children = materialize(db, adapter, record, max_count)
        logger.info("Created recurring %s %s with %d occurrences", adapter.kind, record.id, len(children))
    return record


def on_parent_anchor_changed(db: Session, adapter: OccurrenceAdapter, parent, new_anchor: dict, max_count: int) -> list:
    """Move a parent's anchor: drop every occurrence and regenerate from the new anchor.

    Per-occurrence ``completed`` state on the dropped children is lost.
    """
    if adapter.is_child(parent):
        raise ValidationError(
            f"An occurrence's time follows its parent; edit the parent {adapter.kind} instead"
        )
    adapter.set_anchor(parent, new_anchor)
    validate_parent(parent, adapter)
    return regenerate(db, adapter, parent, max_count)


def on_parent_content_changed(db: Session, adapter: OccurrenceAdapter, parent, fields: dict[str, Any], propagate: bool) -> int:
    """Update content fields on ``parent`` and, if asked, on all of its occurrences.

    Returns the number of occurrences updated. Anchors and ``completed``
    are never part of the propagated set.
    """
    unknown = set(fields) - set(adapter.content_fields)
    if unknown:
        raise ValidationError(f"Not content fields of {adapter.kind}: {', '.join(sorted(unknown))}")

    for key, value in fields.items():
        setattr(parent, key, value)

    if not propagate or not fields or adapter.is_child(parent):
        return 0

    children = children_query(db, adapter, parent).all()
    for child in children:
        for key, value in fields.items():
            setattr(child, key, value)
    db.flush()
    logger.info("Propagated %s to %d occurrences of %s %s", sorted(fields), len(children), adapter.kind, parent.id)
    return len(children)


def on_parent_deleted(db: Session, adapter: OccurrenceAdapter, record) -> int:
    """Delete a record. A parent takes all its occurrences with it; an occurrence goes alone.

    Returns the number of records removed.
    """
    removed = 0
    if not adapter.is_child(record):
        removed = delete_children(db, adapter, record)
    db.delete(record)
    db.flush()
    return removed + 1


def disable_recurrence(db: Session, adapter: OccurrenceAdapter, parent, delete_occurrences: bool) -> int:
    if not delete_occurrences:
        return 0
    removed = delete_children(db, adapter, parent)
    logger.info("Recurrence disabled on %s %s, removed %d occurrences", adapter.kind, parent.id, removed)
    return removed


def _without_unchanged(record, edit):
    """Drop the entries of an anchor or recurrence edit that repeat the record's current values.

    A full-body PUT resends every field; only real changes may move the
    schedule, and an occurrence may echo back its own schedule.
    """
    if edit is None:
        return None
    if isinstance(edit, AnchorEdit):
        changed = {k: v for k, v in edit.anchor.items() if getattr(record, k) != v}
        return AnchorEdit(changed) if changed else None
    changed = {k: v for k, v in edit.changes.items() if getattr(record, k) != v}
    return RecurrenceEdit(changed) if changed else None


def apply_edits(
    db: Session,
    adapter: OccurrenceAdapter,
    record,
    edits: list[Edit],
    max_count: int,
    delete_on_disable: bool = False,
):
    """Apply typed edits to ``record`` and keep its occurrences in sync.

    On a parent the order is: recurrence fields, content (optionally
    propagated), then either anchor move (delete + regenerate) or, when only
    the rule changed, regeneration; completion last. Occurrences accept
    content and completion edits for themselves only.
    """
    by_type = {type(edit): edit for edit in edits}
    recurrence_edit = _without_unchanged(record, by_type.get(RecurrenceEdit))
    anchor_edit = _without_unchanged(record, by_type.get(AnchorEdit))
    content_edit = by_type.get(ContentEdit)
    completion_edit = by_type.get(CompletionEdit)

    if adapter.is_child(record):
        if recurrence_edit is not None or anchor_edit is not None:
            logger.warning("Rejected schedule edit on %s occurrence %s", adapter.kind, record.id)
            raise ValidationError(
                f"Occurrences cannot change their own time or recurrence; edit the parent {adapter.kind} instead"
            )
        if content_edit is not None:
            on_parent_content_changed(db, adapter, record, content_edit.fields, propagate=False)
        if completion_edit is not None:
            record.completed = completion_edit.completed
        db.flush()
        return record

    old_rule = adapter.get_rule(record)
    if recurrence_edit is not None:
        for key, value in resolve_recurrence(record, recurrence_edit).items():
            setattr(record, key, value)
    new_rule = adapter.get_rule(record)

    if content_edit is not None:
        on_parent_content_changed(db, adapter, record, content_edit.fields, content_edit.propagate)

    if anchor_edit is not None:
        on_parent_anchor_changed(db, adapter, record, anchor_edit.anchor, max_count)
    elif new_rule != old_rule:
        validate_parent(record, adapter)
        if new_rule is not None:
            regenerate(db, adapter, record, max_count)
        else:
            disable_recurrence(db, adapter, record, delete_on_disable)
    else:
        validate_parent(record, adapter)

    if completion_edit is not None:
        record.completed = completion_edit.completed

    db.flush()
    return record
