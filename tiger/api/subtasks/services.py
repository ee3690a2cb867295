import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from tiger.core import occurrences
from tiger.core.adapters import TASKS
from tiger.core.errors import NotFoundError, ValidationError
from tiger.db.models.subtask import Subtask
from tiger.db.session import transaction
from . import schemas

logger = logging.getLogger(__name__)


def get_subtasks(db: Session, task_id: int, user_id: int):
    occurrences.get_owned(db, TASKS, task_id, user_id)
    return (
        db.query(Subtask)
        .filter(Subtask.task_id == task_id, Subtask.user_id == user_id)
        .order_by(Subtask.position, Subtask.id)
        .all()
    )

def get_subtask(db: Session, task_id: int, subtask_id: int, user_id: int) -> Subtask:
    subtask = db.query(Subtask).filter(
        Subtask.id == subtask_id,
        Subtask.task_id == task_id,
        Subtask.user_id == user_id,
    ).first()
    if subtask is None:
        raise NotFoundError("Subtask not found")
    return subtask

def add_subtasks(db: Session, task_id: int, payload: schemas.SubtaskBulkCreate, user_id: int):
    """Append new subtasks after the current last position and return the full list."""
    occurrences.get_owned(db, TASKS, task_id, user_id)
    new_items = [s for s in payload.subtasks if s.id is None]
    if new_items:
        max_position = db.query(func.coalesce(func.max(Subtask.position), -1)).filter(
            Subtask.task_id == task_id
        ).scalar()
        with transaction(db):
            db.add_all([
                Subtask(
                    task_id=task_id,
                    user_id=user_id,
                    title=item.title,
                    completed=item.completed,
                    position=max_position + 1 + index,
                )
                for index, item in enumerate(new_items)
            ])
        logger.info("Added %d subtasks to task %s", len(new_items), task_id)
    return get_subtasks(db, task_id, user_id)

def update_subtask(db: Session, task_id: int, subtask_id: int, data: schemas.SubtaskUpdate, user_id: int):
    update_data = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
    if not update_data:
        raise ValidationError("No valid fields to update")
    subtask = get_subtask(db, task_id, subtask_id, user_id)
    with transaction(db):
        for key, value in update_data.items():
            setattr(subtask, key, value)
    db.refresh(subtask)
    return subtask

def delete_subtask(db: Session, task_id: int, subtask_id: int, user_id: int) -> None:
    subtask = get_subtask(db, task_id, subtask_id, user_id)
    with transaction(db):
        db.delete(subtask)
