from sqlalchemy.orm import Session

from tiger.config import settings
from tiger.core import occurrences
from tiger.core.adapters import TASKS
from tiger.db.session import transaction
from tiger.api.schemas import build_edits
from . import schemas


def get_tasks_by_user(db: Session, user_id: int):
    return occurrences.list_owned(db, TASKS, user_id)

def get_task(db: Session, task_id: int, user_id: int):
    return occurrences.get_owned(db, TASKS, task_id, user_id)

def get_task_occurrences(db: Session, task_id: int, user_id: int):
    return occurrences.list_children(db, TASKS, get_task(db, task_id, user_id))

def create_task(db: Session, task: schemas.TaskCreate, user_id: int):
    with transaction(db):
        db_task = occurrences.create_record(
            db, TASKS, task.model_dump(), user_id, settings.RECURRENCE_MAX_OCCURRENCES
        )
    db.refresh(db_task)
    return db_task

def update_task(db: Session, task_id: int, task: schemas.TaskUpdate, user_id: int):
    db_task = get_task(db, task_id, user_id)
    edits = build_edits(task, TASKS)
    with transaction(db):
        occurrences.apply_edits(
            db, TASKS, db_task, edits,
            max_count=settings.RECURRENCE_MAX_OCCURRENCES,
            delete_on_disable=settings.DELETE_OCCURRENCES_WHEN_RECURRENCE_DISABLED,
        )
    db.refresh(db_task)
    return db_task

def delete_task(db: Session, task_id: int, user_id: int) -> int:
    db_task = get_task(db, task_id, user_id)
    with transaction(db):
        return occurrences.on_parent_deleted(db, TASKS, db_task)
