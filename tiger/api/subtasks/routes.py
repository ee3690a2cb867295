from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from tiger.db.session import get_db
from tiger.core.security import get_current_user
from tiger.db.models.user import User
from . import schemas, services

router = APIRouter()


@router.get("/", response_model=list[schemas.SubtaskOut])
def list_subtasks(task_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return services.get_subtasks(db, task_id, current_user.id)

@router.post("/", response_model=list[schemas.SubtaskOut])
def add_subtasks(
    task_id: int,
    payload: schemas.SubtaskBulkCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return services.add_subtasks(db, task_id, payload, current_user.id)

@router.patch("/{subtask_id}", response_model=schemas.SubtaskOut)
def update_subtask(
    task_id: int,
    subtask_id: int,
    data: schemas.SubtaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return services.update_subtask(db, task_id, subtask_id, data, current_user.id)

@router.delete("/{subtask_id}")
def delete_subtask(task_id: int, subtask_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    services.delete_subtask(db, task_id, subtask_id, current_user.id)
    return {"success": True, "message": "Subtask deleted successfully"}
