from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from tiger.db.session import get_db
from tiger.core.security import get_current_user
from tiger.db.models.user import User
from . import schemas, services

router = APIRouter()


@router.get("/", response_model=list[schemas.TaskOut])
def get_my_tasks(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return services.get_tasks_by_user(db, current_user.id)

@router.post("/", response_model=schemas.TaskOut)
def create_task(
    task: schemas.TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return services.create_task(db, task, current_user.id)

@router.get("/{task_id}", response_model=schemas.TaskOut)
def get_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return services.get_task(db, task_id, current_user.id)

@router.get("/{task_id}/occurrences", response_model=list[schemas.TaskOut])
def get_task_occurrences(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return services.get_task_occurrences(db, task_id, current_user.id)

@router.put("/{task_id}", response_model=schemas.TaskOut)
@router.patch("/{task_id}", response_model=schemas.TaskOut)
def update_task(
    task_id: int,
    task: schemas.TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return services.update_task(db, task_id, task, current_user.id)

@router.delete("/{task_id}")
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    removed = services.delete_task(db, task_id, current_user.id)
    return {"success": True, "deleted": removed}
