from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from tiger.db.session import get_db
from tiger.core.security import get_current_user
from tiger.db.models.user import User
from . import schemas, services

router = APIRouter()


@router.get("/", response_model=list[schemas.MeetingOut])
def list_meetings(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return services.get_meetings(db, current_user.id)

@router.post("/", response_model=schemas.MeetingOut)
def create_meeting(
    meeting: schemas.MeetingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return services.create_meeting(db, meeting, current_user.id)

@router.get("/{meeting_id}", response_model=schemas.MeetingOut)
def get_meeting(meeting_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return services.get_meeting(db, meeting_id, current_user.id)

@router.get("/{meeting_id}/occurrences", response_model=list[schemas.MeetingOut])
def get_meeting_occurrences(meeting_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return services.get_meeting_occurrences(db, meeting_id, current_user.id)

@router.put("/{meeting_id}", response_model=schemas.MeetingOut)
@router.patch("/{meeting_id}", response_model=schemas.MeetingOut)
def update_meeting(
    meeting_id: int,
    meeting: schemas.MeetingUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return services.update_meeting(db, meeting_id, meeting, current_user.id)

@router.delete("/{meeting_id}")
def delete_meeting(meeting_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    removed = services.delete_meeting(db, meeting_id, current_user.id)
    return {"success": True, "deleted": removed}
