from sqlalchemy.orm import Session

from tiger.config import settings
from tiger.core import occurrences
from tiger.core.adapters import MEETINGS
from tiger.db.session import transaction
from tiger.api.schemas import build_edits
from . import schemas


def get_meetings(db: Session, user_id: int):
    return occurrences.list_owned(db, MEETINGS, user_id)

def get_meeting(db: Session, meeting_id: int, user_id: int):
    return occurrences.get_owned(db, MEETINGS, meeting_id, user_id)

def get_meeting_occurrences(db: Session, meeting_id: int, user_id: int):
    return occurrences.list_children(db, MEETINGS, get_meeting(db, meeting_id, user_id))

def create_meeting(db: Session, meeting: schemas.MeetingCreate, user_id: int):
    with transaction(db):
        db_meeting = occurrences.create_record(
            db, MEETINGS, meeting.model_dump(), user_id, settings.RECURRENCE_MAX_OCCURRENCES
        )
    db.refresh(db_meeting)
    return db_meeting

def update_meeting(db: Session, meeting_id: int, meeting: schemas.MeetingUpdate, user_id: int):
    db_meeting = get_meeting(db, meeting_id, user_id)
    edits = build_edits(meeting, MEETINGS)
    with transaction(db):
        occurrences.apply_edits(
            db, MEETINGS, db_meeting, edits,
            max_count=settings.RECURRENCE_MAX_OCCURRENCES,
            delete_on_disable=settings.DELETE_OCCURRENCES_WHEN_RECURRENCE_DISABLED,
        )
    db.refresh(db_meeting)
    return db_meeting

def delete_meeting(db: Session, meeting_id: int, user_id: int) -> int:
    db_meeting = get_meeting(db, meeting_id, user_id)
    with transaction(db):
        return occurrences.on_parent_deleted(db, MEETINGS, db_meeting)
