from sqlalchemy.orm import Session

from tiger.config import settings
from tiger.core import occurrences
from tiger.core.adapters import APPOINTMENTS
from tiger.db.session import transaction
from tiger.api.schemas import build_edits
from . import schemas


def get_appointments(db: Session, user_id: int):
    return occurrences.list_owned(db, APPOINTMENTS, user_id)

def get_appointment(db: Session, appointment_id: int, user_id: int):
    return occurrences.get_owned(db, APPOINTMENTS, appointment_id, user_id)

def get_appointment_occurrences(db: Session, appointment_id: int, user_id: int):
    return occurrences.list_children(db, APPOINTMENTS, get_appointment(db, appointment_id, user_id))

def create_appointment(db: Session, appointment: schemas.AppointmentCreate, user_id: int):
    with transaction(db):
        db_appointment = occurrences.create_record(
            db, APPOINTMENTS, appointment.model_dump(), user_id, settings.RECURRENCE_MAX_OCCURRENCES
        )
    db.refresh(db_appointment)
    return db_appointment

def update_appointment(db: Session, appointment_id: int, appointment: schemas.AppointmentUpdate, user_id: int):
    db_appointment = get_appointment(db, appointment_id, user_id)
    edits = build_edits(appointment, APPOINTMENTS)
    with transaction(db):
        occurrences.apply_edits(
            db, APPOINTMENTS, db_appointment, edits,
            max_count=settings.RECURRENCE_MAX_OCCURRENCES,
            delete_on_disable=settings.DELETE_OCCURRENCES_WHEN_RECURRENCE_DISABLED,
        )
    db.refresh(db_appointment)
    return db_appointment

def delete_appointment(db: Session, appointment_id: int, user_id: int) -> int:
    db_appointment = get_appointment(db, appointment_id, user_id)
    with transaction(db):
        return occurrences.on_parent_deleted(db, APPOINTMENTS, db_appointment)
