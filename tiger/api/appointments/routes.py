from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from tiger.db.session import get_db
from tiger.core.security import get_current_user
from tiger.db.models.user import User
from . import schemas, services

router = APIRouter()


@router.get("/", response_model=list[schemas.AppointmentOut])
def list_appointments(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return services.get_appointments(db, current_user.id)

@router.post("/", response_model=schemas.AppointmentOut)
def create_appointment(
    appointment: schemas.AppointmentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return services.create_appointment(db, appointment, current_user.id)

@router.get("/{appointment_id}", response_model=schemas.AppointmentOut)
def get_appointment(appointment_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return services.get_appointment(db, appointment_id, current_user.id)

@router.get("/{appointment_id}/occurrences", response_model=list[schemas.AppointmentOut])
def get_appointment_occurrences(appointment_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return services.get_appointment_occurrences(db, appointment_id, current_user.id)

@router.put("/{appointment_id}", response_model=schemas.AppointmentOut)
@router.patch("/{appointment_id}", response_model=schemas.AppointmentOut)
def update_appointment(
    appointment_id: int,
    appointment: schemas.AppointmentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return services.update_appointment(db, appointment_id, appointment, current_user.id)

@router.delete("/{appointment_id}")
def delete_appointment(appointment_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    removed = services.delete_appointment(db, appointment_id, current_user.id)
    return {"success": True, "deleted": removed}
