from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime, Text
from tiger.db.session import Base
from tiger.db.models.recurrence import RecurrenceColumns


class Appointment(RecurrenceColumns, Base):
    __tablename__ = "appointments"
    # occurrence ids are never reused after a regeneration
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    all_day = Column(Boolean, nullable=False, default=False)

    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)

    parent_appointment_id = Column(Integer, ForeignKey("appointments.id", ondelete="CASCADE"), nullable=True, index=True)
