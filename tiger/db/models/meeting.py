from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text
from tiger.db.session import Base
from tiger.db.models.recurrence import RecurrenceColumns


class Meeting(RecurrenceColumns, Base):
    __tablename__ = "meetings"
    # occurrence ids are never reused after a regeneration
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String, nullable=True)
    attendees = Column(Text, nullable=True)  # comma separated

    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)

    parent_meeting_id = Column(Integer, ForeignKey("meetings.id", ondelete="CASCADE"), nullable=True, index=True)
