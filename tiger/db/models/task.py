from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime, Text
from sqlalchemy.orm import relationship
from tiger.db.session import Base
from tiger.db.models.recurrence import RecurrenceColumns


class Task(RecurrenceColumns, Base):
    __tablename__ = "tasks"
    # occurrence ids are never reused after a regeneration
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    priority = Column(String, nullable=False, default="medium")   # low | medium | high
    all_day = Column(Boolean, nullable=False, default=False)

    due_date = Column(DateTime, nullable=True)           # 🗓 Anchor

    # Generated occurrence -> its recurring parent
    parent_task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=True, index=True)

    subtasks = relationship(
        "Subtask",
        back_populates="task",
        cascade="all, delete-orphan",
        order_by="Subtask.position",
    )

    @property
    def total_subtasks(self) -> int:
        return len(self.subtasks)

    @property
    def completed_subtasks(self) -> int:
        return sum(1 for s in self.subtasks if s.completed)

    @property
    def has_subtasks(self) -> bool:
        return self.total_subtasks > 0
