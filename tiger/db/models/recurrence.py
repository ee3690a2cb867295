from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.sql import func


class RecurrenceColumns:
    """Columns shared by every record that can recur.

    The self-referencing parent key differs per table and is declared on
    each model.
    """

    is_recurring = Column(Boolean, nullable=False, default=False)
    recurrence_pattern = Column(String, nullable=True)      # 🔁 daily | weekly | monthly | yearly
    recurrence_interval = Column(Integer, nullable=True)
    recurrence_end_date = Column(DateTime, nullable=True)

    completed = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
