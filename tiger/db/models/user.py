from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from tiger.db.session import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=True)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    tasks = relationship("Task", backref="owner", cascade="all, delete", lazy="dynamic")
    appointments = relationship("Appointment", backref="owner", cascade="all, delete", lazy="dynamic")
    meetings = relationship("Meeting", backref="owner", cascade="all, delete", lazy="dynamic")
