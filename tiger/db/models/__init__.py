# tiger/db/models/__init__.py
from .user import User
from .task import Task
from .subtask import Subtask
from .appointment import Appointment
from .meeting import Meeting
