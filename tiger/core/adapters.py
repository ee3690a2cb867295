from tiger.core.recurrence import OccurrenceAdapter
from tiger.db.models import Task, Appointment, Meeting

TASKS = OccurrenceAdapter(
    kind="task",
    model=Task,
    parent_key="parent_task_id",
    anchor_fields=("due_date",),
    content_fields=("title", "description", "priority", "all_day"),
)

APPOINTMENTS = OccurrenceAdapter(
    kind="appointment",
    model=Appointment,
    parent_key="parent_appointment_id",
    anchor_fields=("start_time", "end_time"),
    content_fields=("title", "description", "all_day"),
)

MEETINGS = OccurrenceAdapter(
    kind="meeting",
    model=Meeting,
    parent_key="parent_meeting_id",
    anchor_fields=("start_time", "end_time"),
    content_fields=("title", "description", "location", "attendees"),
)
