import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from tiger.config import settings
from tiger.core import occurrences
from tiger.core.adapters import TASKS, APPOINTMENTS, MEETINGS
from tiger.core import hashing
from tiger.db.models import User, Subtask
from tiger.db.session import transaction

logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@example.com"


def seed_demo_data(db: Session, user: User):
    today = datetime.now(timezone.utc).replace(tzinfo=None).replace(hour=9, minute=0, second=0, microsecond=0)
    max_count = settings.RECURRENCE_MAX_OCCURRENCES

    with transaction(db):
        # ✅ Tasks
        standup_notes = occurrences.create_record(db, TASKS, {
            "title": "Write standup notes",
            "priority": "high",
            "due_date": today,
            "is_recurring": True,
            "recurrence_pattern": "daily",
        }, user.id, max_count)
        occurrences.create_record(db, TASKS, {
            "title": "Pay rent",
            "priority": "medium",
            "due_date": today.replace(day=1) + timedelta(days=31),
            "is_recurring": True,
            "recurrence_pattern": "monthly",
        }, user.id, max_count)
        occurrences.create_record(db, TASKS, {
            "title": "Read a book",
            "priority": "low",
        }, user.id, max_count)

        db.add_all([
            Subtask(task_id=standup_notes.id, user_id=user.id, title="Yesterday", position=0),
            Subtask(task_id=standup_notes.id, user_id=user.id, title="Today", position=1),
            Subtask(task_id=standup_notes.id, user_id=user.id, title="Blockers", position=2),
        ])

        # 📅 Appointments and meetings
        occurrences.create_record(db, APPOINTMENTS, {
            "title": "Dentist",
            "start_time": today + timedelta(days=3, hours=5),
            "end_time": today + timedelta(days=3, hours=6),
            "is_recurring": True,
            "recurrence_pattern": "monthly",
            "recurrence_interval": 6,
        }, user.id, max_count)
        occurrences.create_record(db, MEETINGS, {
            "title": "Sprint review",
            "start_time": today + timedelta(days=1, hours=6),
            "end_time": today + timedelta(days=1, hours=7),
            "location": "Room 2",
            "attendees": "team@example.com",
            "is_recurring": True,
            "recurrence_pattern": "weekly",
            "recurrence_interval": 2,
        }, user.id, max_count)


if __name__ == "__main__":
    from tiger.db.session import SessionLocal
    import tiger.db.models  # noqa: F401  ensure all models are registered

    logging.basicConfig(level=logging.INFO)
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == DEMO_EMAIL).first()
        if user is None:
            user = User(email=DEMO_EMAIL, name="Demo", hashed_password=hashing.hash_password("tiger-demo"))
            db.add(user)
            db.commit()
            db.refresh(user)
        logger.info("Seeding data for user: %s", user.email)
        seed_demo_data(db, user)
    finally:
        db.close()
