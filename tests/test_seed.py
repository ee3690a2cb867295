from tiger.db.models import Appointment, Meeting, Subtask, Task
from tiger.db.seed import seed_demo_data


def test_seed_demo_data(db, user, monkeypatch):
    monkeypatch.setattr("tiger.db.seed.settings.RECURRENCE_MAX_OCCURRENCES", 2)
    seed_demo_data(db, user)

    parents = db.query(Task).filter(Task.parent_task_id.is_(None)).all()
    assert len(parents) == 3
    assert db.query(Task).count() == 3 + 2 + 2
    assert db.query(Appointment).count() == 3
    assert db.query(Meeting).count() == 3
    assert db.query(Subtask).count() == 3

    rent = next(t for t in parents if t.title == "Pay rent")
    assert rent.recurrence_pattern == "monthly"
