"""Tests for occurrence generation and rule resolution (no database)."""

from datetime import datetime, timedelta

import pytest

from tiger.core.adapters import APPOINTMENTS, MEETINGS, TASKS
from tiger.core.errors import ValidationError
from tiger.core.recurrence import (
    RecurrenceEdit,
    RecurrenceRule,
    advance,
    generate_occurrences,
    resolve_recurrence,
    validate_parent,
)
from tiger.db.models import Appointment, Meeting, Task


def _task(**overrides):
    values = dict(
        id=1,
        user_id=7,
        title="Water plants",
        description="Balcony and kitchen",
        priority="high",
        all_day=False,
        completed=False,
        due_date=datetime(2024, 1, 31, 9, 0),
        is_recurring=True,
        recurrence_pattern="daily",
        recurrence_interval=1,
        recurrence_end_date=None,
        parent_task_id=None,
    )
    values.update(overrides)
    return Task(**values)


# ---------------------------------------------------------------------------
# advance
# ---------------------------------------------------------------------------

class TestAdvance:
    def test_daily_and_weekly(self):
        start = datetime(2024, 3, 1, 8, 30)
        assert advance(start, "daily", 3) == datetime(2024, 3, 4, 8, 30)
        assert advance(start, "weekly", 2) == datetime(2024, 3, 15, 8, 30)

    def test_monthly_clamps_to_last_day(self):
        assert advance(datetime(2024, 1, 31), "monthly", 1) == datetime(2024, 2, 29)
        assert advance(datetime(2023, 1, 31), "monthly", 1) == datetime(2023, 2, 28)
        assert advance(datetime(2024, 3, 31), "monthly", 1) == datetime(2024, 4, 30)

    def test_yearly_from_leap_day(self):
        assert advance(datetime(2024, 2, 29), "yearly", 1) == datetime(2025, 2, 28)
        assert advance(datetime(2024, 2, 29), "yearly", 4) == datetime(2028, 2, 29)

    def test_unknown_pattern(self):
        with pytest.raises(ValidationError):
            advance(datetime(2024, 1, 1), "hourly", 1)


# ---------------------------------------------------------------------------
# RecurrenceRule
# ---------------------------------------------------------------------------

class TestRecurrenceRule:
    @pytest.mark.parametrize("pattern", ["hourly", "", None, "Weekly"])
    def test_rejects_invalid_pattern(self, pattern):
        with pytest.raises(ValidationError):
            RecurrenceRule(pattern=pattern).validate()

    @pytest.mark.parametrize("interval", [0, -1, None])
    def test_rejects_non_positive_interval(self, interval):
        with pytest.raises(ValidationError):
            RecurrenceRule(pattern="daily", interval=interval).validate()

    def test_rejects_end_date_before_anchor(self):
        rule = RecurrenceRule(pattern="daily", end_date=datetime(2024, 1, 1))
        with pytest.raises(ValidationError):
            rule.validate(anchor=datetime(2024, 1, 2))

    def test_end_date_is_inclusive(self):
        rule = RecurrenceRule(pattern="daily", end_date=datetime(2024, 1, 5, 9))
        anchors = rule.anchors(datetime(2024, 1, 1, 9))
        assert anchors[-1] == datetime(2024, 1, 5, 9)
        assert len(anchors) == 4


# ---------------------------------------------------------------------------
# generate_occurrences
# ---------------------------------------------------------------------------

class TestGenerateOccurrences:
    def test_bounded_without_end_date(self):
        children = generate_occurrences(_task(), TASKS)
        assert len(children) == 10

    def test_custom_max_count(self):
        assert len(generate_occurrences(_task(), TASKS, max_count=3)) == 3

    def test_truncated_by_end_date(self):
        parent = _task(recurrence_pattern="weekly", recurrence_end_date=datetime(2024, 3, 1))
        children = generate_occurrences(parent, TASKS)
        assert 0 < len(children) < 10
        assert all(c.due_date <= parent.recurrence_end_date for c in children)

    def test_anchors_strictly_increasing(self):
        for pattern in ("daily", "weekly", "monthly", "yearly"):
            children = generate_occurrences(_task(recurrence_pattern=pattern, recurrence_interval=2), TASKS)
            dates = [c.due_date for c in children]
            assert all(a < b for a, b in zip(dates, dates[1:])), pattern

    def test_monthly_from_jan_31_lands_on_month_ends(self):
        parent = _task(recurrence_pattern="monthly")
        dates = [c.due_date for c in generate_occurrences(parent, TASKS)]
        assert dates == [
            datetime(2024, 2, 29, 9, 0),
            datetime(2024, 3, 31, 9, 0),
            datetime(2024, 4, 30, 9, 0),
            datetime(2024, 5, 31, 9, 0),
            datetime(2024, 6, 30, 9, 0),
            datetime(2024, 7, 31, 9, 0),
            datetime(2024, 8, 31, 9, 0),
            datetime(2024, 9, 30, 9, 0),
            datetime(2024, 10, 31, 9, 0),
            datetime(2024, 11, 30, 9, 0),
        ]

    def test_children_copy_content_and_carry_no_recurrence(self):
        parent = _task()
        for child in generate_occurrences(parent, TASKS):
            assert child.title == parent.title
            assert child.description == parent.description
            assert child.priority == parent.priority
            assert child.all_day == parent.all_day
            assert child.user_id == parent.user_id
            assert child.parent_task_id == parent.id
            assert child.completed is False
            assert child.is_recurring is False
            assert child.recurrence_pattern is None
            assert child.recurrence_interval is None
            assert child.recurrence_end_date is None

    def test_completed_parent_yields_open_children(self):
        children = generate_occurrences(_task(completed=True), TASKS, max_count=2)
        assert [c.completed for c in children] == [False, False]

    def test_non_recurring_parent_yields_nothing(self):
        assert generate_occurrences(_task(is_recurring=False, recurrence_pattern=None), TASKS) == []

    def test_recurring_task_without_due_date(self):
        with pytest.raises(ValidationError):
            generate_occurrences(_task(due_date=None), TASKS)

    def test_biweekly_appointment_until_five_weeks(self):
        monday = datetime(2024, 1, 1, 10, 0)
        parent = Appointment(
            id=3, user_id=7, title="Physio", description=None, all_day=False, completed=False,
            start_time=monday, end_time=monday + timedelta(hours=1),
            is_recurring=True, recurrence_pattern="weekly", recurrence_interval=2,
            recurrence_end_date=monday + timedelta(weeks=5),
        )
        children = generate_occurrences(parent, APPOINTMENTS)
        assert [c.start_time for c in children] == [datetime(2024, 1, 15, 10), datetime(2024, 1, 29, 10)]
        assert [c.end_time for c in children] == [datetime(2024, 1, 15, 11), datetime(2024, 1, 29, 11)]
        assert all(c.parent_appointment_id == 3 for c in children)

    def test_meeting_keeps_duration_across_clamped_month(self):
        start = datetime(2024, 1, 31, 16, 0)
        parent = Meeting(
            id=4, user_id=7, title="Board", description="Quarterly", location="HQ",
            attendees="ceo@example.com,cfo@example.com", completed=False,
            start_time=start, end_time=start + timedelta(minutes=90),
            is_recurring=True, recurrence_pattern="monthly", recurrence_interval=1,
        )
        first = generate_occurrences(parent, MEETINGS, max_count=1)[0]
        assert first.start_time == datetime(2024, 2, 29, 16, 0)
        assert first.end_time == datetime(2024, 2, 29, 17, 30)
        assert first.location == "HQ"
        assert first.attendees == "ceo@example.com,cfo@example.com"


# ---------------------------------------------------------------------------
# resolve_recurrence / validate_parent
# ---------------------------------------------------------------------------

class TestResolveRecurrence:
    def test_interval_defaults_to_one(self):
        record = _task(is_recurring=False, recurrence_pattern=None, recurrence_interval=None)
        resolved = resolve_recurrence(record, RecurrenceEdit({"is_recurring": True, "recurrence_pattern": "weekly"}))
        assert resolved == {
            "is_recurring": True,
            "recurrence_pattern": "weekly",
            "recurrence_interval": 1,
            "recurrence_end_date": None,
        }

    def test_keeps_existing_values(self):
        record = _task(recurrence_pattern="monthly", recurrence_interval=3)
        resolved = resolve_recurrence(record, RecurrenceEdit({"recurrence_end_date": datetime(2025, 1, 1)}))
        assert resolved["recurrence_pattern"] == "monthly"
        assert resolved["recurrence_interval"] == 3
        assert resolved["recurrence_end_date"] == datetime(2025, 1, 1)

    def test_turning_off_nulls_every_field(self):
        record = _task(recurrence_pattern="monthly", recurrence_interval=3, recurrence_end_date=datetime(2025, 1, 1))
        resolved = resolve_recurrence(record, RecurrenceEdit({"is_recurring": False}))
        assert resolved == {
            "is_recurring": False,
            "recurrence_pattern": None,
            "recurrence_interval": None,
            "recurrence_end_date": None,
        }

    def test_recurring_without_pattern_is_rejected(self):
        record = _task(is_recurring=False, recurrence_pattern=None)
        with pytest.raises(ValidationError):
            resolve_recurrence(record, RecurrenceEdit({"is_recurring": True}))

    def test_non_positive_interval_is_rejected(self):
        with pytest.raises(ValidationError):
            resolve_recurrence(_task(), RecurrenceEdit({"recurrence_interval": 0}))

    def test_validate_parent_checks_end_date_against_anchor(self):
        with pytest.raises(ValidationError):
            validate_parent(_task(recurrence_end_date=datetime(2024, 1, 1)), TASKS)

    def test_validate_parent_checks_end_time_after_start(self):
        start = datetime(2024, 5, 1, 12, 0)
        appointment = Appointment(
            id=1, user_id=1, title="x", start_time=start, end_time=start - timedelta(minutes=1),
            is_recurring=False,
        )
        with pytest.raises(ValidationError):
            validate_parent(appointment, APPOINTMENTS)
