"""End-to-end tests for /appointments."""

import pytest

from tiger.config import settings


def _create(client, headers, **overrides):
    body = {
        "title": "Physio",
        "description": "Knee",
        "start_time": "2024-01-01T10:00:00",
        "end_time": "2024-01-01T11:00:00",
        "is_recurring": True,
        "recurrence_pattern": "weekly",
        "recurrence_interval": 2,
    }
    body.update(overrides)
    resp = client.post("/appointments/", json=body, headers=headers)
    assert resp.status_code == 200, resp.text
    return resp.json()


def _occurrences(client, headers, appointment_id):
    resp = client.get(f"/appointments/{appointment_id}/occurrences", headers=headers)
    assert resp.status_code == 200, resp.text
    return resp.json()


def test_biweekly_until_end_date(client, auth_headers):
    appointment = _create(client, auth_headers, recurrence_end_date="2024-02-05T10:00:00")
    children = _occurrences(client, auth_headers, appointment["id"])
    assert [(c["start_time"], c["end_time"]) for c in children] == [
        ("2024-01-15T10:00:00", "2024-01-15T11:00:00"),
        ("2024-01-29T10:00:00", "2024-01-29T11:00:00"),
    ]
    assert all(c["parent_appointment_id"] == appointment["id"] for c in children)


def test_end_before_start_is_rejected(client, auth_headers):
    resp = client.post(
        "/appointments/",
        json={"title": "Backwards", "start_time": "2024-01-01T10:00:00", "end_time": "2024-01-01T09:00:00"},
        headers=auth_headers,
    )
    assert resp.status_code == 422


def test_moving_start_past_end_is_rejected(client, auth_headers):
    appointment = _create(client, auth_headers, is_recurring=False)
    resp = client.patch(
        f"/appointments/{appointment['id']}",
        json={"start_time": "2024-01-01T12:00:00"},
        headers=auth_headers,
    )
    assert resp.status_code == 422
    body = client.get(f"/appointments/{appointment['id']}", headers=auth_headers).json()
    assert body["start_time"] == "2024-01-01T10:00:00"


def test_moving_parent_shifts_whole_series(client, auth_headers, monkeypatch):
    monkeypatch.setattr(settings, "RECURRENCE_MAX_OCCURRENCES", 2)
    appointment = _create(client, auth_headers)
    resp = client.patch(
        f"/appointments/{appointment['id']}",
        json={"start_time": "2024-01-03T14:00:00", "end_time": "2024-01-03T14:30:00"},
        headers=auth_headers,
    )
    assert resp.status_code == 200, resp.text
    children = _occurrences(client, auth_headers, appointment["id"])
    assert [(c["start_time"], c["end_time"]) for c in children] == [
        ("2024-01-17T14:00:00", "2024-01-17T14:30:00"),
        ("2024-01-31T14:00:00", "2024-01-31T14:30:00"),
    ]


@pytest.mark.parametrize("payload", [
    {"start_time": "2024-01-20T10:00:00"},
    {"recurrence_interval": 1},
])
def test_occurrence_schedule_is_read_only(client, auth_headers, payload):
    appointment = _create(client, auth_headers)
    child = _occurrences(client, auth_headers, appointment["id"])[0]
    resp = client.patch(f"/appointments/{child['id']}", json=payload, headers=auth_headers)
    assert resp.status_code == 422


def test_propagated_description(client, auth_headers, monkeypatch):
    monkeypatch.setattr(settings, "RECURRENCE_MAX_OCCURRENCES", 2)
    appointment = _create(client, auth_headers)
    client.patch(
        f"/appointments/{appointment['id']}",
        json={"description": "Left knee", "update_all_recurring": True},
        headers=auth_headers,
    )
    assert {c["description"] for c in _occurrences(client, auth_headers, appointment["id"])} == {"Left knee"}


def test_delete_series(client, auth_headers, monkeypatch):
    monkeypatch.setattr(settings, "RECURRENCE_MAX_OCCURRENCES", 2)
    appointment = _create(client, auth_headers)
    resp = client.delete(f"/appointments/{appointment['id']}", headers=auth_headers)
    assert resp.json() == {"success": True, "deleted": 3}
    assert client.get("/appointments/", headers=auth_headers).json() == []


def test_not_visible_to_other_users(client, auth_headers, other_headers):
    appointment = _create(client, auth_headers, is_recurring=False)
    assert client.get(f"/appointments/{appointment['id']}", headers=other_headers).status_code == 404
    assert client.get(f"/appointments/{appointment['id']}/occurrences", headers=other_headers).status_code == 404
