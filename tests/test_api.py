from __future__ import annotations

import pytest

from class_schedule.container import build_container
from class_schedule.main import create_app
from class_schedule.reminders.notifier import LoggingNotifier


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    container = build_container(backend="memory", default_horizon_months=1)
    app = create_app(container)
    with app.test_client() as c:
        yield c
    container.sessions.close_all()


@pytest.fixture
def signed_in(client):
    r = client.post("/api/session", json={"userId": "student-1"})
    assert r.status_code == 200
    return client


def _make_schedule(c):
    subject = c.post("/api/subjects", json={"name": "Math", "color": "blue"}).get_json()["data"]
    timetable = c.post("/api/timetables", json={"name": "Semester 1"}).get_json()["data"]
    r = c.post(
        f"/api/timetables/{timetable['id']}/slots",
        json={"subjectId": subject["id"], "dayOfWeek": 1, "startTime": "9:00", "endTime": "10:00"},
    )
    assert r.status_code == 201
    return subject, timetable


def test_requires_session(client):
    assert client.get("/api/subjects").status_code == 401
    assert client.post("/api/session", json={}).status_code == 401


def test_subject_crud(signed_in):
    r = signed_in.post("/api/subjects", json={"name": "Physics", "color": "red"})
    assert r.status_code == 201
    body = r.get_json()
    assert body["persisted"] is True
    subject_id = body["data"]["id"]

    r = signed_in.put(f"/api/subjects/{subject_id}", json={"name": "Physics II", "color": "purple"})
    assert r.get_json()["data"]["name"] == "Physics II"

    assert signed_in.delete(f"/api/subjects/{subject_id}").status_code == 200
    assert signed_in.get("/api/subjects").get_json()["data"] == []


def test_validation_and_not_found(signed_in):
    assert signed_in.post("/api/subjects", json={"name": "", "color": "blue"}).status_code == 400
    assert signed_in.post("/api/subjects", json={"name": "Art", "color": "beige"}).status_code == 400
    assert signed_in.delete("/api/subjects/missing").status_code == 404
    assert signed_in.post("/api/classes/missing/status", json={"status": "confirmed"}).status_code == 404


def test_generate_needs_active_timetable(signed_in):
    r = signed_in.post("/api/classes/generate", json={"months": 1})
    assert r.status_code == 409


def test_generate_rejects_out_of_range_months(signed_in):
    _make_schedule(signed_in)
    assert signed_in.post("/api/classes/generate", json={"months": 13}).status_code == 400
    assert signed_in.post("/api/classes/generate", json={"months": "soon"}).status_code == 400


def test_generate_mark_and_stats(signed_in):
    subject, _ = _make_schedule(signed_in)

    r = signed_in.post("/api/classes/generate", json={"months": 1})
    assert r.status_code == 201
    classes = r.get_json()["data"]
    assert len(classes) >= 4
    assert all(c["startTime"] == "09:00" for c in classes)

    first = classes[0]["id"]
    r = signed_in.post(f"/api/classes/{first}/status", json={"status": "confirmed"})
    assert r.get_json()["data"]["status"] == "confirmed"
    r = signed_in.post(f"/api/classes/{first}/attendance", json={"attended": True})
    assert r.get_json()["data"]["attended"] is True
    assert signed_in.post(f"/api/classes/{first}/attendance", json={"attended": "yes"}).status_code == 400

    stats = signed_in.get("/api/stats").get_json()["data"]
    assert stats == {"totalClasses": 1, "attendedClasses": 1, "missedClasses": 0, "percentage": 100}
    by_subject = signed_in.get("/api/stats/subjects").get_json()["data"]
    assert by_subject[subject["id"]]["goodStanding"] is True

    # Recorded attendance is protected unless overwrite is explicit.
    assert signed_in.post("/api/classes/generate", json={"months": 1}).status_code == 409
    r = signed_in.post("/api/classes/generate", json={"months": 1, "overwrite": True})
    assert r.status_code == 201
    assert signed_in.get("/api/stats").get_json()["data"]["totalClasses"] == 0


def test_reset_endpoints(signed_in):
    _make_schedule(signed_in)
    classes = signed_in.post("/api/classes/generate", json={}).get_json()["data"]
    class_id = classes[0]["id"]

    signed_in.post(f"/api/classes/{class_id}/status", json={"status": "confirmed"})
    signed_in.post(f"/api/classes/{class_id}/attendance", json={"attended": False})
    assert signed_in.delete(f"/api/classes/{class_id}/attendance").get_json()["data"]["attended"] is None

    data = signed_in.post(f"/api/classes/{class_id}/reset").get_json()["data"]
    assert data["status"] == "scheduled"


def test_profile_and_notifications(signed_in):
    assert signed_in.get("/api/profile").get_json()["data"] == {"userName": "Student"}
    r = signed_in.put("/api/profile", json={"userName": "Ada"})
    assert r.get_json()["data"]["userName"] == "Ada"

    r = signed_in.put("/api/notifications", json={"beforeClassMinutes": 5})
    assert r.get_json()["data"]["beforeClassMinutes"] == 5
    assert signed_in.put("/api/notifications", json={"afterClassMinutes": -1}).status_code == 400


def test_sign_out(signed_in):
    assert signed_in.delete("/api/session").status_code == 200
    assert signed_in.get("/api/profile").status_code == 401


@pytest.fixture
def denied_client(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    container = build_container(backend="memory", notifier_factory=lambda _user_id: LoggingNotifier(granted=False))
    app = create_app(container)
    with app.test_client() as c:
        c.post("/api/session", json={"userId": "student-1"})
        yield c, container
    container.sessions.close_all()


def test_enabling_notifications_without_permission(denied_client):
    c, container = denied_client

    assert c.put("/api/notifications", json={"enabled": True}).status_code == 403
    assert c.put("/api/notifications", json={"enabled": "false"}).status_code == 400

    notifications = container.sessions.get("student-1").notifications
    assert notifications.settings.enabled is False
    assert not notifications.timer_running


def test_injected_container_is_not_registered_for_exit(monkeypatch):
    registered = []
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setattr("class_schedule.main.atexit.register", registered.append)

    container = build_container(backend="memory")
    create_app(container)
    create_app(container)

    assert registered == []
