from __future__ import annotations

import pytest

from src.attendance_tracker.attendance_tracker.core.exceptions import StoreError
from src.attendance_tracker.attendance_tracker.main import create_app
from src.attendance_tracker.attendance_tracker.profiles.model import Profile
from tests.fakes import make_container


@pytest.fixture
def container():
    return make_container({"s1": Profile(user_id="s1", name="Asha")})


@pytest.fixture
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    with app.test_client() as c:
        with c.session_transaction() as sess:
            sess["user_id"] = "s1"
        yield c


def test_requires_login(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    anon = create_app(container).test_client()

    resp = anon.get("/api/attendance")

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_catalog_is_public(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    data = create_app(container).test_client().get("/api/catalog").get_json()

    assert data["groups"] == ["TY CE-1", "TY CE-2", "TY CE-3"]
    assert data["subjects"][0] == {"code": "CN", "name": "Computer Networks"}


def test_profile(client):
    assert client.get("/api/profile").get_json()["profile"] == {"user_id": "s1", "name": "Asha"}


def test_missing_profile_is_404(client):
    with client.session_transaction() as sess:
        sess["user_id"] = "nobody"

    assert client.get("/api/profile").status_code == 404


def test_mark_then_duplicate(client):
    first = client.post("/api/attendance", json={"subject": "CN", "date": "2024-01-01"})
    second = client.post("/api/attendance", json={"subject": "CN", "date": "2024-01-01"})

    assert first.status_code == 201
    assert first.get_json()["record"]["subject"] == "CN"
    assert second.status_code == 409
    assert second.get_json()["outcome"] == "ALREADY_MARKED"
    assert len(client.get("/api/attendance").get_json()["records"]) == 1


def test_mark_rejects_bad_input(client):
    assert client.post("/api/attendance", json={"subject": "CN", "date": "01/02/2024"}).status_code == 400
    assert client.post("/api/attendance", json={"subject": "LAW"}).status_code == 400


def test_mark_store_failure_returns_store_message(client, container):
    container.attendance_repo.fail_with = StoreError("too many connections")

    resp = client.post("/api/attendance", json={"subject": "CN", "date": "2024-01-01"})

    assert resp.status_code == 500
    assert resp.get_json()["message"] == "too many connections"


def test_group_preference_drives_summary(client):
    assert client.get("/api/group").get_json()["group"] == "TY CE-1"
    assert client.put("/api/group", json={"group": "TY CE-9"}).status_code == 400
    assert client.put("/api/group", json={"group": "TY CE-2"}).get_json()["group"] == "TY CE-2"

    client.post("/api/attendance", json={"subject": "CN", "date": "2024-01-01"})
    data = client.get("/api/attendance/summary").get_json()

    assert data["group"] == "TY CE-2"
    cn = {r["subject"]: r for r in data["subjects"]}["Computer Network (CN)"]
    assert (cn["attended"], cn["total"], cn["percentage"]) == (1, 22, 5)


def test_edit_total_and_capacity(client):
    bad = client.put("/api/totals", json={"subject": "Computer Network (CN)", "group": "TY CE-1", "total": -2})
    assert bad.status_code == 400

    saved = client.put("/api/totals", json={"subject": "Computer Network (CN)", "group": "TY CE-1", "total": 1})
    assert saved.get_json()["override"]["total"] == 1
    assert client.get("/api/totals", query_string={"group": "TY CE-1"}).get_json()["effective"]["Computer Network (CN)"] == 1

    client.post("/api/attendance", json={"subject": "CN", "date": "2024-01-01"})
    cap = client.get("/api/attendance/capacity", query_string={"subject": "CN", "group": "TY CE-1"}).get_json()
    assert (cap["allowed"], cap["attended"], cap["total"]) == (False, 1, 1)

    blocked = client.post("/api/attendance", json={"subject": "CN", "date": "2024-01-02", "group": "TY CE-1"})
    assert blocked.status_code == 409
    assert blocked.get_json()["outcome"] == "CAPACITY_REACHED"


def test_delete_one_and_all(client):
    for day in ("2024-01-01", "2024-01-02", "2024-01-03"):
        client.post("/api/attendance", json={"subject": "SE", "date": day})
    records = client.get("/api/attendance").get_json()["records"]

    assert client.delete(f"/api/attendance/{records[0]['id']}").status_code == 200
    assert client.delete(f"/api/attendance/{records[0]['id']}").status_code == 404
    assert len(client.get("/api/attendance").get_json()["records"]) == 2

    assert client.delete("/api/attendance").get_json()["deleted"] == 2
    assert client.get("/api/attendance").get_json()["records"] == []


def test_guarded_mark_store_failure_is_json(client, container):
    container.attendance_repo.fail_with = StoreError("connection reset")

    resp = client.post("/api/attendance", json={"subject": "CN", "group": "TY CE-1"})

    assert resp.status_code == 500
    assert resp.is_json
    assert resp.get_json()["outcome"] == "FAILED"
    assert resp.get_json()["message"] == "connection reset"


@pytest.mark.parametrize("body", [{"subject": "CN", "group": ["TY CE-1"]}, {"subject": "CN", "group": 5}])
def test_mark_rejects_non_string_group(client, body):
    resp = client.post("/api/attendance", json=body)

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


@pytest.mark.parametrize("path, method", [("/api/attendance", "post"), ("/api/totals", "put"), ("/api/group", "put")])
def test_non_object_json_body_is_400(client, path, method):
    resp = getattr(client, method)(path, json=["CN", "TY CE-1"])

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_totals_reject_unknown_group(client):
    resp = client.get("/api/totals", query_string={"group": "bogus"})

    assert resp.status_code == 400


def test_totals_store_failures_are_500(client, container):
    container.totals_repo.fail_with = StoreError("server has gone away")

    read = client.get("/api/totals")
    write = client.put("/api/totals", json={"subject": "Computer Network (CN)", "group": "TY CE-1", "total": 3})

    assert (read.status_code, read.get_json()["message"]) == (500, "server has gone away")
    assert (write.status_code, write.get_json()["message"]) == (500, "server has gone away")


def test_change_stream_subscribes_until_closed(client, container):
    resp = client.get("/api/changes")

    assert resp.status_code == 200
    assert resp.mimetype == "text/event-stream"
    assert container.feed.subscriber_count() == 2

    resp.close()
    assert container.feed.subscriber_count() == 0


def test_change_stream_requires_login(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")

    assert create_app(container).test_client().get("/api/changes").status_code == 401
    assert container.feed.subscriber_count() == 0
