"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from spatial_tracker.app import create_app

REPLY = 'Hi there. <spatial_system>{"characters":[{"name":"Bob","x":5,"y":0,"status":"Walking"}]}</spatial_system>'


@pytest.fixture
def client(tmp_path) -> TestClient:
    return TestClient(create_app(tmp_path))


@pytest.fixture
def session_id(client) -> str:
    resp = client.post("/api/sessions")
    assert resp.status_code == 201
    return resp.json()["id"]


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}


def test_settings_roundtrip(client):
    assert client.get("/api/settings").json() == {"active": True}
    assert client.patch("/api/settings", json={"active": False}).json() == {"active": False}
    assert client.get("/api/settings").json() == {"active": False}


def test_settings_rejects_non_bool(client):
    assert client.patch("/api/settings", json={"active": "sometimes"}).status_code == 422


def test_create_session_fresh(client):
    body = client.post("/api/sessions").json()
    assert body["state"]["snapshot"]["characters"] == []


def test_create_session_from_saved_state(client):
    saved = {
        "snapshot": {"characters": [{"name": "Ann", "x": 1, "y": 2, "status": "Idle"}]},
        "last_update": 123,
    }
    body = client.post("/api/sessions", json={"state": saved}).json()
    assert body["state"]["last_update"] == 123
    assert body["state"]["snapshot"]["characters"][0]["name"] == "Ann"


def test_unknown_session_404(client):
    assert client.get("/api/sessions/nope").status_code == 404
    assert client.post("/api/sessions/nope/after-turn", json={"content": "x"}).status_code == 404
    assert client.delete("/api/sessions/nope").status_code == 404


def test_before_turn(client, session_id):
    body = client.post(f"/api/sessions/{session_id}/before-turn", json={"content": "Hello"}).json()
    assert "<spatial_system>" in body["system_message"]


def test_after_turn_updates_and_cleans(client, session_id):
    body = client.post(f"/api/sessions/{session_id}/after-turn", json={"content": REPLY}).json()
    assert body["outcome"] == "updated"
    assert body["message"] == "Hi there."
    chars = body["state"]["snapshot"]["characters"]
    assert chars == [{"name": "Bob", "x": 5, "y": 0, "status": "Walking"}]

    session = client.get(f"/api/sessions/{session_id}").json()
    assert session["state"]["snapshot"]["characters"] == chars
    assert "Bob" in session["display"]


def test_after_turn_parse_failure_keeps_state(client, session_id):
    client.post(f"/api/sessions/{session_id}/after-turn", json={"content": REPLY})
    broken = "Oops <spatial_system>{not json}</spatial_system>"
    body = client.post(f"/api/sessions/{session_id}/after-turn", json={"content": broken}).json()
    assert body["outcome"] == "parse_failed"
    assert body["message"] == broken
    assert body["state"]["snapshot"]["characters"][0]["name"] == "Bob"


def test_after_turn_huge_coordinate_is_not_a_server_error(client, session_id):
    text = 'Hi <spatial_system>{"characters":[{"name":"Bob","x":1' + "0" * 400 + ',"y":0,"status":""}]}</spatial_system>'
    resp = client.post(f"/api/sessions/{session_id}/after-turn", json={"content": text})
    assert resp.status_code == 200
    assert resp.json()["outcome"] == "parse_failed"
    assert resp.json()["message"] == text


def test_inactive_passes_through(client, session_id):
    client.patch("/api/settings", json={"active": False})
    before = client.post(f"/api/sessions/{session_id}/before-turn", json={"content": "Hi"}).json()
    assert before["system_message"] is None
    body = client.post(f"/api/sessions/{session_id}/after-turn", json={"content": REPLY}).json()
    assert body["outcome"] == "inactive"
    assert body["message"] == REPLY
    assert body["state"]["snapshot"]["characters"] == []


def test_restore_state(client, session_id):
    client.post(f"/api/sessions/{session_id}/after-turn", json={"content": REPLY})
    earlier = {"snapshot": {"characters": []}, "last_update": 5}
    body = client.put(f"/api/sessions/{session_id}/state", json=earlier).json()
    assert body["state"] == earlier
    assert client.get(f"/api/sessions/{session_id}").json()["state"] == earlier


def test_restore_rejects_invalid_state(client, session_id):
    bad = {"snapshot": {"characters": [{"name": "Bob", "x": "abc", "y": 0}]}, "last_update": 1}
    assert client.put(f"/api/sessions/{session_id}/state", json=bad).status_code == 422


def test_delete_session(client, session_id):
    assert client.delete(f"/api/sessions/{session_id}").json() == {"ok": True}
    assert client.get(f"/api/sessions/{session_id}").status_code == 404


def test_bad_stored_setting_does_not_break_sessions(tmp_path):
    client = TestClient(create_app(tmp_path))
    (tmp_path / "config.json").write_text('{"active": null}')
    assert client.get("/api/settings").json() == {"active": True}
    sid = client.post("/api/sessions").json()["id"]
    body = client.post(f"/api/sessions/{sid}/after-turn", json={"content": REPLY}).json()
    assert body["outcome"] == "updated"
