import pytest
from fastapi.testclient import TestClient

from rest_api import app as app_module


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(app_module, "API_KEY", "")
    app_module.reset_store()
    yield TestClient(app_module.app)
    app_module.reset_store()


def _create(client, task_id, title, completed=False):
    resp = client.post("/tasks", json={"id": task_id, "title": title, "completed": completed})
    assert resp.status_code == 200
    return resp.json()


def test_health_reports_task_count(client):
    _create(client, "1", "a")
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "tasks": 1}


def test_list_preserves_creation_order(client):
    _create(client, "b", "second")
    _create(client, "a", "first")
    resp = client.get("/tasks")
    assert [t["id"] for t in resp.json()["tasks"]] == ["b", "a"]


def test_complete_activate_and_clear(client):
    _create(client, "1", "a")
    _create(client, "2", "b")

    assert client.post("/tasks/1/complete").json()["completed"] is True
    assert client.post("/tasks/2/complete").status_code == 200
    assert client.post("/tasks/2/activate").json()["completed"] is False

    resp = client.post("/tasks/clear-completed")
    assert resp.json() == {"removed": 1}
    assert [t["id"] for t in client.get("/tasks").json()["tasks"]] == ["2"]


def test_unknown_task_returns_404(client):
    assert client.get("/tasks/missing").status_code == 404
    resp = client.post("/tasks/missing/complete")
    assert resp.status_code == 404
    assert "missing" in resp.json()["detail"]
    assert client.delete("/tasks/missing").status_code == 404


def test_delete_single_and_all(client):
    _create(client, "1", "a")
    _create(client, "2", "b")

    assert client.delete("/tasks/1").status_code == 204
    assert client.get("/tasks/2").json()["title"] == "b"
    assert client.delete("/tasks").status_code == 204
    assert client.get("/tasks").json() == {"tasks": []}


def test_blank_id_rejected(client):
    resp = client.post("/tasks", json={"id": "", "title": "x"})
    assert resp.status_code == 422


def test_api_key_enforced(client, monkeypatch):
    monkeypatch.setattr(app_module, "API_KEY", "secret")
    assert client.get("/tasks").status_code == 401
    resp = client.get("/tasks", headers={"X-API-Key": "secret"})
    assert resp.status_code == 200
