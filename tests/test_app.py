"""
Feature: HTTP surface of the API
  As the board client
  I want consistent status codes from the real routes
  So that failures can be told apart from successes

Scenario: Create, move and delete a task over HTTP
  Given a signed-up user
  When they create, update and delete a task
  Then the routes answer 201, 200 and 200

Scenario: Invalid input
  When the title is blank or the status filter is unknown
  Then the API answers 400 with a validation message
"""

import pytest
from fastapi.testclient import TestClient
from sqlmodel import create_engine, Session, SQLModel
from sqlmodel.pool import StaticPool
from database import get_session
from main import app


@pytest.fixture(name="client")
def client_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    SQLModel.metadata.create_all(engine)

    def get_session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = get_session_override
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
    SQLModel.metadata.drop_all(engine)


def _auth_headers(client, email="ada@example.com"):
    response = client.post("/api/auth/signup", json={"email": email, "password": "secret123"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "running"


def test_task_lifecycle(client):
    headers = _auth_headers(client)

    created = client.post("/api/tasks", json={"title": "Project setup"}, headers=headers)
    assert created.status_code == 201
    task = created.json()["task"]
    assert task["status"] == "pending"

    moved = client.put(f"/api/tasks/{task['id']}", json={"status": "in-progress"}, headers=headers)
    assert moved.status_code == 200
    assert moved.json()["task"]["status"] == "in-progress"

    listed = client.get("/api/tasks", params={"status": "in-progress"}, headers=headers)
    assert listed.status_code == 200
    assert [item["id"] for item in listed.json()["tasks"]] == [task["id"]]

    deleted = client.delete(f"/api/tasks/{task['id']}", headers=headers)
    assert deleted.status_code == 200
    assert deleted.json()["task"]["id"] == task["id"]

    assert client.get("/api/tasks", headers=headers).json()["count"] == 0


def test_blank_title_is_400(client):
    headers = _auth_headers(client)

    response = client.post("/api/tasks", json={"title": "   "}, headers=headers)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation Error"
    assert "Title is required" in body["message"]


def test_unknown_status_filter_is_400(client):
    headers = _auth_headers(client)

    response = client.get("/api/tasks", params={"status": "archived"}, headers=headers)

    assert response.status_code == 400


def test_missing_token_is_401(client):
    response = client.get("/api/tasks")

    assert response.status_code == 401


def test_other_users_task_is_404(client):
    owner = _auth_headers(client, "owner@example.com")
    intruder = _auth_headers(client, "intruder@example.com")
    task = client.post("/api/tasks", json={"title": "Private"}, headers=owner).json()["task"]

    response = client.put(f"/api/tasks/{task['id']}", json={"status": "completed"}, headers=intruder)

    assert response.status_code == 404


def test_null_status_is_400(client):
    headers = _auth_headers(client)
    task = client.post("/api/tasks", json={"title": "Keep my column"}, headers=headers).json()["task"]

    response = client.put(f"/api/tasks/{task['id']}", json={"status": None}, headers=headers)

    assert response.status_code == 400
    assert client.get("/api/tasks", headers=headers).json()["tasks"][0]["status"] == "pending"
