"""
Feature: Task API client
  As the board
  I want typed access to the task endpoints with the bearer token attached
  So that every failure reaches me as a single ApiError

Scenario: List tasks with a status filter
  When the board lists pending tasks
  Then GET /api/tasks?status=pending is sent with the bearer token

Scenario: Server rejects a request
  When the server answers 404
  Then ApiError carries the status code and the server's message

Scenario: Server cannot be reached
  When the transport fails
  Then ApiError is raised without a status code
"""

import json
from datetime import datetime, timezone

import httpx
import pytest

from board.client import ApiError, TaskApiClient

TASK = {
    "id": "task_abc",
    "title": "Design user interface",
    "description": None,
    "status": "pending",
    "due_date": None,
    "created_at": "2024-01-15T10:00:00Z",
}


def _client(handler) -> TaskApiClient:
    return TaskApiClient(
        "tkn_secret",
        base_url="http://testserver/api",
        transport=httpx.MockTransport(handler)
    )


@pytest.mark.asyncio
async def test_list_tasks_sends_filter_and_token():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"message": "ok", "count": 1, "tasks": [TASK]})

    tasks = await _client(handler).list_tasks(status="pending")

    assert [task.id for task in tasks] == ["task_abc"]
    assert seen[0].method == "GET"
    assert seen[0].url.path == "/api/tasks"
    assert seen[0].url.params["status"] == "pending"
    assert seen[0].headers["Authorization"] == "Bearer tkn_secret"


@pytest.mark.asyncio
async def test_list_tasks_without_filter_sends_no_status():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"message": "ok", "count": 0, "tasks": []})

    assert await _client(handler).list_tasks() == []
    assert "status" not in seen[0].url.params


@pytest.mark.asyncio
async def test_list_tasks_accepts_unknown_status():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"tasks": [{**TASK, "status": "archived"}]})

    tasks = await _client(handler).list_tasks()

    assert tasks[0].status == "archived"


@pytest.mark.asyncio
async def test_update_task_sends_partial_body():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"message": "ok", "task": {**TASK, "status": "completed"}})

    task = await _client(handler).update_task("task_abc", status="completed")

    assert task.status == "completed"
    assert seen[0].method == "PUT"
    assert seen[0].url.path == "/api/tasks/task_abc"
    assert json.loads(seen[0].content) == {"status": "completed"}


@pytest.mark.asyncio
async def test_create_task_serializes_due_date():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(201, json={"message": "ok", "task": TASK})

    await _client(handler).create_task(
        "Design user interface",
        due_date=datetime(2026, 1, 14, 16, 19, tzinfo=timezone.utc)
    )

    assert seen[0]["due_date"] == "2026-01-14T16:19:00+00:00"
    assert seen[0]["status"] == "pending"


@pytest.mark.asyncio
async def test_delete_task_returns_deleted_record():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "DELETE"
        return httpx.Response(200, json={"message": "ok", "task": TASK})

    task = await _client(handler).delete_task("task_abc")

    assert task.id == "task_abc"


@pytest.mark.asyncio
async def test_http_error_becomes_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"detail": "Task not found or you do not have permission to update it"})

    with pytest.raises(ApiError) as exc_info:
        await _client(handler).update_task("task_missing", status="completed")

    assert exc_info.value.status_code == 404
    assert "not found" in exc_info.value.message.lower()


@pytest.mark.asyncio
async def test_unauthorized_is_an_ordinary_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"detail": "Invalid or expired token"})

    with pytest.raises(ApiError) as exc_info:
        await _client(handler).delete_task("task_abc")

    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_transport_error_becomes_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ApiError) as exc_info:
        await _client(handler).list_tasks()

    assert exc_info.value.status_code is None
    assert "Cannot connect" in exc_info.value.message


@pytest.mark.asyncio
async def test_update_profile_only_sends_given_fields():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, json={"message": "ok", "user": {"id": "user_1", "full_name": "Ada"}})

    user = await _client(handler).update_profile(full_name="Ada")

    assert seen == [{"full_name": "Ada"}]
    assert user["full_name"] == "Ada"
