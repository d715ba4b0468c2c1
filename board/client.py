import httpx
from datetime import datetime
from typing import Any, Dict, List, Optional
from board.models import Task
from settings import API_BASE_URL, logger


class ApiError(Exception):
    """A request to the task API failed, for whatever reason."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BearerAuth(httpx.Auth):
    """Attach the access token to every outgoing request."""

    def __init__(self, access_token: str):
        self.access_token = access_token

    def auth_flow(self, request: httpx.Request):
        request.headers["Authorization"] = f"Bearer {self.access_token}"
        yield request


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict):
        return body.get("message") or body.get("detail") or body.get("error") or f"HTTP {response.status_code}"
    return f"HTTP {response.status_code}"


def _serialize(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


class TaskApiClient:
    """Async client for the task and profile endpoints."""

    def __init__(
        self,
        access_token: str,
        base_url: str = API_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._auth = BearerAuth(access_token)
        self._transport = transport

    async def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                auth=self._auth,
                timeout=self.timeout,
                transport=self._transport
            ) as client:
                response = await client.request(method, path, **kwargs)
                response.raise_for_status()
                return response.json()

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            message = _error_message(e.response)
            if status_code == 401:
                logger.error("Unauthorized - please log in again", extra={"path": path})
            else:
                logger.warning("Task API request failed", extra={
                    "method": method,
                    "path": path,
                    "status_code": status_code,
                    "error": message
                })
            raise ApiError(message, status_code=status_code) from e

        except httpx.HTTPError as e:
            logger.warning("Cannot reach task API", extra={
                "method": method,
                "path": path,
                "error": str(e)
            })
            raise ApiError(f"Cannot connect to server: {e}") from e

    async def list_tasks(self, status: Optional[str] = None) -> List[Task]:
        params = {"status": status} if status else None
        data = await self._request("GET", "/tasks", params=params)
        return [Task.model_validate(task) for task in data.get("tasks", [])]

    async def create_task(
        self,
        title: str,
        description: Optional[str] = None,
        status: str = "pending",
        due_date: Optional[datetime] = None
    ) -> Task:
        payload = {
            "title": title,
            "description": description,
            "status": status,
            "due_date": _serialize(due_date)
        }
        data = await self._request("POST", "/tasks", json=payload)
        return Task.model_validate(data["task"])

    async def update_task(self, task_id: str, **fields) -> Task:
        """Send a partial update; only the given fields are changed."""
        payload = {key: _serialize(value) for key, value in fields.items()}
        data = await self._request("PUT", f"/tasks/{task_id}", json=payload)
        return Task.model_validate(data["task"])

    async def delete_task(self, task_id: str) -> Task:
        data = await self._request("DELETE", f"/tasks/{task_id}")
        return Task.model_validate(data["task"])

    async def get_profile(self) -> Dict[str, Any]:
        return await self._request("GET", "/user")

    async def update_profile(
        self,
        email: Optional[str] = None,
        full_name: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        payload = {
            key: value
            for key, value in (("email", email), ("full_name", full_name), ("metadata", metadata))
            if value is not None
        }
        data = await self._request("PUT", "/user", json=payload)
        return data["user"]

    async def delete_profile(self) -> bool:
        data = await self._request("DELETE", "/user")
        return bool(data.get("deleted"))
