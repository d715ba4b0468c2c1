from datetime import datetime
from typing import Optional
from board.client import ApiError
from board.events import EventBus, TASKS_CHANGED
from board.models import COLUMNS, Task
from settings import logger


class TaskForm:
    """Task creation form.

    Input is checked before anything is sent. A successful submission
    publishes ``TASKS_CHANGED`` so mounted boards refetch.
    """

    def __init__(self, api, bus: EventBus):
        self.api = api
        self.bus = bus
        self.error: Optional[str] = None
        self.submitting = False

    def validate(self, title: str, status: str) -> Optional[str]:
        if not title or not title.strip():
            return "Title is required"
        if status not in COLUMNS:
            return f"Status must be one of: {', '.join(COLUMNS)}"
        return None

    async def submit(
        self,
        title: str,
        description: Optional[str] = None,
        status: str = "pending",
        due_date: Optional[datetime] = None
    ) -> Optional[Task]:
        """Create the task; returns it, or None with ``error`` set."""
        self.error = self.validate(title, status)
        if self.error:
            return None

        self.submitting = True
        try:
            task = await self.api.create_task(
                title=title.strip(),
                description=(description or "").strip() or None,
                status=status,
                due_date=due_date
            )
        except ApiError as e:
            logger.warning("Task creation failed", extra={"status_code": e.status_code, "error": e.message})
            self.error = e.message or "Failed to create task. Please try again."
            return None
        finally:
            self.submitting = False

        await self.bus.publish(TASKS_CHANGED, task_id=task.id)
        return task
