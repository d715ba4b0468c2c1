from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime
from models.tasks import TaskStatus


def _strip_or_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class CreateTaskRequest(BaseModel):
    """Schema for creating a new task."""
    title: str = Field(..., description="Task title")
    description: Optional[str] = Field(default=None, description="Task description")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Board column of the task")
    due_date: Optional[datetime] = Field(default=None, description="Due date (ISO-8601)")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Title is required")
        return value

    @field_validator("description")
    @classmethod
    def normalize_description(cls, value: Optional[str]) -> Optional[str]:
        return _strip_or_none(value)


class UpdateTaskRequest(BaseModel):
    """Schema for a partial task update; only fields sent are applied."""
    title: Optional[str] = Field(default=None, description="New task title")
    description: Optional[str] = Field(default=None, description="New task description")
    status: Optional[TaskStatus] = Field(default=None, description="New board column")
    due_date: Optional[datetime] = Field(default=None, description="New due date, null clears it")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("Title cannot be empty")
        return value

    @field_validator("description")
    @classmethod
    def normalize_description(cls, value: Optional[str]) -> Optional[str]:
        return _strip_or_none(value)


# Response Schemas
class TaskResponse(BaseModel):
    """Schema for task responses."""
    id: str = Field(..., description="Task ID")
    title: str = Field(..., description="Task title")
    description: Optional[str] = Field(default=None, description="Task description")
    status: str = Field(..., description="Board column")
    due_date: Optional[datetime] = Field(default=None, description="Due date")
    created_at: datetime = Field(..., description="Creation timestamp")

    model_config = {"from_attributes": True}


class TaskEnvelope(BaseModel):
    """Single task wrapped with a confirmation message."""
    message: str = Field(..., description="Result message")
    task: TaskResponse = Field(..., description="Affected task")


class TaskListResponse(BaseModel):
    """Tasks visible to the caller."""
    message: str = Field(..., description="Result message")
    count: int = Field(..., description="Number of tasks returned")
    tasks: List[TaskResponse] = Field(default_factory=list, description="Tasks, newest first")
