from sqlmodel import SQLModel, Field
from enum import Enum
from typing import Optional
from datetime import datetime
from .helper import id_generator, utcnow


class TaskStatus(str, Enum):
    """Board columns a task can sit in."""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class Task(SQLModel, table=True):
    """Unit of work owned by a single user."""
    id: str = Field(default_factory=id_generator('task', 10), primary_key=True)
    user_id: str = Field(foreign_key="user.id", index=True)
    title: str
    description: Optional[str] = Field(default=None)
    status: str = Field(default=TaskStatus.PENDING.value, index=True)
    due_date: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow, index=True)
