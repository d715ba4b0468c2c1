from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from datetime import datetime

# Column order on the board; also the only statuses the API accepts
COLUMNS = ("pending", "in-progress", "completed")


class Task(BaseModel):
    """Task as received from the API.

    ``status`` stays a plain string: records with a status the board does not
    know are still accepted, and simply left off the board.
    """
    id: str
    title: str
    description: Optional[str] = None
    status: str
    due_date: Optional[datetime] = None
    created_at: Optional[datetime] = None


# status -> ordered tasks in that column
Partition = Dict[str, List[Task]]


class DropLocation(BaseModel):
    """A position on the board: column key plus index within the column."""
    column: str
    index: int = Field(..., ge=0)


class DragResult(BaseModel):
    """Outcome of a drag gesture; no destination means it was dropped outside the board."""
    task_id: str
    source: DropLocation
    destination: Optional[DropLocation] = None
