from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select
from database import get_session
from models.auth import Token
from models.tasks import Task, TaskStatus
from apis.schemas.tasks import (
    CreateTaskRequest, UpdateTaskRequest, TaskResponse, TaskEnvelope, TaskListResponse
)
from helpers.auth import get_auth_token, require_user
from settings import logger
from typing import Optional

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _get_owned_task(db_session: Session, task_id: str, user_id: str) -> Optional[Task]:
    # Ownership filter stands in for row-level security
    statement = select(Task).where(Task.id == task_id, Task.user_id == user_id)
    return db_session.exec(statement).first()


@router.post("", response_model=TaskEnvelope, status_code=201)
async def create_task(
    task_data: CreateTaskRequest,
    token: Token = Depends(get_auth_token),
    db_session: Session = Depends(get_session)
) -> TaskEnvelope:
    """Create a new task for the current user."""
    user = await require_user(token=token, db_session=db_session)

    task = Task(
        user_id=user.id,
        title=task_data.title,
        description=task_data.description,
        status=task_data.status.value,
        due_date=task_data.due_date
    )

    db_session.add(task)
    db_session.commit()
    db_session.refresh(task)

    logger.info("Task created", extra={"task_id": task.id, "user_id": user.id, "status": task.status})

    return TaskEnvelope(message="Task created successfully", task=TaskResponse.model_validate(task))


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    status: Optional[TaskStatus] = Query(default=None, description="Only return tasks in this column"),
    token: Token = Depends(get_auth_token),
    db_session: Session = Depends(get_session)
) -> TaskListResponse:
    """List the current user's tasks, newest first."""
    user = await require_user(token=token, db_session=db_session)

    statement = select(Task).where(Task.user_id == user.id)
    if status is not None:
        statement = statement.where(Task.status == status.value)
    statement = statement.order_by(Task.created_at.desc())

    tasks = db_session.exec(statement).all()

    return TaskListResponse(
        message="Tasks fetched successfully",
        count=len(tasks),
        tasks=[TaskResponse.model_validate(task) for task in tasks]
    )


@router.put("/{task_id}", response_model=TaskEnvelope)
async def update_task(
    task_id: str,
    task_data: UpdateTaskRequest,
    token: Token = Depends(get_auth_token),
    db_session: Session = Depends(get_session)
) -> TaskEnvelope:
    """Update task (move column, change title, etc.)."""
    user = await require_user(token=token, db_session=db_session)

    # Only fields present in the request body are applied
    updates = task_data.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No fields provided to update")
    if "title" in updates and updates["title"] is None:
        raise HTTPException(status_code=400, detail="Title cannot be empty")
    if "status" in updates and updates["status"] is None:
        raise HTTPException(status_code=400, detail="Status must be one of: pending, in-progress, completed")

    task = _get_owned_task(db_session, task_id, user.id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found or you do not have permission to update it")

    for field_name, value in updates.items():
        if isinstance(value, TaskStatus):
            value = value.value
        setattr(task, field_name, value)

    db_session.add(task)
    db_session.commit()
    db_session.refresh(task)

    logger.info("Task updated", extra={"task_id": task.id, "fields": sorted(updates)})

    return TaskEnvelope(message="Task updated successfully", task=TaskResponse.model_validate(task))


@router.delete("/{task_id}", response_model=TaskEnvelope)
async def delete_task(
    task_id: str,
    token: Token = Depends(get_auth_token),
    db_session: Session = Depends(get_session)
) -> TaskEnvelope:
    """Delete task and return the deleted record."""
    user = await require_user(token=token, db_session=db_session)

    task = _get_owned_task(db_session, task_id, user.id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found or you do not have permission to delete it")

    deleted = TaskResponse.model_validate(task)

    db_session.delete(task)
    db_session.commit()

    logger.info("Task deleted", extra={"task_id": task_id, "user_id": user.id})

    return TaskEnvelope(message="Task deleted successfully", task=deleted)
