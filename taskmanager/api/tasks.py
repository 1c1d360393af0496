"""API route handlers for task CRUD."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskmanager.core.database import get_db
from taskmanager.core.models import Task, TaskStatus
from taskmanager.core.schemas import (
    TaskCreate,
    TaskUpdate,
    TaskResponse,
    TaskListResponse,
    TaskDeleteResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tasks"])


def _get_task_or_404(db: Session, task_id: int) -> Task:
    task = db.get(Task, task_id)
    if task is None:
        logger.warning("Task not found", extra={"task_id": task_id})
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found.",
        )
    return task


def _commit(db: Session, action: str, task_id: Optional[int] = None):
    try:
        db.commit()
    except SQLAlchemyError as e:
        logger.error(
            f"Task {action} failed",
            extra={"task_id": task_id, "error": str(e)},
            exc_info=True,
        )
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to {action} task: {str(e)}",
        )


@router.get(
    "",
    response_model=TaskListResponse,
    summary="List tasks with pagination and filtering",
)
def list_tasks(
    status_filter: Optional[TaskStatus] = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    """
    List tasks, newest first.

    Query Parameters:
    - status: Filter by status (pending, in_progress, completed)
    - limit: Number of tasks per page (1-100, default: 50)
    - offset: Number of tasks to skip (default: 0)
    """
    logger.info(
        "List tasks request",
        extra={
            "status_filter": status_filter.value if status_filter else None,
            "limit": limit,
            "offset": offset,
        },
    )

    query = db.query(Task)
    if status_filter:
        query = query.filter(Task.status == status_filter)

    total = query.count()
    tasks = query.order_by(Task.created_at.desc(), Task.id.desc()).offset(offset).limit(limit).all()

    return TaskListResponse(
        tasks=[TaskResponse.model_validate(task) for task in tasks],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Get a single task",
)
def get_task(task_id: int, db: Session = Depends(get_db)):
    return _get_task_or_404(db, task_id)


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
)
def create_task(task_data: TaskCreate, db: Session = Depends(get_db)):
    task = Task(**task_data.model_dump())
    db.add(task)
    _commit(db, "create")
    db.refresh(task)

    logger.info(
        "Task created",
        extra={"task_id": task.id, "status": task.status.value},
    )
    return task


@router.put(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Update a task",
)
def update_task(task_id: int, task_data: TaskUpdate, db: Session = Depends(get_db)):
    """Apply the supplied fields to an existing task; omitted fields are left untouched."""
    task = _get_task_or_404(db, task_id)

    changes = task_data.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(task, field, value)

    _commit(db, "update", task_id)
    db.refresh(task)

    logger.info(
        "Task updated",
        extra={"task_id": task_id, "fields": sorted(changes)},
    )
    return task


@router.delete(
    "/{task_id}",
    response_model=TaskDeleteResponse,
    summary="Delete a task",
)
def delete_task(task_id: int, db: Session = Depends(get_db)):
    task = _get_task_or_404(db, task_id)

    db.delete(task)
    _commit(db, "delete", task_id)

    logger.info("Task deleted", extra={"task_id": task_id})

    return TaskDeleteResponse(
        task_id=task_id,
        message="Task deleted successfully.",
    )
