"""Core application components - models, schemas, database."""

from taskmanager.core.models import Task, TaskStatus, Base
from taskmanager.core.schemas import (
    TaskCreate,
    TaskUpdate,
    TaskResponse,
    TaskListResponse,
    TaskDeleteResponse,
    HealthResponse,
    ErrorResponse,
)
from taskmanager.core.database import (
    database_url,
    create_pool,
    create_session_factory,
    check_connection,
    init_db,
    prepare_database,
    dispose_pool,
    get_db,
)

__all__ = [
    "Task",
    "TaskStatus",
    "Base",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "TaskListResponse",
    "TaskDeleteResponse",
    "HealthResponse",
    "ErrorResponse",
    "database_url",
    "create_pool",
    "create_session_factory",
    "check_connection",
    "init_db",
    "prepare_database",
    "dispose_pool",
    "get_db",
]
