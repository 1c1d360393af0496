"""HTTP routers."""

from taskmanager.api.health import router as health_router
from taskmanager.api.tasks import router as tasks_router

__all__ = ["health_router", "tasks_router"]
