"""uvicorn runner for the task manager API."""

import logging
from typing import Optional

import uvicorn

from taskmanager.config.logging import setup_logging
from taskmanager.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class TaskManagerServer(uvicorn.Server):
    """uvicorn server that reports the port once its sockets are bound."""

    def __init__(self, config: uvicorn.Config, settings: Settings):
        super().__init__(config)
        self.settings = settings

    async def startup(self, sockets=None):
        await super().startup(sockets=sockets)
        if self.started:
            logger.info(
                f"Server is running on port {self.config.port} in {self.settings.server.env} mode",
                extra={"port": self.config.port, "environment": self.settings.server.env},
            )


def build_server(settings: Optional[Settings] = None, app=None) -> TaskManagerServer:
    """Create the server for ``app`` (the module-level application by default)."""
    if settings is None:
        settings = get_settings()
    if app is None:
        from taskmanager.main import app

    config = uvicorn.Config(
        app,
        host=settings.server.host,
        port=settings.server.port,
        # Propagate uvicorn records to the JSON root handler
        log_config=None,
    )
    return TaskManagerServer(config, settings)


def main():
    settings = get_settings()
    setup_logging(settings)
    build_server(settings).run()


if __name__ == "__main__":
    main()
