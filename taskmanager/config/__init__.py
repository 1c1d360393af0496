"""Configuration modules - settings, logging."""

from taskmanager.config.logging import setup_logging
from taskmanager.config.settings import (
    Settings,
    ServerSettings,
    DatabaseSettings,
    load_settings,
    get_settings,
)

__all__ = [
    "setup_logging",
    "Settings",
    "ServerSettings",
    "DatabaseSettings",
    "load_settings",
    "get_settings",
]
