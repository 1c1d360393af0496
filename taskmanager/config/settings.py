"""Environment-driven application settings."""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import List, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

ENV_FILE = Path("config") / ".env"


class ServerSettings(BaseModel):
    """HTTP server section."""

    port: int = 3000
    env: str = "development"
    host: str = "0.0.0.0"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    class Config:
        frozen = True


class DatabaseSettings(BaseModel):
    """PostgreSQL connection and pool parameters."""

    host: str = "db"
    port: int = 5432
    database: str = "taskmanager"
    user: str = "postgres"
    password: str = "postgres"
    pool_size: int = 10
    max_overflow: int = 20
    pool_timeout: int = 30
    connect_timeout: int = 10

    class Config:
        frozen = True


class Settings(BaseModel):
    """Top-level configuration, resolved once at process start."""

    server: ServerSettings = Field(default_factory=ServerSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    log_level: str = "INFO"

    class Config:
        frozen = True


def _get(environ: Mapping[str, str], name: str, default: str) -> str:
    # Empty strings count as unset.
    value = environ.get(name)
    return value if value else default


def _get_int(environ: Mapping[str, str], name: str, default: int) -> int:
    value = environ.get(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(
            "Ignoring non-integer environment value",
            extra={"variable": name, "value": value, "default": default},
        )
        return default


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    env_file: Optional[Path] = ENV_FILE,
) -> Settings:
    """
    Resolve settings from the environment.

    When ``environ`` is omitted, ``env_file`` is first loaded into the process
    environment with python-dotenv. Variables that are already set are not
    overridden, so the real environment always wins over the file.

    Args:
        environ: Mapping to read from instead of ``os.environ``
        env_file: Optional dotenv file; skipped when missing

    Returns:
        Frozen Settings instance
    """
    if environ is None:
        if env_file is not None and Path(env_file).is_file():
            load_dotenv(env_file, override=False)
        environ = os.environ

    origins = _get(environ, "CORS_ORIGINS", "*")

    server = ServerSettings(
        port=_get_int(environ, "PORT", 3000),
        env=_get(environ, "NODE_ENV", "development"),
        host=_get(environ, "HOST", "0.0.0.0"),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()] or ["*"],
    )
    database = DatabaseSettings(
        host=_get(environ, "DB_HOST", "db"),
        port=_get_int(environ, "DB_PORT", 5432),
        database=_get(environ, "DB_NAME", "taskmanager"),
        user=_get(environ, "DB_USER", "postgres"),
        password=_get(environ, "DB_PASSWORD", "postgres"),
        pool_size=_get_int(environ, "DB_POOL_SIZE", 10),
        max_overflow=_get_int(environ, "DB_MAX_OVERFLOW", 20),
        pool_timeout=_get_int(environ, "DB_POOL_TIMEOUT", 30),
        connect_timeout=_get_int(environ, "DB_CONNECT_TIMEOUT", 10),
    )
    return Settings(
        server=server,
        database=database,
        log_level=_get(environ, "LOG_LEVEL", "INFO").upper(),
    )


@lru_cache()
def get_settings() -> Settings:
    """Return the cached process-wide settings."""
    return load_settings()
