"""Task manager backend: task CRUD over HTTP, backed by PostgreSQL."""

__version__ = "1.0.0"
