"""Unit tests for the connection pool and database models."""

import logging
from datetime import datetime

from sqlalchemy import inspect

from taskmanager.config.settings import load_settings
from taskmanager.core.database import (
    check_connection,
    create_pool,
    database_url,
    prepare_database,
)
from taskmanager.core.models import Base, Task, TaskStatus


def test_database_url_from_settings():
    settings = load_settings(
        environ={"DB_HOST": "pg", "DB_PORT": "6543", "DB_NAME": "tm", "DB_USER": "u", "DB_PASSWORD": "pw"}
    )

    url = database_url(settings.database)

    assert url.drivername == "postgresql+psycopg2"
    assert url.host == "pg"
    assert url.port == 6543
    assert url.database == "tm"
    assert url.username == "u"
    assert url.password == "pw"
    assert "pw" not in url.render_as_string(hide_password=True)


def test_create_pool_uses_settings():
    settings = load_settings(environ={"DB_POOL_SIZE": "4", "DB_POOL_TIMEOUT": "7"})

    engine = create_pool(settings.database)
    try:
        assert engine.dialect.name == "postgresql"
        assert engine.pool.size() == 4
        assert engine.pool.timeout() == 7
        assert engine.url.host == "db"
    finally:
        engine.dispose()


def test_check_connection_success(engine, caplog):
    caplog.set_level(logging.INFO, logger="taskmanager.core.database")

    assert check_connection(engine) is True
    assert "Successfully connected to PostgreSQL database" in caplog.text
    # the diagnostic connection went back to the pool
    assert engine.pool.checkedout() == 0


def test_check_connection_failure_is_logged(unreachable_engine, caplog):
    caplog.set_level(logging.INFO, logger="taskmanager.core.database")

    assert check_connection(unreachable_engine) is False

    errors = [
        r for r in caplog.records
        if r.name == "taskmanager.core.database" and r.levelno == logging.ERROR
    ]
    assert len(errors) == 1
    assert errors[0].getMessage() == "Error connecting to the database"
    assert errors[0].exc_info is not None


def test_prepare_database_creates_schema(engine):
    Base.metadata.drop_all(bind=engine)

    assert prepare_database(engine) is True
    assert "tasks" in inspect(engine).get_table_names()


def test_prepare_database_unreachable(unreachable_engine):
    assert prepare_database(unreachable_engine) is False


def test_task_model_creation(db_session):
    """Test creating a Task model."""
    task = Task(title="Water plants")
    db_session.add(task)
    db_session.commit()

    assert task.id is not None
    assert task.status == TaskStatus.PENDING
    assert task.description is None
    assert task.due_date is None
    assert isinstance(task.created_at, datetime)
    assert isinstance(task.updated_at, datetime)


def test_task_status_transitions(db_session):
    """Test task status transitions."""
    task = Task(title="Refactor")
    db_session.add(task)
    db_session.commit()

    task.status = TaskStatus.IN_PROGRESS
    db_session.commit()
    assert task.status == TaskStatus.IN_PROGRESS

    task.status = TaskStatus.COMPLETED
    db_session.commit()
    assert task.status == TaskStatus.COMPLETED


def test_task_updated_at_changes(db_session):
    task = Task(title="Stamp", updated_at=datetime(2020, 1, 1))
    db_session.add(task)
    db_session.commit()

    task.title = "Stamped"
    db_session.commit()

    assert task.updated_at > datetime(2020, 1, 1)


def test_task_model_repr(db_session):
    """Test Task model string representation."""
    task = Task(title="Repr me")
    db_session.add(task)
    db_session.commit()

    repr_str = repr(task)
    assert "Task" in repr_str
    assert str(task.id) in repr_str
    assert "PENDING" in repr_str
