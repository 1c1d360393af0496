"""Shared pytest fixtures for testing."""

import tempfile

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from taskmanager.config.settings import load_settings
from taskmanager.core.models import Base, Task, TaskStatus
from taskmanager.main import create_app


# Use a temporary file-based database for tests (more reliable than in-memory)
# This ensures all connections see the same database
_test_db_file = tempfile.NamedTemporaryFile(delete=False, suffix='.db')
_test_db_path = _test_db_file.name
_test_db_file.close()

TEST_DATABASE_URL = f"sqlite:///{_test_db_path}"

test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    pool_pre_ping=True
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

# Points into a directory that does not exist, so every connect fails
UNREACHABLE_DATABASE_URL = "sqlite:////nonexistent-taskmanager-dir/sub/tasks.db"


@pytest.fixture(scope="function", autouse=True)
def db_session():
    """Create a test database session and ensure tables exist."""
    Base.metadata.create_all(bind=test_engine)

    db = TestSessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def settings():
    """Settings resolved from an empty environment (all defaults)."""
    return load_settings(environ={})


@pytest.fixture
def engine():
    """The SQLite test pool."""
    return test_engine


@pytest.fixture
def app(settings, engine):
    """Application wired to the SQLite test pool."""
    return create_app(settings, engine=engine)


@pytest.fixture(scope="function")
def client(app):
    """Create a test client; runs the application lifespan."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def unreachable_engine():
    engine = create_engine(UNREACHABLE_DATABASE_URL)
    yield engine
    engine.dispose()


@pytest.fixture
def sample_task(db_session):
    """Create a sample task in the database."""
    task = Task(title="Write report", description="Quarterly numbers", status=TaskStatus.PENDING)
    db_session.add(task)
    db_session.commit()
    db_session.refresh(task)
    return task
