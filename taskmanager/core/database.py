"""Database connection pool and session management."""

import logging

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, URL
from sqlalchemy.orm import sessionmaker, Session

from taskmanager.config.settings import DatabaseSettings
from taskmanager.core.models import Base

logger = logging.getLogger(__name__)


def database_url(db_settings: DatabaseSettings) -> URL:
    """Build the PostgreSQL URL for the configured database."""
    return URL.create(
        "postgresql+psycopg2",
        username=db_settings.user,
        password=db_settings.password,
        host=db_settings.host,
        port=db_settings.port,
        database=db_settings.database,
    )


def create_pool(db_settings: DatabaseSettings) -> Engine:
    """
    Create the pooled engine for the configured database.

    No connection is opened here; use check_connection() to verify
    connectivity.
    """
    return create_engine(
        database_url(db_settings),
        pool_size=db_settings.pool_size,
        max_overflow=db_settings.max_overflow,
        pool_timeout=db_settings.pool_timeout,
        connect_args={"connect_timeout": db_settings.connect_timeout},
        echo=False,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def check_connection(engine: Engine) -> bool:
    """
    Acquire one connection, run a trivial query and release it.

    Failures are logged with their traceback and reported as False;
    this never raises.
    """
    url = engine.url.render_as_string(hide_password=True)
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(
            "Error connecting to the database",
            extra={"url": url, "error": str(e)},
            exc_info=True,
        )
        return False

    logger.info("Successfully connected to PostgreSQL database", extra={"url": url})
    return True


def init_db(engine: Engine):
    """Create the tables that do not exist yet."""
    Base.metadata.create_all(bind=engine)


def prepare_database(engine: Engine) -> bool:
    """Startup job: verify connectivity, then make sure the schema exists."""
    if not check_connection(engine):
        return False
    try:
        init_db(engine)
    except Exception as e:
        logger.error("Failed to initialize database schema", extra={"error": str(e)}, exc_info=True)
        return False
    logger.info("Database initialized")
    return True


def dispose_pool(engine: Engine):
    """Close every pooled connection."""
    engine.dispose()
    logger.info("Database pool disposed")


def get_db(request: Request) -> Session:
    """
    Dependency function for FastAPI to get database session.
    Yields a session from the application's pool and ensures it's closed after use.
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
