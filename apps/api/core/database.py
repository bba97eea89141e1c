"""
Database connection management.

Engine and session factory are built once per process; request handlers
receive a session through the `get_db` dependency and never touch the
engine directly.
"""
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import QueuePool, StaticPool
from fastapi import HTTPException, Request
from core.config import settings
from core.exceptions import StoreUnavailableError
import logging

logger = logging.getLogger(__name__)

DATABASE_URL = settings.database_url


def build_engine(url: str) -> Engine:
    """
    Create an engine for `url`.

    SQLite (local runs and tests) gets a single shared connection so an
    in-memory database survives across sessions; everything else uses a
    bounded QueuePool.
    """
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=settings.DEBUG,
        )
    return create_engine(
        url,
        poolclass=QueuePool,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=True,
        echo=settings.DEBUG,
    )


engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False,
)

Base = declarative_base()


@event.listens_for(engine, "checkout")
def receive_checkout(dbapi_conn, connection_record, connection_proxy):
    logger.debug("Connection checked out from pool")


@event.listens_for(engine, "checkin")
def receive_checkin(dbapi_conn, connection_record):
    logger.debug("Connection returned to pool")


def ensure_schema(bind: Engine = None) -> None:
    """
    Create the submissions table and its indexes if they are missing.

    Idempotent: existing tables and indexes are left untouched.
    """
    import models  # noqa: F401  (registers tables on Base.metadata)

    Base.metadata.create_all(bind=bind or engine, checkfirst=True)


def require_schema(request: Request) -> None:
    """
    Dependency guaranteeing the schema exists before a handler runs.

    Startup normally ensures the schema once. When the store was down at
    startup, the ensure step is attempted again here; failure aborts the
    request with StoreUnavailable.
    """
    if getattr(request.app.state, "schema_ready", False):
        return
    try:
        ensure_schema()
    except SQLAlchemyError as e:
        logger.error(f"DB ensure error: {e}", exc_info=True)
        raise StoreUnavailableError() from e
    request.app.state.schema_ready = True


def get_db() -> Session:
    """
    Dependency for FastAPI to get a database session.

    The session is acquired from the pool for the duration of one request
    and returned afterwards. Store failures are surfaced immediately as
    StoreUnavailable; nothing is retried.
    """
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        db.close()
        logger.error(f"Failed to establish database connection: {e}")
        raise StoreUnavailableError() from e

    try:
        yield db
        db.commit()
    except Exception as e:
        db.rollback()
        # Only log actual database errors, not HTTP exceptions
        if not isinstance(e, HTTPException):
            logger.error(f"Database transaction error: {e}")
        raise
    finally:
        db.close()


def check_db_connection() -> bool:
    """
    Check if database connection is healthy.

    Returns:
        True if connection is healthy, False otherwise
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error(f"Database connection check failed: {e}")
        return False
