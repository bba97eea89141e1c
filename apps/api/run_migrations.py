#!/usr/bin/env python3
"""Database bootstrap: run Alembic migrations before the API starts.

- Wait for the database to accept connections.
- Apply `alembic upgrade head`.
- On an empty database that cannot replay migrations, fall back to
  creating the schema from the models and stamping head.
- Any other failure exits non-zero; the API must not start on an unknown schema.
"""

import logging
import os
import sys
import time

from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError

from core.config import settings
from core.database import engine, ensure_schema
from core.logging import setup_logging

logger = logging.getLogger("run_migrations")


def check_db_ready() -> bool:
    """Check if database is ready"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False


def _get_alembic_config():
    """Load Alembic config for programmatic migrations."""
    from alembic.config import Config

    here = os.path.dirname(os.path.abspath(__file__))
    cfg = Config(os.path.join(here, "alembic.ini"))
    cfg.set_main_option("script_location", os.path.join(here, "alembic"))
    return cfg


def alembic_upgrade_head() -> None:
    """Apply all pending migrations."""
    from alembic import command

    command.upgrade(_get_alembic_config(), "head")


def alembic_stamp_head() -> None:
    """Stamp alembic_version as head (no schema changes)."""
    from alembic import command

    command.stamp(_get_alembic_config(), "head")


def create_schema_directly() -> None:
    """Fallback: create schema from the models, then stamp head.

    Refuses to run when the submissions table already holds rows.
    """
    if inspect(engine).has_table("submissions"):
        with engine.connect() as conn:
            count = conn.execute(text("SELECT COUNT(*) FROM submissions")).scalar()
        if count:
            raise RuntimeError(
                f"Refusing direct schema creation on non-empty DB (submissions={count}). "
                f"Run Alembic migrations instead."
            )

    logger.info("Creating schema directly from models...")
    ensure_schema()
    alembic_stamp_head()
    logger.info("Schema created successfully")


def main(max_retries: int = 30) -> None:
    setup_logging()
    logger.info(f"Waiting for database to be ready ({settings.ENVIRONMENT})...")

    for attempt in range(1, max_retries + 1):
        if check_db_ready():
            logger.info("Database is ready")
            break
        logger.warning(f"Database is unavailable - sleeping (attempt {attempt}/{max_retries})")
        time.sleep(1)
    else:
        logger.error("Database is not ready after maximum retries")
        sys.exit(1)

    try:
        alembic_upgrade_head()
        logger.info("Migrations completed successfully")
        return
    except Exception as e:
        logger.error(f"Alembic upgrade failed: {e}")

    try:
        create_schema_directly()
    except Exception as e:
        logger.error(f"Schema bootstrap failed: {e}")
        sys.exit(1)
    logger.info("Schema bootstrap completed via create_all fallback")


if __name__ == '__main__':
    main()
