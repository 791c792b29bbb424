"""SQLAlchemy engine factory for database connections.

Backend selection:
- PostgreSQL via the DATABASE_URL environment variable
- SQLite file-based via db_path, TRADERGAME_DB_PATH or var/tradergame.db
- SQLite in-memory for tests (db_path=":memory:")
"""

import os
import json
import logging
from pathlib import Path
from typing import Optional, Union
from sqlalchemy import create_engine, Engine, event
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path("var/tradergame.db")


def create_engine_from_config(db_path: Optional[Union[str, Path]] = None) -> Engine:
    """
    Create SQLAlchemy engine from configuration.

    Args:
        db_path: Optional explicit database path. ":memory:" gives an
                 in-memory SQLite database. None uses environment or default.

    Returns:
        Configured SQLAlchemy Engine instance
    """
    database_url = os.environ.get("DATABASE_URL")

    if database_url and database_url.startswith("postgresql://"):
        logger.info(f"Creating PostgreSQL engine: {database_url.split('@')[-1]}")  # Hide credentials

        return create_engine(
            database_url,
            pool_size=5,
            max_overflow=10,
            pool_pre_ping=True,
            json_serializer=json.dumps,
            json_deserializer=json.loads,
            echo=False,
        )

    if str(db_path) == ":memory:":
        # StaticPool keeps one connection, otherwise each connection is a fresh empty database
        logger.info("Creating SQLite in-memory engine (testing mode)")

        return create_engine(
            "sqlite:///:memory:",
            connect_args={'check_same_thread': False},
            poolclass=StaticPool,
            json_serializer=json.dumps,
            json_deserializer=json.loads,
            echo=False,
        )

    # Priority: explicit parameter > environment variable > default
    if db_path is not None:
        sqlite_path = Path(db_path)
    else:
        env_path = os.environ.get("TRADERGAME_DB_PATH")
        if env_path and env_path != ":memory:":
            sqlite_path = Path(env_path)
        else:
            sqlite_path = DEFAULT_DB_PATH

    sqlite_path.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Creating SQLite file engine: {sqlite_path}")

    engine = create_engine(
        f"sqlite:///{sqlite_path}",
        connect_args={'check_same_thread': False},
        json_serializer=json.dumps,
        json_deserializer=json.loads,
        echo=False,
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine
