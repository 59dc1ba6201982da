"""Database engine and sessions.

One SQLite engine and session factory per database file, created lazily and
shared by every request in the process.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from scorify.core.config import get_settings
from scorify.db.schema import Base


@dataclass(frozen=True)
class _Database:
    engine: Engine
    sessions: sessionmaker


# Keyed by absolute database path
_databases: dict[str, _Database] = {}


def _database(db_path: Path | None) -> _Database:
    path = Path(db_path) if db_path is not None else Path(get_settings().database_path)
    key = str(path.resolve())

    database = _databases.get(key)
    if database is None:
        path.parent.mkdir(parents=True, exist_ok=True)
        # Sync routes run in FastAPI's threadpool; one shared connection
        engine = create_engine(
            f"sqlite:///{path}",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        database = _Database(engine=engine, sessions=sessionmaker(bind=engine))
        _databases[key] = database

    return database


def get_engine(db_path: Path | None = None) -> Engine:
    """Engine for the database at `db_path` (default: settings.database_path)."""
    return _database(db_path).engine


def get_session(db_path: Path | None = None) -> Session:
    """New session on the database. The caller must close it."""
    return _database(db_path).sessions()


def init_db(db_path: Path | None = None) -> None:
    """Create missing tables."""
    Base.metadata.create_all(get_engine(db_path))
