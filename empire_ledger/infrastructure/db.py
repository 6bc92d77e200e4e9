"""Database infrastructure for the game storage.

This module exposes helpers to create and reuse the SQLAlchemy engine backing
the key/value game storage. The URL comes from ``EMPIRE_DB_URL`` (optionally
set in a ``.env`` file) and defaults to a SQLite file under ``data/``.
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from empire_ledger.application.ports.database import DatabaseEnginePort
from empire_ledger.utils.utils import get_project_root


def _get_env_var(name: str, default: Optional[str] = None) -> str:
    """Read an environment variable or raise a descriptive error.

    Args:
        name: Name of the environment variable to read.
        default: Value used when the variable is missing or empty.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the variable is missing and no default is given.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if value:
        return value
    if default is not None:
        return default
    raise RuntimeError(f"Missing environment variable: {name}")


def _default_db_url() -> str:
    data_dir = get_project_root() / "data"
    data_dir.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{data_dir / 'empire_ledger.db'}"


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine.

    Args:
        db_url: Fully qualified database URL.

    Returns:
        Engine: A SQLAlchemy engine instance with a small connection pool and
        health checks enabled.
    """
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_storage_engine: Optional[Engine] = None


def get_storage_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the game storage.

    Returns:
        Engine: Lazily initialized engine connected to the storage database.
    """
    global _storage_engine
    if _storage_engine is None:
        db_url = _get_env_var("EMPIRE_DB_URL", default=_default_db_url())
        _storage_engine = _create_engine(db_url)
    return _storage_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by the cached engine."""

    def get_storage_engine(self) -> Engine:
        """Get the engine for the game storage.

        Returns:
            Engine: SQLAlchemy engine connected to the storage database.
        """
        return get_storage_engine()


__all__ = [
    "get_storage_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
