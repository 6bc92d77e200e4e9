"""Database port for the game storage backend."""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the engine of the game storage database."""

    def get_storage_engine(self) -> Engine:
        """Get the engine for the game storage database.

        Returns:
            Engine: SQLAlchemy engine connected to the storage backend.
        """


__all__ = ["DatabaseEnginePort"]
