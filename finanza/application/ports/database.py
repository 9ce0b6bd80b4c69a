"""Database port for snapshot storage.

Infrastructure implementations provide the concrete engine; application code
only depends on this protocol.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the engine backing remote snapshot storage."""

    def get_engine(self) -> Engine:
        """Get the engine for the snapshot database.

        Returns:
            Engine: SQLAlchemy engine connected to the state store.
        """


__all__ = ["DatabaseEnginePort"]
