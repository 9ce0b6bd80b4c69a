"""Database infrastructure for remote snapshot storage.

This module exposes concrete helpers to create and reuse the SQLAlchemy
engine connected to the state database. It belongs to the infrastructure
layer because it deals with an external system.
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from finanza.application.ports.database import DatabaseEnginePort


def _get_env_var(name: str) -> str:
    """Read an environment variable or raise a descriptive error.

    Args:
        name: Name of the environment variable to read.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the environment variable is missing or empty.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine.

    Args:
        db_url: Fully qualified database URL (including driver and credentials)

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


_state_engine: Optional[Engine] = None


def get_state_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the state database.

    Returns:
        Engine: Lazily initialized engine read from ``FINANZA_DB_URL``.
    """
    global _state_engine
    if _state_engine is None:
        db_url = _get_env_var("FINANZA_DB_URL")
        _state_engine = _create_engine(db_url)
    return _state_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine."""

    def get_engine(self) -> Engine:
        """Get the engine for the state database.

        Returns:
            Engine: SQLAlchemy engine connected to the state store.
        """
        return get_state_engine()


__all__ = ["get_state_engine", "SqlAlchemyDatabaseEngineAdapter"]
