"""Database configuration and session management."""

import logging
import threading
from collections.abc import Generator
from typing import Any

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

logger = logging.getLogger(__name__)

Base: Any = declarative_base()


def engine_options(database_url: str) -> dict[str, Any]:
    """Engine keyword arguments appropriate for the database backend."""
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}


class Database:
    """Process-wide handle on the document store.

    Created once by the application factory and kept on ``app.state``. The engine
    (and its connection pool) is built on first use; ``connect`` may be called
    before every operation and from several threads at once.
    """

    def __init__(self, database_url: str, **engine_kwargs: Any):
        self.database_url = database_url
        self._engine_kwargs = engine_kwargs or engine_options(database_url)
        self._engine: Engine | None = None
        self._session_factory = sessionmaker(autocommit=False, autoflush=False)
        self._lock = threading.Lock()

    def connect(self) -> Engine:
        """Return the engine, creating it on the first call."""
        if self._engine is not None:
            return self._engine
        with self._lock:
            if self._engine is None:
                engine = create_engine(self.database_url, **self._engine_kwargs)
                self._engine = engine
                logger.info(f"Database engine created for {engine.url.render_as_string()}")
        return self._engine

    def session(self) -> Session:
        """Open a new session bound to the shared engine."""
        return self._session_factory(bind=self.connect())

    def create_all(self) -> None:
        """Create all tables for the registered models."""
        # Import all models here so they are registered with Base.metadata
        from prooflog import models  # noqa: F401

        Base.metadata.create_all(bind=self.connect())

    def dispose(self) -> None:
        with self._lock:
            if self._engine is not None:
                self._engine.dispose()
            self._engine = None


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
