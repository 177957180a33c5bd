# src/solid_agent/infrastructure/database/connection.py
from contextlib import contextmanager
from typing import Any, Generator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel

from solid_agent.config.settings import Settings, get_settings
from solid_agent.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class DatabaseManager:
    """
    Manages the database engine and the request-scoped session used by models.

    Agent actions run synchronously, one per thread, so sessions are handed out
    through a thread-scoped registry: every model call made during one action
    shares the same session and records stay attached until the host calls
    ``remove_session()`` at the end of the request.

    Usage:
        db = DatabaseManager()
        db.connect(url="postgresql+psycopg://...")
        db.create_all()

        with db.transaction() as session:
            session.add(record)

        db.remove_session()
    """

    def __init__(self):
        self._engine: Optional[Engine] = None
        self._sessions: Optional[scoped_session] = None

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        if not self._engine:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._engine

    def connect(self, url: str, echo_sql: bool = False, **engine_kwargs: Any) -> None:
        """
        Initialize the engine and session registry.

        Args:
            url: SQLAlchemy database URL
            echo_sql: Log every SQL statement
            **engine_kwargs: Passed through to ``create_engine``

        In-memory SQLite URLs share a single connection so that every session
        sees the same database.
        """
        if url.startswith("sqlite"):
            engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
            if url in ("sqlite://", "sqlite:///:memory:"):
                engine_kwargs.setdefault("poolclass", StaticPool)

        self._engine = create_engine(url, echo=echo_sql, **engine_kwargs)
        self._sessions = scoped_session(
            sessionmaker(bind=self._engine, class_=Session, expire_on_commit=False)
        )

        logger.info("database_connected", dialect=self._engine.dialect.name)

    def connect_from_settings(self, settings: Optional[Settings] = None) -> None:
        """Connect using ``database_url`` from settings."""
        settings = settings or get_settings()
        if not settings.database_url:
            raise RuntimeError("database_url is not configured")
        self.connect(
            url=settings.database_url.get_secret_value(),
            echo_sql=settings.db_echo_sql,
        )

    def disconnect(self) -> None:
        """
        Dispose of the engine and drop the session registry.

        Safe to call multiple times.
        """
        if self._sessions is not None:
            self._sessions.remove()
            self._sessions = None
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            logger.info("database_disconnected")

    def create_all(self) -> None:
        """Create every table registered on SQLModel metadata."""
        SQLModel.metadata.create_all(self.engine)

    def drop_all(self) -> None:
        SQLModel.metadata.drop_all(self.engine)

    def session(self) -> Session:
        """
        Return the session bound to the current thread.

        Raises:
            RuntimeError: If database not connected
        """
        if self._sessions is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._sessions()

    def remove_session(self) -> None:
        """Close the current thread's session (end of request)."""
        if self._sessions is not None:
            self._sessions.remove()

    @contextmanager
    def transaction(self) -> Generator[Session, None, None]:
        """
        Run a block against the current session with commit/rollback.

        Usage:
            with db.transaction() as session:
                session.add(message)
                # committed on success, rolled back on exception
        """
        session = self.session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise

    def health_check(self) -> bool:
        """
        Perform a health check by executing a simple query.

        Returns:
            True if database is healthy, False otherwise
        """
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error("database_health_check_failed", error=str(e))
            return False


# Global database manager instance
db = DatabaseManager()
