"""Database connection and session management."""

import logging
from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from journal.core.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base class."""

    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless this is set on every connection
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys = ON")
    finally:
        cursor.close()


class Database:
    """Storage handle owning one engine and its session factory.

    A handle is created by the application (or a test) and passed to every
    service that needs storage. Creating the handle does not touch the
    schema; call :meth:`create_all` explicitly.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = make_url(url)
        engine_kwargs: dict = {"echo": echo}

        if self.is_sqlite:
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if self.is_memory:
                # One shared connection, otherwise every session sees an empty database
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_pre_ping"] = True

        self.engine: Engine = create_engine(self.url, **engine_kwargs)

        if self.is_sqlite:
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.session_factory = sessionmaker(
            bind=self.engine,
            class_=Session,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build a handle from application settings."""
        return cls(settings.DATABASE_URL, echo=settings.DB_ECHO)

    @property
    def is_sqlite(self) -> bool:
        return self.url.get_backend_name() == "sqlite"

    @property
    def is_memory(self) -> bool:
        return self.is_sqlite and self.url.database in (None, "", ":memory:")

    def create_all(self) -> None:
        """Create all tables that do not exist yet."""
        # Register every mapped table on Base.metadata before creating
        import journal.models  # noqa: F401

        Base.metadata.create_all(self.engine)
        logger.info(f"Schema ready at {self.url.render_as_string(hide_password=True)}")

    def drop_all(self) -> None:
        """Drop all tables."""
        import journal.models  # noqa: F401

        Base.metadata.drop_all(self.engine)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Open a session for one operation.

        Commits when the block finishes, rolls back on any exception and
        always closes the session.
        """
        session = self.session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()
