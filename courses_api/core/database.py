import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()

# Largest id an SQLite/Postgres BIGINT column can hold
MAX_ID = 2 ** 63 - 1


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ships with foreign key enforcement off per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create the SQLAlchemy engine for a database URL.

    SQLite engines may be shared across the request thread pool and enforce
    foreign keys on every connection. An in-memory SQLite URL gets a single
    static connection so every session sees the same tables.
    """
    kwargs = {"echo": echo, "future": True}
    is_sqlite = database_url.startswith("sqlite")

    if is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, **kwargs)

    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    return engine


class Database:
    """Store handle: one engine plus its session factory.

    Created once per application and handed to request handlers through
    dependency injection.
    """

    def __init__(self, database_url: str, echo: bool = False):
        self.url = database_url
        self.engine = create_db_engine(database_url, echo=echo)
        self.SessionLocal = sessionmaker(
            bind=self.engine,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
        )

    def create_all(self) -> None:
        """Create the users, courses and enrollments tables when missing."""
        # Registers the mapped tables on Base.metadata
        from courses_api.models import course, enrollment, user  # noqa: F401

        Base.metadata.create_all(self.engine)
        logger.info(f"Database schema ready ({self.engine.dialect.name})")

    @contextmanager
    def session(self) -> Iterator[Session]:
        session = self.SessionLocal()
        try:
            yield session
        finally:
            session.close()

    def dispose(self) -> None:
        self.engine.dispose()
