# core/sa/database.py
from contextlib import contextmanager
from typing import Iterator, Optional
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import NullPool, QueuePool
import logging
import os

from core.sa.models import Base

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///books_service.db"


def unicode_lower(value: Optional[str]) -> Optional[str]:
    """lower() for SQLite, which only folds ASCII letters by default"""
    return value.lower() if value is not None else None


class Database:
    def __init__(self, connection_string: Optional[str] = None, **engine_kwargs):
        """Set up the engine and session factory.

        Args:
            connection_string: SQLAlchemy URL. Falls back to DATABASE_URL, then to a
                              local SQLite file
            engine_kwargs: Extra keyword arguments for create_engine
        """
        self.connection_string = connection_string or os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)
        self.is_sqlite = self.connection_string.startswith("sqlite")

        if self.is_sqlite:
            engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
            engine_kwargs.setdefault("poolclass", NullPool)
        else:
            engine_kwargs.setdefault("pool_size", 5)
            engine_kwargs.setdefault("max_overflow", 10)
            engine_kwargs.setdefault("poolclass", QueuePool)

        self.engine = create_engine(self.connection_string, **engine_kwargs)

        if self.is_sqlite:
            # Case-insensitive search has to fold accented letters too
            @event.listens_for(self.engine, "connect")
            def register_lower(dbapi_connection, connection_record):
                dbapi_connection.create_function("lower", 1, unicode_lower, deterministic=True)

        # Loaded attributes stay readable after commit so responses can be
        # serialized once the unit of work is finished
        self._SessionFactory = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine
        )

    @contextmanager
    def get_db(self) -> Iterator[Session]:
        """Session that commits on success and rolls back on error"""
        session: Session = self._SessionFactory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def init_db(self) -> None:
        """Create the books table if it is missing"""
        logger.info("Creating tables on %s", self.engine.url.render_as_string(hide_password=True))
        Base.metadata.create_all(self.engine)

    def drop_db(self) -> None:
        Base.metadata.drop_all(self.engine)

    def get_session(self) -> Session:
        return self._SessionFactory()

    def dispose(self) -> None:
        self.engine.dispose()


db = Database()


def get_db() -> Iterator[Session]:
    """Request-scoped session for route dependencies"""
    session = db.get_session()
    try:
        yield session
    finally:
        session.close()
