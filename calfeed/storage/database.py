"""Database engine and session management."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from calfeed.exceptions import StorageError
from calfeed.storage.schema import Base

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the SQLAlchemy engine and hands out transactional sessions."""

    def __init__(self, url: str, timeout: float = 5.0):
        """
        Initialize database.

        Args:
            url: SQLAlchemy database URL
            timeout: Seconds to wait for a connection or a lock before failing
        """
        self.url = make_url(url)
        connect_args = {}
        if self.url.get_backend_name() == "sqlite":
            connect_args = {"check_same_thread": False, "timeout": timeout}
            database = self.url.database
            if database and database != ":memory:":
                Path(database).parent.mkdir(parents=True, exist_ok=True)
        elif self.url.get_backend_name() == "postgresql":
            connect_args = {"connect_timeout": int(timeout)}

        self.engine: Engine = create_engine(
            self.url, connect_args=connect_args, pool_pre_ping=True
        )
        if self.url.get_backend_name() == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)

    @property
    def dialect(self) -> str:
        return self.engine.dialect.name

    def create_all(self) -> None:
        """Create missing tables."""
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to create tables: {e}") from e
        logger.info(f"Database ready at {self.url.render_as_string(hide_password=True)}")

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Yield a session inside a transaction.

        Commits on success, rolls back on error. SQLAlchemy errors are
        re-raised as StorageError.
        """
        session = self._session_factory()
        try:
            with session.begin():
                yield session
        except SQLAlchemyError as e:
            logger.error(f"Database error: {e}")
            raise StorageError(str(e)) from e
        finally:
            session.close()

    def dispose(self) -> None:
        self.engine.dispose()
