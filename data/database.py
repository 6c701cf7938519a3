"""
Engine and session handling for the manual store.

One DatabaseManager per process owns the engine. Ingestion writes a whole
document inside a single session so that a failed run leaves nothing behind.
"""
import logging
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session

from config.settings import settings
from .db_models import Base

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


class DatabaseManager:
    """Owns the engine and hands out sessions for the manual store."""

    def __init__(self, database_url: Optional[str] = None, echo: bool = False):
        """
        Args:
            database_url: SQLAlchemy URL (default: settings.database_url)
            echo: Log emitted SQL
        """
        self.database_url = database_url or settings.database_url
        self.is_sqlite = self.database_url.startswith('sqlite')

        connect_args = {'check_same_thread': False} if self.is_sqlite else {}
        self.engine = create_engine(self.database_url, connect_args=connect_args, echo=echo)
        if self.is_sqlite:
            # Page, TOC and section rows must point at an existing document
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_tables(self):
        """Create documents, pages, toc_entries and sections if missing."""
        Base.metadata.create_all(bind=self.engine)
        logger.info("Manual store ready at %s", self.database_url)

    def drop_tables(self):
        """Drop every manual store table."""
        Base.metadata.drop_all(bind=self.engine)
        logger.warning("Dropped manual store tables at %s", self.database_url)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Session that commits on success and rolls back on any exception."""
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


_db_manager: Optional[DatabaseManager] = None


def get_db_manager(database_url: Optional[str] = None) -> DatabaseManager:
    """Process-wide manager; database_url only matters on the first call."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager(database_url)
    return _db_manager


def init_database(database_url: Optional[str] = None) -> DatabaseManager:
    """Create the manual store tables and return the manager."""
    db_manager = get_db_manager(database_url)
    db_manager.create_tables()
    return db_manager


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """
    Session from the process-wide manager.

    Usage:
        with session_scope() as session:
            documents = DocumentRepository(session).list_all()
    """
    with get_db_manager().session() as session:
        yield session
