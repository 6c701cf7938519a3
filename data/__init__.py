"""Data access layer - Database models, connections and repositories."""

from .db_models import Base, Document, Page, TOCEntry, Section
from .database import (
    DatabaseManager,
    get_db_manager,
    session_scope,
    init_database
)
from .repositories import (
    DocumentRepository,
    PageRepository,
    TOCEntryRepository,
    SectionRepository
)

__all__ = [
    # Models
    'Base',
    'Document',
    'Page',
    'TOCEntry',
    'Section',

    # Database
    'DatabaseManager',
    'get_db_manager',
    'session_scope',
    'init_database',

    # Repositories
    'DocumentRepository',
    'PageRepository',
    'TOCEntryRepository',
    'SectionRepository'
]
