"""Core package - Domain models, constants and exceptions."""

from .models import (
    PrintedPageNumber,
    PageClassification,
    AnalyzedPage,
    TOCEntry,
    SectionInfo,
    DocumentStructure,
    SearchablePage,
    SearchableDocument,
    SearchHit,
    SearchResult,
    SearchContext
)
from .constants import (
    PAGE_CATEGORIES,
    CATEGORY_SIGNATURES,
    TECHNICAL_TERMS,
    SEARCH_STAGES,
    DEFAULT_SEARCH_PARAMS
)
from .exceptions import (
    ManualIndexError,
    ExtractionError,
    IngestionError,
    DocumentNotFoundError,
    PageOutOfRangeError
)

__all__ = [
    'PrintedPageNumber',
    'PageClassification',
    'AnalyzedPage',
    'TOCEntry',
    'SectionInfo',
    'DocumentStructure',
    'SearchablePage',
    'SearchableDocument',
    'SearchHit',
    'SearchResult',
    'SearchContext',
    'PAGE_CATEGORIES',
    'CATEGORY_SIGNATURES',
    'TECHNICAL_TERMS',
    'SEARCH_STAGES',
    'DEFAULT_SEARCH_PARAMS',
    'ManualIndexError',
    'ExtractionError',
    'IngestionError',
    'DocumentNotFoundError',
    'PageOutOfRangeError'
]
