"""Services package - Extraction, ingestion and search entry points."""

from .text_extraction import TextExtractor, PDFTextExtractor
from .ingestion_service import IngestionService, IngestionReport, build_default_analyzer
from .search_service import SearchService, PageView

__all__ = [
    'TextExtractor',
    'PDFTextExtractor',
    'IngestionService',
    'IngestionReport',
    'build_default_analyzer',
    'SearchService',
    'PageView'
]
