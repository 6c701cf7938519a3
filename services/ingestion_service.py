"""
Ingestion Service - Turns an uploaded manual into stored, structured records.

Pipeline: extract page text -> analyze structure -> persist everything in
one transaction. A failure reports the stage it happened in and leaves no
partial document behind.
"""
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config.settings import settings
from core.exceptions import ExtractionError, IngestionError
from core.models import DocumentStructure
from data.repositories import (
    DocumentRepository,
    PageRepository,
    SectionRepository,
    TOCEntryRepository
)
from manualindex.core import ContentStartResolver, PageClassifier, PageNumberDetector
from manualindex.processors import DocumentAnalyzer
from .text_extraction import PDFTextExtractor, TextExtractor

logger = logging.getLogger(__name__)


@dataclass
class IngestionReport:
    """Summary of one successful ingestion."""
    document_id: str
    title: str
    total_pages: int
    content_start_page: int
    content_start_method: str
    toc_end_page: int
    toc_entry_count: int
    section_count: int
    category_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def page_offset(self) -> int:
        return -(self.content_start_page - 1)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'document_id': self.document_id,
            'title': self.title,
            'total_pages': self.total_pages,
            'content_start_page': self.content_start_page,
            'content_start_method': self.content_start_method,
            'page_offset': self.page_offset,
            'toc_end_page': self.toc_end_page,
            'toc_entry_count': self.toc_entry_count,
            'section_count': self.section_count,
            'category_counts': self.category_counts
        }


def build_default_analyzer() -> DocumentAnalyzer:
    """Analyzer configured from application settings."""
    return DocumentAnalyzer(
        detector=PageNumberDetector(**settings.get_detector_config()),
        classifier=PageClassifier(**settings.get_classifier_config()),
        resolver=ContentStartResolver(settings.substantial_content_chars),
        batch_size=settings.ingestion_batch_size
    )


class IngestionService:
    """Service for ingesting manuals into the store."""

    def __init__(
        self,
        session: Session,
        extractor: Optional[TextExtractor] = None,
        analyzer: Optional[DocumentAnalyzer] = None
    ):
        """
        Initialize ingestion service.

        Args:
            session: SQLAlchemy database session
            extractor: Page text extractor (default: PyMuPDF)
            analyzer: Structure analyzer (default: configured from settings)
        """
        self.session = session
        self.extractor = extractor or PDFTextExtractor()
        self.analyzer = analyzer or build_default_analyzer()

    async def ingest_file(
        self,
        file_path: str,
        title: Optional[str] = None,
        category: Optional[str] = None
    ) -> IngestionReport:
        """
        Ingest a PDF from disk.

        Args:
            file_path: Path to the PDF
            title: Display title (default: filename without extension)
            category: Optional document category

        Returns:
            IngestionReport

        Raises:
            IngestionError: With stage 'extraction' or 'persistence'
        """
        filename = os.path.basename(file_path)
        return await self.ingest_source(
            file_path,
            filename=filename,
            title=title,
            category=category,
            file_path=os.path.abspath(file_path)
        )

    async def ingest_source(
        self,
        source: Union[str, bytes],
        filename: str,
        title: Optional[str] = None,
        category: Optional[str] = None,
        file_path: Optional[str] = None
    ) -> IngestionReport:
        """Extract page text from a path or bytes, then ingest it."""
        try:
            page_texts = self.extractor.extract_pages(source)
        except ExtractionError as e:
            logger.error("Extraction failed for %s: %s", filename, e)
            raise IngestionError('extraction', str(e)) from e

        return await self.ingest_pages(
            page_texts,
            filename=filename,
            title=title,
            category=category,
            file_path=file_path
        )

    async def ingest_pages(
        self,
        page_texts: List[str],
        filename: str,
        title: Optional[str] = None,
        category: Optional[str] = None,
        file_path: Optional[str] = None
    ) -> IngestionReport:
        """
        Ingest already-extracted page text.

        Args:
            page_texts: Ordered per-page text
            filename: Original filename

        Returns:
            IngestionReport
        """
        if not page_texts or not any(text.strip() for text in page_texts):
            raise IngestionError('extraction', f"No page text extracted from {filename}")

        title = title or os.path.splitext(filename)[0]
        logger.info("Analyzing %s (%d pages)", filename, len(page_texts))
        structure = await self.analyzer.analyze(page_texts)

        document_id = self._persist(structure, title, filename, category, file_path)
        return IngestionReport(
            document_id=document_id,
            title=title,
            total_pages=structure.total_pages,
            content_start_page=structure.content_start_page,
            content_start_method=structure.content_start_method,
            toc_end_page=structure.toc_end_page,
            toc_entry_count=len(structure.toc_entries),
            section_count=len(structure.sections),
            category_counts=structure.category_counts()
        )

    def _persist(
        self,
        structure: DocumentStructure,
        title: str,
        filename: str,
        category: Optional[str],
        file_path: Optional[str]
    ) -> str:
        """Write document, pages, TOC entries and sections in one transaction."""
        try:
            document = DocumentRepository(self.session).create(
                title=title,
                filename=filename,
                total_pages=structure.total_pages,
                content_start_page=structure.content_start_page,
                toc_end_page=structure.toc_end_page,
                file_path=file_path,
                category=category
            )

            pages = PageRepository(self.session)
            for page in structure.pages:
                pages.create_from_analysis(document.id, page)

            toc_entries = TOCEntryRepository(self.session)
            for entry in structure.toc_entries:
                toc_entries.create(document.id, entry)

            sections = SectionRepository(self.session)
            for section in structure.sections:
                sections.create(document.id, section)

            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("Persisting %s failed: %s", filename, e)
            raise IngestionError('persistence', str(e)) from e

        logger.info("Stored document %s (%s)", document.id, filename)
        return document.id
