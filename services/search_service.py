"""
Search Service - Query-time entry point for the presentation/voice layer.

Loads candidate documents from the store, runs the multi-stage search
engine, and converts physical page indices to printed page numbers (and
back, for "show me page N" requests).
"""
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from config.settings import settings
from core.constants import SEARCHABLE_CATEGORIES
from core.exceptions import DocumentNotFoundError
from core.models import (
    SearchableDocument,
    SearchablePage,
    SearchContext,
    SearchHit,
    SearchResult
)
from data.repositories import DocumentRepository, PageRepository
from manualindex.core import PageOffsetTranslator
from manualindex.search import MultiStageSearchEngine
from utils.image_utils import render_pdf_page_to_base64

logger = logging.getLogger(__name__)


@dataclass
class PageView:
    """A page resolved for display."""
    document_id: str
    document_title: str
    printed_page: int
    physical_index: int
    text: str
    image_base64: str = ""
    image_width: Optional[int] = None
    image_height: Optional[int] = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'document_id': self.document_id,
            'document_title': self.document_title,
            'printed_page': self.printed_page,
            'physical_index': self.physical_index,
            'text': self.text,
            'image_base64': self.image_base64,
            'image_width': self.image_width,
            'image_height': self.image_height
        }


def translator_for(document: SearchableDocument) -> PageOffsetTranslator:
    """Offset translator for a searchable document."""
    return PageOffsetTranslator(document.content_start_page, total_pages=document.total_pages or None)


class SearchService:
    """Service for searching stored manuals and resolving pages for display."""

    def __init__(self, session: Session, engine: Optional[MultiStageSearchEngine] = None):
        """
        Initialize search service.

        Args:
            session: SQLAlchemy database session
            engine: Search engine (default: configured from settings)
        """
        self.session = session
        self.engine = engine or MultiStageSearchEngine(**settings.get_search_config())

    def load_context(
        self,
        document_ids: Optional[Iterable[str]] = None,
        category: Optional[str] = None,
        active_document_id: Optional[str] = None
    ) -> SearchContext:
        """
        Build a search context from stored documents.

        Args:
            document_ids: Restrict to these documents
            category: Restrict to a document category ('all' means no filter)
            active_document_id: Document currently shown to the user

        Returns:
            SearchContext holding only searchable pages
        """
        documents = DocumentRepository(self.session).list_candidates(document_ids, category)
        pages = PageRepository(self.session)

        searchable = []
        for document in documents:
            rows = pages.get_by_document(document.id, categories=SEARCHABLE_CATEGORIES)
            searchable.append(SearchableDocument(
                id=document.id,
                title=document.title,
                content_start_page=document.content_start_page,
                total_pages=document.total_pages,
                pages=[
                    SearchablePage(
                        physical_index=row.page_number,
                        text=row.text_content,
                        category=row.category
                    )
                    for row in rows
                ]
            ))

        logger.debug("Loaded %d candidate document(s)", len(searchable))
        return SearchContext(documents=searchable, active_document_id=active_document_id)

    def search(self, query: str, context: SearchContext, active_only: bool = False) -> SearchResult:
        """
        Search the context's documents.

        Args:
            query: User query
            context: Candidate documents
            active_only: Search only the active document

        Returns:
            SearchResult
        """
        documents = context.documents
        if active_only:
            active = context.active_document
            documents = [active] if active is not None else []
        return self.engine.search(query, documents)

    def printed_page(self, hit: SearchHit, context: SearchContext) -> int:
        """Printed page number for a hit."""
        document = context.get(hit.document_id)
        if document is None:
            raise DocumentNotFoundError(hit.document_id)
        return translator_for(document).to_printed(hit.physical_index)

    def format_for_voice(self, result: SearchResult, context: SearchContext) -> str:
        """
        Render a result as text for the voice assistant.

        Page numbers are always printed numbers. Never raises for empty
        results: the message asks the user to try different terms.
        """
        if not result.found:
            return result.message

        multi_document = len({hit.document_id for hit in result.hits}) > 1
        lines = []
        if result.stage != 'exact':
            lines.append(result.message)

        for hit in result.hits:
            page = self.printed_page(hit, context)
            source = f" of {hit.document_title}" if multi_document else ""
            lines.append(f"Page {page}{source}: {hit.snippet}")
        return '\n\n'.join(lines)

    def show_page(
        self,
        document_id: str,
        printed_page: int,
        render: bool = False
    ) -> PageView:
        """
        Resolve a spoken/printed page number to the stored page.

        Args:
            document_id: Document to show
            printed_page: Page number as printed in the manual
            render: Also render the page image from the source PDF

        Raises:
            DocumentNotFoundError: Unknown document
            PageOutOfRangeError: Page number maps outside the document
        """
        document = DocumentRepository(self.session).get_by_id(document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)

        translator = PageOffsetTranslator(document.content_start_page, total_pages=document.total_pages)
        physical_index = translator.to_physical_checked(printed_page)
        page = PageRepository(self.session).get_page(document_id, physical_index)

        view = PageView(
            document_id=document.id,
            document_title=document.title,
            printed_page=printed_page,
            physical_index=physical_index,
            text=page.text_content if page is not None else ""
        )

        if render and document.file_path:
            view.image_base64, view.image_width, view.image_height = render_pdf_page_to_base64(
                document.file_path,
                physical_index,
                target_dpi=settings.render_dpi
            )
        logger.info("Showing printed page %d (physical %d) of %s", printed_page, physical_index, document.title)
        return view
