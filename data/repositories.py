"""
Repository pattern for data access.

Repositories add and flush; the caller owns the transaction so that a
document and all of its pages land together or not at all.
"""
from typing import Iterable, List, Optional
from sqlalchemy.orm import Session

from core.models import AnalyzedPage, SectionInfo, TOCEntry as TOCItem
from data.db_models import Document, Page, TOCEntry, Section


class DocumentRepository:
    """Repository for Document operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(
        self,
        title: str,
        filename: str,
        total_pages: int,
        content_start_page: int,
        toc_end_page: int = 0,
        file_path: Optional[str] = None,
        category: Optional[str] = None
    ) -> Document:
        """Create a new document."""
        document = Document(
            title=title,
            filename=filename,
            file_path=file_path,
            category=category,
            total_pages=total_pages,
            content_start_page=content_start_page,
            toc_end_page=toc_end_page
        )
        self.session.add(document)
        self.session.flush()
        return document

    def get_by_id(self, document_id: str) -> Optional[Document]:
        """Get document by ID."""
        return self.session.query(Document).filter(
            Document.id == document_id
        ).first()

    def list_all(self, limit: int = 50, offset: int = 0) -> List[Document]:
        """List documents with pagination."""
        return self.session.query(Document)\
            .order_by(Document.created_at.desc())\
            .limit(limit)\
            .offset(offset)\
            .all()

    def list_candidates(
        self,
        document_ids: Optional[Iterable[str]] = None,
        category: Optional[str] = None
    ) -> List[Document]:
        """
        List documents eligible for a search.

        A category other than 'all' takes precedence over an explicit id list.
        """
        query = self.session.query(Document)
        if category and category != 'all':
            query = query.filter(Document.category == category)
        elif document_ids:
            query = query.filter(Document.id.in_(list(document_ids)))
        return query.order_by(Document.created_at.desc()).all()

    def list_categories(self) -> List[str]:
        """Distinct non-empty document categories, sorted."""
        rows = self.session.query(Document.category)\
            .filter(Document.category.isnot(None))\
            .distinct()\
            .all()
        return sorted(row[0] for row in rows if row[0])

    def delete(self, document_id: str) -> bool:
        """Delete a document."""
        document = self.get_by_id(document_id)
        if document:
            self.session.delete(document)
            self.session.flush()
            return True
        return False


class PageRepository:
    """Repository for Page operations."""

    def __init__(self, session: Session):
        self.session = session

    def create_from_analysis(self, document_id: str, page: AnalyzedPage) -> Page:
        """Create a page row from an analyzed page."""
        printed = page.printed_number
        row = Page(
            document_id=document_id,
            page_number=page.physical_index,
            text_content=page.text,
            char_count=page.char_count,
            category=page.category,
            confidence=page.confidence,
            printed_number_kind=printed.kind if printed else None,
            printed_number_value=printed.value if printed else None,
            printed_number_magnitude=printed.magnitude if printed else None
        )
        self.session.add(row)
        return row

    def get_by_document(
        self,
        document_id: str,
        categories: Optional[Iterable[str]] = None
    ) -> List[Page]:
        """Get pages for a document in physical order, optionally by category."""
        query = self.session.query(Page).filter(Page.document_id == document_id)
        if categories:
            query = query.filter(Page.category.in_(list(categories)))
        return query.order_by(Page.page_number).all()

    def get_page(self, document_id: str, page_number: int) -> Optional[Page]:
        """Get a single page by physical index."""
        return self.session.query(Page)\
            .filter(Page.document_id == document_id, Page.page_number == page_number)\
            .first()


class TOCEntryRepository:
    """Repository for TOCEntry operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, document_id: str, entry: TOCItem) -> TOCEntry:
        """Create a TOC entry."""
        row = TOCEntry(
            document_id=document_id,
            section=entry.section,
            title=entry.title,
            page=entry.page,
            physical_index=entry.physical_index
        )
        self.session.add(row)
        return row

    def get_by_document(self, document_id: str) -> List[TOCEntry]:
        """Get TOC entries sorted by target page."""
        return self.session.query(TOCEntry)\
            .filter(TOCEntry.document_id == document_id)\
            .order_by(TOCEntry.page)\
            .all()


class SectionRepository:
    """Repository for Section operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, document_id: str, section: SectionInfo) -> Section:
        """Create a section."""
        row = Section(
            document_id=document_id,
            section_number=section.section_number,
            title=section.title,
            parent_section_number=section.parent_section_number,
            start_page=section.start_page,
            end_page=section.end_page
        )
        self.session.add(row)
        return row

    def get_by_document(self, document_id: str) -> List[Section]:
        """Get sections ordered by start page."""
        return self.session.query(Section)\
            .filter(Section.document_id == document_id)\
            .order_by(Section.start_page)\
            .all()
