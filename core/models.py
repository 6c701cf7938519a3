"""
Core domain models for manual structure inference and retrieval.

These are pure data structures without business logic.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class PrintedPageNumber:
    """A page number printed on the page itself."""
    kind: str  # 'roman' or 'arabic'
    value: str
    magnitude: int

    @property
    def is_roman(self) -> bool:
        return self.kind == 'roman'

    @property
    def is_arabic(self) -> bool:
        return self.kind == 'arabic'

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'kind': self.kind,
            'value': self.value,
            'magnitude': self.magnitude
        }


@dataclass
class PageClassification:
    """Result of scoring one page against the category signatures."""
    category: str
    confidence: int
    scores: Dict[str, int] = field(default_factory=dict)


@dataclass
class AnalyzedPage:
    """A page after number detection and classification."""
    physical_index: int
    text: str
    category: str = 'unknown'
    confidence: int = 0
    printed_number: Optional[PrintedPageNumber] = None

    @property
    def char_count(self) -> int:
        return len(self.text.strip())


@dataclass
class TOCEntry:
    """A single table-of-contents line."""
    title: str
    page: int
    section: Optional[str] = None
    physical_index: Optional[int] = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'section': self.section,
            'title': self.title,
            'page': self.page,
            'physical_index': self.physical_index
        }


@dataclass
class SectionInfo:
    """A numbered section heading and the physical pages it spans."""
    section_number: str
    title: str
    start_page: int
    end_page: int
    parent_section_number: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'section_number': self.section_number,
            'title': self.title,
            'start_page': self.start_page,
            'end_page': self.end_page,
            'parent_section_number': self.parent_section_number
        }


@dataclass
class DocumentStructure:
    """Everything inferred about one document before persistence."""
    pages: List[AnalyzedPage]
    content_start_page: int
    content_start_method: str
    toc_end_page: int = 0
    toc_entries: List[TOCEntry] = field(default_factory=list)
    sections: List[SectionInfo] = field(default_factory=list)

    @property
    def total_pages(self) -> int:
        return len(self.pages)

    def category_counts(self) -> Dict[str, int]:
        """Count pages per category."""
        counts: Dict[str, int] = {}
        for page in self.pages:
            counts[page.category] = counts.get(page.category, 0) + 1
        return counts


@dataclass
class SearchablePage:
    """Read-only view of a stored page used by the search engine."""
    physical_index: int
    text: str
    category: str = 'main'


@dataclass
class SearchableDocument:
    """Read-only view of a stored document used by the search engine."""
    id: str
    title: str
    content_start_page: int
    pages: List[SearchablePage] = field(default_factory=list)
    total_pages: int = 0


@dataclass
class SearchHit:
    """A page matching a query."""
    document_id: str
    document_title: str
    physical_index: int
    score: float
    snippet: str
    stage: str

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'document_id': self.document_id,
            'document_title': self.document_title,
            'physical_index': self.physical_index,
            'score': self.score,
            'snippet': self.snippet,
            'stage': self.stage
        }


@dataclass
class SearchResult:
    """Outcome of one search call."""
    query: str
    status: str  # 'found', 'no_match' or 'no_documents'
    stage: Optional[str] = None
    hits: List[SearchHit] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.status == 'found'

    @property
    def message(self) -> str:
        """Human-readable summary for the presentation layer."""
        if self.status == 'no_documents':
            return "No documents are available to search."
        if self.status == 'no_match':
            return f'No results found for "{self.query}". Try different search terms.'
        if self.stage == 'exact':
            return f'Found "{self.query}" on {len(self.hits)} page(s).'
        return f'Found {len(self.hits)} page(s) containing related terms for "{self.query}".'


@dataclass
class SearchContext:
    """
    Candidate documents for a voice session.

    Replaces a global "currently loaded document": callers pass this into
    every search and show-page call.
    """
    documents: List[SearchableDocument] = field(default_factory=list)
    active_document_id: Optional[str] = None

    @property
    def active_document(self) -> Optional[SearchableDocument]:
        if self.active_document_id is None:
            return self.documents[0] if len(self.documents) == 1 else None
        return self.get(self.active_document_id)

    def get(self, document_id: str) -> Optional[SearchableDocument]:
        for document in self.documents:
            if document.id == document_id:
                return document
        return None

    def excluding(self, document_id: str) -> 'SearchContext':
        """Context without one document (active id dropped if it was that one)."""
        active = None if self.active_document_id == document_id else self.active_document_id
        return SearchContext(
            documents=[d for d in self.documents if d.id != document_id],
            active_document_id=active
        )
