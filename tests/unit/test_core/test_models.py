"""
Unit tests for core.models module.
"""
import pytest
from core.models import (
    AnalyzedPage,
    DocumentStructure,
    PrintedPageNumber,
    SearchableDocument,
    SearchContext,
    SearchHit,
    SearchResult,
    TOCEntry,
)


def make_hit(doc_id="doc-1", page=5, stage="exact"):
    return SearchHit(
        document_id=doc_id,
        document_title="Manual",
        physical_index=page,
        score=1.0,
        snippet="...",
        stage=stage
    )


class TestPrintedPageNumber:
    """Tests for PrintedPageNumber dataclass."""

    def test_kind_flags(self):
        """Test is_roman / is_arabic follow kind."""
        roman = PrintedPageNumber(kind='roman', value='iv', magnitude=4)
        arabic = PrintedPageNumber(kind='arabic', value='12', magnitude=12)

        assert roman.is_roman and not roman.is_arabic
        assert arabic.is_arabic and not arabic.is_roman

    def test_is_immutable(self):
        """Test printed numbers are frozen."""
        number = PrintedPageNumber(kind='arabic', value='1', magnitude=1)

        with pytest.raises(Exception):
            number.magnitude = 2

    def test_to_dict(self):
        """Test conversion to dictionary."""
        number = PrintedPageNumber(kind='roman', value='xii', magnitude=12)

        assert number.to_dict() == {'kind': 'roman', 'value': 'xii', 'magnitude': 12}


class TestAnalyzedPage:
    """Tests for AnalyzedPage dataclass."""

    def test_defaults(self):
        """Test unclassified pages default to unknown."""
        page = AnalyzedPage(physical_index=3, text="text")

        assert page.category == 'unknown'
        assert page.confidence == 0
        assert page.printed_number is None

    def test_char_count_ignores_surrounding_whitespace(self):
        """Test char_count counts trimmed text."""
        page = AnalyzedPage(physical_index=1, text="  \n abc \n ")

        assert page.char_count == 3


class TestDocumentStructure:
    """Tests for DocumentStructure dataclass."""

    def test_category_counts(self):
        """Test pages are counted per category."""
        structure = DocumentStructure(
            pages=[
                AnalyzedPage(1, "a", category='title'),
                AnalyzedPage(2, "b", category='main'),
                AnalyzedPage(3, "c", category='main'),
            ],
            content_start_page=2,
            content_start_method='first_main'
        )

        assert structure.total_pages == 3
        assert structure.category_counts() == {'title': 1, 'main': 2}
        assert structure.toc_entries == []
        assert structure.toc_end_page == 0


class TestTOCEntry:
    """Tests for TOCEntry dataclass."""

    def test_section_optional(self):
        """Test section and physical index default to None."""
        entry = TOCEntry(title="Index", page=212)

        assert entry.section is None
        assert entry.physical_index is None
        assert entry.to_dict()['page'] == 212


class TestSearchResult:
    """Tests for SearchResult messages."""

    def test_no_documents_message(self):
        """Test message when nothing can be searched."""
        result = SearchResult(query="breaker", status='no_documents')

        assert not result.found
        assert result.message == "No documents are available to search."

    def test_no_match_message(self):
        """Test no-match message includes the query and a hint."""
        result = SearchResult(query="flux capacitor", status='no_match')

        assert not result.found
        assert '"flux capacitor"' in result.message
        assert "Try different search terms" in result.message

    def test_exact_message(self):
        """Test exact stage message counts pages."""
        result = SearchResult(query="240V", status='found', stage='exact', hits=[make_hit()])

        assert result.found
        assert result.message == 'Found "240V" on 1 page(s).'

    def test_related_terms_message(self):
        """Test non-exact stages say the hits are related terms."""
        result = SearchResult(
            query="breaker panel",
            status='found',
            stage='word',
            hits=[make_hit(stage='word'), make_hit(page=6, stage='word')]
        )

        assert "related terms" in result.message
        assert "2 page(s)" in result.message


class TestSearchContext:
    """Tests for SearchContext."""

    def test_single_document_is_active_by_default(self):
        """Test a lone document is the active one."""
        doc = SearchableDocument(id="a", title="A", content_start_page=1)
        context = SearchContext(documents=[doc])

        assert context.active_document is doc

    def test_no_implicit_active_with_many_documents(self):
        """Test no active document is guessed among several."""
        context = SearchContext(documents=[
            SearchableDocument(id="a", title="A", content_start_page=1),
            SearchableDocument(id="b", title="B", content_start_page=1),
        ])

        assert context.active_document is None

    def test_explicit_active_document(self):
        """Test active_document_id selects a document."""
        b = SearchableDocument(id="b", title="B", content_start_page=1)
        context = SearchContext(
            documents=[SearchableDocument(id="a", title="A", content_start_page=1), b],
            active_document_id="b"
        )

        assert context.active_document is b
        assert context.get("missing") is None

    def test_excluding(self):
        """Test excluding drops the document and clears it as active."""
        context = SearchContext(
            documents=[
                SearchableDocument(id="a", title="A", content_start_page=1),
                SearchableDocument(id="b", title="B", content_start_page=1),
            ],
            active_document_id="a"
        )

        remaining = context.excluding("a")

        assert [d.id for d in remaining.documents] == ["b"]
        assert remaining.active_document_id is None
        assert len(context.documents) == 2
