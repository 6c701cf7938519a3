"""
Unit tests for services.ingestion_service module.
"""
import asyncio

import pytest
from sqlalchemy.exc import SQLAlchemyError

from core.exceptions import ExtractionError, IngestionError
from data.db_models import Document, Page, Section
from data.repositories import PageRepository
from services.ingestion_service import IngestionReport, IngestionService


class FakeExtractor:
    """Extractor returning canned page texts."""

    def __init__(self, pages=None, error=None):
        self.pages = pages
        self.error = error

    def extract_pages(self, source):
        if self.error:
            raise ExtractionError(self.error)
        return self.pages


class TestIngestionReport:
    """Tests for IngestionReport."""

    def test_page_offset(self):
        """Test offset derives from content start."""
        report = IngestionReport(
            document_id="d", title="t", total_pages=12, content_start_page=5,
            content_start_method='arabic_one', toc_end_page=0, toc_entry_count=0, section_count=8
        )

        assert report.page_offset == -4
        assert report.to_dict()['page_offset'] == -4


class TestIngestionService:
    """Tests for IngestionService."""

    def test_ingest_pages(self, test_db_session, scenario_a_pages):
        """Test the whole structure is persisted in one go."""
        service = IngestionService(test_db_session, extractor=FakeExtractor(scenario_a_pages))

        report = asyncio.run(service.ingest_source(b"%PDF", filename="acme.pdf", category="electrical"))

        assert report.title == "acme"
        assert report.total_pages == 12
        assert report.content_start_page == 5
        assert report.category_counts == {'title': 2, 'preface': 2, 'main': 8}
        assert report.section_count == 8

        doc = test_db_session.get(Document, report.document_id)
        assert doc.category == "electrical"
        assert doc.content_start_page == 5
        assert len(doc.pages) == 12
        assert test_db_session.query(Section).count() == 8

        first_main = PageRepository(test_db_session).get_page(doc.id, 5)
        assert first_main.category == 'main'
        assert first_main.printed_number_value == '1'

    def test_explicit_title(self, test_db_session, scenario_a_pages):
        """Test a given title overrides the filename."""
        service = IngestionService(test_db_session, extractor=FakeExtractor(scenario_a_pages))

        report = asyncio.run(service.ingest_pages(scenario_a_pages, filename="x.pdf", title="Acme Code"))

        assert report.title == "Acme Code"

    def test_extraction_failure(self, test_db_session):
        """Test extraction errors report the extraction stage and store nothing."""
        service = IngestionService(test_db_session, extractor=FakeExtractor(error="corrupt file"))

        with pytest.raises(IngestionError) as exc_info:
            asyncio.run(service.ingest_source(b"junk", filename="bad.pdf"))

        assert exc_info.value.stage == 'extraction'
        assert "corrupt file" in exc_info.value.message
        assert test_db_session.query(Document).count() == 0

    def test_no_text(self, test_db_session):
        """Test pages without any text are an extraction failure."""
        service = IngestionService(test_db_session, extractor=FakeExtractor(["", "  \n"]))

        with pytest.raises(IngestionError) as exc_info:
            asyncio.run(service.ingest_source(b"%PDF", filename="scan.pdf"))

        assert exc_info.value.stage == 'extraction'

    def test_persistence_failure_leaves_no_document(self, test_db_session, scenario_a_pages, monkeypatch):
        """Test a failed commit rolls back the document and its pages."""
        service = IngestionService(test_db_session, extractor=FakeExtractor(scenario_a_pages))

        def failing_commit():
            raise SQLAlchemyError("disk full")

        monkeypatch.setattr(test_db_session, "commit", failing_commit)

        with pytest.raises(IngestionError) as exc_info:
            asyncio.run(service.ingest_source(b"%PDF", filename="acme.pdf"))

        assert exc_info.value.stage == 'persistence'
        assert test_db_session.query(Document).count() == 0
        assert test_db_session.query(Page).count() == 0

    def test_ingest_file(self, test_db_session, sample_pdf_path):
        """Test ingesting a real PDF records its path for rendering."""
        service = IngestionService(test_db_session)

        report = asyncio.run(service.ingest_file(sample_pdf_path))

        assert report.total_pages == 12
        assert report.title == "manual"
        assert report.content_start_page == 5

        doc = test_db_session.get(Document, report.document_id)
        assert doc.filename == "manual.pdf"
        assert doc.file_path.endswith("manual.pdf")

    def test_ingest_missing_file(self, test_db_session, temp_dir):
        """Test a missing file is an extraction failure."""
        service = IngestionService(test_db_session)

        with pytest.raises(IngestionError) as exc_info:
            asyncio.run(service.ingest_file(str(temp_dir / "missing.pdf")))

        assert exc_info.value.stage == 'extraction'
