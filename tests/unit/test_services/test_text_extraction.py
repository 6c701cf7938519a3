"""
Unit tests for services.text_extraction module.
"""
import fitz
import pytest

from core.exceptions import ExtractionError
from services.text_extraction import PDFTextExtractor


def build_pdf(texts):
    doc = fitz.open()
    for text in texts:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text, fontsize=11)
    data = doc.tobytes()
    doc.close()
    return data


class TestPDFTextExtractor:
    """Tests for PDFTextExtractor."""

    def test_one_string_per_page(self):
        """Test page order and count are preserved, empty pages included."""
        pdf = build_pdf(["Grounding and bonding", "", "Wiring methods"])

        pages = PDFTextExtractor().extract_pages(pdf)

        assert len(pages) == 3
        assert "Grounding and bonding" in pages[0]
        assert pages[1].strip() == ""
        assert "Wiring methods" in pages[2]

    def test_from_path(self, sample_pdf_path):
        """Test extraction from a file on disk."""
        pages = PDFTextExtractor().extract_pages(sample_pdf_path)

        assert len(pages) == 12
        assert "Preface" in pages[2]

    def test_invalid_bytes(self):
        """Test unreadable input raises ExtractionError."""
        with pytest.raises(ExtractionError):
            PDFTextExtractor().extract_pages(b"this is not a pdf")

    def test_missing_file(self, temp_dir):
        """Test missing files raise ExtractionError."""
        with pytest.raises(ExtractionError):
            PDFTextExtractor().extract_pages(str(temp_dir / "missing.pdf"))

    def test_no_text(self):
        """Test image-only PDFs raise ExtractionError."""
        with pytest.raises(ExtractionError, match="no extractable text"):
            PDFTextExtractor().extract_pages(build_pdf(["", ""]))
