"""
Text Extraction Service - Produces ordered per-page plain text from PDFs.
"""
import logging
from typing import List, Protocol, Union

from core.exceptions import ExtractionError
from utils.image_utils import open_pdf

logger = logging.getLogger(__name__)


class TextExtractor(Protocol):
    """Anything that turns a document into ordered page texts."""

    def extract_pages(self, source: Union[str, bytes]) -> List[str]:
        ...


class PDFTextExtractor:
    """PyMuPDF-based extractor. One string per physical page, in reading order."""

    def __init__(self, sort: bool = True):
        """
        Initialize extractor.

        Args:
            sort: Ask PyMuPDF to sort text blocks top-left to bottom-right
        """
        self.sort = sort

    def extract_pages(self, source: Union[str, bytes]) -> List[str]:
        """
        Extract plain text for every page.

        Args:
            source: Path to the PDF or its raw bytes

        Returns:
            List of page texts (empty pages yield empty strings)

        Raises:
            ExtractionError: If the PDF cannot be read or has no text at all
        """
        try:
            doc = open_pdf(source)
        except Exception as e:
            raise ExtractionError(f"Could not open PDF: {e}") from e

        try:
            pages = [page.get_text("text", sort=self.sort) for page in doc]
        except Exception as e:
            raise ExtractionError(f"Could not read page text: {e}") from e
        finally:
            doc.close()

        if not pages:
            raise ExtractionError("PDF has no pages")
        if not any(text.strip() for text in pages):
            raise ExtractionError("PDF has no extractable text (scanned without OCR?)")

        logger.info("Extracted text from %d pages", len(pages))
        return pages
