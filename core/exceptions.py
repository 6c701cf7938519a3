"""
Exception types raised by ingestion and retrieval.
"""


class ManualIndexError(Exception):
    """Base class for all manual indexing errors."""


class ExtractionError(ManualIndexError):
    """Text extraction failed or produced no pages."""


class IngestionError(ManualIndexError):
    """Ingestion failed at a named stage ('extraction' or 'persistence')."""

    def __init__(self, stage: str, message: str):
        self.stage = stage
        self.message = message
        super().__init__(f"Ingestion failed during {stage}: {message}")


class DocumentNotFoundError(ManualIndexError):
    """Requested document does not exist."""

    def __init__(self, document_id: str):
        self.document_id = document_id
        super().__init__(f"Document not found: {document_id}")


class PageOutOfRangeError(ManualIndexError):
    """A printed page number does not map to a physical page of the document."""

    def __init__(self, printed_page: int, physical_index: int, total_pages: int):
        self.printed_page = printed_page
        self.physical_index = physical_index
        self.total_pages = total_pages
        super().__init__(
            f"Page {printed_page} maps to physical page {physical_index}, "
            f"outside 1..{total_pages}"
        )
