"""
Page Offset Component.

Maps between physical page indices (position in the PDF) and the printed
page numbers a reader sees and speaks.
"""

from typing import List, Optional

from core.exceptions import PageOutOfRangeError
from core.models import TOCEntry


def calculate_offset(content_start_page: int) -> int:
    """
    Offset added to a physical index to get the printed page number.

    Content starting at physical page 5 means physical 5 is printed page 1,
    so the offset is -4.
    """
    if content_start_page < 1:
        raise ValueError(f"content_start_page must be >= 1, got {content_start_page}")
    return -(content_start_page - 1)


class PageOffsetTranslator:
    """
    Linear, invertible map between physical and printed page space.

    Every place a page number crosses between storage (physical) and the
    user (printed) goes through this class.
    """

    def __init__(self, content_start_page: int, total_pages: Optional[int] = None):
        """
        Initialize translator.

        Args:
            content_start_page: Physical index where main content begins
            total_pages: Optional page count used for range checks
        """
        self.content_start_page = content_start_page
        self.offset = calculate_offset(content_start_page)
        self.total_pages = total_pages

    def to_printed(self, physical_index: int) -> int:
        """Physical index -> printed page number."""
        return physical_index + self.offset

    def to_physical(self, printed_number: int) -> int:
        """Printed page number -> physical index."""
        return printed_number - self.offset

    def to_physical_checked(self, printed_number: int) -> int:
        """
        Printed page number -> physical index, validated against total_pages.

        Raises:
            PageOutOfRangeError: If the result falls outside 1..total_pages
        """
        physical_index = self.to_physical(printed_number)
        upper = self.total_pages if self.total_pages is not None else physical_index
        if physical_index < 1 or physical_index > upper:
            raise PageOutOfRangeError(printed_number, physical_index, self.total_pages or 0)
        return physical_index

    def apply_to_toc(self, entries: List[TOCEntry]) -> List[TOCEntry]:
        """
        Set physical_index on TOC entries from their printed page.

        Entries whose physical index would fall outside the document keep
        physical_index = None.
        """
        for entry in entries:
            physical_index = self.to_physical(entry.page)
            in_range = physical_index >= 1 and (
                self.total_pages is None or physical_index <= self.total_pages
            )
            entry.physical_index = physical_index if in_range else None
        return entries
