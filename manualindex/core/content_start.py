"""
Content Start Resolution.

Decides which physical page is the first page of substantive content.
"""

import logging
from typing import Callable, List, Optional, Tuple

from core.constants import FRONT_MATTER_CATEGORIES, SUBSTANTIAL_CONTENT_CHARS
from core.models import AnalyzedPage

logger = logging.getLogger(__name__)


class ContentStartResolver:
    """
    Layered fallback over all classified pages, strongest signal first:

    1. a page printed with Arabic "1"
    2. the first Arabic-numbered page after the last Roman-numbered page
    3. the first page classified as main
    4. the first substantial page that is not front matter
    5. physical page 1
    """

    def __init__(self, substantial_content_chars: int = SUBSTANTIAL_CONTENT_CHARS):
        self.substantial_content_chars = substantial_content_chars
        self._rules: List[Tuple[str, Callable[[List[AnalyzedPage]], Optional[int]]]] = [
            ('arabic_one', self._from_arabic_one),
            ('roman_to_arabic', self._from_numbering_transition),
            ('first_main', self._from_first_main),
            ('substantial_content', self._from_substantial_content),
        ]

    def resolve(self, pages: List[AnalyzedPage]) -> int:
        """Return the physical index where content starts."""
        return self.resolve_with_method(pages)[0]

    def resolve_with_method(self, pages: List[AnalyzedPage]) -> Tuple[int, str]:
        """
        Return the content start page and the name of the rule that found it.

        Args:
            pages: Analyzed pages (any order; sorted by physical index here)

        Returns:
            (physical_index, method)
        """
        ordered = sorted(pages, key=lambda page: page.physical_index)
        for method, rule in self._rules:
            index = rule(ordered)
            if index is not None:
                logger.debug("Content starts at page %d (%s)", index, method)
                return index, method

        logger.debug("No content start signal, defaulting to page 1")
        return 1, 'default'

    @staticmethod
    def _from_arabic_one(pages: List[AnalyzedPage]) -> Optional[int]:
        for page in pages:
            printed = page.printed_number
            if printed is not None and printed.is_arabic and printed.magnitude == 1:
                return page.physical_index
        return None

    @staticmethod
    def _from_numbering_transition(pages: List[AnalyzedPage]) -> Optional[int]:
        last_roman = None
        for page in pages:
            if page.printed_number is not None and page.printed_number.is_roman:
                last_roman = page.physical_index
        if last_roman is None:
            return None

        for page in pages:
            if page.physical_index <= last_roman:
                continue
            if page.printed_number is not None and page.printed_number.is_arabic:
                return page.physical_index
        return None

    @staticmethod
    def _from_first_main(pages: List[AnalyzedPage]) -> Optional[int]:
        for page in pages:
            if page.category == 'main':
                return page.physical_index
        return None

    def _from_substantial_content(self, pages: List[AnalyzedPage]) -> Optional[int]:
        for page in pages:
            if page.category in FRONT_MATTER_CATEGORIES:
                continue
            if page.char_count > self.substantial_content_chars:
                return page.physical_index
        return None


def find_numbering_regressions(
    pages: List[AnalyzedPage],
    content_start_page: int
) -> List[Tuple[int, int]]:
    """
    Find places where printed Arabic numbers decrease after the content start.

    Monotonic numbering is a sanity signal only; callers log the result.

    Returns:
        List of (physical_index, printed_magnitude) for pages that went backwards
    """
    regressions = []
    previous = None
    for page in sorted(pages, key=lambda p: p.physical_index):
        if page.physical_index < content_start_page:
            continue
        printed = page.printed_number
        if printed is None or not printed.is_arabic:
            continue
        if previous is not None and printed.magnitude < previous:
            regressions.append((page.physical_index, printed.magnitude))
        previous = printed.magnitude
    return regressions
