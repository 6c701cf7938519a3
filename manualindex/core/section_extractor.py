"""
Section Extraction Component.

Finds numbered section headings on content pages and aggregates them into
sections spanning physical page ranges.
"""

import re
from typing import Dict, List, Optional, Tuple

from core.constants import SECTION_HEADING_LINES, SECTION_HEADING_PATTERN
from core.models import AnalyzedPage, SectionInfo


class SectionExtractor:
    """Builds a flat list of sections from per-page headings."""

    def __init__(self, heading_lines: int = SECTION_HEADING_LINES):
        self.heading_lines = heading_lines
        self._pattern = re.compile(SECTION_HEADING_PATTERN, re.IGNORECASE)

    def find_heading(self, text: str) -> Optional[Tuple[str, str]]:
        """
        Find a section heading in the first lines of a page.

        Returns:
            (section_number, title) or None
        """
        lines = [line.strip() for line in (text or '').splitlines() if line.strip()]
        for line in lines[:self.heading_lines]:
            match = self._pattern.match(line)
            if match:
                title = match.group(2).strip()
                if title:
                    return match.group(1), title
        return None

    def extract(
        self,
        pages: List[AnalyzedPage],
        content_start_page: int = 1
    ) -> List[SectionInfo]:
        """
        Aggregate headings from content pages into sections.

        A section starts on the first page carrying its heading and ends on
        the last page carrying the same section number.

        Args:
            pages: Analyzed pages
            content_start_page: Pages before this index are ignored

        Returns:
            Sections in order of first appearance
        """
        sections: Dict[str, SectionInfo] = {}
        for page in sorted(pages, key=lambda p: p.physical_index):
            if page.physical_index < content_start_page:
                continue
            heading = self.find_heading(page.text)
            if heading is None:
                continue

            number, title = heading
            if number not in sections:
                sections[number] = SectionInfo(
                    section_number=number,
                    title=title,
                    start_page=page.physical_index,
                    end_page=page.physical_index,
                    parent_section_number=parent_of(number)
                )
            else:
                sections[number].end_page = page.physical_index

        return list(sections.values())


def parent_of(section_number: str) -> Optional[str]:
    """'4.2.1' -> '4.2'; top-level numbers have no parent."""
    if '.' not in section_number:
        return None
    return section_number.rsplit('.', 1)[0]
