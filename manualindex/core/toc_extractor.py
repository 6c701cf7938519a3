"""
TOC Extraction Component.

Parses the text of table-of-contents pages into (section, title, page) entries.
"""

import re
from typing import List, Optional

from core.constants import TOC_LIMITS
from core.models import AnalyzedPage, TOCEntry


LEADER = r'(?:\s*[.·…]{2,}\s*|\s+)'

# Line shapes from most to least specific: (name, regex)
# Groups: section (optional), title, page
TOC_LINE_PATTERNS = [
    ('numeric_section', re.compile(
        r'^(?P<section>\d+(?:\.\d+)*)\.?\s+(?P<title>.+?)' + LEADER + r'(?P<page>\d{1,4})$'
    )),
    ('chapter', re.compile(
        r'^(?P<section>chapter\s+(?:\d+|[ivxlcdm]+)\b)\s*[:.\-–]?\s*(?P<title>.+?)' + LEADER + r'(?P<page>\d{1,4})$',
        re.IGNORECASE
    )),
    ('section_letter', re.compile(
        r'^(?P<section>section\s+[A-Z]\b)\s*[:.\-–]?\s*(?P<title>.+?)' + LEADER + r'(?P<page>\d{1,4})$',
        re.IGNORECASE
    )),
    ('dotted', re.compile(
        r'^(?P<title>.+?)\s*[.·…]{2,}\s*(?P<page>\d{1,4})$'
    )),
    ('generic', re.compile(
        r'^(?P<title>.+?)\s+(?P<page>\d{1,4})$'
    )),
]


class TOCExtractor:
    """
    Extracts structured entries from table-of-contents text.

    Each line is tried against TOC_LINE_PATTERNS in order; the first match
    wins. Lines matching nothing are skipped without aborting extraction.
    """

    def __init__(
        self,
        min_line_chars: int = TOC_LIMITS['min_line_chars'],
        min_title_chars: int = TOC_LIMITS['min_title_chars'],
        max_page: int = TOC_LIMITS['max_page']
    ):
        self.min_line_chars = min_line_chars
        self.min_title_chars = min_title_chars
        self.max_page = max_page

    def extract(self, toc_text: str) -> List[TOCEntry]:
        """
        Parse TOC text line by line.

        Args:
            toc_text: Concatenated text of all TOC pages

        Returns:
            Entries in line order
        """
        entries = []
        for raw_line in (toc_text or '').splitlines():
            line = ' '.join(raw_line.split())
            if len(line) < self.min_line_chars:
                continue
            entry = self.parse_line(line)
            if entry is not None:
                entries.append(entry)
        return entries

    def extract_from_pages(self, pages: List[AnalyzedPage]) -> List[TOCEntry]:
        """Extract entries from the pages classified as toc."""
        toc_pages = sorted(
            (page for page in pages if page.category == 'toc'),
            key=lambda page: page.physical_index
        )
        return self.extract('\n'.join(page.text for page in toc_pages))

    def parse_line(self, line: str) -> Optional[TOCEntry]:
        """Parse a single normalized line, or return None."""
        for _, pattern in TOC_LINE_PATTERNS:
            match = pattern.match(line)
            if not match:
                continue
            # First matching shape wins, even if its entry is then rejected
            return self._build_entry(match)
        return None

    def _build_entry(self, match: re.Match) -> Optional[TOCEntry]:
        page = int(match.group('page'))
        if page <= 0 or page >= self.max_page:
            return None

        title = self._clean_title(match.group('title'))
        if len(title) < self.min_title_chars:
            return None

        section = match.groupdict().get('section')
        if section:
            section = ' '.join(section.split())
            if section[0].isalpha():
                section = section[0].upper() + section[1:]
        return TOCEntry(title=title, page=page, section=section or None)

    @staticmethod
    def _clean_title(title: str) -> str:
        """Strip leader dots and separators left on the title."""
        return title.strip().rstrip('.·… ').strip(' :-–')


def last_toc_page(pages: List[AnalyzedPage]) -> int:
    """Physical index of the last TOC page, or 0 when there is none."""
    toc_indices = [page.physical_index for page in pages if page.category == 'toc']
    return max(toc_indices) if toc_indices else 0
