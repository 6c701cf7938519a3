"""
Printed Page Number Detection.

Finds the page number a reader would see printed on a page (Roman front
matter numbering or Arabic body numbering).
"""

import re
from typing import List, Optional, Tuple

from core.constants import PAGE_NUMBER_LIMITS, ROMAN_NUMERAL_VALUES
from core.models import PrintedPageNumber


ROMAN_TOKEN = r'[ivxlcdm]{1,%d}'
ARABIC_TOKEN = r'\d{1,4}'

# Positional pattern shapes, most specific first. Each applies to a region
# of the page: 'line' patterns to individual edge lines, 'text' patterns to
# the joined head/tail of the page.
PATTERN_SHAPES = [
    ('bottom_line', r'^\s*({token})\s*$'),
    ('top_line', r'^\s*({token})\s*$'),
    ('wrapped', r'^\s*[-–—\[\(]\s*({token})\s*[-–—\]\)]\s*$'),
    ('prefixed', r'\b(?:page|pg\.?)\s*({token})\b'),
    ('text_end', r'(?:^|\s)({token})\s*$'),
    ('text_start', r'^\s*({token})\s'),
]

INLINE_REGIONS = ('text_end', 'text_start')


def roman_to_int(token: str) -> Optional[int]:
    """
    Convert a Roman numeral to an integer.

    Scans right-to-left, subtracting a digit whose value is below the largest
    value seen so far. Returns None if any character is not a numeral.
    """
    if not token:
        return None

    total = 0
    max_seen = 0
    for char in reversed(token.lower()):
        value = ROMAN_NUMERAL_VALUES.get(char)
        if value is None:
            return None
        if value < max_seen:
            total -= value
        else:
            total += value
            max_seen = value
    return total


class PageNumberDetector:
    """
    Detects printed page numbers near the top or bottom of a page.

    Roman patterns are tried before Arabic ones. The first pattern that
    yields an in-range number wins; conflicting numbers are not reconciled.
    """

    def __init__(
        self,
        roman_max_value: int = PAGE_NUMBER_LIMITS['roman_max_value'],
        arabic_max_value: int = PAGE_NUMBER_LIMITS['arabic_max_value'],
        roman_max_length: int = PAGE_NUMBER_LIMITS['roman_max_length'],
        edge_lines: int = PAGE_NUMBER_LIMITS['edge_lines']
    ):
        self.roman_max_value = roman_max_value
        self.arabic_max_value = arabic_max_value
        self.edge_lines = edge_lines

        roman = ROMAN_TOKEN % roman_max_length
        self._patterns: List[Tuple[str, str, re.Pattern]] = []
        for kind, token in (('roman', roman), ('arabic', ARABIC_TOKEN)):
            for region, shape in PATTERN_SHAPES:
                # Inline Roman tokens must be lower case: "240 V" or "Type I" are not page numbers
                flags = 0 if kind == 'roman' and region in INLINE_REGIONS else re.IGNORECASE
                self._patterns.append(
                    (kind, region, re.compile(shape.format(token=token), flags))
                )

    def detect(self, text: str) -> Optional[PrintedPageNumber]:
        """
        Detect the printed page number on a page.

        Args:
            text: Raw page text

        Returns:
            PrintedPageNumber or None
        """
        if not text or not text.strip():
            return None

        lines = [line.strip() for line in text.splitlines() if line.strip()]
        top = lines[:self.edge_lines]
        bottom = lines[-self.edge_lines:]
        regions = {
            'top_line': top,
            'bottom_line': list(reversed(bottom)),
            'wrapped': list(reversed(bottom)) + top,
            'prefixed': list(reversed(bottom)) + top,
            'text_end': [' '.join(bottom)],
            'text_start': [' '.join(top)],
        }

        for kind, region, pattern in self._patterns:
            for candidate in regions[region]:
                match = pattern.search(candidate)
                if not match:
                    continue
                number = self._to_page_number(kind, match.group(1))
                if number is not None:
                    return number
        return None

    def _to_page_number(self, kind: str, token: str) -> Optional[PrintedPageNumber]:
        """Validate a matched token against the magnitude bounds."""
        if kind == 'roman':
            magnitude = roman_to_int(token)
            if magnitude is None or not 0 < magnitude <= self.roman_max_value:
                return None
            return PrintedPageNumber(kind='roman', value=token.lower(), magnitude=magnitude)

        magnitude = int(token)
        if not 0 < magnitude < self.arabic_max_value:
            return None
        return PrintedPageNumber(kind='arabic', value=token, magnitude=magnitude)
