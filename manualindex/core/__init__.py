"""
Core structure inference components for manuals.

Leaves first: printed page number detection, page classification,
content-start resolution, TOC and section extraction, page offset mapping.
"""

from .page_numbers import PageNumberDetector, roman_to_int
from .page_classifier import PageClassifier
from .content_start import ContentStartResolver, find_numbering_regressions
from .toc_extractor import TOCExtractor, last_toc_page
from .section_extractor import SectionExtractor, parent_of
from .page_offset import PageOffsetTranslator, calculate_offset

__all__ = [
    'PageNumberDetector',
    'roman_to_int',
    'PageClassifier',
    'ContentStartResolver',
    'find_numbering_regressions',
    'TOCExtractor',
    'last_toc_page',
    'SectionExtractor',
    'parent_of',
    'PageOffsetTranslator',
    'calculate_offset',
]
