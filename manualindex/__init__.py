"""
ManualIndex - Technical Manual Structure Inference and Retrieval Library.

Infers cover/TOC/preface/main/appendix structure and printed page numbering
from per-page text, and retrieves pages for natural-language queries.
"""

from .processors import DocumentAnalyzer
from .search import MultiStageSearchEngine
from .core import PageOffsetTranslator, calculate_offset

__all__ = [
    'DocumentAnalyzer',
    'MultiStageSearchEngine',
    'PageOffsetTranslator',
    'calculate_offset',
]
