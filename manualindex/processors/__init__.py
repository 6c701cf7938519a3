"""
High-level orchestrators for manual processing.
"""

from .document_analyzer import DocumentAnalyzer

__all__ = [
    'DocumentAnalyzer',
]
