"""
Query-time retrieval for ingested manuals.

Strategy Pattern: each search stage implements SearchStrategy.attempt(),
and MultiStageSearchEngine evaluates them in order.
"""

from .strategies import (
    SearchStrategy,
    ExactPhraseStrategy,
    WordOverlapStrategy,
    PartialTermStrategy,
    default_strategies
)
from .engine import MultiStageSearchEngine

__all__ = [
    'SearchStrategy',
    'ExactPhraseStrategy',
    'WordOverlapStrategy',
    'PartialTermStrategy',
    'default_strategies',
    'MultiStageSearchEngine',
]
