"""
Multi-Stage Search Engine.

Runs an ordered chain of search strategies over candidate documents and
stops at the first stage that finds anything.
"""

import logging
from typing import Iterable, List, Optional

from core.constants import DEFAULT_SEARCH_PARAMS, SEARCHABLE_CATEGORIES
from core.models import SearchableDocument, SearchResult
from .strategies import STRATEGY_TYPES, SearchStrategy, default_strategies

logger = logging.getLogger(__name__)


class MultiStageSearchEngine:
    """
    Stateless cascading page search.

    Only pages in SEARCHABLE_CATEGORIES take part; front matter is never
    returned. The result carries the stage that produced it so callers can
    phrase exact and related-term hits differently.
    """

    def __init__(
        self,
        strategies: Optional[List[SearchStrategy]] = None,
        max_results: int = DEFAULT_SEARCH_PARAMS['max_results'],
        max_per_document: int = DEFAULT_SEARCH_PARAMS['max_per_document'],
        searchable_categories: Iterable[str] = SEARCHABLE_CATEGORIES
    ):
        """
        Initialize search engine.

        Args:
            strategies: Ordered stages (default: exact -> word -> partial)
            max_results: Cap on hits across all documents
            max_per_document: Cap on hits from any single document
            searchable_categories: Page categories eligible for retrieval
        """
        self.strategies = strategies or default_strategies(max_per_document)
        self.max_results = max_results
        self.max_per_document = max_per_document
        self.searchable_categories = tuple(searchable_categories)

    @classmethod
    def from_stage_names(cls, stages: List[str], **kwargs) -> 'MultiStageSearchEngine':
        """
        Build an engine with a custom stage order, e.g. ['exact', 'partial'].

        Raises:
            ValueError: If a stage name is unknown
        """
        max_per_document = kwargs.get('max_per_document', DEFAULT_SEARCH_PARAMS['max_per_document'])
        strategies = []
        for name in stages:
            strategy_type = STRATEGY_TYPES.get(name)
            if strategy_type is None:
                raise ValueError(
                    f"Unsupported search stage: '{name}'. "
                    f"Supported stages: {', '.join(STRATEGY_TYPES)}"
                )
            strategies.append(strategy_type(max_per_document))
        return cls(strategies=strategies, **kwargs)

    def search(self, query: str, documents: List[SearchableDocument]) -> SearchResult:
        """
        Search candidate documents for a query.

        Args:
            query: Natural-language query or phrase
            documents: Candidate documents (document order breaks ties)

        Returns:
            SearchResult with status 'found', 'no_match' or 'no_documents'
        """
        if not documents:
            return SearchResult(query=query, status='no_documents')

        candidates = [self._restrict(document) for document in documents]

        for strategy in self.strategies:
            groups = strategy.attempt(query, candidates)
            if not any(groups):
                logger.debug("Stage '%s' found nothing for %r", strategy.stage, query)
                continue

            hits = strategy.merge(groups, self.max_results)
            logger.info("Stage '%s' found %d hit(s) for %r", strategy.stage, len(hits), query)
            return SearchResult(query=query, status='found', stage=strategy.stage, hits=hits)

        return SearchResult(query=query, status='no_match')

    def _restrict(self, document: SearchableDocument) -> SearchableDocument:
        """Copy of document holding only searchable pages."""
        return SearchableDocument(
            id=document.id,
            title=document.title,
            content_start_page=document.content_start_page,
            total_pages=document.total_pages,
            pages=[page for page in document.pages if page.category in self.searchable_categories]
        )
