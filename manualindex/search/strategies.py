"""
Search strategies for the multi-stage search engine.

Each strategy is one stage in an ordered fallback chain. All strategies
share the attempt() interface and are stateless.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from core.constants import DEFAULT_SEARCH_PARAMS
from core.models import SearchableDocument, SearchablePage, SearchHit
from utils.text_utils import make_snippet, tokenize_query


class SearchStrategy(ABC):
    """
    Abstract base class for search stages.

    attempt() returns hits grouped per document, in the order the documents
    were given, each group already ranked and capped.
    """

    stage: str = ''

    def __init__(self, max_per_document: int = DEFAULT_SEARCH_PARAMS['max_per_document']):
        self.max_per_document = max_per_document

    @abstractmethod
    def attempt(
        self,
        query: str,
        documents: List[SearchableDocument]
    ) -> List[List[SearchHit]]:
        """
        Run this stage over the candidate documents.

        Args:
            query: Raw query string
            documents: Candidate documents restricted to searchable pages

        Returns:
            One ranked, capped hit list per document (possibly empty)
        """
        pass

    def merge(self, groups: List[List[SearchHit]], limit: int) -> List[SearchHit]:
        """
        Merge per-document groups into one list.

        Default: round-robin in document order, so every document with a
        hit is represented before any document gets a second slot.
        """
        merged = []
        depth = max((len(group) for group in groups), default=0)
        for rank in range(depth):
            for group in groups:
                if rank < len(group):
                    merged.append(group[rank])
                    if len(merged) >= limit:
                        return merged
        return merged

    def _hit(self, document: SearchableDocument, page: SearchablePage, score: float, term: str) -> SearchHit:
        return SearchHit(
            document_id=document.id,
            document_title=document.title,
            physical_index=page.physical_index,
            score=score,
            snippet=make_snippet(page.text, term),
            stage=self.stage
        )

    def _substring_hits(self, term: str, documents: List[SearchableDocument]) -> List[List[SearchHit]]:
        """Pages containing term, earliest physical page first."""
        needle = term.lower()
        groups = []
        for document in documents:
            pages = sorted(document.pages, key=lambda page: page.physical_index)
            hits = []
            for page in pages:
                occurrences = page.text.lower().count(needle)
                if occurrences:
                    hits.append(self._hit(document, page, float(occurrences), term))
                    if len(hits) >= self.max_per_document:
                        break
            groups.append(hits)
        return groups


class ExactPhraseStrategy(SearchStrategy):
    """Case-insensitive substring match of the whole query."""

    stage = 'exact'

    def attempt(self, query, documents):
        phrase = ' '.join(query.split())
        if not phrase:
            return [[] for _ in documents]
        return self._substring_hits(phrase, documents)


class WordOverlapStrategy(SearchStrategy):
    """Scores pages by how many distinct query tokens they contain."""

    stage = 'word'

    def __init__(
        self,
        max_per_document: int = DEFAULT_SEARCH_PARAMS['max_per_document'],
        min_token_length: int = DEFAULT_SEARCH_PARAMS['min_token_length']
    ):
        super().__init__(max_per_document)
        self.min_token_length = min_token_length

    def attempt(self, query, documents):
        tokens = tokenize_query(query, min_length=self.min_token_length)
        groups = []
        for document in documents:
            scored: List[Tuple[int, SearchablePage, str]] = []
            for page in document.pages:
                text = page.text.lower()
                matched = [token for token in tokens if token in text]
                if matched:
                    scored.append((len(matched), page, matched[0]))

            # Highest overlap first, then earliest page
            scored.sort(key=lambda item: (-item[0], item[1].physical_index))
            groups.append([
                self._hit(document, page, float(score), term)
                for score, page, term in scored[:self.max_per_document]
            ])
        return groups

    def merge(self, groups, limit):
        """Global ordering by descending score; ties keep document then page order."""
        ranked: List[Tuple[float, int, int, SearchHit]] = []
        for doc_position, group in enumerate(groups):
            for hit in group:
                ranked.append((hit.score, doc_position, hit.physical_index, hit))
        ranked.sort(key=lambda item: (-item[0], item[1], item[2]))
        return [item[3] for item in ranked[:limit]]


class PartialTermStrategy(SearchStrategy):
    """Matches a stem of the longest query token."""

    stage = 'partial'

    def __init__(
        self,
        max_per_document: int = DEFAULT_SEARCH_PARAMS['max_per_document'],
        trim_chars: int = DEFAULT_SEARCH_PARAMS['partial_trim_chars'],
        min_stem: int = DEFAULT_SEARCH_PARAMS['partial_min_stem']
    ):
        super().__init__(max_per_document)
        self.trim_chars = trim_chars
        self.min_stem = min_stem

    def stem(self, query: str) -> Optional[str]:
        """
        Longest token truncated by up to trim_chars trailing characters.

        Returns None when the longest token is shorter than min_stem.
        """
        tokens = tokenize_query(query)
        if not tokens:
            return None
        longest = max(tokens, key=len)
        if len(longest) < self.min_stem:
            return None
        keep = max(self.min_stem, len(longest) - self.trim_chars)
        return longest[:keep]

    def attempt(self, query, documents):
        stem = self.stem(query)
        if stem is None:
            return [[] for _ in documents]
        return self._substring_hits(stem, documents)


def default_strategies(
    max_per_document: int = DEFAULT_SEARCH_PARAMS['max_per_document']
) -> List[SearchStrategy]:
    """Exact phrase -> word overlap -> partial term."""
    return [
        ExactPhraseStrategy(max_per_document),
        WordOverlapStrategy(max_per_document),
        PartialTermStrategy(max_per_document),
    ]


STRATEGY_TYPES: Dict[str, type] = {
    'exact': ExactPhraseStrategy,
    'word': WordOverlapStrategy,
    'partial': PartialTermStrategy,
}
