"""
Text utilities for page text and search queries.
"""
import re
from typing import List, Optional

from core.constants import DEFAULT_SEARCH_PARAMS


def normalize_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces."""
    if not text:
        return ""
    return re.sub(r'\s+', ' ', text).strip()


def tokenize_query(query: str, min_length: int = 1) -> List[str]:
    """
    Split a query into lowercase whitespace tokens.

    Args:
        query: Raw query string
        min_length: Minimum token length to keep

    Returns:
        Distinct tokens in first-seen order
    """
    tokens = []
    for token in (query or '').lower().split():
        token = token.strip('.,;:!?"\'()[]{}')
        if len(token) >= min_length and token not in tokens:
            tokens.append(token)
    return tokens


def find_term(text: str, term: str) -> int:
    """Case-insensitive position of term in text, or -1."""
    if not term:
        return -1
    return text.lower().find(term.lower())


def make_snippet(
    text: str,
    term: Optional[str],
    before: int = DEFAULT_SEARCH_PARAMS['snippet_before'],
    after: int = DEFAULT_SEARCH_PARAMS['snippet_after']
) -> str:
    """
    Cut a window of text around the first occurrence of term.

    Args:
        text: Page text
        term: Matched term (falls back to the start of the page if absent)
        before: Characters kept before the match
        after: Characters kept after the match start

    Returns:
        Whitespace-normalized snippet wrapped in ellipses where truncated
    """
    if not text:
        return ""

    position = find_term(text, term) if term else -1
    if position < 0:
        position = 0

    start = max(0, position - before)
    end = min(len(text), position + after)
    snippet = normalize_whitespace(text[start:end])

    if start > 0:
        snippet = '...' + snippet
    if end < len(text):
        snippet = snippet + '...'
    return snippet
