"""
Page Classifier Module

Classifies pages of a technical manual into structural categories:
title, toc, preface, main, appendix, glossary, blank (or unknown).

Scoring is table-driven: each category owns an ordered list of
(pattern, weight) signatures from core.constants, plus category-specific
gates and bonuses. This is a heuristic-only implementation.
"""
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from core.constants import (
    CATEGORY_SIGNATURES,
    CLASSIFIER_BONUSES,
    CLASSIFIER_THRESHOLDS,
    PAGE_CATEGORIES,
    TECHNICAL_TERMS,
)
from core.models import PageClassification, PrintedPageNumber


DOTTED_LEADER_PATTERN = re.compile(r'\.{4,}\s*\d+')
NUMBERED_LINE_PATTERN = re.compile(r'\s\d{1,4}\s*$')
SHORT_NUMBER_PATTERN = re.compile(r'^\d{1,3}$')
WORD_PATTERN = re.compile(r'[a-z]+')


@dataclass
class Signature:
    """A compiled trigger and the points it adds."""
    pattern: re.Pattern
    weight: int

    def score(self, text: str) -> int:
        return self.weight if self.pattern.search(text) else 0


def compile_signatures(table: Dict[str, List[Tuple[str, int]]]) -> Dict[str, List[Signature]]:
    """Compile a category -> [(regex, weight)] table."""
    return {
        category: [
            Signature(re.compile(pattern, re.IGNORECASE | re.MULTILINE), weight)
            for pattern, weight in entries
        ]
        for category, entries in table.items()
    }


class PageClassifier:
    """
    Scores a page against every category signature set and returns the best.

    Classification is a pure function of (text, physical index, printed
    number), so pages can be classified independently and in parallel.
    """

    def __init__(
        self,
        signatures: Optional[Dict[str, List[Tuple[str, int]]]] = None,
        technical_terms: Optional[List[str]] = None,
        blank_min_chars: int = CLASSIFIER_THRESHOLDS['blank_min_chars'],
        confidence_floor: int = CLASSIFIER_THRESHOLDS['confidence_floor'],
        late_page_floor: int = CLASSIFIER_THRESHOLDS['late_page_floor'],
        late_page_confidence: int = CLASSIFIER_THRESHOLDS['late_page_confidence'],
        title_max_index: int = CLASSIFIER_THRESHOLDS['title_max_index'],
        preface_max_index: int = CLASSIFIER_THRESHOLDS['preface_max_index']
    ):
        """
        Initialize page classifier.

        Args:
            signatures: Category -> [(regex, weight)] table (default: CATEGORY_SIGNATURES)
            technical_terms: Domain vocabulary for the main-content density bonus
            blank_min_chars: Pages with fewer trimmed characters are blank
            confidence_floor: Best score below this falls back to unknown
            late_page_floor: Pages after this index default to main instead of unknown
            late_page_confidence: Fixed confidence for that default
            title_max_index: Title signatures only apply up to this index
            preface_max_index: Preface signatures only apply up to this index
        """
        self.signatures = compile_signatures(signatures or CATEGORY_SIGNATURES)
        self.technical_terms = set(term.lower() for term in (technical_terms or TECHNICAL_TERMS))
        self.blank_min_chars = blank_min_chars
        self.confidence_floor = confidence_floor
        self.late_page_floor = late_page_floor
        self.late_page_confidence = late_page_confidence
        self.title_max_index = title_max_index
        self.preface_max_index = preface_max_index

        self._gates: Dict[str, Callable[[str, int], bool]] = {
            'title': self._title_gate,
            'preface': lambda text, index: index <= self.preface_max_index,
        }
        self._bonuses: Dict[str, Callable[[str, Optional[PrintedPageNumber]], int]] = {
            'toc': self._toc_bonus,
            'preface': self._preface_bonus,
            'main': self._main_bonus,
        }

    def classify(
        self,
        text: str,
        physical_index: int,
        printed_number: Optional[PrintedPageNumber] = None
    ) -> PageClassification:
        """
        Classify a single page.

        Args:
            text: Raw page text
            physical_index: 1-based page position in the document
            printed_number: Detected printed number, if available

        Returns:
            PageClassification with category and confidence (0-100)
        """
        stripped = (text or '').strip()
        if len(stripped) < self.blank_min_chars:
            return PageClassification(category='blank', confidence=100)

        scores = self.score_categories(stripped, physical_index, printed_number)

        best_category = None
        best_score = 0
        for category in PAGE_CATEGORIES:
            score = scores.get(category, 0)
            if score > best_score:
                best_category, best_score = category, score

        if best_category is None or best_score < self.confidence_floor:
            if physical_index > self.late_page_floor and \
                    len(stripped) >= CLASSIFIER_THRESHOLDS['late_page_min_chars']:
                return PageClassification(
                    category='main',
                    confidence=self.late_page_confidence,
                    scores=scores
                )
            return PageClassification(category='unknown', confidence=min(best_score, 100), scores=scores)

        return PageClassification(category=best_category, confidence=min(best_score, 100), scores=scores)

    def score_categories(
        self,
        text: str,
        physical_index: int,
        printed_number: Optional[PrintedPageNumber] = None
    ) -> Dict[str, int]:
        """Additive score for every gated-in category."""
        scores = {}
        for category, signatures in self.signatures.items():
            gate = self._gates.get(category)
            if gate is not None and not gate(text, physical_index):
                continue

            score = sum(signature.score(text) for signature in signatures)
            bonus = self._bonuses.get(category)
            if bonus is not None:
                score += bonus(text, printed_number)
            scores[category] = score
        return scores

    def _title_gate(self, text: str, index: int) -> bool:
        return index <= self.title_max_index and len(text) <= CLASSIFIER_THRESHOLDS['title_max_chars']

    @staticmethod
    def _toc_bonus(text: str, printed_number: Optional[PrintedPageNumber]) -> int:
        bonus = 0
        tokens = text.split()
        if tokens:
            numeric = sum(1 for token in tokens if SHORT_NUMBER_PATTERN.match(token.strip('.')))
            if numeric / len(tokens) >= CLASSIFIER_THRESHOLDS['toc_number_density']:
                bonus += CLASSIFIER_BONUSES['toc_number_density']

        if DOTTED_LEADER_PATTERN.search(text):
            bonus += CLASSIFIER_BONUSES['toc_dotted_leaders']

        numbered_lines = sum(1 for line in text.splitlines() if NUMBERED_LINE_PATTERN.search(line))
        if numbered_lines >= CLASSIFIER_THRESHOLDS['toc_numbered_lines']:
            bonus += CLASSIFIER_BONUSES['toc_numbered_lines']
        return bonus

    @staticmethod
    def _preface_bonus(text: str, printed_number: Optional[PrintedPageNumber]) -> int:
        if printed_number is not None and printed_number.is_roman:
            return CLASSIFIER_BONUSES['printed_roman_preface']
        return 0

    def _main_bonus(self, text: str, printed_number: Optional[PrintedPageNumber]) -> int:
        bonus = 0
        words = WORD_PATTERN.findall(text.lower())
        if words:
            hits = sum(1 for word in words if word in self.technical_terms)
            density = hits / len(words) * 100
            bonus += min(
                CLASSIFIER_BONUSES['main_term_density_cap'],
                int(density * CLASSIFIER_BONUSES['main_term_density_factor'])
            )

        if len(text) > CLASSIFIER_THRESHOLDS['main_large_page_chars']:
            bonus += CLASSIFIER_BONUSES['main_large_page']

        if printed_number is not None and printed_number.is_arabic:
            bonus += CLASSIFIER_BONUSES['printed_arabic_main']
        return bonus
