"""
Document Analyzer.

High-level orchestrator for inferring a manual's structure from its page text.
"""

import asyncio
import logging
from typing import List, Optional

from core.constants import DEFAULT_INGESTION_PARAMS
from core.models import AnalyzedPage, DocumentStructure
from ..core import (
    PageNumberDetector,
    PageClassifier,
    ContentStartResolver,
    TOCExtractor,
    SectionExtractor,
    PageOffsetTranslator,
    find_numbering_regressions,
    last_toc_page
)

logger = logging.getLogger(__name__)


class DocumentAnalyzer:
    """
    Orchestrates the complete structure inference pipeline.

    Per-page number detection and classification run concurrently in
    batches. Content-start resolution, TOC extraction and section extraction
    wait for every page (they need the whole document).
    """

    def __init__(
        self,
        detector: Optional[PageNumberDetector] = None,
        classifier: Optional[PageClassifier] = None,
        resolver: Optional[ContentStartResolver] = None,
        toc_extractor: Optional[TOCExtractor] = None,
        section_extractor: Optional[SectionExtractor] = None,
        batch_size: int = DEFAULT_INGESTION_PARAMS['batch_size']
    ):
        """
        Initialize document analyzer.

        Args:
            detector: Printed page number detector
            classifier: Page classifier
            resolver: Content start resolver
            toc_extractor: TOC line parser
            section_extractor: Section heading aggregator
            batch_size: Pages analyzed concurrently per batch
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")

        self.detector = detector or PageNumberDetector()
        self.classifier = classifier or PageClassifier()
        self.resolver = resolver or ContentStartResolver()
        self.toc_extractor = toc_extractor or TOCExtractor()
        self.section_extractor = section_extractor or SectionExtractor()
        self.batch_size = batch_size

    def analyze_page(self, text: str, physical_index: int) -> AnalyzedPage:
        """
        Detect the printed number and classify one page.

        Detection failures only drop the number signal; the page is still
        classified from its text.
        """
        try:
            printed_number = self.detector.detect(text)
        except Exception as e:
            logger.warning("Page number detection failed on page %d: %s", physical_index, e)
            printed_number = None

        classification = self.classifier.classify(text, physical_index, printed_number)
        return AnalyzedPage(
            physical_index=physical_index,
            text=text,
            category=classification.category,
            confidence=classification.confidence,
            printed_number=printed_number
        )

    async def analyze_pages(self, page_texts: List[str]) -> List[AnalyzedPage]:
        """
        Analyze all pages, batch by batch.

        A page whose analysis raises is kept as 'unknown' with confidence 0
        instead of failing the batch.
        """
        analyzed = []
        total = len(page_texts)
        for start in range(0, total, self.batch_size):
            batch = page_texts[start:start + self.batch_size]
            tasks = [
                asyncio.to_thread(self.analyze_page, text, start + offset + 1)
                for offset, text in enumerate(batch)
            ]
            results = await asyncio.gather(*tasks, return_exceptions=True)

            for offset, result in enumerate(results):
                physical_index = start + offset + 1
                if isinstance(result, Exception):
                    logger.warning("Analysis failed on page %d: %s", physical_index, result)
                    result = AnalyzedPage(physical_index=physical_index, text=batch[offset])
                analyzed.append(result)

            logger.debug("Analyzed pages %d to %d", start + 1, min(start + self.batch_size, total))
        return analyzed

    def build_structure(self, pages: List[AnalyzedPage]) -> DocumentStructure:
        """Whole-document steps, run after every page is analyzed."""
        content_start, method = self.resolver.resolve_with_method(pages)

        regressions = find_numbering_regressions(pages, content_start)
        if regressions:
            logger.info("Printed numbering goes backwards at %d page(s): %s", len(regressions), regressions[:5])

        translator = PageOffsetTranslator(content_start, total_pages=len(pages))
        toc_entries = translator.apply_to_toc(self.toc_extractor.extract_from_pages(pages))
        sections = self.section_extractor.extract(pages, content_start)

        structure = DocumentStructure(
            pages=pages,
            content_start_page=content_start,
            content_start_method=method,
            toc_end_page=last_toc_page(pages),
            toc_entries=toc_entries,
            sections=sections
        )
        logger.info(
            "Structure: %d pages, content starts at %d (%s), %d TOC entries, %d sections",
            structure.total_pages, content_start, method, len(toc_entries), len(sections)
        )
        return structure

    async def analyze(self, page_texts: List[str]) -> DocumentStructure:
        """
        Main processing entry point.

        Args:
            page_texts: Ordered per-page plain text (reading order, no gaps)

        Returns:
            DocumentStructure
        """
        pages = await self.analyze_pages(page_texts)
        return self.build_structure(pages)

    def analyze_sync(self, page_texts: List[str]) -> DocumentStructure:
        """Blocking wrapper around analyze() for scripts and tests."""
        return asyncio.run(self.analyze(page_texts))
