"""
Unit tests for manualindex.processors.document_analyzer module.
"""
import asyncio

import pytest
from manualindex.core import PageClassifier, PageNumberDetector
from manualindex.processors import DocumentAnalyzer


class FlakyClassifier(PageClassifier):
    """Classifier that fails on one physical page."""

    def __init__(self, failing_index):
        super().__init__()
        self.failing_index = failing_index

    def classify(self, text, physical_index, printed_number=None):
        if physical_index == self.failing_index:
            raise RuntimeError("classifier crashed")
        return super().classify(text, physical_index, printed_number)


class BrokenDetector(PageNumberDetector):
    """Detector that always fails."""

    def detect(self, text):
        raise RuntimeError("detector crashed")


class TestDocumentAnalyzer:
    """Tests for DocumentAnalyzer."""

    def test_scenario_structure(self, scenario_a_pages):
        """Test title, preface and main pages with content starting at physical 5."""
        structure = DocumentAnalyzer().analyze_sync(scenario_a_pages)

        categories = [page.category for page in structure.pages]
        assert categories[:4] == ['title', 'title', 'preface', 'preface']
        assert categories[4:] == ['main'] * 8

        assert structure.pages[2].printed_number.value == 'iii'
        assert structure.pages[4].printed_number.magnitude == 1
        assert structure.content_start_page == 5
        assert structure.content_start_method == 'arabic_one'
        assert structure.toc_end_page == 0

    def test_scenario_sections(self, scenario_a_pages):
        """Test numbered headings on content pages become sections."""
        structure = DocumentAnalyzer().analyze_sync(scenario_a_pages)

        numbers = [section.section_number for section in structure.sections]
        assert numbers == [f"{n}.1" for n in range(1, 9)]
        assert structure.sections[0].start_page == 5
        assert structure.sections[0].parent_section_number == "1"

    def test_pages_in_physical_order(self, scenario_a_pages):
        """Test batching keeps page order and numbering."""
        structure = DocumentAnalyzer(batch_size=3).analyze_sync(scenario_a_pages)

        assert [page.physical_index for page in structure.pages] == list(range(1, 13))
        assert structure.total_pages == 12

    def test_toc_entries_mapped_to_physical(self):
        """Test TOC entries get physical indices from the content start."""
        toc = (
            "Table of Contents\n"
            "1 General Requirements .......... 1\n"
            "2 Wiring Methods .......... 2\n"
            "3 Grounding .......... 3\n"
            "4 Overcurrent Protection .......... 4\n"
            "5 Panelboards .......... 5"
        )
        body = ("{n}.1 Topic\nAll conductors shall be sized for the circuit load "
                "and the voltage rating of the cable.\n{n}")
        pages = [toc] + [body.format(n=n) for n in range(1, 6)]

        structure = DocumentAnalyzer().analyze_sync(pages)

        assert structure.pages[0].category == 'toc'
        assert structure.toc_end_page == 1
        assert structure.content_start_page == 2
        assert [(e.page, e.physical_index) for e in structure.toc_entries] == [
            (1, 2), (2, 3), (3, 4), (4, 5), (5, 6)
        ]

    def test_failing_page_does_not_abort(self, scenario_a_pages):
        """Test a page whose classification raises becomes unknown."""
        analyzer = DocumentAnalyzer(classifier=FlakyClassifier(failing_index=7))

        structure = analyzer.analyze_sync(scenario_a_pages)

        assert structure.total_pages == 12
        failed = structure.pages[6]
        assert failed.category == 'unknown'
        assert failed.confidence == 0
        assert structure.pages[7].category == 'main'

    def test_detector_failure_keeps_classification(self, scenario_a_pages):
        """Test detection errors only drop the printed number."""
        analyzer = DocumentAnalyzer(detector=BrokenDetector())

        structure = analyzer.analyze_sync(scenario_a_pages)

        assert all(page.printed_number is None for page in structure.pages)
        assert structure.pages[4].category == 'main'
        assert structure.content_start_page == 5
        assert structure.content_start_method == 'first_main'

    def test_async_entry_point(self, scenario_a_pages):
        """Test analyze() can be awaited directly."""
        structure = asyncio.run(DocumentAnalyzer().analyze(scenario_a_pages[:4]))

        assert structure.total_pages == 4

    def test_invalid_batch_size(self):
        """Test batch size must be positive."""
        with pytest.raises(ValueError):
            DocumentAnalyzer(batch_size=0)
