"""
Unit tests for manualindex.core.page_numbers module.
"""
import pytest
from manualindex.core.page_numbers import PageNumberDetector, roman_to_int


class TestRomanToInt:
    """Tests for roman_to_int function."""

    @pytest.mark.parametrize("token,expected", [
        ("i", 1),
        ("iv", 4),
        ("ix", 9),
        ("xiv", 14),
        ("XXIX", 29),
        ("mcmxc", 1990),
    ])
    def test_valid_numerals(self, token, expected):
        """Test standard numerals convert."""
        assert roman_to_int(token) == expected

    def test_non_canonical_accepted(self):
        """Test 'iiii' is summed rather than rejected."""
        assert roman_to_int("iiii") == 4

    def test_invalid_characters(self):
        """Test tokens with non-numeral characters return None."""
        assert roman_to_int("abc") is None
        assert roman_to_int("") is None


class TestPageNumberDetector:
    """Tests for PageNumberDetector class."""

    @pytest.fixture
    def detector(self):
        return PageNumberDetector()

    def test_bare_arabic_bottom_line(self, detector):
        """Test a bare number on the last line."""
        number = detector.detect("Grounding\nBody text about bonding.\n17")

        assert number.kind == 'arabic'
        assert number.magnitude == 17
        assert number.value == "17"

    def test_bare_roman_line(self, detector):
        """Test a bare Roman numeral line."""
        number = detector.detect("Preface\nSome introductory words.\nxii")

        assert number.is_roman
        assert number.magnitude == 12
        assert number.value == "xii"

    def test_uppercase_roman_line_lowercased(self, detector):
        """Test bare uppercase numerals are accepted and lowercased."""
        number = detector.detect("Foreword\nThanks to our readers.\nIV")

        assert number.value == "iv"
        assert number.magnitude == 4

    def test_wrapped_number(self, detector):
        """Test numbers wrapped in dashes."""
        number = detector.detect("Wiring Methods\nRun cable in conduit.\n- 12 -")

        assert number.magnitude == 12

    def test_prefixed_number(self, detector):
        """Test 'Page N' footers."""
        number = detector.detect("Header\nbody text\nPage 7 of 120")

        assert number.is_arabic
        assert number.magnitude == 7

    def test_number_at_end_of_flat_text(self, detector):
        """Test a trailing number on single-line page text."""
        number = detector.detect("Grounding conductors shall be bonded to the enclosure 23")

        assert number.magnitude == 23

    def test_roman_takes_precedence(self, detector):
        """Test Roman patterns are tried before Arabic ones."""
        number = detector.detect("iv\nSome text\n12")

        assert number.is_roman
        assert number.magnitude == 4

    def test_year_rejected(self, detector):
        """Test numbers at or above 2000 are not page numbers."""
        assert detector.detect("Copyright\n2023") is None

    def test_large_roman_rejected(self, detector):
        """Test Roman magnitudes above 30 are never returned."""
        assert detector.detect("Appendix notes\nmore text\nxl") is None

    def test_inline_uppercase_letters_ignored(self, detector):
        """Test unit letters and type labels are not Roman page numbers."""
        assert detector.detect("The supply is rated 240 V") is None

    def test_zero_rejected(self, detector):
        """Test zero is not a page number."""
        assert detector.detect("Heading\ntext\n0") is None

    def test_empty_text(self, detector):
        """Test empty and whitespace-only pages."""
        assert detector.detect("") is None
        assert detector.detect("   \n  ") is None

    def test_no_number(self, detector):
        """Test prose without page numbers."""
        assert detector.detect("Read this manual before\ninstalling the equipment.") is None

    def test_custom_ceiling(self):
        """Test the Roman ceiling is configurable."""
        detector = PageNumberDetector(roman_max_value=50)

        number = detector.detect("Appendix notes\nmore text\nxl")

        assert number.magnitude == 40
