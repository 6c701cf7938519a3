"""
Unit tests for config.settings module.
"""
from config.settings import Settings
from manualindex.core import PageClassifier, PageNumberDetector
from manualindex.search import MultiStageSearchEngine


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        """Test defaults match the built-in limits."""
        monkeypatch.delenv("SEARCH_MAX_RESULTS", raising=False)
        settings = Settings(_env_file=None)

        assert settings.roman_max_value == 30
        assert settings.arabic_max_value == 2000
        assert settings.ingestion_batch_size == 5
        assert settings.search_max_results == 5
        assert settings.search_max_per_document == 3

    def test_environment_override(self, monkeypatch):
        """Test environment variables are read case-insensitively."""
        monkeypatch.setenv("search_max_results", "8")
        monkeypatch.setenv("ROMAN_MAX_VALUE", "40")

        settings = Settings(_env_file=None)

        assert settings.search_max_results == 8
        assert settings.roman_max_value == 40

    def test_configs_build_components(self):
        """Test config dictionaries are valid constructor arguments."""
        settings = Settings(_env_file=None)

        detector = PageNumberDetector(**settings.get_detector_config())
        classifier = PageClassifier(**settings.get_classifier_config())
        engine = MultiStageSearchEngine(**settings.get_search_config())

        assert detector.roman_max_value == settings.roman_max_value
        assert classifier.blank_min_chars == settings.blank_min_chars
        assert engine.max_results == settings.search_max_results
