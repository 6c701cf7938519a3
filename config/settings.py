"""
Configuration management using Pydantic Settings.

Environment variables (case-insensitive):
- DATABASE_URL: SQLAlchemy database URL
- LOG_LEVEL: Logging level for CLI runs
- ROMAN_MAX_VALUE / ARABIC_MAX_VALUE: Printed page number ceilings
- INGESTION_BATCH_SIZE: Pages classified concurrently per batch
- SEARCH_MAX_RESULTS / SEARCH_MAX_PER_DOCUMENT: Search result caps
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Database Configuration
    database_url: str = Field(default="sqlite:///manual_store.db")

    # Logging
    log_level: str = Field(default="INFO")

    # Page Number Detection
    roman_max_value: int = Field(default=30)
    arabic_max_value: int = Field(default=2000)

    # Page Classification
    blank_min_chars: int = Field(default=50)
    confidence_floor: int = Field(default=30)
    late_page_floor: int = Field(default=10)
    late_page_confidence: int = Field(default=50)
    title_max_index: int = Field(default=3)
    preface_max_index: int = Field(default=20)

    # Content Start
    substantial_content_chars: int = Field(default=500)

    # Ingestion
    ingestion_batch_size: int = Field(default=5)
    render_dpi: int = Field(default=150)

    # Search
    search_max_results: int = Field(default=5)
    search_max_per_document: int = Field(default=3)

    def get_detector_config(self) -> dict:
        """Get page number detector limits as dictionary."""
        return {
            'roman_max_value': self.roman_max_value,
            'arabic_max_value': self.arabic_max_value,
        }

    def get_classifier_config(self) -> dict:
        """Get classifier thresholds as dictionary."""
        return {
            'blank_min_chars': self.blank_min_chars,
            'confidence_floor': self.confidence_floor,
            'late_page_floor': self.late_page_floor,
            'late_page_confidence': self.late_page_confidence,
            'title_max_index': self.title_max_index,
            'preface_max_index': self.preface_max_index,
        }

    def get_search_config(self) -> dict:
        """Get search engine caps as dictionary."""
        return {
            'max_results': self.search_max_results,
            'max_per_document': self.search_max_per_document,
        }


# Global settings instance
settings = Settings()
