"""
Insurance Dashboard Analyzer - Configuration

Configuration using Pydantic Settings.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalyzerSettings(BaseSettings):
    """Column classification and suggestion configuration."""

    model_config = SettingsConfigDict(env_prefix="ANALYZER_")

    # Column classification
    type_inference_threshold: float = Field(
        default=0.8,
        description="Share of non-null values that must parse for date/number types"
    )
    sample_size: int = Field(
        default=5,
        description="Number of sample values kept per column"
    )
    key_min_rows: int = Field(
        default=10,
        description="Row count that must be exceeded before uniqueness marks a key"
    )

    # Suggestions
    max_filters: int = Field(default=5, description="Maximum suggested filters")
    card_count: int = Field(default=4, description="Exact number of suggested cards")
    max_charts: int = Field(default=4, description="Maximum suggested charts")
    dropdown_max_values: int = Field(
        default=20,
        description="Distinct values up to which a dropdown filter is offered"
    )
    enum_max_values: int = Field(
        default=20,
        description="Distinct values up to which a text column is chartable"
    )
    chart_top_values: int = Field(
        default=10,
        description="Bars/slices kept per chart"
    )

    # Display
    currency_symbol: str = Field(default="₪", description="Currency prefix")
    unknown_label: str = Field(
        default="לא ידוע",
        description="Label for empty values in chart tallies"
    )


class CacheSettings(BaseSettings):
    """Caching configuration."""

    model_config = SettingsConfigDict(env_prefix="CACHE_")

    enabled: bool = Field(default=True, description="Enable caching")
    max_size: int = Field(default=128, description="LRU cache max size")
    ttl_seconds: int = Field(default=600, description="Cache TTL in seconds")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Application
    app_name: str = "Insurance Dashboard Analyzer"
    app_version: str = "1.0.0"
    debug: bool = Field(default=False, description="Debug mode")

    # Logging
    log_level: str = Field(default="INFO", description="Console log level")
    log_file: Optional[str] = Field(
        default=None,
        description="Rotating log file path, e.g. logs/analyzer_{time:YYYY-MM-DD}.log"
    )

    # Project setup
    row_fetch_limit: int = Field(
        default=5000,
        description="Maximum rows fetched for a setup analysis"
    )

    # Nested settings
    analyzer: AnalyzerSettings = Field(default_factory=AnalyzerSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
