"""Tests for configuration module."""

from propsearch.config import (
    SEARCH_CONFIG,
    DatabaseConfig,
    GeocodingConfig,
    LanguageModelConfig,
    PaginationConfig,
    SearchSettings,
    StorageConfig,
    get_search_settings,
)


def test_search_config_exists():
    """Test that SEARCH_CONFIG dictionary is properly defined."""
    assert isinstance(SEARCH_CONFIG, dict)
    for section in ("language_model", "geocoding", "storage", "database", "pagination"):
        assert section in SEARCH_CONFIG


def test_get_search_settings():
    """Test that get_search_settings returns proper SearchSettings object."""
    settings = get_search_settings()

    assert isinstance(settings, SearchSettings)
    assert isinstance(settings.language_model, LanguageModelConfig)
    assert isinstance(settings.geocoding, GeocodingConfig)
    assert isinstance(settings.storage, StorageConfig)
    assert isinstance(settings.database, DatabaseConfig)
    assert isinstance(settings.pagination, PaginationConfig)


def test_search_settings_defaults():
    """Test that SearchSettings fills in nested defaults."""
    settings = SearchSettings()

    assert settings.language_model.timeout_seconds == 10.0
    assert settings.geocoding.timeout_seconds == 10.0
    assert settings.geocoding.cache_ttl_seconds == 7 * 24 * 60 * 60
    assert settings.geocoding.cache_backend == "memory"
    assert settings.storage.signed_url_ttl_seconds == 3600
    assert settings.pagination.property_page_size == 9
    assert settings.pagination.lease_page_size == 20


def test_search_settings_with_custom_values():
    """Test that SearchSettings accepts custom nested configs."""
    settings = SearchSettings(
        geocoding=GeocodingConfig(api_key="key", timeout_seconds=2.5, cache_backend="redis"),
        pagination=PaginationConfig(property_page_size=12),
    )

    assert settings.geocoding.api_key == "key"
    assert settings.geocoding.timeout_seconds == 2.5
    assert settings.geocoding.cache_backend == "redis"
    assert settings.pagination.property_page_size == 12
    assert settings.pagination.lease_page_size == 20
    assert isinstance(settings.database, DatabaseConfig)
