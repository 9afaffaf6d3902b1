"""Configuration module for the property search service."""

from .search_config import (
    SEARCH_CONFIG,
    SearchSettings,
    LanguageModelConfig,
    GeocodingConfig,
    StorageConfig,
    DatabaseConfig,
    PaginationConfig,
    get_search_settings,
)

__all__ = [
    'SEARCH_CONFIG',
    'SearchSettings',
    'LanguageModelConfig',
    'GeocodingConfig',
    'StorageConfig',
    'DatabaseConfig',
    'PaginationConfig',
    'get_search_settings',
]
