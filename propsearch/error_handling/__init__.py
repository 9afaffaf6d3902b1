"""
Error handling module for the property search service.

Provides the pipeline error taxonomy and timeout-bounded collaborator calls.
"""

from .error_handler import ErrorHandler, TimeoutConfig
from .errors import (
    SearchError,
    ExtractionParseError,
    GeocodingFailure,
    DownstreamSearchError,
    SigningFailure,
)

__all__ = [
    'ErrorHandler',
    'TimeoutConfig',
    'SearchError',
    'ExtractionParseError',
    'GeocodingFailure',
    'DownstreamSearchError',
    'SigningFailure',
]
