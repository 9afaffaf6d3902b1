"""
Error taxonomy for the search pipeline.

Only GeocodingFailure and DownstreamSearchError ever reach a caller; the other
types are recovered inside the stage that raises them.
"""

from typing import Optional


class SearchError(Exception):
    """Base class for search pipeline errors."""


class ExtractionParseError(SearchError):
    """Language model output could not be turned into a filter record."""

    def __init__(self, message: str, raw_text: Optional[str] = None):
        super().__init__(message)
        self.raw_text = raw_text


class GeocodingFailure(SearchError):
    """A required location could not be geocoded.

    Attributes:
        location: The location string that failed to resolve
        status: Status reported by the geocoder, when there was one
    """

    def __init__(self, location: str, status: Optional[str] = None, message: Optional[str] = None):
        self.location = location
        self.status = status
        super().__init__(message or f"Geocoding failed for '{location}'")


class DownstreamSearchError(SearchError):
    """The search execution backend reported a failure."""


class SigningFailure(SearchError):
    """A signed URL could not be minted for a stored resource."""

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        super().__init__(message or f"Could not sign '{path}'")
