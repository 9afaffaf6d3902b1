"""Geocoding services"""

from .geo_cache import GEO_CACHE_TTL_SECONDS, GeoCache, GeoCacheEntry, InMemoryGeoCache, RedisGeoCache
from .google_geocoder import GoogleGeocoder
from .location_resolver import Geocoder, LocationResolver, strip_filler
from .states import AMBIGUOUS_PLACE_NAMES, US_STATES, is_ambiguous_place, normalize_state

__all__ = [
    "GEO_CACHE_TTL_SECONDS",
    "GeoCache",
    "GeoCacheEntry",
    "InMemoryGeoCache",
    "RedisGeoCache",
    "GoogleGeocoder",
    "Geocoder",
    "LocationResolver",
    "strip_filler",
    "AMBIGUOUS_PLACE_NAMES",
    "US_STATES",
    "is_ambiguous_place",
    "normalize_state",
]
