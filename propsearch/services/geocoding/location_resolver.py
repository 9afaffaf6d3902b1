"""
Location resolver - turns the location fields of extracted filters into
either a radius origin (lat/lng) or a single administrative region.
"""

import logging
import re
import time
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

from ...error_handling import ErrorHandler, GeocodingFailure
from ...models import ExtractedFilters
from .geo_cache import GEO_CACHE_TTL_SECONDS, GeoCache, GeoCacheEntry, InMemoryGeoCache
from .states import is_ambiguous_place, normalize_state

logger = logging.getLogger(__name__)

_FILLER_RE = re.compile(
    r"^\s*(?:outside(?:\s+of)?|near(?:by)?|around|within|close\s+to|next\s+to|of)\b\s*",
    re.IGNORECASE,
)


class Geocoder(Protocol):
    async def geocode(self, address: str) -> Dict[str, Any]:
        ...


def strip_filler(location: str) -> str:
    """Remove leading directional words: "near downtown Austin" -> "downtown Austin"."""
    cleaned = location.strip()
    while True:
        stripped = _FILLER_RE.sub("", cleaned, count=1)
        if stripped == cleaned:
            break
        cleaned = stripped
    return cleaned.strip(" ,") or location.strip()


def _admin_components(result: Dict[str, Any]) -> Tuple[Optional[str], Optional[str]]:
    """(locality long name, administrative_area_level_1 short name) of a geocode result."""
    locality = None
    region = None
    for component in result.get("address_components") or []:
        types = component.get("types") or []
        if "locality" in types and locality is None:
            locality = component.get("long_name")
        elif "administrative_area_level_1" in types and region is None:
            short_name = component.get("short_name") or component.get("long_name")
            region = normalize_state(short_name) or short_name
    return locality, region


class LocationResolver:
    """
    Resolves radius origins and administrative regions.

    Owns its geocode cache; pass a pre-seeded cache or a fake clock to
    control expiry in tests.
    """

    def __init__(
        self,
        geocoder: Geocoder,
        cache: Optional[GeoCache] = None,
        clock: Callable[[], float] = time.time,
        ttl_seconds: int = GEO_CACHE_TTL_SECONDS,
        timeout_seconds: float = 10.0,
        error_handler: Optional[ErrorHandler] = None
    ):
        """
        Initialize resolver.

        Args:
            geocoder: Geocoding collaborator
            cache: Geocode cache (default: in-memory cache on the same clock)
            clock: Time source for cache expiry
            ttl_seconds: Lifetime of a cached geocode
            timeout_seconds: Bound for one geocoding call
            error_handler: Timeout runner (default: a fresh ErrorHandler)
        """
        self.geocoder = geocoder
        self.clock = clock
        self.cache = cache if cache is not None else InMemoryGeoCache(clock=clock)
        self.ttl_seconds = ttl_seconds
        self.timeout_seconds = timeout_seconds
        self.error_handler = error_handler or ErrorHandler(default_timeout_seconds=timeout_seconds)

    async def geocode(self, location: str) -> GeoCacheEntry:
        """
        Geocode a location, through the cache.

        Args:
            location: Place name or address

        Returns:
            Coordinates and admin components of the first result

        Raises:
            GeocodingFailure: Non-OK status, no results, timeout or transport error
        """
        key = location.strip().lower()
        cached = await self.cache.get(key)
        if cached is not None:
            logger.debug(f"Geocode cache hit: '{key}'")
            return cached

        body = await self.error_handler.run_with_timeout(
            self.geocoder.geocode,
            location,
            timeout_seconds=self.timeout_seconds,
            failure=lambda e: GeocodingFailure(location, message=f"Geocoding failed for '{location}': {e}"),
        )

        status = body.get("status") if isinstance(body, dict) else None
        results = (body.get("results") or []) if isinstance(body, dict) else []
        if status != "OK" or not results:
            logger.warning(f"Geocoding returned no usable result for '{location}' (status={status})")
            raise GeocodingFailure(location, status=status)

        first = results[0]
        point = (first.get("geometry") or {}).get("location") or {}
        if point.get("lat") is None or point.get("lng") is None:
            raise GeocodingFailure(location, status=status, message=f"Geocoding result for '{location}' has no coordinates")

        locality, region = _admin_components(first)
        entry = GeoCacheEntry(
            lat=float(point["lat"]),
            lng=float(point["lng"]),
            formatted_address=first.get("formatted_address"),
            expires_at=self.clock() + self.ttl_seconds,
            locality=locality,
            region=region,
        )
        await self.cache.set(key, entry, self.ttl_seconds)
        return entry

    async def resolve(self, filters: ExtractedFilters) -> ExtractedFilters:
        """
        Resolve the location fields of a filter record.

        Radius search (radius plus a location) geocodes the cleaned location
        to an origin and clears city/state. Otherwise the state is normalized
        to its two-letter code, city/state names that are also the other kind
        ("Washington") are disambiguated through the geocoder in favor of the
        state, and when both survive the city is kept. A pair such as
        "Washington, PA" is geocoded together and keeps its unambiguous half.

        Args:
            filters: Filters from the extractor

        Returns:
            A new filter record; the input is not modified

        Raises:
            GeocodingFailure: A required location could not be geocoded
        """
        location_text = filters.location_text
        radius = filters.radius_meters
        city = filters.city
        state = filters.state

        # "within 5 miles of Austin" can come back with the place in city
        if radius is not None and location_text is None and city is not None:
            location_text = ", ".join(part for part in (city, state) if part)

        if radius is not None and location_text is not None:
            cleaned = strip_filler(location_text)
            entry = await self.geocode(cleaned)
            logger.info(f"Radius origin for '{cleaned}': ({entry.lat}, {entry.lng}) r={radius}m")
            return filters.model_copy(update={
                "location_text": cleaned,
                "origin_lat": entry.lat,
                "origin_lng": entry.lng,
                "city": None,
                "state": None,
            })

        if radius is not None:
            logger.info("Dropping radius with no location to measure from")
            radius = None

        ambiguous = next((name for name in (city, state) if is_ambiguous_place(name)), None)
        if ambiguous is None:
            state = normalize_state(state) if state is not None else None
        elif city is not None and state is not None:
            city, state = await self._resolve_pair(city, state)
            logger.info(f"Ambiguous pair resolved to city={city} state={state}")
        else:
            entry = await self.geocode(ambiguous)
            city, state = self._pick_admin(entry, city, state)
            logger.info(f"Ambiguous place '{ambiguous}' resolved to city={city} state={state}")

        if city is not None and state is not None:
            state = None

        return filters.model_copy(update={
            "location_text": location_text,
            "radius_meters": radius,
            "city": city,
            "state": state,
        })

    async def _resolve_pair(self, city: str, state: str) -> Tuple[Optional[str], Optional[str]]:
        """
        Resolve a city/state pair where at least one name is ambiguous.

        The pair is geocoded together ("Washington, PA"), so the place must
        exist. When only one of the two names is ambiguous the other one
        identifies the place and is kept.
        """
        entry = await self.geocode(f"{city}, {state}")
        city_ambiguous = is_ambiguous_place(city)
        state_ambiguous = is_ambiguous_place(state)

        if city_ambiguous and not state_ambiguous:
            code = normalize_state(state) or entry.region
            if code:
                return None, code
            return city, None
        if state_ambiguous and not city_ambiguous:
            return city, None
        return self._pick_admin(entry, city, state)

    @staticmethod
    def _pick_admin(
        entry: GeoCacheEntry,
        city: Optional[str],
        state: Optional[str]
    ) -> Tuple[Optional[str], Optional[str]]:
        """State from the geocode result, else its locality, else the input with the state normalized."""
        if entry.region:
            return None, entry.region
        if entry.locality:
            return entry.locality, None
        return city, normalize_state(state) if state is not None else None
