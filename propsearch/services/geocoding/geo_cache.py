"""
Geocode cache - keeps resolved coordinates for a week.

Entries are immutable and replaced wholesale on refresh, so concurrent
requests racing on the same key only ever write identical values.
"""

import json
import logging
import time
from dataclasses import asdict, dataclass
from typing import Callable, Dict, Optional, Protocol

logger = logging.getLogger(__name__)

GEO_CACHE_TTL_SECONDS = 7 * 24 * 60 * 60


@dataclass(frozen=True)
class GeoCacheEntry:
    """
    A geocoding result.

    Attributes:
        lat: Latitude of the first result
        lng: Longitude of the first result
        formatted_address: Geocoder's formatted address
        expires_at: Unix time after which the entry is stale
        locality: City name from the address components, if any
        region: Two-letter state code from the address components, if any
    """
    lat: float
    lng: float
    formatted_address: Optional[str]
    expires_at: float
    locality: Optional[str] = None
    region: Optional[str] = None

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class GeoCache(Protocol):
    """Key -> GeoCacheEntry store with time-based expiry"""

    async def get(self, key: str) -> Optional[GeoCacheEntry]:
        ...

    async def set(self, key: str, entry: GeoCacheEntry, ttl_seconds: int) -> None:
        ...


class InMemoryGeoCache:
    """
    Process-local geocode cache.

    Stale entries are never swept; a lookup past expires_at is a miss and
    the next successful geocode overwrites the entry.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self.clock = clock
        self._entries: Dict[str, GeoCacheEntry] = {}

    async def get(self, key: str) -> Optional[GeoCacheEntry]:
        entry = self._entries.get(key)
        if entry is None or entry.is_expired(self.clock()):
            return None
        return entry

    async def set(self, key: str, entry: GeoCacheEntry, ttl_seconds: int) -> None:
        self._entries[key] = entry

    def __len__(self) -> int:
        return len(self._entries)


class RedisGeoCache:
    """Geocode cache shared across workers through Redis"""

    KEY_PREFIX = "geocode:"

    def __init__(self, redis_client, clock: Callable[[], float] = time.time):
        self.redis = redis_client
        self.clock = clock

    async def get(self, key: str) -> Optional[GeoCacheEntry]:
        try:
            cached = await self.redis.get(self.KEY_PREFIX + key)
        except Exception as e:
            # A cache outage degrades to a fresh geocode
            logger.warning(f"Geocode cache read failed for '{key}': {e}")
            return None
        if not cached:
            return None

        try:
            entry = GeoCacheEntry(**json.loads(cached))
            expired = entry.is_expired(self.clock())
        except (ValueError, TypeError) as e:
            logger.warning(f"Discarding unreadable geocode cache value for '{key}': {e}")
            return None
        return None if expired else entry

    async def set(self, key: str, entry: GeoCacheEntry, ttl_seconds: int) -> None:
        try:
            await self.redis.set(self.KEY_PREFIX + key, json.dumps(asdict(entry)), ex=ttl_seconds)
        except Exception as e:
            logger.warning(f"Geocode cache write failed for '{key}': {e}")
