"""
Google Geocoding API client - turns a place name or address into the raw
Geocoding API response.
"""

import logging
from typing import Any, Dict, Optional

import aiohttp

from ...config import GeocodingConfig, get_search_settings

logger = logging.getLogger(__name__)


class GoogleGeocoder:
    """
    Thin async client over the Geocoding API.

    Returns the decoded response body untouched ({status, results: [...]});
    interpreting the status is left to the resolver.
    """

    BASE_URL = "https://maps.googleapis.com/maps/api/geocode/json"

    def __init__(self, config: Optional[GeocodingConfig] = None):
        self.config = config or get_search_settings().geocoding
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the HTTP session"""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def _ensure_session(self):
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()

    async def geocode(self, address: str) -> Dict[str, Any]:
        """
        Geocode an address.

        Args:
            address: Free-form place name or street address

        Returns:
            Geocoding API response body

        Raises:
            RuntimeError: If no API key is configured or the HTTP call fails
        """
        if not self.config.api_key:
            raise RuntimeError("Geocoding not configured. Set GOOGLE_MAPS_SERVER_KEY in .env")

        await self._ensure_session()

        params = {"address": address, "key": self.config.api_key}
        async with self._session.get(self.BASE_URL, params=params) as response:
            if response.status != 200:
                raise RuntimeError(f"Geocoding request failed ({response.status}): {await response.text()}")
            body = await response.json()

        logger.debug(f"Geocoded '{address}': status={body.get('status')} results={len(body.get('results') or [])}")
        return body
