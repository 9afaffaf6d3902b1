"""
Signed URL minting for documents and images kept in Cloud Storage.
"""

import asyncio
import json
import logging
import re
from datetime import timedelta
from typing import Optional
from urllib.parse import unquote

from google.cloud import storage

from ...config import StorageConfig, get_search_settings
from ...error_handling import ErrorHandler, SigningFailure

logger = logging.getLogger(__name__)

_UPLOADS_RE = re.compile(r"/uploads/([^?]+)")


def clean_storage_path(raw: Optional[str]) -> str:
    """
    Turn a stored path or a full storage URL into an object name.

    "https://storage.googleapis.com/bucket/uploads/a.pdf?X-Goog-..." and
    "uploads%2Fa.pdf" both give "uploads/a.pdf".

    Raises:
        ValueError: Missing path, or a URL without an /uploads/ segment
    """
    if raw is None or not raw.strip() or raw.strip() == "undefined":
        raise ValueError("Missing or invalid file path")

    decoded = unquote(raw.strip())
    if decoded.startswith("http"):
        match = _UPLOADS_RE.search(decoded)
        if not match:
            raise ValueError("Invalid URL format (missing /uploads/ segment)")
        decoded = f"uploads/{match.group(1)}"

    if "undefined" in decoded:
        raise ValueError("Invalid clean path")
    return decoded


class GCSUrlSigner:
    """
    Mints V4 read URLs for objects in one bucket.

    The storage client is synchronous, so calls run in a worker thread.
    """

    def __init__(
        self,
        config: Optional[StorageConfig] = None,
        bucket=None,
        timeout_seconds: float = 5.0,
        error_handler: Optional[ErrorHandler] = None
    ):
        """
        Initialize signer.

        Args:
            config: Storage settings (default: from environment)
            bucket: Pre-built bucket handle; built from config on first use otherwise
            timeout_seconds: Bound for minting one URL
            error_handler: Timeout runner (default: a fresh ErrorHandler)
        """
        self.config = config or get_search_settings().storage
        self._bucket = bucket
        self.timeout_seconds = timeout_seconds
        self.error_handler = error_handler or ErrorHandler(default_timeout_seconds=timeout_seconds)

    @property
    def bucket(self):
        if self._bucket is None:
            if not self.config.bucket_name:
                raise RuntimeError("Storage not configured. Set GOOGLE_BUCKET_DOCUMENT in .env")
            if self.config.credentials_json:
                client = storage.Client.from_service_account_info(json.loads(self.config.credentials_json))
            else:
                client = storage.Client()
            self._bucket = client.bucket(self.config.bucket_name)
        return self._bucket

    def _sign_blocking(self, object_name: str) -> str:
        blob = self.bucket.blob(object_name)
        return blob.generate_signed_url(
            version="v4",
            expiration=timedelta(seconds=self.config.signed_url_ttl_seconds),
            method="GET",
        )

    async def sign(self, path: str) -> Optional[str]:
        """
        Mint a time-limited read URL.

        Args:
            path: Stored object path or storage URL

        Returns:
            Signed URL, or None when the path is empty

        Raises:
            SigningFailure: The path is invalid or the storage client failed
        """
        if not path:
            return None
        try:
            object_name = clean_storage_path(path)
        except ValueError as e:
            raise SigningFailure(path, f"Could not sign '{path}': {e}") from e

        return await self.error_handler.run_with_timeout(
            asyncio.to_thread,
            self._sign_blocking,
            object_name,
            timeout_seconds=self.timeout_seconds,
            failure=lambda e: SigningFailure(path, f"Could not sign '{path}': {e}"),
        )

    async def exists(self, object_name: str) -> bool:
        """Whether an object is present in the bucket."""
        blob = self.bucket.blob(object_name)
        return await asyncio.to_thread(blob.exists)
