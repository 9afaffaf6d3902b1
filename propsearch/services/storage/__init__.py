"""Document storage services"""

from .signed_urls import GCSUrlSigner, clean_storage_path

__all__ = ["GCSUrlSigner", "clean_storage_path"]
