"""Supabase Storage bucket as the blob store."""

import logging

import requests

from ....core.domain.exceptions import BlobStoreError
from ....core.ports.blob_store_port import BlobStorePort
from .client import SupabaseClient

logger = logging.getLogger(__name__)

DEFAULT_BUCKET = "user-files"


class SupabaseBlobStore(BlobStorePort):
    """Uploads and removes objects in one bucket."""

    def __init__(self, client: SupabaseClient, bucket: str = DEFAULT_BUCKET) -> None:
        self.client = client
        self.bucket = bucket

    def upload(self, key: str, data: bytes, content_type: str) -> None:
        url = self.client.storage_url(f"object/{self.bucket}/{key}")
        try:
            self.client.request(
                "POST",
                url,
                data=data,
                headers={"Content-Type": content_type, "x-upsert": "true"},
            )
        except requests.RequestException as e:
            raise BlobStoreError(
                f"Upload of {key} failed: {e}",
                cause=e,
                context={"bucket": self.bucket, "key": key},
            ) from e
        logger.debug("Uploaded %d bytes to %s/%s", len(data), self.bucket, key)

    def delete(self, keys: list[str]) -> None:
        if not keys:
            return
        url = self.client.storage_url(f"object/{self.bucket}")
        try:
            self.client.request("DELETE", url, json={"prefixes": keys})
        except requests.RequestException as e:
            raise BlobStoreError(
                f"Removal of {len(keys)} object(s) failed: {e}",
                cause=e,
                context={"bucket": self.bucket, "keys": keys},
            ) from e
