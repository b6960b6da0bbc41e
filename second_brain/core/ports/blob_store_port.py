"""Blob Store Port Interface."""

from abc import ABC, abstractmethod


def blob_key(owner_id: str, file_name: str) -> str:
    """Storage key for a file: ``owner/filename``."""
    return f"{owner_id}/{file_name}"


class BlobStorePort(ABC):
    """Abstract interface for raw file bytes.

    Implementations raise ``BlobStoreError`` on failure.
    """

    @abstractmethod
    def upload(self, key: str, data: bytes, content_type: str) -> None: ...

    @abstractmethod
    def delete(self, keys: list[str]) -> None: ...
