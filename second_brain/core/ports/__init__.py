"""Ports: interfaces the core depends on, implemented by outbound adapters."""

from .blob_store_port import BlobStorePort, blob_key
from .embedding_port import EmbeddingPort
from .metadata_store_port import MetadataStorePort
from .search_primitive_port import SearchPrimitivePort

__all__ = [
    "BlobStorePort",
    "EmbeddingPort",
    "MetadataStorePort",
    "SearchPrimitivePort",
    "blob_key",
]
