"""Local adapters: SQLite metadata store and filesystem blob store."""

from .blob_store import LocalBlobStore
from .sqlite_store import SQLiteMetadataStore

__all__ = ["LocalBlobStore", "SQLiteMetadataStore"]
