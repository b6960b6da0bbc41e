"""Supabase-backed adapters: metadata rows, similarity RPC and storage bucket."""

from .blob_store import SupabaseBlobStore
from .client import SupabaseClient
from .metadata_store import SupabaseMetadataStore
from .search_primitive import SupabaseSearchPrimitive

__all__ = [
    "SupabaseBlobStore",
    "SupabaseClient",
    "SupabaseMetadataStore",
    "SupabaseSearchPrimitive",
]
