"""Composition root wiring adapters to the application services."""

from __future__ import annotations

import logging
from functools import lru_cache

from ..adapters.outbound.embedding.openai_adapter import OpenAIEmbeddingAdapter
from ..adapters.outbound.local import LocalBlobStore, SQLiteMetadataStore
from ..adapters.outbound.supabase import (
    SupabaseBlobStore,
    SupabaseClient,
    SupabaseMetadataStore,
    SupabaseSearchPrimitive,
)
from ..config.settings import Settings, settings
from ..core.ports import BlobStorePort, MetadataStorePort, SearchPrimitivePort
from ..core.services import (
    ConflictDetector,
    Diagnostics,
    FileService,
    SimilaritySearch,
    UploadGate,
)

logger = logging.getLogger(__name__)


class Container:
    """Builds every adapter and service from one Settings instance.

    Objects are created lazily and cached, so a container that is only used
    to list files never needs an embedding key.
    """

    def __init__(self, config: Settings) -> None:
        self.config = config
        self._supabase: SupabaseClient | None = None
        self._metadata_store: MetadataStorePort | None = None
        self._blob_store: BlobStorePort | None = None
        self._embedder: OpenAIEmbeddingAdapter | None = None

    @property
    def uses_supabase(self) -> bool:
        return self.config.storage_backend == "supabase"

    def supabase(self) -> SupabaseClient:
        if self._supabase is None:
            logger.info("Connecting to Supabase at %s", self.config.supabase_url)
            self._supabase = SupabaseClient(
                url=self.config.supabase_url,
                api_key=self.config.supabase_key,
                timeout=self.config.request_timeout,
            )
        return self._supabase

    def metadata_store(self) -> MetadataStorePort:
        if self._metadata_store is None:
            if self.uses_supabase:
                self._metadata_store = SupabaseMetadataStore(self.supabase())
            else:
                self.config.ensure_directories()
                logger.info("Using SQLite metadata store at %s", self.config.sqlite_path)
                self._metadata_store = SQLiteMetadataStore(self.config.sqlite_path)
        return self._metadata_store

    def blob_store(self) -> BlobStorePort:
        if self._blob_store is None:
            if self.uses_supabase:
                self._blob_store = SupabaseBlobStore(self.supabase(), self.config.storage_bucket)
            else:
                self.config.ensure_directories()
                self._blob_store = LocalBlobStore(self.config.blob_dir)
        return self._blob_store

    def search_primitive(self) -> SearchPrimitivePort | None:
        return SupabaseSearchPrimitive(self.supabase()) if self.uses_supabase else None

    def embedder(self) -> OpenAIEmbeddingAdapter:
        """Embedding adapter; raises MissingAPIKeyError when no key is set."""
        if self._embedder is None:
            self._embedder = OpenAIEmbeddingAdapter(
                api_key=self.config.openai_api_key,
                model=self.config.embedding_model,
                api_url=self.config.embedding_api_url,
                timeout=self.config.request_timeout,
                expected_dimension=self.config.embedding_dimension,
            )
        return self._embedder

    def similarity_search(self) -> SimilaritySearch:
        return SimilaritySearch(self.metadata_store(), self.search_primitive())

    def conflict_detector(self) -> ConflictDetector:
        return ConflictDetector(
            self.embedder(),
            self.similarity_search(),
            threshold=self.config.similarity_threshold,
            limit=self.config.match_count,
            preview_length=self.config.excerpt_length,
        )

    def upload_gate(self, owner_id: str) -> UploadGate:
        return UploadGate(
            owner_id,
            self.conflict_detector(),
            self.metadata_store(),
            self.blob_store(),
        )

    def file_service(self) -> FileService:
        return FileService(self.metadata_store(), self.blob_store())

    def diagnostics(self) -> Diagnostics:
        return Diagnostics(
            self.metadata_store(),
            self.embedder(),
            self.similarity_search(),
            self.conflict_detector(),
        )


@lru_cache
def get_container() -> Container:
    logger.info("Initializing container (backend=%s)...", settings.storage_backend)
    return Container(settings)
