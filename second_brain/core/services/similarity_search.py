"""Per-owner similarity search with a local fallback scan."""

import logging

from ..domain import EmbeddingVector, SearchOutcome, SimilarityMatch, cosine_similarity
from ..domain.exceptions import (
    DimensionMismatchError,
    InvalidSearchParameterError,
    MetadataStoreError,
    SearchPrimitiveError,
)
from ..ports.metadata_store_port import MetadataStorePort
from ..ports.search_primitive_port import SearchPrimitivePort

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.85
DEFAULT_LIMIT = 5


class SimilaritySearch:
    """Finds an owner's stored documents whose vectors are close to a query.

    The server-side primitive is tried first. When it is missing or fails,
    every embedded document of the owner is fetched and scored locally.
    Both paths keep only scores strictly greater than the threshold, so
    they agree on identical data.
    """

    def __init__(
        self,
        metadata_store: MetadataStorePort,
        search_primitive: SearchPrimitivePort | None = None,
    ) -> None:
        """Initialize the search.

        Args:
            metadata_store: Store used by the fallback scan.
            search_primitive: Server-side nearest-neighbour query, or None
                when the backend has none (always scans locally).
        """
        self.metadata_store = metadata_store
        self.search_primitive = search_primitive

    def query(
        self,
        query_vector: EmbeddingVector | None,
        owner_id: str,
        threshold: float = DEFAULT_THRESHOLD,
        limit: int = DEFAULT_LIMIT,
    ) -> list[SimilarityMatch]:
        """Matches above ``threshold`` for ``owner_id``, best first."""
        return self.search(query_vector, owner_id, threshold, limit).matches

    def search(
        self,
        query_vector: EmbeddingVector | None,
        owner_id: str,
        threshold: float = DEFAULT_THRESHOLD,
        limit: int = DEFAULT_LIMIT,
    ) -> SearchOutcome:
        """Like :meth:`query` but also reports which path answered.

        Raises:
            InvalidSearchParameterError: threshold outside [0, 1] or limit < 1.
        """
        if not 0.0 <= threshold <= 1.0:
            raise InvalidSearchParameterError(
                f"Similarity threshold must be within [0, 1], got {threshold}",
                context={"threshold": threshold},
            )
        if limit < 1:
            raise InvalidSearchParameterError(
                f"Match limit must be at least 1, got {limit}",
                context={"limit": limit},
            )

        if not query_vector:
            logger.debug("No query vector for owner %s, skipping search", owner_id)
            return SearchOutcome()

        if self.search_primitive is None:
            logger.debug("No search primitive configured, scanning locally")
            return self._fallback(
                query_vector, owner_id, threshold, limit, reason="search primitive not configured"
            )

        try:
            rows = self.search_primitive.find_similar_documents(
                query_embedding=query_vector,
                user_id=owner_id,
                similarity_threshold=threshold,
                match_count=limit,
            )
        except SearchPrimitiveError as e:
            logger.warning("Search primitive failed, falling back to local scan: %s", e)
            return self._fallback(query_vector, owner_id, threshold, limit, reason=str(e))

        matches = self._rank([row for row in rows if row.similarity > threshold], limit)
        logger.info("Search primitive returned %d match(es) for owner %s", len(matches), owner_id)
        return SearchOutcome(matches=matches)

    def _fallback(
        self,
        query_vector: EmbeddingVector,
        owner_id: str,
        threshold: float,
        limit: int,
        reason: str,
    ) -> SearchOutcome:
        try:
            documents = self.metadata_store.list_documents(owner_id, with_embedding=True)
        except MetadataStoreError as e:
            logger.error("Fallback scan could not read documents for owner %s: %s", owner_id, e)
            return SearchOutcome(
                used_fallback=True, failed=True, error=f"{reason}; fallback failed: {e}"
            )

        matches: list[SimilarityMatch] = []
        for document in documents:
            if not document.embedding:
                continue
            try:
                similarity = cosine_similarity(query_vector, document.embedding)
            except DimensionMismatchError as e:
                logger.warning("Skipping %s (id=%s): %s", document.name, document.id, e)
                continue

            logger.debug("Local similarity for %s: %.1f%%", document.name, similarity * 100)
            if similarity > threshold:
                matches.append(
                    SimilarityMatch(
                        id=document.id,
                        name=document.name,
                        content=document.content,
                        similarity=similarity,
                    )
                )

        ranked = self._rank(matches, limit)
        logger.info(
            "Local scan of %d document(s) found %d match(es) for owner %s",
            len(documents),
            len(ranked),
            owner_id,
        )
        return SearchOutcome(matches=ranked, used_fallback=True, error=reason)

    @staticmethod
    def _rank(matches: list[SimilarityMatch], limit: int) -> list[SimilarityMatch]:
        # sorted() is stable, so ties keep store order
        return sorted(matches, key=lambda m: m.similarity, reverse=True)[:limit]
