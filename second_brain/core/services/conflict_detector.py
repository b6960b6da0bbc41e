"""Pre-upload check for near-duplicate content."""

import logging

import requests

from ..domain import ConflictEntry, ConflictReport
from ..domain.exceptions import ConfigurationError, SecondBrainError
from ..ports.embedding_port import EmbeddingPort
from .similarity_search import DEFAULT_LIMIT, DEFAULT_THRESHOLD, SimilaritySearch

logger = logging.getLogger(__name__)


class ConflictDetector:
    """Embeds candidate text and looks for near-duplicates among an owner's files.

    Conflict checking is advisory. Any failure while embedding or searching
    comes back as a degraded report instead of an exception so that an
    upload is never blocked by the check. Only configuration errors
    propagate.
    """

    def __init__(
        self,
        embedder: EmbeddingPort,
        search: SimilaritySearch,
        threshold: float = DEFAULT_THRESHOLD,
        limit: int = DEFAULT_LIMIT,
        preview_length: int = 100,
    ) -> None:
        """Initialize the detector.

        Args:
            embedder: Text-to-vector port.
            search: Per-owner similarity search.
            threshold: Default similarity a stored document must exceed to
                be reported.
            limit: Maximum number of conflicts reported.
            preview_length: Characters of stored text shown per conflict.
        """
        self.embedder = embedder
        self.search = search
        self.threshold = threshold
        self.limit = limit
        self.preview_length = preview_length

    def detect_conflicts(
        self,
        text: str | None,
        candidate_name: str,
        owner_id: str,
        threshold: float | None = None,
        limit: int | None = None,
    ) -> ConflictReport:
        """Check ``text`` against everything ``owner_id`` has stored.

        Args:
            text: Extracted text of the file about to be uploaded.
            candidate_name: File name, used for logging only.
            owner_id: Owner whose documents are searched.
            threshold: Override of the default threshold (e.g. lowered for
                diagnostics).
            limit: Override of the default match limit.

        Returns:
            ConflictReport carrying the computed embedding.
        """
        threshold = self.threshold if threshold is None else threshold
        limit = self.limit if limit is None else limit
        logger.info(
            "Checking %s for conflicts (owner=%s, %d chars)",
            candidate_name,
            owner_id,
            len(text or ""),
        )

        embedding = None
        try:
            embedding = self.embedder.generate_embedding(text or "")
            if embedding is None:
                logger.info("No text to analyze in %s", candidate_name)
                return ConflictReport(has_conflicts=False, conflicts=[])

            outcome = self.search.search(embedding, owner_id, threshold=threshold, limit=limit)
        except ConfigurationError:
            raise
        except (SecondBrainError, requests.RequestException) as e:
            logger.warning("Conflict check for %s degraded: %s", candidate_name, e)
            return ConflictReport.degraded(str(e), embedding=embedding)
        except Exception as e:
            logger.exception("Unexpected failure checking %s for conflicts", candidate_name)
            return ConflictReport.degraded(f"{type(e).__name__}: {e}", embedding=embedding)

        if outcome.failed:
            logger.warning("Conflict check for %s degraded: %s", candidate_name, outcome.error)
            return ConflictReport(
                embedding=embedding,
                error=outcome.error or "similarity search unavailable",
                used_fallback=outcome.used_fallback,
            )

        conflicts = [ConflictEntry.from_match(m, self.preview_length) for m in outcome.matches]
        if conflicts:
            logger.warning(
                "%s conflicts with %d stored document(s): %s",
                candidate_name,
                len(conflicts),
                ", ".join(f"{c.name} ({c.similarity}%)" for c in conflicts),
            )
        else:
            logger.info("No conflicts detected for %s", candidate_name)

        return ConflictReport(
            has_conflicts=bool(conflicts),
            conflicts=conflicts,
            embedding=embedding,
            used_fallback=outcome.used_fallback,
        )
