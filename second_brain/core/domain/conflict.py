"""Conflict report returned by the pre-upload similarity check."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .document import EmbeddingVector, SimilarityMatch

NO_PREVIEW = "No preview available"


class ReportStatus(Enum):
    """Outcome class of a conflict check.

    Attributes:
        CLEAN: Check ran and found nothing above the threshold.
        CONFLICTS: At least one stored document is a near-duplicate.
        DEGRADED: The check itself failed; the upload should continue
            with a warning.
    """

    CLEAN = "clean"
    CONFLICTS = "conflicts"
    DEGRADED = "degraded"


def similarity_percent(similarity: float) -> int:
    """Convert a raw cosine score into an integer percentage in [0, 100].

    Rounds half up, so 0.625 becomes 63 rather than banker's-rounding to 62.
    """
    percent = math.floor(similarity * 100 + 0.5)
    return max(0, min(100, int(percent)))


def make_preview(content: str | None, length: int = 100) -> str:
    """First ``length`` characters of stored text, or a placeholder."""
    if not content:
        return NO_PREVIEW
    if len(content) <= length:
        return content
    return content[:length] + "..."


@dataclass
class ConflictEntry:
    """One near-duplicate as shown to the user."""

    id: str
    name: str
    similarity: int
    content_preview: str

    @classmethod
    def from_match(cls, match: SimilarityMatch, preview_length: int = 100) -> "ConflictEntry":
        return cls(
            id=match.id,
            name=match.name,
            similarity=similarity_percent(match.similarity),
            content_preview=make_preview(match.content, preview_length),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "similarity": self.similarity,
            "content_preview": self.content_preview,
        }


@dataclass
class ConflictReport:
    """Result of checking candidate text against an owner's documents.

    The embedding is carried even when nothing conflicts so the commit step
    can store it without calling the provider again.

    Attributes:
        has_conflicts: True iff ``conflicts`` is non-empty.
        conflicts: Entries ordered by descending similarity.
        embedding: Vector computed for the candidate text, if any.
        error: Message describing why the check degraded.
        used_fallback: True when matches came from the local scan.
    """

    has_conflicts: bool = False
    conflicts: list[ConflictEntry] = field(default_factory=list)
    embedding: EmbeddingVector | None = None
    error: str | None = None
    used_fallback: bool = False

    @classmethod
    def degraded(cls, message: str, embedding: EmbeddingVector | None = None) -> "ConflictReport":
        return cls(has_conflicts=False, conflicts=[], embedding=embedding, error=message)

    @property
    def status(self) -> ReportStatus:
        if self.error:
            return ReportStatus.DEGRADED
        if self.has_conflicts:
            return ReportStatus.CONFLICTS
        return ReportStatus.CLEAN

    def to_dict(self, include_embedding: bool = False) -> dict[str, Any]:
        """Wire shape consumed by the upload UI."""
        result: dict[str, Any] = {
            "hasConflicts": self.has_conflicts,
            "conflicts": [entry.to_dict() for entry in self.conflicts],
            "status": self.status.value,
        }
        if self.error:
            result["error"] = self.error
        if self.used_fallback:
            result["usedFallback"] = True
        if include_embedding and self.embedding is not None:
            result["embedding"] = self.embedding
        return result
