"""Stored document and similarity match models."""

from dataclasses import dataclass, field
from datetime import datetime

# Fixed-length vector produced by the embedding provider.
EmbeddingVector = list[float]


@dataclass
class DocumentRecord:
    """A file's metadata row as held by the metadata store.

    The core only reads records and supplies the embedding at insert time;
    records are never mutated after creation.

    Attributes:
        id: Store-assigned identifier.
        owner_id: Opaque identifier of the owning user.
        name: Display name (original file name).
        size: Size of the raw bytes.
        mime_type: Content type reported at upload.
        content: Extracted text, None for binary files.
        embedding: Vector for the content, None when there was no text
            or generation failed.
        created_at: Insert timestamp, when the store provides one.
    """

    id: str
    owner_id: str
    name: str
    size: int = 0
    mime_type: str = ""
    content: str | None = None
    embedding: EmbeddingVector | None = None
    created_at: datetime | None = None

    @property
    def has_embedding(self) -> bool:
        return bool(self.embedding)


@dataclass
class NewDocument:
    """Insert payload for the metadata store."""

    owner_id: str
    name: str
    size: int
    mime_type: str
    content: str | None = None
    embedding: EmbeddingVector | None = None


@dataclass
class SimilarityMatch:
    """A stored document scored against a query vector. Never persisted."""

    id: str
    name: str
    content: str | None
    similarity: float


@dataclass
class SearchOutcome:
    """Matches plus which search path produced them.

    Attributes:
        matches: Matches ordered by descending similarity.
        used_fallback: True when the local linear scan replaced the
            server-side primitive.
        failed: True when neither path could read the owner's documents,
            so an empty result says nothing about duplicates.
        error: Why the primary path was abandoned, plus the fallback
            failure when ``failed`` is set.
    """

    matches: list[SimilarityMatch] = field(default_factory=list)
    used_fallback: bool = False
    failed: bool = False
    error: str | None = None
