"""Server-side nearest-neighbour search Port Interface."""

from abc import ABC, abstractmethod

from ..domain import EmbeddingVector, SimilarityMatch


class SearchPrimitivePort(ABC):
    """Nearest-neighbour query executed next to the stored vectors.

    Implementations raise ``SearchPrimitiveError`` on any failure so the
    caller can fall back to a local scan.
    """

    @abstractmethod
    def find_similar_documents(
        self,
        query_embedding: EmbeddingVector,
        user_id: str,
        similarity_threshold: float,
        match_count: int,
    ) -> list[SimilarityMatch]: ...
