"""Embedding Port Interface."""

from abc import ABC, abstractmethod

from ..domain import EmbeddingVector


class EmbeddingPort(ABC):
    """Abstract interface for turning text into a fixed-length vector."""

    @abstractmethod
    def generate_embedding(self, text: str) -> EmbeddingVector | None:
        """Embed ``text``; None when the text is blank."""
        ...
