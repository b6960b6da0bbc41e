"""Similarity search exceptions for Second Brain."""

from .base import SecondBrainError


class VectorSearchError(SecondBrainError):
    """Base error for similarity search operations."""

    error_code = "SB_SRC_001"


class SearchPrimitiveError(VectorSearchError):
    """Server-side nearest-neighbour primitive failed.

    Recoverable: the similarity search falls back to a local scan.

    Common causes:
    - The RPC function is not deployed
    - The request was rejected (bad embedding dimension, permissions)
    - The response rows did not match the expected shape
    """

    error_code = "SB_SRC_002"


class SearchPrimitiveUnavailableError(SearchPrimitiveError):
    """No server-side search primitive is configured for this backend."""

    error_code = "SB_SRC_003"
