"""Embedding exceptions for Second Brain."""

from typing import Any

from .base import SecondBrainError


class EmbeddingError(SecondBrainError):
    """Failed to generate an embedding."""

    error_code = "SB_EMB_001"


class EmbeddingProviderError(EmbeddingError):
    """Embedding provider returned a non-success response or was unreachable.

    Carries the provider's HTTP status code and response body (when there was
    a response) so quota, auth and payload problems can be diagnosed.
    """

    error_code = "SB_EMB_002"

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
        cause: Exception | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        merged = dict(context or {})
        if status_code is not None:
            merged["status_code"] = status_code
        if body:
            merged["body"] = body
        super().__init__(message, cause=cause, context=merged)
        self.status_code = status_code
        self.body = body


class EmbeddingResponseError(EmbeddingProviderError):
    """Embedding provider response did not match the expected schema."""

    error_code = "SB_EMB_003"
