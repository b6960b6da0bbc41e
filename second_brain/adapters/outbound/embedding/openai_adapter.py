"""OpenAI-compatible embeddings adapter."""

import logging
from typing import Any

import requests
from pydantic import BaseModel, Field
from pydantic import ValidationError as SchemaValidationError

from ....core.domain import EmbeddingVector
from ....core.domain.exceptions import (
    EmbeddingProviderError,
    EmbeddingResponseError,
    MissingAPIKeyError,
)
from ....core.ports.embedding_port import EmbeddingPort

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.openai.com/v1/embeddings"
DEFAULT_MODEL = "text-embedding-ada-002"
REQUEST_TIMEOUT = 10.0
# Provider bodies can be large HTML error pages; keep what fits in a log line.
MAX_ERROR_BODY = 2000


class EmbeddingItem(BaseModel):
    embedding: list[float] = Field(..., min_length=1)
    index: int = 0


class EmbeddingResponse(BaseModel):
    """Subset of the provider response the adapter relies on."""

    data: list[EmbeddingItem] = Field(..., min_length=1)
    model: str | None = None


class OpenAIEmbeddingAdapter(EmbeddingPort):
    """Generates embeddings with one POST per text.

    No retries: a failed call surfaces as ``EmbeddingProviderError`` and the
    caller decides how to degrade.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        api_url: str = DEFAULT_API_URL,
        timeout: float = REQUEST_TIMEOUT,
        expected_dimension: int | None = None,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            api_key: Bearer credential for the provider.
            model: Model identifier sent with every request.
            api_url: Embeddings endpoint.
            timeout: Seconds before a request is abandoned.
            expected_dimension: Reject vectors of any other length (None or 0
                disables the check).
            session: HTTP session, mainly for tests.

        Raises:
            MissingAPIKeyError: If ``api_key`` is empty.
        """
        self._require_key(api_key)
        self.api_key = api_key
        self.model = model
        self.api_url = api_url
        self.timeout = timeout
        self.expected_dimension = expected_dimension or None
        self.session = session or requests.Session()

    @staticmethod
    def _require_key(api_key: str) -> None:
        if not api_key:
            raise MissingAPIKeyError(
                "Embedding API key is not configured (set OPENAI_API_KEY)",
                context={"setting": "openai_api_key"},
            )

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()

    def generate_embedding(self, text: str) -> EmbeddingVector | None:
        """Embed ``text``.

        Returns:
            The vector, or None when ``text`` is blank (no request is made).

        Raises:
            MissingAPIKeyError: If the key was cleared after construction.
            EmbeddingProviderError: On transport failure, timeout or non-2xx.
            EmbeddingResponseError: If the response body has the wrong shape.
        """
        if not text or not text.strip():
            logger.debug("Blank text, no embedding generated")
            return None

        self._require_key(self.api_key)
        logger.debug("Requesting embedding for %d chars with %s", len(text), self.model)

        try:
            response = self.session.post(
                self.api_url,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json={"input": text, "model": self.model},
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            raise EmbeddingProviderError(
                f"Embedding request timed out after {self.timeout}s",
                cause=e,
                context={"url": self.api_url},
            ) from e
        except requests.RequestException as e:
            raise EmbeddingProviderError(
                f"Embedding request failed: {e}",
                cause=e,
                context={"url": self.api_url},
            ) from e

        if not response.ok:
            body = response.text[:MAX_ERROR_BODY]
            logger.error("Embedding API error: %s - %s", response.status_code, body)
            raise EmbeddingProviderError(
                f"Embedding API error: {response.status_code} - {body}",
                status_code=response.status_code,
                body=body,
            )

        return self._parse(response)

    def _parse(self, response: requests.Response) -> EmbeddingVector:
        try:
            payload: Any = response.json()
            parsed = EmbeddingResponse.model_validate(payload)
        except (ValueError, SchemaValidationError) as e:
            raise EmbeddingResponseError(
                "Embedding API returned an unexpected response shape",
                status_code=response.status_code,
                cause=e,
            ) from e

        vector = parsed.data[0].embedding
        if self.expected_dimension and len(vector) != self.expected_dimension:
            raise EmbeddingResponseError(
                f"Embedding has {len(vector)} dimensions, expected {self.expected_dimension}",
                status_code=response.status_code,
                context={"model": self.model},
            )

        logger.debug("Embedding generated, length %d", len(vector))
        return vector
