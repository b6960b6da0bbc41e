"""``find_similar_documents`` Postgres function exposed through PostgREST RPC."""

import logging

import requests
from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaValidationError

from ....core.domain import EmbeddingVector, SimilarityMatch
from ....core.domain.exceptions import SearchPrimitiveError, SearchPrimitiveUnavailableError
from ....core.ports.search_primitive_port import SearchPrimitivePort
from .client import SupabaseClient
from .rows import MatchRow

logger = logging.getLogger(__name__)

RPC_FUNCTION = "find_similar_documents"

_rows = TypeAdapter(list[MatchRow])


class SupabaseSearchPrimitive(SearchPrimitivePort):
    """Runs the nearest-neighbour query inside the database."""

    def __init__(self, client: SupabaseClient, function: str = RPC_FUNCTION) -> None:
        self.client = client
        self.function = function

    def find_similar_documents(
        self,
        query_embedding: EmbeddingVector,
        user_id: str,
        similarity_threshold: float,
        match_count: int,
    ) -> list[SimilarityMatch]:
        """Call the RPC; every failure becomes ``SearchPrimitiveError``.

        A 404 (function not deployed) raises ``SearchPrimitiveUnavailableError``.
        """
        url = self.client.rpc_url(self.function)
        try:
            response = self.client.request(
                "POST",
                url,
                json={
                    "query_embedding": query_embedding,
                    "user_id": user_id,
                    "similarity_threshold": similarity_threshold,
                    "match_count": match_count,
                },
            )
            rows = _rows.validate_python(response.json() or [])
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            error_cls = SearchPrimitiveUnavailableError if status == 404 else SearchPrimitiveError
            raise error_cls(
                f"RPC {self.function} failed: {e}",
                cause=e,
                context={"function": self.function, "status_code": status},
            ) from e
        except requests.RequestException as e:
            raise SearchPrimitiveError(
                f"RPC {self.function} failed: {e}",
                cause=e,
                context={"function": self.function},
            ) from e
        except (ValueError, SchemaValidationError) as e:
            raise SearchPrimitiveError(
                f"RPC {self.function} returned unexpected rows",
                cause=e,
                context={"function": self.function},
            ) from e

        logger.debug("RPC %s returned %d row(s)", self.function, len(rows))
        return [row.to_match() for row in rows]
