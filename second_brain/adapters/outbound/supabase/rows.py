"""Row schemas for the ``files`` table and the similarity RPC."""

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, field_validator

from ....core.domain import DocumentRecord, SimilarityMatch


def parse_vector(value: Any) -> list[float] | None:
    """pgvector columns come back from PostgREST as ``"[0.1,0.2,...]"`` strings."""
    if value is None:
        return None
    if isinstance(value, str):
        value = json.loads(value)
    return [float(x) for x in value]


class FileRow(BaseModel):
    id: str
    user_id: str
    name: str
    size: int | None = 0
    type: str | None = ""
    content: str | None = None
    embedding: list[float] | None = None
    created_at: datetime | None = None

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def stringify(cls, value: Any) -> Any:
        return str(value) if value is not None else value

    @field_validator("embedding", mode="before")
    @classmethod
    def vector(cls, value: Any) -> list[float] | None:
        return parse_vector(value)

    def to_record(self) -> DocumentRecord:
        return DocumentRecord(
            id=self.id,
            owner_id=self.user_id,
            name=self.name,
            size=self.size or 0,
            mime_type=self.type or "",
            content=self.content,
            embedding=self.embedding,
            created_at=self.created_at,
        )


class MatchRow(BaseModel):
    id: str
    name: str
    content: str | None = None
    similarity: float

    @field_validator("id", mode="before")
    @classmethod
    def stringify(cls, value: Any) -> Any:
        return str(value) if value is not None else value

    def to_match(self) -> SimilarityMatch:
        return SimilarityMatch(
            id=self.id, name=self.name, content=self.content, similarity=self.similarity
        )
