"""Pydantic models for API requests and responses."""

from datetime import datetime

from pydantic import BaseModel, Field

from ....core.domain import ConflictReport, DocumentRecord, UploadOutcome


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    storage_backend: str = Field(..., description="Configured storage backend")


class FileInfo(BaseModel):
    """A stored file as listed to its owner."""

    id: str
    name: str
    size: int
    type: str
    created_at: datetime | None = None
    has_embedding: bool = False
    preview: str | None = Field(None, description="First 100 characters of the text")

    @classmethod
    def from_record(cls, record: DocumentRecord) -> "FileInfo":
        return cls(
            id=record.id,
            name=record.name,
            size=record.size,
            type=record.mime_type,
            created_at=record.created_at,
            has_embedding=record.has_embedding,
            preview=record.content[:100] if record.content else None,
        )


class FileListResponse(BaseModel):
    files: list[FileInfo] = Field(default_factory=list)
    count: int = 0


class ClearResponse(BaseModel):
    deleted: int


class ConflictInfo(BaseModel):
    id: str
    name: str
    similarity: int = Field(..., ge=0, le=100, description="Similarity percentage")
    content_preview: str


class ConflictReportResponse(BaseModel):
    """Conflict check result. ``error`` is set when the check degraded."""

    has_conflicts: bool = Field(..., serialization_alias="hasConflicts")
    conflicts: list[ConflictInfo] = Field(default_factory=list)
    status: str
    error: str | None = None
    used_fallback: bool = Field(False, serialization_alias="usedFallback")

    @classmethod
    def from_report(cls, report: ConflictReport) -> "ConflictReportResponse":
        return cls(
            has_conflicts=report.has_conflicts,
            conflicts=[ConflictInfo(**entry.to_dict()) for entry in report.conflicts],
            status=report.status.value,
            error=report.error,
            used_fallback=report.used_fallback,
        )


class ConflictCheckRequest(BaseModel):
    text: str = Field(..., description="Text to check against stored documents")
    name: str = Field("untitled.txt", description="Candidate file name")
    threshold: float | None = Field(None, ge=0.0, le=1.0, description="Override threshold")


class UploadResponse(BaseModel):
    """Outcome of an upload step."""

    status: str = Field(..., description="committed, awaiting_decision or cancelled")
    file: FileInfo | None = None
    report: ConflictReportResponse | None = None
    warning: str | None = Field(None, description="Set when the conflict check degraded")

    @classmethod
    def from_outcome(cls, outcome: UploadOutcome) -> "UploadResponse":
        return cls(
            status=outcome.status.value,
            file=FileInfo.from_record(outcome.record) if outcome.record else None,
            report=ConflictReportResponse.from_report(outcome.report) if outcome.report else None,
            warning=outcome.warning,
        )


class GateStateResponse(BaseModel):
    state: str
    pending_file: str | None = None
    report: ConflictReportResponse | None = None
