"""Upload flow models: incoming files, pending decisions, gate states."""

from dataclasses import dataclass
from enum import Enum

from .conflict import ConflictReport
from .document import DocumentRecord, EmbeddingVector

TEXT_SUFFIXES = (".txt",)


class GateState(Enum):
    """States of the upload decision flow."""

    IDLE = "idle"
    ANALYZING = "analyzing"
    AWAITING_DECISION = "awaiting_decision"
    COMMITTING = "committing"


class UploadStatus(Enum):
    """How a gate call ended."""

    COMMITTED = "committed"
    AWAITING_DECISION = "awaiting_decision"
    CANCELLED = "cancelled"


@dataclass
class IncomingFile:
    """A file handed to the upload gate.

    Attributes:
        name: Original file name.
        data: Raw bytes.
        content_type: MIME type reported by the client.
    """

    name: str
    data: bytes
    content_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def is_text(self) -> bool:
        return self.content_type.startswith("text/") or self.name.lower().endswith(TEXT_SUFFIXES)

    def extract_text(self) -> str | None:
        """Decode the bytes as UTF-8 text, or None for non-text files."""
        if not self.is_text:
            return None
        return self.data.decode("utf-8", errors="replace")


@dataclass
class PendingUpload:
    """Upload held while the user decides whether to keep a near-duplicate."""

    file: IncomingFile
    text: str | None
    embedding: EmbeddingVector | None
    report: ConflictReport


@dataclass
class UploadOutcome:
    """Result of ``UploadGate.start`` / ``proceed`` / ``cancel``.

    Attributes:
        status: Whether the file was committed, is awaiting a decision,
            or was discarded.
        record: The stored record when committed.
        report: Conflict report from analysis, if analysis ran.
        warning: Non-blocking message when the conflict check degraded.
    """

    status: UploadStatus
    record: DocumentRecord | None = None
    report: ConflictReport | None = None
    warning: str | None = None
