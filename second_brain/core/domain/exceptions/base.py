"""Root of the Second Brain error hierarchy.

Every error knows its code, where it was raised, what caused it and any
key-value context worth logging. ``to_dict`` produces the JSON body used by
the HTTP handlers and the structured log formatter.
"""

import inspect
import traceback
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from pathlib import PurePath
from types import FrameType
from typing import Any


@dataclass(frozen=True)
class RaiseLocation:
    """Where an error was constructed."""

    class_name: str
    method_name: str
    file_name: str
    line_number: int
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    @classmethod
    def from_frame(cls, frame: FrameType | None) -> "RaiseLocation":
        if frame is None:
            return cls("<unknown>", "<unknown>", "<unknown>", 0)
        owner = frame.f_locals.get("self")
        return cls(
            class_name=type(owner).__name__ if owner is not None else "<module>",
            method_name=frame.f_code.co_name,
            file_name=PurePath(frame.f_code.co_filename.replace("\\", "/")).name,
            line_number=frame.f_lineno,
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        return {
            "class": data["class_name"],
            "method": data["method_name"],
            "file": data["file_name"],
            "line": data["line_number"],
            "timestamp": data["timestamp"],
        }


class SecondBrainError(Exception):
    """Base class for every error raised by Second Brain code.

    Example:
        try:
            session.post(url, json=payload, timeout=timeout)
        except requests.RequestException as e:
            raise EmbeddingProviderError("Embedding request failed", cause=e) from e
    """

    error_code: str = "SB_ERR_001"

    def __init__(
        self,
        message: str,
        *,
        cause: Exception | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.extra_context = context or {}
        self.location = RaiseLocation.from_frame(self._raise_frame())
        self.stack_trace = traceback.format_exc() if cause else None

    def _raise_frame(self) -> FrameType | None:
        """First frame outside this error's own constructor chain.

        Subclasses may add their own ``__init__`` layers, so frames are
        skipped for as long as they belong to this instance.
        """
        frame = inspect.currentframe()
        while frame is not None and frame.f_locals.get("self") is self:
            frame = frame.f_back
        return frame

    def to_dict(self, include_trace: bool = False) -> dict[str, Any]:
        """Serialize for logs and HTTP error bodies.

        ``stack_trace`` is only included when ``include_trace`` is set and the
        error wraps a cause.
        """
        payload: dict[str, Any] = {
            "error": {"type": type(self).__name__, "code": self.error_code, "message": self.message},
            "location": self.location.to_dict(),
        }
        if self.extra_context:
            payload["context"] = self.extra_context
        if self.cause is not None:
            payload["cause"] = {"type": type(self.cause).__name__, "message": str(self.cause)}
        if include_trace and self.stack_trace:
            payload["stack_trace"] = [ln for ln in self.stack_trace.splitlines() if ln.strip()]
        return payload
