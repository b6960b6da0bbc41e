"""Application services: the conflict detection pipeline and file use cases."""

from .conflict_detector import ConflictDetector
from .diagnostics import DiagnosticReport, Diagnostics, DiagnosticStep
from .file_service import FileService
from .similarity_search import SimilaritySearch
from .upload_gate import UploadGate

__all__ = [
    "ConflictDetector",
    "DiagnosticReport",
    "DiagnosticStep",
    "Diagnostics",
    "FileService",
    "SimilaritySearch",
    "UploadGate",
]
