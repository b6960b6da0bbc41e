"""Domain models for Second Brain.

- document: DocumentRecord, NewDocument, SimilarityMatch, SearchOutcome
- conflict: ConflictEntry, ConflictReport, ReportStatus
- upload: IncomingFile, PendingUpload, GateState, UploadOutcome
- vector_math: cosine_similarity

    from second_brain.core.domain import ConflictReport, DocumentRecord
"""

from .conflict import ConflictEntry, ConflictReport, ReportStatus, make_preview, similarity_percent
from .document import DocumentRecord, EmbeddingVector, NewDocument, SearchOutcome, SimilarityMatch
from .upload import GateState, IncomingFile, PendingUpload, UploadOutcome, UploadStatus
from .vector_math import cosine_similarity

__all__ = [
    # Document models
    "EmbeddingVector",
    "DocumentRecord",
    "NewDocument",
    "SimilarityMatch",
    "SearchOutcome",
    # Conflict models
    "ConflictEntry",
    "ConflictReport",
    "ReportStatus",
    "make_preview",
    "similarity_percent",
    # Upload models
    "GateState",
    "IncomingFile",
    "PendingUpload",
    "UploadOutcome",
    "UploadStatus",
    # Math
    "cosine_similarity",
]
