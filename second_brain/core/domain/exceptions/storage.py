"""Storage exceptions for Second Brain (metadata rows and raw blobs)."""

from .base import SecondBrainError


class StorageError(SecondBrainError):
    """Base error for metadata and blob storage operations."""

    error_code = "SB_STO_001"


class MetadataStoreError(StorageError):
    """Metadata store read or write failed."""

    error_code = "SB_STO_002"


class BlobStoreError(StorageError):
    """Blob upload or removal failed."""

    error_code = "SB_STO_003"


class DocumentNotFoundError(StorageError):
    """No document with the given id exists for this owner."""

    error_code = "SB_STO_004"


class PartialCommitError(StorageError):
    """Blob write succeeded but the metadata write failed.

    The blob is left orphaned; the blob key is recorded in the context as
    a repair candidate.
    """

    error_code = "SB_STO_005"
