"""Custom exception hierarchy for Second Brain.

Each exception carries an error code, the location it was raised from,
an optional cause and free-form context, and serializes to JSON for
structured logging and HTTP error bodies.

All exceptions are re-exported here:

    from second_brain.core.domain.exceptions import EmbeddingProviderError
"""

# Base classes
from .base import RaiseLocation, SecondBrainError

# Configuration exceptions
from .configuration import (
    ConfigurationError,
    InvalidConfigurationError,
    MissingAPIKeyError,
)

# Embedding exceptions
from .embedding import (
    EmbeddingError,
    EmbeddingProviderError,
    EmbeddingResponseError,
)

# Similarity search exceptions
from .search import (
    SearchPrimitiveError,
    SearchPrimitiveUnavailableError,
    VectorSearchError,
)

# Storage exceptions
from .storage import (
    BlobStoreError,
    DocumentNotFoundError,
    MetadataStoreError,
    PartialCommitError,
    StorageError,
)

# Upload gate exceptions
from .upload import (
    ConcurrentUploadError,
    DuplicateFileNameError,
    InvalidGateTransitionError,
    UploadError,
)

# Validation exceptions
from .validation import (
    DimensionMismatchError,
    InvalidSearchParameterError,
    ValidationError,
)

__all__ = [
    # Base
    "RaiseLocation",
    "SecondBrainError",
    # Configuration
    "ConfigurationError",
    "MissingAPIKeyError",
    "InvalidConfigurationError",
    # Embedding
    "EmbeddingError",
    "EmbeddingProviderError",
    "EmbeddingResponseError",
    # Search
    "VectorSearchError",
    "SearchPrimitiveError",
    "SearchPrimitiveUnavailableError",
    # Storage
    "StorageError",
    "MetadataStoreError",
    "BlobStoreError",
    "DocumentNotFoundError",
    "PartialCommitError",
    # Upload
    "UploadError",
    "ConcurrentUploadError",
    "DuplicateFileNameError",
    "InvalidGateTransitionError",
    # Validation
    "ValidationError",
    "DimensionMismatchError",
    "InvalidSearchParameterError",
]
