"""Upload gate exceptions for Second Brain."""

from .base import SecondBrainError


class UploadError(SecondBrainError):
    """Base error for the upload decision flow."""

    error_code = "SB_UPL_001"


class ConcurrentUploadError(UploadError):
    """An upload was started while another one is still in progress."""

    error_code = "SB_UPL_002"


class InvalidGateTransitionError(UploadError):
    """proceed/cancel called while no upload is awaiting a decision."""

    error_code = "SB_UPL_003"


class DuplicateFileNameError(UploadError):
    """The owner already stores a file with this name."""

    error_code = "SB_UPL_004"
