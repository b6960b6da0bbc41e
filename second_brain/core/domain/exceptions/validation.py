"""Validation exceptions for Second Brain."""

from .base import SecondBrainError


class ValidationError(SecondBrainError):
    """Input validation failed."""

    error_code = "SB_VAL_001"


class DimensionMismatchError(ValidationError):
    """Two vectors of unequal length were compared."""

    error_code = "SB_VAL_002"


class InvalidSearchParameterError(ValidationError):
    """Threshold outside [0, 1] or a non-positive result limit."""

    error_code = "SB_VAL_003"
