"""Configuration-related exceptions for Second Brain."""

from .base import SecondBrainError


class ConfigurationError(SecondBrainError):
    """Configuration or environment variable errors.

    Raised when required configuration is missing or invalid. These are
    fatal: they are never retried and never downgraded into a report.
    """

    error_code = "SB_CFG_001"


class MissingAPIKeyError(ConfigurationError):
    """Required API key or service credential is not configured."""

    error_code = "SB_CFG_002"


class InvalidConfigurationError(ConfigurationError):
    """Configuration value is invalid."""

    error_code = "SB_CFG_003"
