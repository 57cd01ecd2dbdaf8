"""Custom exceptions for the gpt-load service configuration core.

This module defines specific exception types so that callers can tell a
configuration that failed validation apart from one that could not be read
at all, and decide fatality accordingly.
"""


class GptLoadError(Exception):
    """Base exception for all gpt-load errors."""

    pass


class ConfigurationError(GptLoadError):
    """Configuration-related errors."""

    pass


class ValidationError(GptLoadError):
    """Base class for validation errors."""

    def __init__(self, message: str, validation_context: dict = None):
        """Initialize validation error with context.

        Args:
            message: Error description
            validation_context: Validation-relevant context (field names, values, etc.)
        """
        super().__init__(message)
        self.validation_context = validation_context or {}


class ConfigValidationError(ValidationError, ConfigurationError):
    """Raised when an assembled configuration breaks one or more rules.

    Every violation is collected before this is raised, so the message lists
    all of them joined with ``"; "``.
    """

    code = "VALIDATION_ERROR"

    def __init__(self, violations: list[str], validation_context: dict = None):
        self.violations = list(violations)
        super().__init__("; ".join(self.violations), validation_context)


class SettingsFileError(ConfigurationError):
    """Raised when the settings file cannot be read or written."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path
