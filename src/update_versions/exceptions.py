"""
Custom exceptions for update-versions.

This module defines domain-specific exceptions so that callers can tell
per-release failures (skipped and logged) apart from run-level failures.
"""


class UpdateVersionsError(Exception):
    """
    Base exception for all update-versions errors.

    All custom exceptions should inherit from this class to allow for easy
    catching of all application-specific errors.
    """

    def __init__(self, message: str, details: str | None = None) -> None:
        """
        Initialize the exception.

        Args:
            message: The primary error message.
            details: Optional additional context about the error.
        """
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(UpdateVersionsError):
    """
    Exception raised when configuration is invalid or missing.

    This includes:
    - Invalid command line or configuration file values
    - Configuration file parsing errors
    """

    pass


class ConfigFileError(ConfigurationError):
    """Exception raised when a configuration file cannot be read or parsed."""

    pass


class ConfigValidationError(ConfigurationError):
    """
    Exception raised when configuration validation fails.

    Attributes:
        field: The configuration field that failed validation.
        value: The rejected value, as text.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, details)
        self.field = field
        self.value = value


# =============================================================================
# Download Errors
# =============================================================================


class DownloadError(UpdateVersionsError):
    """
    Base exception for asset download errors.

    Attributes:
        url: The URL that was being downloaded when the error occurred.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, details)
        self.url = url


class NetworkError(DownloadError):
    """
    Exception raised for network-related download failures.

    This includes:
    - Connection timeouts
    - DNS resolution failures
    - Connection refused errors
    - SSL/TLS errors
    """

    pass


class HTTPError(DownloadError):
    """
    Exception raised when a download returns a non-success HTTP status.

    Attributes:
        status_code: The HTTP status code returned by the server.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        url: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, url, details)
        self.status_code = status_code


# =============================================================================
# API Errors
# =============================================================================


class APIError(UpdateVersionsError):
    """
    Exception raised when the GitHub API cannot list releases.

    Attributes:
        url: The API endpoint that was being accessed.
        status_code: The HTTP status code, when the server answered.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, details)
        self.url = url
        self.status_code = status_code


class RateLimitError(APIError):
    """
    Exception raised when the GitHub API rate limit is exceeded.

    Attributes:
        reset_time: When the rate limit will reset (Unix timestamp).
    """

    def __init__(
        self,
        message: str = "GitHub API rate limit exceeded",
        reset_time: int | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(
            message,
            url=url,
            status_code=403,
            details=f"Resets at: {reset_time}",
        )
        self.reset_time = reset_time


# =============================================================================
# File System Errors
# =============================================================================


class FileSystemError(UpdateVersionsError):
    """
    Exception raised for file system-related errors.

    Attributes:
        path: The file system path involved in the error.
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, details)
        self.path = path


class CacheError(FileSystemError):
    """Exception raised when a cached checksum file cannot be read."""

    pass


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(UpdateVersionsError):
    """
    Exception raised when input data fails validation.

    Attributes:
        field: The name of the field that failed validation.
        value: The value that failed validation.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, details)
        self.field = field
        self.value = value


class ChecksumParseError(ValidationError):
    """Exception raised when a checksum manifest cannot be read at all."""

    pass


class PlatformExtractionError(ValidationError):
    """Exception raised when an asset filename does not name a platform archive."""

    pass


# =============================================================================
# Pipeline Errors
# =============================================================================


class TemplateError(UpdateVersionsError):
    """Exception raised when the output template cannot be loaded or rendered."""

    pass


class NoVersionsError(UpdateVersionsError):
    """Exception raised when no release survived checksum processing."""

    def __init__(self, message: str = "no versions were successfully processed"):
        super().__init__(message)
