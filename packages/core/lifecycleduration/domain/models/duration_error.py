"""DurationError model for standardized error handling."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Categories of lifecycle duration errors."""

    InvalidArgument = "invalid_argument"
    """Required input (resource path, lifecycle name, timestamp) missing or empty."""

    NotFound = "not_found"
    """History record or history entry absent."""

    ParseError = "parse_error"
    """History document, element path or timestamp could not be parsed."""

    RegistryError = "registry_error"
    """Registry storage failed while reading a history record."""

    ServiceUnavailable = "service_unavailable"
    """Lifecycle management service could not be reached."""

    ConnectionSetupError = "connection_setup_error"
    """Service transport could not be initialized."""

    RemoteOperationError = "remote_operation_error"
    """Service executed the operation but reported a failure."""


class DurationError(Exception):
    """Standardized error for lifecycle duration operations.

    Every failure raised by the resolver or the remote client is a
    DurationError (or a subclass of it), so callers rendering messages to
    end users can catch a single type.

    Example:
        ```python
        raise DurationError(
            category=ErrorCategory.NotFound,
            message="History resource does not exist",
            details={"history_path": path},
        )
        ```
    """

    default_category: ErrorCategory = ErrorCategory.RegistryError

    def __init__(
        self,
        message: str,
        category: ErrorCategory | str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize DurationError.

        Args:
            message: Human-readable error message.
            category: Error category (ErrorCategory enum or string). Defaults to
                the category of the concrete error class.
            details: Additional error details.
        """
        if category is None:
            category = self.default_category
        self.category = ErrorCategory(category) if isinstance(category, str) else category
        self.message = message
        self.details = details or {}
        self.retryable = False
        super().__init__(self.message)

    def __repr__(self) -> str:
        """String representation of the error."""
        return f"{type(self).__name__}(category={self.category.value}, message={self.message!r})"

    def __str__(self) -> str:
        """Human-readable error message."""
        return self.message


class InvalidArgumentError(DurationError):
    """Raised when a required argument is missing or empty."""

    default_category = ErrorCategory.InvalidArgument


class NotFoundError(DurationError):
    """Raised when a history record or history entry does not exist."""

    default_category = ErrorCategory.NotFound


class HistoryParseError(DurationError):
    """Raised when history content or a timestamp cannot be parsed."""

    default_category = ErrorCategory.ParseError


class ServiceUnavailableError(DurationError):
    """Raised when the lifecycle management service cannot be reached."""

    default_category = ErrorCategory.ServiceUnavailable


class ConnectionSetupError(DurationError):
    """Raised when the service transport cannot be initialized."""

    default_category = ErrorCategory.ConnectionSetupError


class RemoteOperationError(DurationError):
    """Raised when the service reports a business-level failure."""

    default_category = ErrorCategory.RemoteOperationError
