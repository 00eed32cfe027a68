"""Domain models for lifecycle state durations."""

from lifecycleduration.domain.models.duration_error import (
    ConnectionSetupError,
    DurationError,
    ErrorCategory,
    HistoryParseError,
    InvalidArgumentError,
    NotFoundError,
    RemoteOperationError,
    ServiceUnavailableError,
)
from lifecycleduration.domain.models.history import HistoryRecord, TransitionEntry

__all__ = [
    "HistoryRecord",
    "TransitionEntry",
    "DurationError",
    "ErrorCategory",
    "InvalidArgumentError",
    "NotFoundError",
    "HistoryParseError",
    "ServiceUnavailableError",
    "ConnectionSetupError",
    "RemoteOperationError",
]
