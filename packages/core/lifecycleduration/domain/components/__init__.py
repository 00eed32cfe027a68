"""Domain components."""

from lifecycleduration.domain.components.duration_formatter import (
    DurationFormatter,
    format_duration,
)
from lifecycleduration.domain.components.history_duration_resolver import (
    HistoryDurationResolver,
)

__all__ = [
    "DurationFormatter",
    "format_duration",
    "HistoryDurationResolver",
]
