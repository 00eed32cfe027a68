"""HistoryDurationResolver component for locally computed lifecycle durations."""

from collections.abc import Callable
from datetime import datetime, timedelta

import structlog

from lifecycleduration.domain.interfaces.registry import Registry, RegistryError
from lifecycleduration.domain.models.duration_error import (
    DurationError,
    ErrorCategory,
    HistoryParseError,
    InvalidArgumentError,
    NotFoundError,
)
from lifecycleduration.domain.models.history import HistoryRecord
from lifecycleduration.infrastructure.config.settings import DurationSettings
from lifecycleduration.infrastructure.utils.validation import (
    validate_not_empty,
    validate_resource_request,
)

logger = structlog.get_logger(__name__)

_ONE_MILLISECOND = timedelta(milliseconds=1)


class HistoryDurationResolver:
    """Derives how long a resource has been in its current lifecycle state.

    Reads the resource's lifecycle history record straight from the registry,
    picks the entry marking when the current state was entered and returns
    the time elapsed since then in milliseconds. Nothing is cached: every
    call reads the registry again.

    Example:
        ```python
        resolver = HistoryDurationResolver(registry)
        millis = resolver.resolve_current_state_duration(
            "/_system/governance/trunk/services/foo", "ServiceLifeCycle"
        )
        ```
    """

    def __init__(
        self,
        registry: Registry,
        settings: DurationSettings | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize HistoryDurationResolver.

        Args:
            registry: Registry holding lifecycle history records.
            settings: History layout settings. Defaults to DurationSettings().
            clock: Returns the current time (naive local, like history
                timestamps). Defaults to datetime.now.
        """
        self._registry = registry
        self._settings = settings or DurationSettings()
        self._clock = clock or datetime.now

    def history_resource_path(self, resource_path: str) -> str:
        """Registry path of the history record kept for a resource."""
        return self._settings.history_log_root + resource_path.replace("/", "_")

    def resolve_current_state_duration(self, resource_path: str, lifecycle_name: str) -> int:
        """Get the time spent in the current lifecycle state.

        Args:
            resource_path: Registry path to the resource.
            lifecycle_name: Lifecycle name associated to the resource.

        Returns:
            Milliseconds since the last state change, or since the resource
            entered the lifecycle when it never changed state. Zero when the
            history record is empty. Negative values (clock skew) are logged
            and returned as-is.

        Raises:
            InvalidArgumentError: If an argument is empty or the reference
                entry carries no timestamp.
            NotFoundError: If the history record, or any entry for the
                lifecycle, is missing.
            HistoryParseError: If the history or its timestamp is malformed.
            DurationError: If the registry read fails.
        """
        validate_resource_request(resource_path, lifecycle_name)
        history_path = self.history_resource_path(resource_path)

        text_content = self._read_history(history_path)
        if not text_content.strip():
            return 0

        try:
            record = HistoryRecord.from_xml(text_content, self._settings)
        except HistoryParseError as e:
            logger.error(
                "Error while parsing lifecycle history",
                history_path=history_path,
                error=e.message,
            )
            raise

        entry = record.reference_entry(lifecycle_name)
        if entry is None:
            message = f"No history entry for lifecycle {lifecycle_name} in {history_path}"
            logger.error(message, history_path=history_path, lifecycle_name=lifecycle_name)
            raise NotFoundError(
                message,
                details={"history_path": history_path, "lifecycle_name": lifecycle_name},
            )

        now = self._clock().strftime(self._settings.timestamp_format)
        duration = self.time_difference(now, entry.timestamp)
        if duration < 0:
            logger.warning(
                "Lifecycle state changed in the future; check clock skew or history content",
                history_path=history_path,
                lifecycle_name=lifecycle_name,
                last_state_change=entry.timestamp,
                duration_millis=duration,
            )
        return duration

    def time_difference(self, later: str | None, earlier: str | None) -> int:
        """Calculate the difference between two history timestamps.

        Args:
            later: Latest timestamp.
            earlier: Earlier timestamp.

        Returns:
            later - earlier in milliseconds.

        Raises:
            InvalidArgumentError: If either timestamp is not set.
            HistoryParseError: If either timestamp does not match the
                configured timestamp format.
        """
        validate_not_empty(later, "later timestamp")
        validate_not_empty(earlier, "earlier timestamp")
        return (self._parse_timestamp(later) - self._parse_timestamp(earlier)) // _ONE_MILLISECOND

    def _parse_timestamp(self, value: str) -> datetime:
        try:
            return datetime.strptime(value, self._settings.timestamp_format)
        except ValueError as e:
            message = f"Timestamp {value!r} does not match format {self._settings.timestamp_format!r}"
            logger.error(message, timestamp=value)
            raise HistoryParseError(message, details={"timestamp": value}) from e

    def _read_history(self, history_path: str) -> str:
        try:
            exists = self._registry.exists(history_path)
        except RegistryError as e:
            message = f"Error while checking history resource {history_path}"
            logger.error(message, history_path=history_path, exc_info=True)
            raise DurationError(
                message, category=ErrorCategory.RegistryError, details={"history_path": history_path}
            ) from e

        if not exists:
            message = f"Resource: {history_path} does not exist"
            logger.error(message, history_path=history_path)
            raise NotFoundError(message, details={"history_path": history_path})

        try:
            content = self._registry.get_content(history_path)
        except RegistryError as e:
            message = f"Error while reading history resource {history_path}"
            logger.error(message, history_path=history_path, exc_info=True)
            raise DurationError(
                message, category=ErrorCategory.RegistryError, details={"history_path": history_path}
            ) from e

        if not content:
            return ""
        try:
            return content.decode("utf-8")
        except UnicodeDecodeError as e:
            message = f"History resource {history_path} is not valid UTF-8"
            logger.error(message, history_path=history_path)
            raise HistoryParseError(message, details={"history_path": history_path}) from e
