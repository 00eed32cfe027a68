"""Tests for HistoryDurationResolver component."""

from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from structlog.testing import capture_logs

from lifecycleduration.domain.components.history_duration_resolver import (
    HistoryDurationResolver,
)
from lifecycleduration.domain.interfaces.registry import Registry, RegistryError
from lifecycleduration.domain.models.duration_error import (
    DurationError,
    ErrorCategory,
    HistoryParseError,
    InvalidArgumentError,
    NotFoundError,
)
from lifecycleduration.infrastructure.config.settings import DurationSettings
from lifecycleduration.infrastructure.registry.file_registry import FileSystemRegistry
from lifecycleduration.infrastructure.registry.memory_registry import InMemoryRegistry

ONE_DAY = 24 * 60 * 60 * 1000


class TestHistoryResourcePath:
    """Tests for history record path derivation."""

    def test_slashes_replaced_and_prefixed(
        self, resolver: HistoryDurationResolver, settings: DurationSettings
    ) -> None:
        """Test every slash becomes an underscore under the log root."""
        assert resolver.history_resource_path("/_system/governance/a/b") == (
            settings.history_log_root + "__system_governance_a_b"
        )

    def test_custom_log_root(self, registry: InMemoryRegistry) -> None:
        """Test the log root comes from settings."""
        resolver = HistoryDurationResolver(
            registry, settings=DurationSettings(history_log_root="/logs/")
        )
        assert resolver.history_resource_path("/a/b") == "/logs/_a_b"


class TestResolveCurrentStateDuration:
    """Tests for resolve_current_state_duration."""

    def test_uses_most_recent_transition(
        self,
        resolver: HistoryDurationResolver,
        registry: InMemoryRegistry,
        history_path: str,
        history_xml: str,
        resource_path: str,
        lifecycle_name: str,
    ) -> None:
        """Test the first transition entry in document order is the reference."""
        registry.put(history_path, history_xml)

        assert resolver.resolve_current_state_duration(resource_path, lifecycle_name) == ONE_DAY

    def test_transition_preferred_over_later_bootstrap(
        self,
        resolver: HistoryDurationResolver,
        registry: InMemoryRegistry,
        history_path: str,
        resource_path: str,
    ) -> None:
        """Test a transition entry wins over a bootstrap entry."""
        registry.put(
            history_path,
            '<logs><item aspect="L" targetState="Approved" timestamp="2015-06-02 10:00:00.0"/>'
            '<item aspect="L" timestamp="2015-06-01 10:00:00.0"/></logs>',
        )

        assert resolver.resolve_current_state_duration(resource_path, "L") == ONE_DAY

    def test_falls_back_to_last_bootstrap_entry(
        self,
        resolver: HistoryDurationResolver,
        registry: InMemoryRegistry,
        history_path: str,
        resource_path: str,
    ) -> None:
        """Test the last entry is used when the lifecycle never changed state."""
        registry.put(
            history_path,
            '<logs><item aspect="L" state="Created" timestamp="2015-06-01 09:00:00.0"/>'
            '<item aspect="L" state="Created" timestamp="2015-05-30 08:00:00.0"/></logs>',
        )

        # 2015-05-30 08:00 -> 2015-06-03 10:00
        assert resolver.resolve_current_state_duration(resource_path, "L") == 98 * 60 * 60 * 1000

    def test_single_bootstrap_entry(
        self,
        resolver: HistoryDurationResolver,
        registry: InMemoryRegistry,
        history_path: str,
        resource_path: str,
    ) -> None:
        """Test a record with a single bootstrap entry."""
        registry.put(history_path, '<logs><item aspect="L" timestamp="2015-06-03 09:59:30.5"/></logs>')

        assert resolver.resolve_current_state_duration(resource_path, "L") == 29500

    def test_empty_target_state_is_not_a_transition(
        self,
        resolver: HistoryDurationResolver,
        registry: InMemoryRegistry,
        history_path: str,
        resource_path: str,
    ) -> None:
        """Test an empty targetState attribute does not count as a transition."""
        registry.put(
            history_path,
            '<logs><item aspect="L" targetState="" timestamp="2015-06-03 09:00:00.0"/>'
            '<item aspect="L" timestamp="2015-06-02 10:00:00.0"/></logs>',
        )

        assert resolver.resolve_current_state_duration(resource_path, "L") == ONE_DAY

    def test_other_lifecycles_ignored(
        self,
        resolver: HistoryDurationResolver,
        registry: InMemoryRegistry,
        history_path: str,
        resource_path: str,
    ) -> None:
        """Test entries of other lifecycles are not selected."""
        registry.put(
            history_path,
            '<logs><item aspect="Other" targetState="Retired" timestamp="2015-06-03 09:00:00.0"/>'
            '<item aspect="L" targetState="Testing" timestamp="2015-06-02 10:00:00.0"/>'
            '<item aspect="Other" timestamp="2015-01-01 00:00:00.0"/></logs>',
        )

        assert resolver.resolve_current_state_duration(resource_path, "L") == ONE_DAY

    def test_empty_content_returns_zero(
        self,
        resolver: HistoryDurationResolver,
        registry: InMemoryRegistry,
        history_path: str,
        resource_path: str,
        lifecycle_name: str,
    ) -> None:
        """Test an empty history record means the state was just entered."""
        registry.put(history_path, b"")

        assert resolver.resolve_current_state_duration(resource_path, lifecycle_name) == 0

    def test_whitespace_content_returns_zero(
        self,
        resolver: HistoryDurationResolver,
        registry: InMemoryRegistry,
        history_path: str,
        resource_path: str,
        lifecycle_name: str,
    ) -> None:
        """Test whitespace-only content is treated as empty."""
        registry.put(history_path, "  \n")

        assert resolver.resolve_current_state_duration(resource_path, lifecycle_name) == 0

    def test_negative_duration_returned_and_logged(
        self,
        registry: InMemoryRegistry,
        settings: DurationSettings,
        history_path: str,
        history_xml: str,
        resource_path: str,
        lifecycle_name: str,
    ) -> None:
        """Test a transition after 'now' is surfaced, not clamped."""
        registry.put(history_path, history_xml)
        resolver = HistoryDurationResolver(
            registry, settings=settings, clock=lambda: datetime(2015, 6, 2, 9, 0, 0)
        )

        with capture_logs() as logs:
            duration = resolver.resolve_current_state_duration(resource_path, lifecycle_name)

        assert duration == -60 * 60 * 1000
        assert [log["log_level"] for log in logs] == ["warning"]

    def test_rereads_registry_on_every_call(
        self,
        resolver: HistoryDurationResolver,
        registry: InMemoryRegistry,
        history_path: str,
        history_xml: str,
        resource_path: str,
        lifecycle_name: str,
    ) -> None:
        """Test results are not cached between calls."""
        registry.put(history_path, history_xml)
        assert resolver.resolve_current_state_duration(resource_path, lifecycle_name) == ONE_DAY

        registry.put(
            history_path,
            '<logs><item aspect="ServiceLifeCycle" targetState="Retired" '
            'timestamp="2015-06-03 09:00:00.0"/></logs>',
        )
        assert resolver.resolve_current_state_duration(resource_path, lifecycle_name) == 60 * 60 * 1000

    def test_custom_attribute_names(
        self, registry: InMemoryRegistry, fixed_now: datetime, resource_path: str
    ) -> None:
        """Test element path, attributes and timestamp format come from settings."""
        settings = DurationSettings(
            history_item_path=".//entry",
            lifecycle_name_attribute="lifecycleName",
            timestamp_format="%Y-%m-%d %H:%M:%S",
        )
        resolver = HistoryDurationResolver(registry, settings=settings, clock=lambda: fixed_now)
        registry.put(
            resolver.history_resource_path(resource_path),
            '<history><entry lifecycleName="L" targetState="Approved" '
            'timestamp="2015-06-02 10:00:00"/></history>',
        )

        assert resolver.resolve_current_state_duration(resource_path, "L") == ONE_DAY


class TestResolveCurrentStateDurationErrors:
    """Tests for resolve_current_state_duration failure modes."""

    @pytest.mark.parametrize(
        ("path", "name"),
        [("", "ServiceLifeCycle"), (None, "ServiceLifeCycle"), ("/a/b", ""), ("/a/b", None)],
    )
    def test_empty_arguments_rejected(self, path: str | None, name: str | None) -> None:
        """Test empty arguments fail before the registry is touched."""
        registry = MagicMock(spec=Registry)
        resolver = HistoryDurationResolver(registry)

        with pytest.raises(InvalidArgumentError) as exc_info:
            resolver.resolve_current_state_duration(path, name)  # type: ignore[arg-type]

        assert exc_info.value.category == ErrorCategory.InvalidArgument
        registry.exists.assert_not_called()

    def test_missing_record(
        self, resolver: HistoryDurationResolver, resource_path: str, lifecycle_name: str
    ) -> None:
        """Test a missing history record raises NotFoundError."""
        with pytest.raises(NotFoundError, match="does not exist"):
            resolver.resolve_current_state_duration(resource_path, lifecycle_name)

    def test_malformed_document(
        self,
        resolver: HistoryDurationResolver,
        registry: InMemoryRegistry,
        history_path: str,
        resource_path: str,
        lifecycle_name: str,
    ) -> None:
        """Test malformed XML raises HistoryParseError."""
        registry.put(history_path, "<logs><item aspect=")

        with pytest.raises(HistoryParseError):
            resolver.resolve_current_state_duration(resource_path, lifecycle_name)

    def test_invalid_element_path(
        self, registry: InMemoryRegistry, resource_path: str, history_xml: str
    ) -> None:
        """Test an invalid configured element path raises HistoryParseError."""
        resolver = HistoryDurationResolver(
            registry, settings=DurationSettings(history_item_path="//item")
        )
        registry.put(resolver.history_resource_path(resource_path), history_xml)

        with pytest.raises(HistoryParseError, match="Invalid history entry path"):
            resolver.resolve_current_state_duration(resource_path, "ServiceLifeCycle")

    def test_no_entry_for_lifecycle(
        self,
        resolver: HistoryDurationResolver,
        registry: InMemoryRegistry,
        history_path: str,
        history_xml: str,
        resource_path: str,
    ) -> None:
        """Test a record without entries for the lifecycle raises NotFoundError."""
        registry.put(history_path, history_xml)

        with pytest.raises(NotFoundError) as exc_info:
            resolver.resolve_current_state_duration(resource_path, "UnknownLifeCycle")

        assert exc_info.value.details["lifecycle_name"] == "UnknownLifeCycle"

    def test_lifecycle_name_compared_as_value(
        self,
        resolver: HistoryDurationResolver,
        registry: InMemoryRegistry,
        history_path: str,
        history_xml: str,
        resource_path: str,
    ) -> None:
        """Test a crafted lifecycle name cannot widen the selection."""
        registry.put(history_path, history_xml)

        with pytest.raises(NotFoundError):
            resolver.resolve_current_state_duration(resource_path, "x' or '1'='1")

    def test_unparsable_timestamp(
        self,
        resolver: HistoryDurationResolver,
        registry: InMemoryRegistry,
        history_path: str,
        resource_path: str,
    ) -> None:
        """Test a timestamp in the wrong format raises HistoryParseError."""
        registry.put(
            history_path, '<logs><item aspect="L" targetState="Approved" timestamp="yesterday"/></logs>'
        )

        with pytest.raises(HistoryParseError, match="yesterday"):
            resolver.resolve_current_state_duration(resource_path, "L")

    def test_transition_without_timestamp(
        self,
        resolver: HistoryDurationResolver,
        registry: InMemoryRegistry,
        history_path: str,
        resource_path: str,
    ) -> None:
        """Test a reference entry missing its timestamp raises InvalidArgumentError."""
        registry.put(history_path, '<logs><item aspect="L" targetState="Approved"/></logs>')

        with pytest.raises(InvalidArgumentError):
            resolver.resolve_current_state_duration(resource_path, "L")

    def test_registry_failure_wrapped(self, resource_path: str, lifecycle_name: str) -> None:
        """Test registry errors are wrapped in DurationError with the cause kept."""
        registry = MagicMock(spec=Registry)
        registry.exists.side_effect = RegistryError("connection lost")
        resolver = HistoryDurationResolver(registry)

        with pytest.raises(DurationError) as exc_info:
            resolver.resolve_current_state_duration(resource_path, lifecycle_name)

        assert exc_info.value.category == ErrorCategory.RegistryError
        assert isinstance(exc_info.value.__cause__, RegistryError)

    def test_content_read_failure_wrapped(self, resource_path: str, lifecycle_name: str) -> None:
        """Test failures reading content are wrapped too."""
        registry = MagicMock(spec=Registry)
        registry.exists.return_value = True
        registry.get_content.side_effect = RegistryError("disk error")
        resolver = HistoryDurationResolver(registry)

        with pytest.raises(DurationError) as exc_info:
            resolver.resolve_current_state_duration(resource_path, lifecycle_name)

        assert exc_info.value.category == ErrorCategory.RegistryError

    def test_unrepresentable_path_on_filesystem_registry(self, tmp_path: Path) -> None:
        """Test a path the filesystem rejects surfaces as a DurationError."""
        resolver = HistoryDurationResolver(FileSystemRegistry(tmp_path))

        with pytest.raises(DurationError):
            resolver.resolve_current_state_duration("/a\x00b", "L")

    def test_undecodable_content(
        self,
        resolver: HistoryDurationResolver,
        registry: InMemoryRegistry,
        history_path: str,
        resource_path: str,
        lifecycle_name: str,
    ) -> None:
        """Test content that is not UTF-8 raises HistoryParseError."""
        registry.put(history_path, b"\xff\xfe<logs/>")

        with pytest.raises(HistoryParseError):
            resolver.resolve_current_state_duration(resource_path, lifecycle_name)


class TestTimeDifference:
    """Tests for time_difference."""

    def test_difference_in_milliseconds(self, resolver: HistoryDurationResolver) -> None:
        """Test timestamps are subtracted with millisecond precision."""
        assert resolver.time_difference("2015-06-02 10:00:01.250", "2015-06-02 10:00:00.0") == 1250

    def test_negative_difference(self, resolver: HistoryDurationResolver) -> None:
        """Test an earlier first timestamp gives a negative result."""
        assert resolver.time_difference("2015-06-01 10:00:00.0", "2015-06-02 10:00:00.0") == -ONE_DAY

    @pytest.mark.parametrize(("later", "earlier"), [("", "2015-06-02 10:00:00.0"), ("2015-06-02 10:00:00.0", None)])
    def test_missing_timestamp(
        self, resolver: HistoryDurationResolver, later: str | None, earlier: str | None
    ) -> None:
        """Test unset timestamps raise InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError, match="timestamp is not set"):
            resolver.time_difference(later, earlier)
