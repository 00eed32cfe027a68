"""HistoryRecord and TransitionEntry data models."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from lifecycleduration.domain.models.duration_error import HistoryParseError

if TYPE_CHECKING:
    from lifecycleduration.infrastructure.config.settings import DurationSettings


class TransitionEntry(BaseModel):
    """One logged event in a lifecycle history record.

    An entry carrying a target state records a transition into that state.
    Entries without one are the bootstrap records written when the resource
    first entered the lifecycle.
    """

    lifecycle_name: str = Field(
        ...,
        description="Name of the lifecycle the entry belongs to",
    )
    target_state: str | None = Field(
        default=None,
        description="State reached by the transition (None for bootstrap entries)",
    )
    timestamp: str | None = Field(
        default=None,
        description="Entry time, formatted with the history timestamp format",
    )

    model_config = ConfigDict(frozen=True)

    @property
    def is_transition(self) -> bool:
        """Whether the entry represents an actual state change."""
        return bool(self.target_state)


class HistoryRecord(BaseModel):
    """Ordered lifecycle history of a single resource.

    Entries keep document order: transitions are written most-recent-first,
    bootstrap entries follow them.
    """

    entries: tuple[TransitionEntry, ...] = Field(
        default_factory=tuple,
        description="History entries in document order",
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_xml(cls, text: str, settings: DurationSettings) -> HistoryRecord:
        """Parse a history document.

        Args:
            text: History document content.
            settings: Settings naming the entry element path and attributes.

        Returns:
            HistoryRecord with one entry per matched element.

        Raises:
            HistoryParseError: If the document is malformed or the configured
                element path is invalid.
        """
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            raise HistoryParseError(
                f"Malformed history document: {e}",
                details={"position": getattr(e, "position", None)},
            ) from e

        try:
            elements = root.findall(settings.history_item_path)
        except (SyntaxError, KeyError, TypeError) as e:
            raise HistoryParseError(
                f"Invalid history entry path: {settings.history_item_path}",
                details={"history_item_path": settings.history_item_path},
            ) from e

        entries = tuple(
            TransitionEntry(
                lifecycle_name=element.get(settings.lifecycle_name_attribute, ""),
                target_state=element.get(settings.target_state_attribute),
                timestamp=element.get(settings.timestamp_attribute),
            )
            for element in elements
        )
        return cls(entries=entries)

    def entries_for(self, lifecycle_name: str) -> list[TransitionEntry]:
        """All entries of a lifecycle, in document order."""
        return [entry for entry in self.entries if entry.lifecycle_name == lifecycle_name]

    def transitions_for(self, lifecycle_name: str) -> list[TransitionEntry]:
        """Transition entries of a lifecycle, in document order (most recent first)."""
        return [entry for entry in self.entries_for(lifecycle_name) if entry.is_transition]

    def reference_entry(self, lifecycle_name: str) -> TransitionEntry | None:
        """Entry marking when the lifecycle entered its current state.

        The most recent transition when one exists, otherwise the last
        (oldest) timestamped entry. None when the lifecycle has neither.
        """
        transitions = self.transitions_for(lifecycle_name)
        if transitions:
            return transitions[0]
        entries = [entry for entry in self.entries_for(lifecycle_name) if entry.timestamp is not None]
        if entries:
            return entries[-1]
        return None
