"""Configuration infrastructure module."""

from lifecycleduration.infrastructure.config.settings import DurationSettings

__all__ = ["DurationSettings"]
