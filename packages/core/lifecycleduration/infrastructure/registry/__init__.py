"""Registry implementations."""

from lifecycleduration.infrastructure.registry.file_registry import FileSystemRegistry
from lifecycleduration.infrastructure.registry.memory_registry import InMemoryRegistry

__all__ = ["InMemoryRegistry", "FileSystemRegistry"]
