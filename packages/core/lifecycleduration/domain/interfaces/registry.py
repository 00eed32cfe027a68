"""Registry interface for reading persisted lifecycle history.

The registry storage layer is owned elsewhere; this module only describes
the two read operations lifecycle duration lookups need.

Example:
    ```python
    from lifecycleduration.infrastructure.registry.memory_registry import InMemoryRegistry

    registry: Registry = InMemoryRegistry()
    registry.put("/history/_a_b", b"<logs/>")

    if registry.exists("/history/_a_b"):
        content = registry.get_content("/history/_a_b")
    ```
"""

from abc import ABC, abstractmethod


class RegistryError(Exception):
    """Raised when a registry read fails."""

    pass


class Registry(ABC):
    """Abstract read interface over registry storage.

    Implementations must raise RegistryError for storage failures, including
    reading content at a path that does not exist.
    """

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check whether a resource exists at a registry path.

        Args:
            path: Absolute registry path.

        Returns:
            True if a resource is stored at the path.

        Raises:
            RegistryError: If the storage cannot be queried.
        """
        pass

    @abstractmethod
    def get_content(self, path: str) -> bytes:
        """Read the stored content of a resource.

        Args:
            path: Absolute registry path.

        Returns:
            Raw resource content.

        Raises:
            RegistryError: If the resource does not exist or cannot be read.
        """
        pass
