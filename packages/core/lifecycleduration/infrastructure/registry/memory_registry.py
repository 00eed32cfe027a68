"""In-memory registry implementation.

This module provides an in-memory implementation of the Registry interface
using a Python dictionary. It backs tests and local tooling that need
lifecycle history without a registry server.

Example:
    ```python
    from lifecycleduration.infrastructure.registry.memory_registry import InMemoryRegistry

    registry = InMemoryRegistry()
    registry.put(history_path, history_xml)
    content = registry.get_content(history_path)
    ```
"""

import threading

from lifecycleduration.domain.interfaces.registry import Registry, RegistryError


class InMemoryRegistry(Registry):
    """In-memory implementation of the Registry interface.

    Thread Safety:
        - put and delete take a threading.Lock
        - exists and get_content are single dict reads and need no lock

    Attributes:
        _resources: Dictionary storing resource content keyed by registry path
        _write_lock: threading.Lock for thread-safe write operations
    """

    def __init__(self, resources: dict[str, bytes | str] | None = None) -> None:
        """Initialize InMemoryRegistry.

        Args:
            resources: Optional initial resources keyed by registry path.
                       str content is stored UTF-8 encoded.
        """
        self._resources: dict[str, bytes] = {}
        self._write_lock = threading.Lock()
        for path, content in (resources or {}).items():
            self.put(path, content)

    def put(self, path: str, content: bytes | str) -> None:
        """Store resource content at a registry path, replacing any existing content.

        Args:
            path: Absolute registry path.
            content: Resource content. str is stored UTF-8 encoded.
        """
        if isinstance(content, str):
            content = content.encode("utf-8")
        with self._write_lock:
            self._resources[path] = content

    def delete(self, path: str) -> None:
        """Remove a resource.

        Raises:
            RegistryError: If no resource exists at the path.
        """
        with self._write_lock:
            if path not in self._resources:
                raise RegistryError(f"Resource {path} does not exist")
            del self._resources[path]

    def exists(self, path: str) -> bool:
        return path in self._resources

    def get_content(self, path: str) -> bytes:
        try:
            return self._resources[path]
        except KeyError as e:
            raise RegistryError(f"Resource {path} does not exist") from e
