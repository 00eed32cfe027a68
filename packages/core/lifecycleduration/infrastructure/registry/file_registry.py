"""Filesystem-backed registry implementation."""

from pathlib import Path

from lifecycleduration.domain.interfaces.registry import Registry, RegistryError


class FileSystemRegistry(Registry):
    """Registry reading resources from files under a root directory.

    The registry path '/a/b' maps to '<root>/a/b'. Useful for working against
    an exported copy of the lifecycle history collection.
    """

    def __init__(self, root: str | Path) -> None:
        """Initialize FileSystemRegistry.

        Args:
            root: Directory that registry paths are resolved against.

        Raises:
            RegistryError: If root is not an existing directory.
        """
        self._root = Path(root).resolve()
        if not self._root.is_dir():
            raise RegistryError(f"Registry root is not a directory: {self._root}")

    def _resolve(self, path: str) -> Path:
        try:
            resolved = (self._root / path.lstrip("/")).resolve()
        except (ValueError, OSError) as e:
            raise RegistryError(f"Invalid registry path {path!r}: {e}") from e
        # Prevent directory traversal out of the registry root
        if not resolved.is_relative_to(self._root):
            raise RegistryError(f"Registry path escapes registry root: {path}")
        return resolved

    def exists(self, path: str) -> bool:
        return self._resolve(path).is_file()

    def get_content(self, path: str) -> bytes:
        resolved = self._resolve(path)
        try:
            return resolved.read_bytes()
        except (ValueError, OSError) as e:
            raise RegistryError(f"Failed to read resource {path}: {e}") from e
