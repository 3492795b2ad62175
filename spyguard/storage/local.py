"""
Local filesystem storage backend.

Keys are paths relative to a root directory. A key that would resolve outside
the root is rejected.
"""

from __future__ import annotations

from pathlib import Path

import aiofiles

from .interface import StorageBackend


class LocalStorageBackend(StorageBackend):
    """Documents stored as files under a root directory."""

    def __init__(self, root: Path) -> None:
        """Initialize local storage.

        Args:
            root: Directory that every key is resolved against.
        """
        self.root = root.resolve()

    @classmethod
    def for_file(cls, path: Path) -> tuple[LocalStorageBackend, str]:
        """Backend rooted at a file's directory, plus the file's key."""
        resolved = path.resolve()
        return cls(resolved.parent), resolved.name

    def path_for(self, key: str) -> Path:
        """Filesystem path for a key.

        Raises:
            ValueError: If the key resolves outside the root directory.
        """
        path = (self.root / key.lstrip("/\\")).resolve()
        if path != self.root and self.root not in path.parents:
            raise ValueError(f"Key escapes storage root: {key}")
        return path

    async def read_text(self, key: str) -> str:
        path = self.path_for(key)
        if not path.is_file():
            raise FileNotFoundError(f"Key not found: {key}")

        async with aiofiles.open(path, "r", encoding="utf-8") as f:
            return await f.read()

    async def write_text(self, key: str, content: str) -> str:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)

        async with aiofiles.open(path, "w", encoding="utf-8") as f:
            await f.write(content)
        return key

    async def exists(self, key: str) -> bool:
        return self.path_for(key).is_file()
