"""File storage for uploaded sources.

Files are stored flat as ``<directory>/<key>.<extension>``. The key is
claimed by the caller; this module only moves bytes.
"""

from __future__ import annotations

from pathlib import Path


class FileStore:
    """Stores uploaded files under a single directory."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def path_for(self, key: int, extension: str) -> Path:
        return self.directory / f"{key}.{extension.lstrip('.')}"

    def store(self, file_bytes: bytes, key: int, extension: str) -> Path:
        """Write *file_bytes* under *key*; refuses to overwrite an existing file.

        Raises:
            FileExistsError: If a file is already stored under *key*.
        """
        path = self.path_for(key, extension)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("xb") as fh:
            fh.write(file_bytes)
        return path

    def discard(self, path: Path) -> None:
        """Remove a stored file (best-effort, used when persisting metadata fails)."""
        path.unlink(missing_ok=True)
