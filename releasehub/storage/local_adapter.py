"""
Local filesystem adapter for release binaries.

Implements StorageAdapter for a single flat directory. Only regular files
directly inside the directory are listed.

Design Pattern: Strategy pattern - same interface as the S3 adapter
"""

import stat
from pathlib import Path
from typing import BinaryIO, List, Tuple

from releasehub.storage.base import StorageAdapter, FileInfo
from releasehub.utils.logging_config import get_logger


logger = get_logger("storage")

PUBLIC_READ_BITS = stat.S_IRUSR | stat.S_IRGRP | stat.S_IROTH


class LocalAdapter(StorageAdapter):
    """
    Local directory adapter.

    Example:
        >>> adapter = LocalAdapter("/srv/binaries")
        >>> files = adapter.list_files_with_metadata()
    """

    def __init__(self, root: str):
        """
        Initialize LocalAdapter.

        Args:
            root: Directory holding the binaries
        """
        self.root = Path(root).expanduser().resolve()

    def _check_root(self) -> None:
        if not self.root.exists():
            raise FileNotFoundError(f"Path does not exist: {self.root}")
        if not self.root.is_dir():
            raise ValueError(f"Path is not a directory: {self.root}")

    def _resolve(self, name: str) -> Path:
        """
        Resolve a binary name to a path inside the root directory.

        Raises:
            ValueError: If name is empty, contains path separators or
                resolves outside the root directory
        """
        if not name or '/' in name or '\\' in name or name in ('.', '..'):
            raise ValueError(f"Invalid binary name: '{name}'")
        file_path = (self.root / name).resolve()
        if file_path.parent != self.root:
            raise ValueError(f"Invalid binary name: '{name}'")
        return file_path

    def list_files_with_metadata(self) -> List[FileInfo]:
        """
        List regular files directly inside the root directory.

        Raises:
            FileNotFoundError: If the root doesn't exist
            ValueError: If the root isn't a directory
        """
        self._check_root()

        files = [
            FileInfo.from_path_object(file_path)
            for file_path in sorted(self.root.iterdir())
            if file_path.is_file()
        ]
        logger.debug(f"Listed {len(files)} binaries from {self.root}")
        return files

    def open_stream(self, name: str) -> BinaryIO:
        """Open a binary for reading; the caller closes the stream."""
        return open(self._resolve(name), "rb")

    def put(self, name: str, data: bytes) -> None:
        """Write data to root/name, replacing any existing file."""
        self._check_root()
        file_path = self._resolve(name)
        file_path.write_bytes(data)
        logger.info(f"Stored {len(data)} bytes in {file_path}")

    def delete(self, name: str) -> None:
        """Remove root/name if it exists."""
        self._resolve(name).unlink(missing_ok=True)

    def set_public_read(self, name: str) -> None:
        """Add read permission for owner, group and others."""
        file_path = self._resolve(name)
        mode = file_path.stat().st_mode
        file_path.chmod(stat.S_IMODE(mode) | PUBLIC_READ_BITS)

    def public_location(self, name: str) -> str:
        """Absolute path of the binary."""
        return str(self.root / name)

    def test_connection(self) -> Tuple[bool, str]:
        """Check that the root directory exists and is a directory."""
        if not self.root.is_dir():
            return False, f"Directory does not exist: {self.root}"
        return True, f"Local directory available: {self.root}"
