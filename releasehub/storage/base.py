"""
Abstract base class for binary storage adapters.

Defines the interface the binary service needs from a storage backend:
list, read, write, delete and grant public read. Concrete adapters exist
for S3 buckets and local directories.

Design Pattern: Strategy pattern for pluggable storage backends
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, List, Tuple


@dataclass(frozen=True)
class FileInfo:
    """
    Stored file as reported by a storage listing.

    Attributes:
        name: File name (S3 object key or local file name)
        size: File size in bytes
        last_modified: Last modification timestamp
    """
    name: str
    size: int
    last_modified: datetime

    @classmethod
    def from_path_object(cls, file_path: Path) -> "FileInfo":
        """
        Create FileInfo from a local file.

        Args:
            file_path: Path to a regular file

        Returns:
            FileInfo with the file's name, size and mtime
        """
        stat = file_path.stat()
        return cls(
            name=file_path.name,
            size=stat.st_size,
            last_modified=datetime.fromtimestamp(stat.st_mtime)
        )


class StorageAdapter(ABC):
    """
    Abstract base class for binary storage.

    Methods:
        list_files_with_metadata(): List stored files with size and timestamp
        open_stream(): Open a stored file for reading
        put(): Store bytes under a name, replacing any existing content
        delete(): Remove a stored file (no-op if absent)
        set_public_read(): Grant anonymous read access to a stored file
        public_location(): Location clients download a stored file from
        test_connection(): Validate credentials and connectivity

    Usage:
        >>> adapter = LocalAdapter("/srv/binaries")
        >>> files = adapter.list_files_with_metadata()
        >>> with adapter.open_stream(files[0].name) as stream:
        ...     data = stream.read()
    """

    @abstractmethod
    def list_files_with_metadata(self) -> List[FileInfo]:
        """
        List all stored files with size and modification time.

        Returns:
            List of FileInfo objects (directories excluded)
        """
        pass

    @abstractmethod
    def open_stream(self, name: str) -> BinaryIO:
        """
        Open a stored file for reading.

        The caller owns the returned stream and must close it.

        Raises:
            FileNotFoundError: Local mode, file does not exist
            botocore.exceptions.ClientError: S3 mode, object cannot be read
        """
        pass

    @abstractmethod
    def put(self, name: str, data: bytes) -> None:
        """Store data under name, replacing any existing content."""
        pass

    @abstractmethod
    def delete(self, name: str) -> None:
        """Remove the file stored under name. Absent files are ignored."""
        pass

    @abstractmethod
    def set_public_read(self, name: str) -> None:
        """Grant anonymous read access to the file stored under name."""
        pass

    @abstractmethod
    def public_location(self, name: str) -> str:
        """Return the location clients download name from."""
        pass

    @abstractmethod
    def test_connection(self) -> Tuple[bool, str]:
        """
        Test connectivity to the storage backend.

        Returns:
            Tuple of (success: bool, message: str)
        """
        pass
