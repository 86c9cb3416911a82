"""
Binary service for release resolution and upload.

Provides:
- latest / latest_all: Newest binary per platform, by numeric version
- upload_or_replace: Validated upload that replaces a same-named binary
- delete_if_exists: Idempotent removal
- resolve_version: Version of the single current binary of a platform
- stream_for: Readable stream of a binary by exact name

Every operation lists the store at most once; selection runs in memory.
"""

from typing import BinaryIO, Iterable, List, Optional

from releasehub.models.artifact import Artifact
from releasehub.models.platform import PlatformType
from releasehub.services.exceptions import ArtifactNotFoundError, InvalidFilenameError
from releasehub.storage.base import StorageAdapter, FileInfo
from releasehub.utils.logging_config import get_logger
from releasehub.utils.version import VersionCodec, version_key


logger = get_logger("services")


def select_latest(
    files: Iterable[FileInfo],
    platform_type: PlatformType,
    codec: VersionCodec
) -> Optional[FileInfo]:
    """
    Pick the file with the highest version among a platform's files.

    Files without the platform's extension are ignored. Files with equal
    versions are ordered by name, so the same listing always yields the
    same result.

    Args:
        files: Storage listing
        platform_type: Platform whose extension filters the listing
        codec: Version codec used to extract each file's version

    Returns:
        The newest matching file, or None if no file has the extension

    Raises:
        VersionNotFoundError: If a matching file carries no version
    """
    best: Optional[FileInfo] = None
    best_key = None
    for file_info in files:
        if not platform_type.matches(file_info.name):
            continue
        key = (version_key(codec.extract_version(file_info.name)), file_info.name)
        if best_key is None or key > best_key:
            best, best_key = file_info, key
    return best


class ArtifactService:
    """
    Service resolving and managing release binaries in a storage backend.

    Usage:
        >>> service = ArtifactService(LocalAdapter("/srv/binaries"), VersionCodec())
        >>> service.latest(PlatformType.LINUX_PACKAGE)
        Artifact(name='app-1.10.0.deb', ...)
    """

    def __init__(self, adapter: StorageAdapter, codec: VersionCodec):
        """Initialize service with a storage adapter and version codec."""
        self.adapter = adapter
        self.codec = codec

    def _to_artifact(self, file_info: FileInfo, platform_type: PlatformType) -> Artifact:
        return Artifact(
            name=file_info.name,
            location=self.adapter.public_location(file_info.name),
            size_bytes=file_info.size,
            version=self.codec.extract_version(file_info.name),
            modified_at=file_info.last_modified,
            platform_type=platform_type
        )

    def _latest_from(self, files: List[FileInfo], platform_type: PlatformType) -> Optional[Artifact]:
        file_info = select_latest(files, platform_type, self.codec)
        if file_info is None:
            return None
        return self._to_artifact(file_info, platform_type)

    def latest(self, platform_type: PlatformType) -> Optional[Artifact]:
        """
        Get the newest binary for a platform.

        Args:
            platform_type: Platform to resolve

        Returns:
            Artifact with the highest version, or None if the platform has no binary
        """
        artifact = self._latest_from(self.adapter.list_files_with_metadata(), platform_type)
        logger.debug(
            f"Resolved latest {platform_type.name} binary: "
            f"{artifact.name if artifact else None}"
        )
        return artifact

    def latest_all(self) -> List[Artifact]:
        """
        Get the newest binary of every platform that has one.

        Platforms without binaries are skipped. The store is listed once.
        """
        files = self.adapter.list_files_with_metadata()
        artifacts = []
        for platform_type in PlatformType:
            artifact = self._latest_from(files, platform_type)
            if artifact is not None:
                artifacts.append(artifact)
        return artifacts

    def upload_or_replace(self, filename: str, data: bytes) -> None:
        """
        Store a binary, replacing any existing binary of the same name.

        The existing binary is deleted before the new one is written and
        made publicly readable. Delete and put are not atomic: a failure
        between them leaves the binary absent.

        Args:
            filename: Binary filename; the whole name must match the version pattern
            data: Binary content

        Raises:
            InvalidFilenameError: If filename contains a path separator, does not
                match the version pattern or has no platform extension. Raised
                before the store is touched.
        """
        if not filename or '/' in filename or '\\' in filename:
            raise InvalidFilenameError(filename, "filename must not contain path separators")
        if not self.codec.has_version(filename):
            raise InvalidFilenameError(
                filename, f"binary version is missing (pattern: {self.codec.pattern})"
            )
        if PlatformType.for_filename(filename) is None:
            suffixes = ", ".join(p.suffix for p in PlatformType)
            raise InvalidFilenameError(
                filename, f"extension must be one of: {suffixes}"
            )

        self.delete_if_exists(filename)
        self.adapter.put(filename, data)
        self.adapter.set_public_read(filename)

        logger.info(
            f"Uploaded binary {filename} ({len(data)} bytes)",
            extra={"binary_filename": filename, "size_bytes": len(data)}
        )

    def delete_if_exists(self, filename: str) -> None:
        """Remove a binary; absent binaries are ignored."""
        self.adapter.delete(filename)
        logger.info(f"Deleted binary {filename} if present")

    def resolve_version(self, platform_type: PlatformType) -> str:
        """
        Get the version of a platform's current binary.

        Intended for local-directory deployments holding one binary per
        platform. When several are present the most recently modified one
        is used.

        Raises:
            ArtifactNotFoundError: If the platform has no binary
            VersionNotFoundError: If the binary's name carries no version
        """
        candidates = [
            f for f in self.adapter.list_files_with_metadata()
            if platform_type.matches(f.name)
        ]
        if not candidates:
            raise ArtifactNotFoundError(platform_type.name)

        current = max(candidates, key=lambda f: (f.last_modified, f.name))
        return self.codec.extract_version(current.name)

    def stream_for(self, filename: str) -> BinaryIO:
        """
        Open a binary by exact filename.

        The caller owns the returned stream and must close it.

        Raises:
            ArtifactNotFoundError: If no stored binary of any platform has that name
        """
        if PlatformType.for_filename(filename) is None:
            raise ArtifactNotFoundError(filename)
        names = {f.name for f in self.adapter.list_files_with_metadata()}
        if filename not in names:
            raise ArtifactNotFoundError(filename)
        return self.adapter.open_stream(filename)
