"""
Artifact model for a downloadable release binary.

Artifacts are derived from a storage listing on every request and are
never persisted.
"""

from dataclasses import dataclass
from datetime import datetime

from releasehub.models.platform import PlatformType


@dataclass(frozen=True)
class Artifact:
    """
    A named, sized, timestamped release binary.

    Attributes:
        name: Filename (object key in S3 mode, file name in local mode)
        location: Public download location (bucket URL + key, or file path)
        size_bytes: File size in bytes
        version: Version extracted from the filename
        modified_at: Last modification timestamp
        platform_type: Platform the filename's extension belongs to

    Raises:
        ValueError: On construction with an empty version or a negative size
    """
    name: str
    location: str
    size_bytes: int
    version: str
    modified_at: datetime
    platform_type: PlatformType

    def __post_init__(self):
        if not self.version:
            raise ValueError(f"Binary '{self.name}' has no version")
        if self.size_bytes < 0:
            raise ValueError(f"Binary '{self.name}' has a negative size: {self.size_bytes}")

    def to_dict(self) -> dict:
        """Serialize for JSON output."""
        return {
            "name": self.name,
            "location": self.location,
            "size_bytes": self.size_bytes,
            "version": self.version,
            "modified_at": self.modified_at.isoformat(),
            "platform_type": self.platform_type.name.lower(),
        }
