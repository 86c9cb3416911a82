"""
Platform type enumeration for release binaries.

Each platform is bound to exactly one filename suffix; the suffix is how a
stored binary is attributed to its platform.
"""

import enum
from typing import Optional


class PlatformType(enum.Enum):
    """
    Release binary platform.

    Supported platforms:
    - LINUX_ARCHIVE: Linux tarball (.tar.bz2)
    - LINUX_PACKAGE: Debian package (.deb)
    - WINDOWS_INSTALLER: Windows installer (.msi)
    """
    LINUX_ARCHIVE = "tar.bz2"
    LINUX_PACKAGE = "deb"
    WINDOWS_INSTALLER = "msi"

    @property
    def suffix(self) -> str:
        """Filename extension without the leading dot (e.g., 'tar.bz2')."""
        return self.value

    def matches(self, filename: str) -> bool:
        """Check whether filename carries this platform's extension."""
        return filename.endswith(f".{self.value}")

    @classmethod
    def for_filename(cls, filename: str) -> Optional["PlatformType"]:
        """Return the platform whose extension ends filename, if any."""
        for platform_type in cls:
            if platform_type.matches(filename):
                return platform_type
        return None

    @classmethod
    def parse(cls, value: str) -> "PlatformType":
        """
        Parse a platform from its name ("linux_package") or suffix ("deb").

        Raises:
            ValueError: If value names no platform
        """
        normalized = value.strip()
        for platform_type in cls:
            if normalized.upper() == platform_type.name or normalized.lower() == platform_type.value:
                return platform_type
        valid = ", ".join(p.name.lower() for p in cls)
        raise ValueError(f"Invalid platform type '{value}'. Must be one of: {valid}")
