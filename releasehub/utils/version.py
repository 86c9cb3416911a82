"""
Version extraction and comparison for release binary filenames.

Release binaries embed their version in the filename (e.g.
``releasehub-agent-1.10.0.deb``). The configured version pattern is the
naming contract: a filename carries a version when the whole name matches
the pattern, and the version itself is the pattern's single capturing group.

Versions are ordered component-wise as integers, so "2.10.0" sorts above
"2.9.0".
"""

import re
from typing import Optional, Pattern, Tuple

from releasehub.services.exceptions import VersionNotFoundError


# Matches a whole release filename and captures its dotted version.
DEFAULT_VERSION_PATTERN = r".*?(\d+\.\d+\.\d+).*"


def version_key(version: str) -> Tuple[int, ...]:
    """Parse a dotted version into a tuple of integer components.

    Args:
        version: Dotted numeric version such as "1.10.0".

    Returns:
        Tuple of integers; tuple ordering matches ``compare_versions``.

    Raises:
        ValueError: If the version is empty or a component is not numeric.
    """
    if not version:
        raise ValueError("Version string is empty")
    try:
        return tuple(int(part) for part in version.split("."))
    except ValueError:
        raise ValueError(f"Version '{version}' is not a dotted numeric version")


def compare_versions(v1: str, v2: str) -> int:
    """
    Compare two dotted numeric versions.

    Components are compared as integers from left to right. When every
    compared component is equal, the version with fewer components is the
    lower one ("1.2" < "1.2.0").

    Returns:
        -1 if v1 < v2, 0 if equal, 1 if v1 > v2
    """
    k1 = version_key(v1)
    k2 = version_key(v2)
    if k1 < k2:
        return -1
    if k1 > k2:
        return 1
    return 0


class VersionCodec:
    """
    Applies the configured version pattern to filenames.

    Usage:
        >>> codec = VersionCodec(r".*?(\\d+\\.\\d+\\.\\d+).*")
        >>> codec.has_version("app-1.2.0.deb")
        True
        >>> codec.extract_version("app-1.2.0.deb")
        '1.2.0'
    """

    def __init__(self, pattern: str = DEFAULT_VERSION_PATTERN):
        """
        Compile the version pattern.

        Args:
            pattern: Regular expression with exactly one capturing group

        Raises:
            ValueError: If the pattern is not a valid regex or does not have
                exactly one capturing group
        """
        try:
            compiled = re.compile(pattern)
        except re.error as e:
            raise ValueError(f"Invalid version pattern '{pattern}': {e}")
        if compiled.groups != 1:
            raise ValueError(
                f"Version pattern '{pattern}' must have exactly one capturing group "
                f"(found {compiled.groups})"
            )
        self.pattern = pattern
        self._regex: Pattern[str] = compiled

    def has_version(self, filename: str) -> bool:
        """Check whether the whole filename satisfies the version pattern."""
        return self._regex.fullmatch(filename) is not None

    def find_version(self, filename: str) -> Optional[str]:
        """Return the first captured version in filename, or None."""
        match = self._regex.search(filename)
        if match is None:
            return None
        return match.group(1)

    def extract_version(self, filename: str) -> str:
        """
        Extract the version embedded in a filename.

        Runs the pattern as a search and returns the first capturing group.

        Raises:
            VersionNotFoundError: If the pattern does not match or captures nothing
        """
        version = self.find_version(filename)
        if not version:
            raise VersionNotFoundError(filename, self.pattern)
        return version

    def compare(self, v1: str, v2: str) -> int:
        """Compare two versions, see ``compare_versions``."""
        return compare_versions(v1, v2)
