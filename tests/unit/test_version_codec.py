"""Unit tests for releasehub.utils.version: filename versions and ordering."""

import pytest

from releasehub.services.exceptions import VersionNotFoundError
from releasehub.utils.version import VersionCodec, compare_versions, version_key


class TestCompareVersions:
    """Tests for compare_versions()."""

    def test_patch_increment_is_greater(self):
        assert compare_versions("1.2.1", "1.2.0") == 1

    def test_numeric_not_lexicographic(self):
        assert compare_versions("1.10.0", "1.9.9") == 1
        assert compare_versions("2.9.0", "2.10.0") == -1

    def test_equal_versions(self):
        assert compare_versions("3.0.0", "3.0.0") == 0

    def test_leading_zeros_compare_numerically(self):
        assert compare_versions("1.02.0", "1.2.0") == 0

    def test_shorter_version_is_lower_on_equal_prefix(self):
        assert compare_versions("1.2", "1.2.0") == -1
        assert compare_versions("1.2.0.1", "1.2.0") == 1

    def test_non_numeric_component_rejected(self):
        with pytest.raises(ValueError):
            compare_versions("1.2.x", "1.2.0")

    def test_empty_version_rejected(self):
        with pytest.raises(ValueError):
            version_key("")

    def test_sorting_list_of_versions(self):
        versions = ["1.9.5", "1.10.0", "1.2.0", "0.9.0"]
        assert sorted(versions, key=version_key) == ["0.9.0", "1.2.0", "1.9.5", "1.10.0"]


class TestVersionCodec:
    """Tests for VersionCodec."""

    def test_has_version_true_for_versioned_filename(self, codec):
        assert codec.has_version("app-1.2.0.deb") is True

    def test_has_version_false_without_version(self, codec):
        assert codec.has_version("app-latest.deb") is False

    def test_has_version_requires_full_match(self):
        codec = VersionCodec(r"app-(\d+\.\d+\.\d+)\.deb")
        assert codec.has_version("app-1.2.0.deb") is True
        assert codec.has_version("app-1.2.0.deb.bak") is False
        assert codec.has_version("my-app-1.2.0.deb") is False

    def test_extract_version_returns_captured_group(self, codec):
        assert codec.extract_version("app-1.10.0.tar.bz2") == "1.10.0"

    def test_extract_version_uses_search(self):
        codec = VersionCodec(r"(\d+\.\d+\.\d+)")
        assert codec.has_version("app-1.2.0.deb") is False
        assert codec.extract_version("app-1.2.0.deb") == "1.2.0"

    def test_extract_version_missing_raises(self, codec):
        with pytest.raises(VersionNotFoundError) as exc_info:
            codec.extract_version("app-latest.msi")

        assert exc_info.value.filename == "app-latest.msi"
        assert exc_info.value.pattern == codec.pattern
        assert "app-latest.msi" in str(exc_info.value)

    def test_find_version_returns_none(self, codec):
        assert codec.find_version("readme.txt") is None

    def test_compare_delegates(self, codec):
        assert codec.compare("2.10.0", "2.9.0") == 1

    def test_pattern_without_group_rejected(self):
        with pytest.raises(ValueError, match="exactly one capturing group"):
            VersionCodec(r"\d+\.\d+\.\d+")

    def test_pattern_with_two_groups_rejected(self):
        with pytest.raises(ValueError, match="exactly one capturing group"):
            VersionCodec(r"(\d+)\.(\d+)")

    def test_invalid_regex_rejected(self):
        with pytest.raises(ValueError, match="Invalid version pattern"):
            VersionCodec(r"(\d+")
