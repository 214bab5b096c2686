"""Unit tests for version parsing and API compatibility checks."""

import pytest

from stromboli import __version__
from stromboli.versioning import (
    API_VERSION_RANGE,
    SDK_VERSION,
    is_compatible,
    parse_version,
)


class TestParseVersion:
    """Tests for parse_version()."""

    @pytest.mark.parametrize(
        "version,expected",
        [
            ("0.3.2", (0, 3, 2)),
            ("v1.2.3", (1, 2, 3)),
            ("0.4.1-beta.2", (0, 4, 1)),
            ("2.0", (2, 0, 0)),
            ("3", (3, 0, 0)),
            (" 0.3.0 ", (0, 3, 0)),
        ],
    )
    def test_valid(self, version, expected):
        assert parse_version(version) == expected

    @pytest.mark.parametrize("version", ["", "unknown", "beta-1"])
    def test_invalid(self, version):
        assert parse_version(version) is None


class TestIsCompatible:
    """Tests for is_compatible() against the default range."""

    @pytest.mark.parametrize("version", ["0.3.0", "0.3.2", "0.9.99", "0.4.0-rc.1"])
    def test_inside_range(self, version):
        assert is_compatible(version) is True

    @pytest.mark.parametrize("version", ["0.2.9", "1.0.0", "2.1.0"])
    def test_outside_range(self, version):
        assert is_compatible(version) is False

    def test_unparseable_version_is_incompatible(self):
        assert is_compatible("unknown") is False

    def test_custom_range(self):
        assert is_compatible("1.4.0", ">1.2.0 <=1.4.0") is True
        assert is_compatible("1.4.1", ">1.2.0 <=1.4.0") is False

    def test_bare_version_means_exact(self):
        assert is_compatible("1.2.3", "1.2.3") is True
        assert is_compatible("1.2.4", "1.2.3") is False
        assert is_compatible("1.2.3", "==1.2.3") is True

    def test_invalid_comparator(self):
        with pytest.raises(ValueError, match="Invalid version comparator"):
            is_compatible("1.0.0", ">=latest")


class TestConstants:
    def test_sdk_version_matches_package(self):
        assert SDK_VERSION == __version__

    def test_default_range(self):
        assert API_VERSION_RANGE == ">=0.3.0 <1.0.0"
