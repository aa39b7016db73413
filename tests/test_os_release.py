"""Tests for os-release inspection."""

import pytest

from exceptions import DistributionError
from models import DistributionInfo
from osrelease.inspector import (
    confirm_distribution,
    get_distribution,
    get_os_release_value,
    get_release_version,
    read_distribution_info,
)

ALPINE_RELEASE = """NAME="Alpine Linux"
ID=alpine
VERSION_ID=3.17.3
PRETTY_NAME="Alpine Linux v3.17"
HOME_URL="https://alpinelinux.org/"
"""

DEBIAN_RELEASE = """PRETTY_NAME="Debian GNU/Linux 12 (bookworm)"
NAME="Debian GNU/Linux"
VERSION_ID="12"
VERSION="12 (bookworm)"
ID=debian
"""


@pytest.fixture
def alpine_release(tmp_path):
    path = tmp_path / "os-release"
    path.write_text(ALPINE_RELEASE, encoding="utf-8")
    return str(path)


@pytest.fixture
def debian_release(tmp_path):
    path = tmp_path / "os-release"
    path.write_text(DEBIAN_RELEASE, encoding="utf-8")
    return str(path)


class TestGetOsReleaseValue:
    """Test KEY=VALUE lookup."""

    def test_returns_id_by_default(self, alpine_release):
        assert get_os_release_value(alpine_release) == "alpine"

    def test_strips_quotes(self, alpine_release):
        assert get_os_release_value(alpine_release, "NAME") == "Alpine Linux"

    def test_allows_whitespace_around_equals(self, tmp_path):
        path = tmp_path / "os-release"
        path.write_text("ID = alpine\n", encoding="utf-8")
        assert get_os_release_value(str(path)) == "alpine"

    def test_key_must_start_the_line(self, tmp_path):
        """VERSION_ID must not match a lookup for ID."""
        path = tmp_path / "os-release"
        path.write_text("VERSION_ID=3.17.3\n", encoding="utf-8")
        assert get_os_release_value(str(path), "ID") == ""

    def test_key_is_case_sensitive(self, tmp_path):
        path = tmp_path / "os-release"
        path.write_text("id=alpine\n", encoding="utf-8")
        assert get_os_release_value(str(path)) == ""

    def test_first_match_wins(self, tmp_path):
        path = tmp_path / "os-release"
        path.write_text("ID=alpine\nID=debian\n", encoding="utf-8")
        assert get_os_release_value(str(path)) == "alpine"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(DistributionError):
            get_os_release_value(str(tmp_path / "missing"))


class TestConfirmDistribution:
    """Test the target distribution check."""

    def test_matches_case_insensitively(self, alpine_release):
        assert confirm_distribution(alpine_release, "Alpine") is True

    def test_rejects_other_distribution(self, debian_release):
        assert confirm_distribution(debian_release, "alpine") is False

    def test_rejects_missing_id(self, tmp_path):
        path = tmp_path / "os-release"
        path.write_text("NAME=Something\n", encoding="utf-8")
        assert confirm_distribution(str(path)) is False

    def test_get_distribution(self, debian_release):
        assert get_distribution(debian_release) == "debian"


class TestGetReleaseVersion:
    """Test release detection."""

    def test_truncates_patch_level(self, alpine_release):
        assert get_release_version(alpine_release) == "v3.17"

    def test_major_minor_only(self, tmp_path):
        path = tmp_path / "os-release"
        path.write_text("ID=alpine\nVERSION_ID=3.19\n", encoding="utf-8")
        assert get_release_version(str(path)) == "v3.19"

    def test_no_numeric_version_returns_empty(self, tmp_path):
        path = tmp_path / "os-release"
        path.write_text("ID=alpine\nVERSION_ID=edge\n", encoding="utf-8")
        assert get_release_version(str(path)) == ""

    def test_wrong_distribution_raises(self, debian_release):
        with pytest.raises(DistributionError) as exc_info:
            get_release_version(debian_release)
        assert "alpine" in str(exc_info.value)
        assert "debian" in str(exc_info.value)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(DistributionError):
            get_release_version(str(tmp_path / "missing"))


class TestReadDistributionInfo:
    """Test DistributionInfo collection."""

    def test_alpine(self, alpine_release):
        info = read_distribution_info(alpine_release)
        assert info == DistributionInfo(identifier="alpine", release="v3.17")
        assert info.matches("ALPINE")

    def test_other_distribution_is_not_an_error(self, debian_release):
        info = read_distribution_info(debian_release)
        assert info.identifier == "debian"
        assert info.release == ""
        assert not info.matches("alpine")
