"""
Test suite for version negotiation.

Tests extracting versions from version-command output and testing them
against supported ranges.
"""

import pytest

from chainclient.client.version import (
    Compatibility,
    VersionCheck,
    check_compatibility,
    find_version,
    is_supported_version,
    negotiate_version,
    parse_version,
)


# ============================================================================
# Test Version Parsing
# ============================================================================

class TestParseVersion:
    """Tests for extracting a version from raw output."""

    @pytest.mark.parametrize("raw_output", [
        "Version: 1.2.3",
        "Geth\nVersion: 1.2.3\nGit Commit: abc",
        "Version: 1.2.3-stable",
        "some prefix Version: 1.2.3 some suffix",
    ])
    def test_version_found_anywhere(self, raw_output):
        """Test that the banner is found wherever it appears."""
        assert parse_version(raw_output) == "1.2.3"

    def test_multi_digit_components(self):
        """Test multi-digit components with trailing text."""
        assert parse_version("Version: 10.20.30 (stable)") == "10.20.30"

    @pytest.mark.parametrize("raw_output", [
        "",
        "no version here",
        "version: 1.2.3",
        "Version: 1.2",
        "Version:1.2.3",
        "Version: v1.2.3",
    ])
    def test_fallback_when_no_banner(self, raw_output):
        """Test the fallback version when nothing matches."""
        assert parse_version(raw_output) == "0.0.0"

    def test_geth_output(self, geth_version_output):
        """Test parsing real geth output."""
        assert parse_version(geth_version_output) == "1.8.27"

    def test_first_banner_wins(self):
        """Test that the first banner is used."""
        assert parse_version("Version: 1.0.0\nVersion: 2.0.0") == "1.0.0"

    def test_non_ascii_digits_rejected(self):
        """Test that only ASCII digits count as version components."""
        assert parse_version("Version: \u0661.\u0662.\u0663") == "0.0.0"
        assert find_version("Version: \u0661.\u0662.\u0663") is None


# ============================================================================
# Test Compatibility
# ============================================================================

class TestIsSupportedVersion:
    """Tests for testing versions against ranges."""

    def test_minimum_version_met(self):
        assert is_supported_version("1.3.0", ">=1.3.0") is True

    def test_minimum_version_not_met(self):
        assert is_supported_version("1.2.9", ">=1.3.0") is False

    @pytest.mark.parametrize("version,expected", [
        ("2.0.0", True),
        ("2.9.1", True),
        ("1.9.9", False),
        ("3.0.0", False),
    ])
    def test_caret_range(self, version, expected):
        assert is_supported_version(version, "^2.0.0") is expected

    @pytest.mark.parametrize("version,expected", [
        ("1.2.7", True),
        ("2.0.0", False),
        ("2.5.0", True),
    ])
    def test_or_range(self, version, expected):
        """Test ranges joined with ||."""
        assert is_supported_version(version, "1.2.x || >=2.5.0") is expected

    def test_and_range(self):
        """Test comparators joined by whitespace."""
        assert is_supported_version("1.5.0", ">=1.3.0 <2.0.0") is True
        assert is_supported_version("2.0.0", ">=1.3.0 <2.0.0") is False

    def test_prerelease_is_dropped(self):
        """Test that pre-release metadata does not affect the verdict."""
        assert is_supported_version("1.9.0-unstable", ">=1.3.0") is True
        assert is_supported_version("1.3.0+build.7", "1.3.0") is True

    @pytest.mark.parametrize("version", ["0.0.1", "1.2.3", "4.5.6", "10.20.30"])
    def test_exact_version_round_trip(self, version):
        """Test that a version satisfies a range naming exactly that version."""
        assert is_supported_version(version, version) is True

    @pytest.mark.parametrize("versions_supported", ["", "   ", "garbage", ">=abc"])
    def test_malformed_range_is_indeterminate(self, versions_supported):
        assert is_supported_version("1.3.0", versions_supported) is None

    @pytest.mark.parametrize("version", ["abc", "1.2", "", "1.2.3.4"])
    def test_malformed_version_is_indeterminate(self, version):
        assert is_supported_version(version, ">=1.3.0") is None

    def test_check_compatibility_enum(self):
        """Test the explicit three-valued result."""
        assert check_compatibility("1.3.0", ">=1.3.0") is Compatibility.SUPPORTED
        assert check_compatibility("1.2.0", ">=1.3.0") is Compatibility.UNSUPPORTED
        assert check_compatibility("abc", ">=1.3.0") is Compatibility.INDETERMINATE

    def test_compatibility_as_bool(self):
        assert Compatibility.SUPPORTED.as_bool() is True
        assert Compatibility.UNSUPPORTED.as_bool() is False
        assert Compatibility.INDETERMINATE.as_bool() is None


# ============================================================================
# Test Full Negotiation
# ============================================================================

class TestNegotiateVersion:
    """Tests for negotiating raw output against a range."""

    def test_supported_binary(self, geth_version_output):
        result = negotiate_version(geth_version_output, ">=1.8.14")

        assert isinstance(result, VersionCheck)
        assert result.detected is True
        assert result.version == "1.8.27"
        assert result.compatibility is Compatibility.SUPPORTED
        assert result.supported is True

    def test_unsupported_binary(self, old_geth_version_output):
        result = negotiate_version(old_geth_version_output, ">=1.8.14")

        assert result.detected is True
        assert result.version == "1.7.3"
        assert result.supported is False

    def test_missing_banner_is_indeterminate(self, parity_version_output):
        """Test that output without a banner is not reported as unsupported."""
        result = negotiate_version(parity_version_output, ">=2.0.0")

        assert result.detected is False
        assert result.version == "0.0.0"
        assert result.compatibility is Compatibility.INDETERMINATE
        assert result.supported is None

    def test_non_ascii_digits_not_detected(self):
        result = negotiate_version("Version: \u0661.\u0662.\u0663", ">=1.0.0")

        assert result.detected is False
        assert result.compatibility is Compatibility.INDETERMINATE

    def test_custom_banner_parser(self):
        """Test negotiating output in a different banner format."""
        def find(raw_output):
            return raw_output.split("/v", 1)[1][:5] if "/v" in raw_output else None

        result = negotiate_version("Node/v2.4.5-stable", ">=2.0.0", find=find)

        assert result.detected is True
        assert result.version == "2.4.5"
        assert result.supported is True

    def test_malformed_range(self, geth_version_output):
        result = negotiate_version(geth_version_output, "garbage")

        assert result.detected is True
        assert result.compatibility is Compatibility.INDETERMINATE
