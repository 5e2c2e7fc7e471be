"""
Version negotiation for node binaries.

Turns the human-oriented output of a node's version command into a
compatibility verdict against the range of versions an adapter supports:

    raw output -> parse_version -> "1.8.27" -> is_supported_version -> True/False/None

Range expressions follow npm semver semantics (``>=1.3.0``, ``^2.0.0``,
``1.2.x || >=2.5.0``...).
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

import nodesemver
import structlog

logger = structlog.get_logger(__name__)


# Matches "Version: <major>.<minor>.<patch>" anywhere in the output
VERSION_REGEX = re.compile(r"Version: ([0-9]+\.[0-9]+\.[0-9]+).*?")

FALLBACK_VERSION = "0.0.0"


class Compatibility(str, Enum):
    """Outcome of testing a version against a supported range."""
    SUPPORTED = "supported"
    UNSUPPORTED = "unsupported"
    INDETERMINATE = "indeterminate"    # Version or range could not be evaluated

    def as_bool(self) -> Optional[bool]:
        """True/False for a definite verdict, None when indeterminate."""
        if self is Compatibility.INDETERMINATE:
            return None
        return self is Compatibility.SUPPORTED


def find_version(raw_output: str) -> Optional[str]:
    """Version after "Version: " in raw output, or None when there is none."""
    match = VERSION_REGEX.search(raw_output)
    if match is None:
        return None
    return match.group(1).strip()


def parse_version(raw_output: str) -> str:
    """
    Extract a ``major.minor.patch`` version from raw version-command output.

    Args:
        raw_output: Text printed by the node's version command

    Returns:
        The version found after "Version: ", or "0.0.0" when there is none
    """
    return find_version(raw_output) or FALLBACK_VERSION


def check_compatibility(parsed_version: str, versions_supported: str) -> Compatibility:
    """
    Test a version against a semver range expression.

    Pre-release and build metadata are dropped before testing, so
    "1.9.0-unstable" is tested as "1.9.0".

    Args:
        parsed_version: Version string, normally from parse_version
        versions_supported: Range expression declared by the adapter

    Returns:
        SUPPORTED or UNSUPPORTED, or INDETERMINATE when the version or the
        range is not valid semver (an empty range counts as undeclared)
    """
    if not versions_supported or not versions_supported.strip():
        return Compatibility.INDETERMINATE

    try:
        version = nodesemver.make_semver(parsed_version, loose=False)
        normalized = f"{version.major}.{version.minor}.{version.patch}"
        version_range = nodesemver.make_range(versions_supported, loose=False)
        result = version_range.test(nodesemver.make_semver(normalized, loose=False))
    except (ValueError, TypeError) as e:
        logger.debug(
            "version_check_failed",
            version=parsed_version,
            range=versions_supported,
            error=str(e),
        )
        return Compatibility.INDETERMINATE

    if not isinstance(result, bool):
        return Compatibility.INDETERMINATE
    return Compatibility.SUPPORTED if result else Compatibility.UNSUPPORTED


def is_supported_version(parsed_version: str, versions_supported: str) -> Optional[bool]:
    """
    Test a version against a semver range expression.

    Returns:
        True or False when the test ran, None when compatibility could not
        be determined
    """
    return check_compatibility(parsed_version, versions_supported).as_bool()


@dataclass(frozen=True)
class VersionCheck:
    """Result of negotiating a binary's version against a supported range."""
    detected: bool                  # Whether a version banner was found
    version: str                    # Parsed version ("0.0.0" if not detected)
    versions_supported: str
    compatibility: Compatibility

    @property
    def supported(self) -> Optional[bool]:
        return self.compatibility.as_bool()


def negotiate_version(
    raw_output: str,
    versions_supported: str,
    find: Callable[[str], Optional[str]] = find_version,
) -> VersionCheck:
    """
    Run the full check on raw version-command output.

    Unlike testing ``parse_version``'s fallback directly, output without a
    recognizable version banner gives an INDETERMINATE verdict instead of
    "0.0.0" being reported as unsupported.

    Args:
        raw_output: Text printed by the node's version command
        versions_supported: Range expression declared by the adapter
        find: Banner parser returning the version or None, adapters with
            their own banner format pass theirs

    Returns:
        The parsed version and its compatibility
    """
    found = find(raw_output)
    if found is None:
        logger.warning("version_not_detected", range=versions_supported)
        return VersionCheck(
            detected=False,
            version=FALLBACK_VERSION,
            versions_supported=versions_supported,
            compatibility=Compatibility.INDETERMINATE,
        )

    compatibility = check_compatibility(found, versions_supported)
    if compatibility is Compatibility.SUPPORTED:
        logger.debug("version_supported", version=found, range=versions_supported)
    elif compatibility is Compatibility.UNSUPPORTED:
        logger.warning("version_unsupported", version=found, range=versions_supported)
    else:
        logger.warning("version_indeterminate", version=found, range=versions_supported)

    return VersionCheck(
        detected=True,
        version=found,
        versions_supported=versions_supported,
        compatibility=compatibility,
    )
