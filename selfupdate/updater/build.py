"""Build data models for selfupdate.

Defines the field kinds used to describe artifact filenames and the
BuildRecord dataclass for one artifact found in a repository listing.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

import semver


class FieldKind(Enum):
    """Logical field carried by an artifact filename."""
    NAME = "name"
    VERSION = "version"
    OS = "os"
    ARCH = "arch"


# <name>-<version>-<os>-<arch>
DEFAULT_FIELDS: Tuple[FieldKind, ...] = (
    FieldKind.NAME,
    FieldKind.VERSION,
    FieldKind.OS,
    FieldKind.ARCH,
)


def parse_version(value: str) -> Optional[semver.Version]:
    """
    Parse a semantic version string.

    Args:
        value: Version token (e.g. "1.2.0", "2.0.0-rc.1")

    Returns:
        Parsed version, or None if the token is not a valid semantic version
    """
    try:
        return semver.Version.parse(value)
    except (ValueError, TypeError):
        return None


@dataclass(frozen=True)
class BuildRecord:
    """Represents one build artifact discovered in a repository listing."""
    name: str
    raw_filename: str
    version: Optional[semver.Version]
    os: str
    arch: str
    checksum: str = ""  # carried through, never verified
    url: str = ""

    def __post_init__(self):
        if not self.raw_filename:
            raise ValueError("BuildRecord requires a non-empty raw_filename")

    @property
    def has_version(self) -> bool:
        """True if the filename carried a valid semantic version."""
        return self.version is not None

    @property
    def display_version(self) -> str:
        """Human-readable version string."""
        return str(self.version) if self.version is not None else "unknown"

    def with_url(self, url: str) -> "BuildRecord":
        """Return a copy of this record pointing at the given download URL."""
        return replace(self, url=url)

    def newer_than(self, version: str) -> bool:
        """
        Check whether this build is newer than a given version.

        Args:
            version: Semantic version string to compare against

        Returns:
            True if this build has a version strictly greater than `version`

        Raises:
            ValueError: If `version` is not a valid semantic version
        """
        if self.version is None:
            return False
        return semver.Version.parse(version) < self.version
