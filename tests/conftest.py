"""Pytest configuration and shared fixtures for selfupdate tests."""

import pytest
from pathlib import Path
from typing import Optional

from selfupdate.config.settings import UpdaterSettings
from selfupdate.updater.build import BuildRecord, parse_version
from selfupdate.updater.matcher import name_os_arch_matcher


# Test constants
TEST_REPOSITORY = "http://repo.example.com/repository/raw/app/"
TEST_BINARY = "app"
TEST_OS = "linux"
TEST_ARCH = "amd64"


def _listing(*filenames: str) -> bytes:
    """Build an autoindex-style listing page linking each filename."""
    rows = "\n".join(
        f'<tr><td><a class="file" href="{name}" title="{name}">{name}</a></td></tr>'
        for name in filenames
    )
    return (
        "<html><head><title>Index of /app</title></head><body>\n"
        '<a href="../">Parent Directory</a>\n'
        f"<table>\n{rows}\n</table>\n</body></html>"
    ).encode("utf-8")


def _build(
    version: Optional[str] = "1.0.0",
    name: str = TEST_BINARY,
    os_name: str = TEST_OS,
    arch: str = TEST_ARCH,
    url: str = "",
    raw_filename: Optional[str] = None,
) -> BuildRecord:
    """Create a BuildRecord for tests."""
    version_token = version if version is not None else "none"
    return BuildRecord(
        name=name,
        raw_filename=raw_filename or f"{name}-{version_token}-{os_name}-{arch}",
        version=parse_version(version) if version is not None else None,
        os=os_name,
        arch=arch,
        url=url,
    )


@pytest.fixture
def settings(tmp_path: Path) -> UpdaterSettings:
    """Provide settings targeting a temp file, matching linux/amd64 builds."""
    staging = tmp_path / "staging"
    staging.mkdir()
    return UpdaterSettings(
        binary_name=TEST_BINARY,
        repository=TEST_REPOSITORY,
        target_path=str(tmp_path / "app"),
        matcher=name_os_arch_matcher(TEST_BINARY, TEST_OS, TEST_ARCH),
        tmp_pattern=str(staging / "%s.tmp"),
    )


@pytest.fixture
def installed_binary(settings: UpdaterSettings) -> Path:
    """Create the currently installed binary at the settings target path."""
    target = Path(settings.target_path)
    target.write_bytes(b"\x7fELF old build")
    target.chmod(0o755)
    return target


@pytest.fixture
def make_listing():
    """Factory fixture building listing pages from filenames."""
    return _listing


@pytest.fixture
def make_build():
    """Factory fixture building BuildRecord objects."""
    return _build
