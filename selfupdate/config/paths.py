"""Platform discovery for selfupdate.

Maps the running interpreter's platform to the OS/architecture
identifiers used in published artifact names, and locates the running
executable and the temporary staging directory.
"""

import os
import platform
import sys
import tempfile
from pathlib import Path
from typing import Dict


# sys.platform prefix -> published OS identifier
OS_NAMES: Dict[str, str] = {
    "linux": "linux",
    "darwin": "darwin",
    "win32": "windows",
    "cygwin": "windows",
    "freebsd": "freebsd",
    "openbsd": "openbsd",
    "netbsd": "netbsd",
}

# platform.machine() (lowercased) -> published architecture identifier
ARCH_NAMES: Dict[str, str] = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "x64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv8l": "arm64",
    "i386": "386",
    "i486": "386",
    "i586": "386",
    "i686": "386",
    "x86": "386",
    "armv6l": "arm",
    "armv7l": "arm",
    "arm": "arm",
    "ppc64le": "ppc64le",
    "s390x": "s390x",
    "riscv64": "riscv64",
}

TEMP_FILE_SUFFIX = ".tmp"


def get_os_name() -> str:
    """
    Get the running operating system identifier.

    Returns:
        OS identifier such as 'linux', 'darwin' or 'windows'.
        Unknown platforms are returned as reported by sys.platform.
    """
    for prefix, name in OS_NAMES.items():
        if sys.platform.startswith(prefix):
            return name
    return sys.platform


def get_arch() -> str:
    """
    Get the running architecture identifier.

    Returns:
        Architecture identifier such as 'amd64', 'arm64' or '386'.
        Unknown machines are returned lowercased as reported.
    """
    machine = platform.machine().lower()
    return ARCH_NAMES.get(machine, machine)


def is_frozen() -> bool:
    """Check whether the application runs as a bundled binary."""
    return bool(getattr(sys, "frozen", False))


def get_executable_path() -> Path:
    """
    Get the path of the running executable.

    Frozen applications (PyInstaller and similar) report the bundled
    binary, otherwise the launched script is used. For a script launched
    through a console entry point that is the launcher itself.

    Returns:
        Resolved path to the running executable

    Raises:
        FileNotFoundError: If the executable cannot be located
    """
    if is_frozen():
        return Path(sys.executable).resolve()

    if sys.argv and sys.argv[0]:
        candidate = Path(sys.argv[0])
        if candidate.is_file():
            return candidate.resolve()

    raise FileNotFoundError("Unable to determine the running executable")


def get_temp_dir() -> Path:
    """
    Get the platform temporary directory.

    Returns:
        Path to the temp directory
    """
    return Path(tempfile.gettempdir())


def get_default_tmp_pattern() -> str:
    """
    Get the default staging file pattern.

    Returns:
        printf-style pattern with a single %s for the artifact filename
    """
    temp_dir = str(get_temp_dir()).replace("%", "%%")
    return os.path.join(temp_dir, "%s" + TEMP_FILE_SUFFIX)
