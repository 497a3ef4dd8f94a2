"""Eligibility matchers.

A matcher decides whether a listed build is a valid update candidate for
the running binary. Any callable taking a record and returning a bool can
be used in place of the default.
"""

from typing import Callable, Optional

from selfupdate.config.paths import get_arch, get_os_name
from selfupdate.updater.build import BuildRecord


# Matcher callback type
Matcher = Callable[[Optional[BuildRecord]], bool]


def name_os_arch_matcher(
    name: str,
    os_name: Optional[str] = None,
    arch: Optional[str] = None
) -> Matcher:
    """
    Create the default matcher: same binary name, OS and architecture.

    Args:
        name: Binary name the build must carry
        os_name: OS identifier (default: running OS)
        arch: Architecture identifier (default: running architecture)

    Returns:
        Matcher accepting builds for this binary and platform
    """
    wanted_os = os_name if os_name is not None else get_os_name()
    wanted_arch = arch if arch is not None else get_arch()

    def matches(build: Optional[BuildRecord]) -> bool:
        return (
            build is not None
            and build.name == name
            and build.os == wanted_os
            and build.arch == wanted_arch
        )

    return matches

