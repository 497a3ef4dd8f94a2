"""Ordering strategies used to rank eligible builds.

A strategy is a strict "less than" comparison over BuildRecord. The
latest build is the last element of a stable ascending sort, so among
builds of equal rank the one appearing later in the listing wins.
"""

from enum import Enum
from functools import cmp_to_key
from typing import Callable, Iterable, List, Optional

from selfupdate.updater.build import BuildRecord


# Comparison callback type: True if the first build ranks strictly lower
LessThan = Callable[[BuildRecord, BuildRecord], bool]


def by_semver(build1: BuildRecord, build2: BuildRecord) -> bool:
    """
    Compare builds by semantic version precedence.

    Builds without a version rank below every versioned build and equal
    to each other.
    """
    if build1.version is None:
        return build2.version is not None
    if build2.version is None:
        return False
    return build1.version < build2.version


class SortCriteria(Enum):
    """Built-in ordering strategies."""
    SEMVER = "semver"

    @property
    def less_than(self) -> LessThan:
        """Comparison function for this criteria."""
        return SORTS[self]


SORTS = {
    SortCriteria.SEMVER: by_semver,
}


def _as_key(less_than: LessThan):
    def compare(build1: BuildRecord, build2: BuildRecord) -> int:
        if less_than(build1, build2):
            return -1
        if less_than(build2, build1):
            return 1
        return 0
    return cmp_to_key(compare)


def sort_builds(builds: Iterable[BuildRecord], less_than: LessThan = by_semver) -> List[BuildRecord]:
    """
    Sort builds ascending with a stable sort.

    Args:
        builds: Builds in listing order
        less_than: Ordering strategy

    Returns:
        New list, lowest ranked first; equal builds keep listing order
    """
    return sorted(builds, key=_as_key(less_than))


def latest(builds: Iterable[BuildRecord], less_than: LessThan = by_semver) -> Optional[BuildRecord]:
    """
    Pick the highest ranked build.

    Args:
        builds: Builds in listing order
        less_than: Ordering strategy

    Returns:
        Last build of the ascending sort, or None if there are no builds
    """
    ordered = sort_builds(builds, less_than)
    if not ordered:
        return None
    return ordered[-1]
