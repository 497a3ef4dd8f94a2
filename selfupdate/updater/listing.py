"""Directory listing parser.

Extracts (text, href) pairs from the anchor tags of an HTML listing page.
"""

import re
from typing import Iterator, List, NamedTuple, Union


# <a ... href="URL" ...>TEXT</a>, tolerant of other attributes
ANCHOR_PATTERN = re.compile(r'<a [^>]*href="([^"]+)"[^>]*>([^<]+)</a>')


class ListingEntry(NamedTuple):
    """One anchor from a listing page."""
    text: str
    href: str


def _decode(html: Union[bytes, str]) -> str:
    if isinstance(html, bytes):
        return html.decode("utf-8", errors="replace")
    return html


def iter_listing(html: Union[bytes, str]) -> Iterator[ListingEntry]:
    """
    Iterate over the anchors of a listing page in document order.

    Entities are passed through verbatim. Fragments that do not look like
    a complete anchor are skipped.

    Args:
        html: Raw page body

    Yields:
        ListingEntry for each anchor
    """
    for match in ANCHOR_PATTERN.finditer(_decode(html)):
        yield ListingEntry(text=match.group(2), href=match.group(1))


def parse_listing(html: Union[bytes, str]) -> List[ListingEntry]:
    """
    Parse a listing page into its anchors.

    Args:
        html: Raw page body

    Returns:
        List of ListingEntry in document order (empty if none found)
    """
    return list(iter_listing(html))
