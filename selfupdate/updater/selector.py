"""Build discovery for selfupdate.

Reads the repository listing, keeps the builds accepted by the matcher
and ranks them to find the latest one.
"""

import logging
from typing import TYPE_CHECKING, List, Optional
from urllib.parse import urljoin

from selfupdate.updater.build import BuildRecord
from selfupdate.updater.listing import parse_listing
from selfupdate.updater.ordering import latest
from selfupdate.updater.repository_client import RepositoryClient
from selfupdate.updater.tokenizer import FilenameTokenizer

if TYPE_CHECKING:
    from selfupdate.config.settings import UpdaterSettings

logger = logging.getLogger("selfupdate.selector")


class BuildSelector:
    """Finds the latest eligible build in a repository listing."""

    def __init__(
        self,
        settings: "UpdaterSettings",
        client: Optional[RepositoryClient] = None
    ):
        """
        Initialize the selector.

        Args:
            settings: Updater settings (repository, filename layout, matcher, sort)
            client: Repository client to use (default: created on first fetch)
        """
        self._settings = settings
        self._client = client
        self._owns_client = client is None
        self._tokenizer = FilenameTokenizer(settings.fields, settings.field_separator)

    def _get_client(self) -> RepositoryClient:
        """Get or create repository client."""
        if self._client is None:
            self._client = RepositoryClient(
                timeout=self._settings.timeout,
                user_agent=self._settings.user_agent,
            )
        return self._client

    def fetch_builds(self) -> List[BuildRecord]:
        """
        List the eligible builds of the repository.

        Returns:
            Eligible builds in listing order, each with its download URL set

        Raises:
            ConfigurationError: If repository or binary name is not configured
            ListingFetchError: If the listing page cannot be retrieved
        """
        self._settings.validate()
        repository = self._settings.repository
        matcher = self._settings.matcher

        logger.info(f"Fetching build list from {repository}")
        page = self._get_client().fetch_listing(repository)
        entries = parse_listing(page.content)

        # hrefs are relative to where the page was served, after redirects
        builds = []
        for entry in entries:
            build = self._tokenizer.tokenize(entry.text)
            if build is None or not matcher(build):
                continue
            builds.append(build.with_url(urljoin(page.url, entry.href)))

        logger.info(f"Found {len(builds)} eligible builds out of {len(entries)} entries")
        return builds

    def find_latest(self) -> Optional[BuildRecord]:
        """
        Find the latest eligible build.

        Returns:
            Highest ranked build, or None if no build is eligible

        Raises:
            ConfigurationError: If repository or binary name is not configured
            ListingFetchError: If the listing page cannot be retrieved
        """
        build = latest(self.fetch_builds(), self._settings.less_than)
        if build is None:
            logger.info("No eligible build found")
        else:
            logger.info(f"Latest build: {build.raw_filename} ({build.display_version})")
        return build

    def close(self) -> None:
        """Clean up resources."""
        if self._client and self._owns_client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "BuildSelector":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
