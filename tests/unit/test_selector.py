"""Unit tests for BuildSelector.

Tests discovery of the latest eligible build from a mocked repository.
"""

import pytest
from unittest.mock import MagicMock

from selfupdate.config.settings import UpdaterSettings
from selfupdate.updater.build import FieldKind
from selfupdate.updater.exceptions import ConfigurationError, ListingFetchError
from selfupdate.updater.repository_client import ListingPage, RepositoryClient
from selfupdate.updater.selector import BuildSelector


def make_client(body: bytes) -> MagicMock:
    """Create a repository client mock serving one listing body."""
    client = MagicMock(spec=RepositoryClient)
    client.fetch_listing.side_effect = lambda url: ListingPage(content=body, url=url)
    return client


class TestBuildSelector:
    """Tests for BuildSelector."""

    def test_finds_latest_for_platform(self, settings, make_listing):
        """Test the windows build is filtered and 1.3.0 beats 1.2.0."""
        client = make_client(make_listing(
            "app-1.2.0-linux-amd64",
            "app-1.3.0-linux-amd64",
            "app-1.3.0-windows-amd64",
        ))
        selector = BuildSelector(settings, client=client)

        build = selector.find_latest()

        assert build is not None
        assert build.raw_filename == "app-1.3.0-linux-amd64"
        assert build.os == "linux"
        assert build.url == settings.repository + "app-1.3.0-linux-amd64"
        client.fetch_listing.assert_called_once_with(settings.repository)

    def test_bogus_version_loses(self, settings, make_listing):
        """Test a build with an invalid version is eligible but loses."""
        client = make_client(make_listing(
            "app-1.0.0-linux-amd64",
            "app-bogus-linux-amd64",
        ))
        selector = BuildSelector(settings, client=client)

        builds = selector.fetch_builds()
        assert [b.raw_filename for b in builds] == [
            "app-1.0.0-linux-amd64",
            "app-bogus-linux-amd64",
        ]
        assert builds[1].version is None

        assert selector.find_latest().raw_filename == "app-1.0.0-linux-amd64"

    def test_fetch_builds_skips_unparseable_entries(self, settings, make_listing):
        client = make_client(make_listing(
            "README.md",
            "app-1.0.0-linux",
            "app-1.0.0-linux-amd64.sha256-x",
            "app-1.1.0-linux-amd64",
        ))
        builds = BuildSelector(settings, client=client).fetch_builds()

        assert [b.raw_filename for b in builds] == ["app-1.1.0-linux-amd64"]

    def test_empty_listing_returns_none(self, settings):
        client = make_client(b"<html><body>Empty</body></html>")
        assert BuildSelector(settings, client=client).find_latest() is None

    def test_no_eligible_build_returns_none(self, settings, make_listing):
        client = make_client(make_listing(
            "app-1.0.0-darwin-arm64",
            "other-2.0.0-linux-amd64",
        ))
        assert BuildSelector(settings, client=client).find_latest() is None

    def test_equal_versions_last_in_listing_wins(self, settings):
        """Test ties are broken by listing order."""
        body = (
            b'<a href="mirror1/app-1.0.0-linux-amd64">app-1.0.0-linux-amd64</a>'
            b'<a href="mirror2/app-1.0.0-linux-amd64">app-1.0.0-linux-amd64</a>'
        )
        build = BuildSelector(settings, client=make_client(body)).find_latest()
        assert build.url == settings.repository + "mirror2/app-1.0.0-linux-amd64"

    def test_is_deterministic(self, settings, make_listing):
        body = make_listing(
            "app-2.0.0-linux-amd64",
            "app-bogus-linux-amd64",
            "app-2.0.0-linux-amd64.exe",
            "app-1.0.0-linux-amd64",
        )
        results = {
            BuildSelector(settings, client=make_client(body)).find_latest().raw_filename
            for _ in range(5)
        }
        assert results == {"app-2.0.0-linux-amd64.exe"}

    def test_absolute_href_kept(self, settings):
        body = b'<a href="https://cdn.example.com/app-1.0.0-linux-amd64">app-1.0.0-linux-amd64</a>'
        build = BuildSelector(settings, client=make_client(body)).find_latest()
        assert build.url == "https://cdn.example.com/app-1.0.0-linux-amd64"

    def test_root_relative_href(self, settings):
        body = b'<a href="/files/app-1.0.0-linux-amd64">app-1.0.0-linux-amd64</a>'
        build = BuildSelector(settings, client=make_client(body)).find_latest()
        assert build.url == "http://repo.example.com/files/app-1.0.0-linux-amd64"

    def test_href_resolved_against_redirected_url(self, settings):
        """Test relative hrefs follow the URL the listing was served from."""
        settings.repository = "http://repo.example.com/app"
        client = MagicMock(spec=RepositoryClient)
        client.fetch_listing.return_value = ListingPage(
            content=b'<a href="app-1.0.0-linux-amd64">app-1.0.0-linux-amd64</a>',
            url="http://repo.example.com/app/",
        )

        build = BuildSelector(settings, client=client).find_latest()
        assert build.url == "http://repo.example.com/app/app-1.0.0-linux-amd64"

    def test_custom_matcher_and_ordering(self, settings, make_listing):
        """Test caller supplied matcher and strategy are used."""
        settings.matcher = lambda build: build is not None and build.os == "windows"
        settings.sort_criteria = lambda a, b: a.raw_filename > b.raw_filename
        client = make_client(make_listing(
            "app-1.0.0-windows-amd64",
            "app-2.0.0-windows-amd64",
            "app-3.0.0-linux-amd64",
        ))

        build = BuildSelector(settings, client=client).find_latest()
        assert build.raw_filename == "app-1.0.0-windows-amd64"

    def test_custom_field_layout(self, tmp_path):
        settings = UpdaterSettings(
            binary_name="cli",
            repository="http://repo.example.com/",
            fields=(FieldKind.OS, FieldKind.ARCH, FieldKind.NAME, FieldKind.VERSION),
            field_separator="_",
            matcher=lambda build: build is not None and build.name == "cli",
        )
        client = make_client(
            b'<a href="linux_amd64_cli_0.2.0">linux_amd64_cli_0.2.0</a>'
            b'<a href="linux_amd64_cli_0.10.0">linux_amd64_cli_0.10.0</a>'
        )

        build = BuildSelector(settings, client=client).find_latest()
        assert build.display_version == "0.10.0"

    def test_fetch_error_propagates(self, settings):
        client = MagicMock(spec=RepositoryClient)
        client.fetch_listing.side_effect = ListingFetchError(settings.repository, status_code=500)

        with pytest.raises(ListingFetchError):
            BuildSelector(settings, client=client).find_latest()

    def test_missing_repository(self, settings):
        settings.repository = ""
        client = make_client(b"")

        with pytest.raises(ConfigurationError):
            BuildSelector(settings, client=client).find_latest()
        client.fetch_listing.assert_not_called()

    def test_missing_binary_name_with_default_matcher(self):
        settings = UpdaterSettings(repository="http://repo.example.com/")
        with pytest.raises(ConfigurationError):
            BuildSelector(settings, client=make_client(b"")).find_latest()

    def test_close_keeps_shared_client(self, settings):
        """Test a client passed in is not closed by the selector."""
        client = make_client(b"")
        with BuildSelector(settings, client=client):
            pass
        client.close.assert_not_called()
