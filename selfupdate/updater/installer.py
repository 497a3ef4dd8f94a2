"""Build installer for selfupdate.

Downloads a selected build to a staging file and moves it over the
target executable in a single rename.
"""

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional

from selfupdate.config.paths import get_executable_path
from selfupdate.updater.build import BuildRecord
from selfupdate.updater.exceptions import InstallError, InstallPreconditionError
from selfupdate.updater.repository_client import RepositoryClient
from selfupdate.updater.selector import BuildSelector

if TYPE_CHECKING:
    from selfupdate.config.settings import UpdaterSettings

logger = logging.getLogger("selfupdate.installer")


# Mode given to a freshly installed binary when there is no previous one
DEFAULT_MODE = 0o755


@dataclass
class DownloadProgress:
    """Progress information for a download operation."""
    file_name: str
    bytes_downloaded: int
    total_bytes: int

    @property
    def percentage(self) -> float:
        """Download progress as percentage."""
        if self.total_bytes == 0:
            return 0.0
        return (self.bytes_downloaded / self.total_bytes) * 100


# Progress callback type
ProgressCallback = Callable[[DownloadProgress], None]


class Updater:
    """Finds builds in a repository and installs them over the target path."""

    def __init__(
        self,
        settings: "UpdaterSettings",
        client: Optional[RepositoryClient] = None
    ):
        """
        Initialize the updater.

        Args:
            settings: Updater settings
            client: Repository client to use (default: created on first use)
        """
        self._settings = settings
        self._client = client
        self._owns_client = client is None
        self._selector: Optional[BuildSelector] = None

    @property
    def settings(self) -> "UpdaterSettings":
        """Settings in use."""
        return self._settings

    def _get_client(self) -> RepositoryClient:
        """Get or create repository client."""
        if self._client is None:
            self._client = RepositoryClient(
                timeout=self._settings.timeout,
                user_agent=self._settings.user_agent,
            )
        return self._client

    def _get_selector(self) -> BuildSelector:
        """Get or create the build selector sharing this updater's client."""
        if self._selector is None:
            self._selector = BuildSelector(self._settings, client=self._get_client())
        return self._selector

    def find_latest(self) -> Optional[BuildRecord]:
        """
        Find the latest eligible build in the repository.

        Returns:
            Highest ranked build, or None if no build is eligible

        Raises:
            ConfigurationError: If repository or binary name is not configured
            ListingFetchError: If the listing page cannot be retrieved
        """
        return self._get_selector().find_latest()

    def resolve_target_path(self) -> Path:
        """
        Get the path the build will be installed to.

        Returns:
            Configured target path, or the running executable

        Raises:
            InstallPreconditionError: If the running executable cannot be found
        """
        if self._settings.target_path:
            return Path(self._settings.target_path)
        try:
            return get_executable_path()
        except OSError as e:
            raise InstallPreconditionError(None, "Cannot find current executable path", e)

    def temp_path_for(self, build: BuildRecord) -> Path:
        """
        Get the staging path for a build.

        Args:
            build: Build about to be downloaded

        Returns:
            Path built from the configured tmp pattern and the build filename

        Raises:
            InstallPreconditionError: If the tmp pattern is malformed
        """
        try:
            return Path(self._settings.tmp_pattern % build.raw_filename)
        except (TypeError, ValueError) as e:
            raise InstallPreconditionError(
                self._settings.tmp_pattern, "Invalid temporary file pattern", e
            )

    def _apply_mode(self, temp_path: Path, target: Path) -> None:
        """Give the staged file the target's permission bits."""
        if target.exists():
            mode = stat.S_IMODE(target.stat().st_mode)
        else:
            mode = DEFAULT_MODE
        os.chmod(temp_path, mode)

    def _remove_temp(self, temp_path: Path) -> None:
        """Remove the staging file if it is still there."""
        try:
            temp_path.unlink()
            logger.debug(f"Removed temporary file {temp_path}")
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Failed to remove temporary file {temp_path}: {e}")

    def update_to(
        self,
        build: BuildRecord,
        progress_callback: Optional[ProgressCallback] = None
    ) -> Path:
        """
        Download a build and install it over the target path.

        The target is only touched by the final rename, so it either keeps
        the previous binary or holds the complete new one.

        Args:
            build: Build to install, with its download URL set
            progress_callback: Optional callback for progress updates

        Returns:
            Path the build was installed to

        Raises:
            ValueError: If the build has no download URL
            InstallPreconditionError: If the target or staging file is unusable
            DownloadError: If the download fails
            InstallError: If the staged file cannot replace the target
        """
        if not build.url:
            raise ValueError(f"Build {build.raw_filename} has no download URL")

        target = self.resolve_target_path()
        temp_path = self.temp_path_for(build)

        try:
            temp_file = open(temp_path, "wb")
        except OSError as e:
            raise InstallPreconditionError(temp_path, "Cannot create temporary file", e)

        def report(downloaded: int, total: int):
            if progress_callback:
                progress_callback(DownloadProgress(
                    file_name=build.raw_filename,
                    bytes_downloaded=downloaded,
                    total_bytes=total,
                ))

        try:
            with temp_file:
                self._get_client().download_to(build.url, temp_file, callback=report)

            try:
                self._apply_mode(temp_path, target)
                os.replace(temp_path, target)
            except OSError as e:
                logger.error(f"Install failed: {e}")
                raise InstallError(temp_path, target, e)

            logger.info(f"Installed {build.raw_filename} to {target}")
            return target

        finally:
            self._remove_temp(temp_path)

    def update_if_newer(
        self,
        current_version: str,
        progress_callback: Optional[ProgressCallback] = None
    ) -> Optional[BuildRecord]:
        """
        Install the latest build if it is newer than the running version.

        Args:
            current_version: Semantic version of the running binary
            progress_callback: Optional callback for progress updates

        Returns:
            The installed build, or None if already up to date

        Raises:
            ValueError: If current_version is not a valid semantic version
            UpdaterError: If discovery or install fails
        """
        build = self.find_latest()
        if build is None or not build.newer_than(current_version):
            logger.info(f"Already up to date (version {current_version})")
            return None

        logger.info(f"Updating from {current_version} to {build.display_version}")
        self.update_to(build, progress_callback)
        return build

    def close(self) -> None:
        """Clean up resources."""
        self._selector = None
        if self._client and self._owns_client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "Updater":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
