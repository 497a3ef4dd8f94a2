"""Command-line entry point for selfupdate.

Loads settings, looks up the latest build and optionally installs it.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from selfupdate import __version__
from selfupdate.config.paths import is_frozen
from selfupdate.config.settings import load_settings
from selfupdate.updater.exceptions import ConfigurationError, UpdaterError
from selfupdate.updater.installer import DownloadProgress, Updater
from selfupdate.utils.logging import get_logger, setup_logging


@click.command()
@click.version_option(version=__version__)
@click.option("--config", "-c", "config_path", required=True,
              type=click.Path(dir_okay=False, path_type=Path), help="Settings JSON file")
@click.option("--check", is_flag=True, help="Only report the latest build, do not install")
@click.option("--current-version", default=None, help="Install only if newer than this version")
@click.option("--target", default=None,
              help="Path to replace. Required unless set in the settings file "
                   "or running as a bundled binary")
@click.option("--log-file", default=None, type=click.Path(dir_okay=False, path_type=Path),
              help="Also write logs to this file")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
def main(
    config_path: Path, check: bool, current_version: Optional[str],
    target: Optional[str], log_file: Optional[Path], verbose: bool,
) -> None:
    """Update a binary from an HTTP repository listing."""
    setup_logging(level=logging.DEBUG if verbose else logging.INFO, log_file=log_file)
    logger = get_logger("selfupdate.main")

    try:
        settings = load_settings(config_path)
        if target:
            settings.target_path = target

        with Updater(settings) as updater:
            build = updater.find_latest()
            if build is None:
                click.echo("No eligible build found")
                return

            click.echo(f"Latest build: {build.raw_filename} ({build.display_version})")
            if check:
                return

            if current_version and not build.newer_than(current_version):
                click.echo(f"Already up to date ({current_version})")
                return

            # outside a bundled binary the running executable is this tool's launcher
            if not settings.target_path and not is_frozen():
                raise ConfigurationError("No target path configured, pass --target")

            def show_progress(progress: DownloadProgress):
                if progress.total_bytes:
                    logger.debug(f"{progress.file_name}: {progress.percentage:.0f}%")

            installed = updater.update_to(build, progress_callback=show_progress)
            click.echo(f"Installed {build.raw_filename} to {installed}")

    except (UpdaterError, ValueError) as e:
        logger.error(f"Update failed: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
