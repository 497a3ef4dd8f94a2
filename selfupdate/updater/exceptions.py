"""Updater exceptions for selfupdate.

Custom exception hierarchy for discovery and install operations to
provide clear error handling and diagnosable messages.
"""

from pathlib import Path
from typing import Optional, Union


class UpdaterError(Exception):
    """Base exception for all updater errors."""

    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


class ConfigurationError(UpdaterError):
    """Settings are missing, invalid or cannot be resolved."""
    pass


class ListingFetchError(UpdaterError):
    """The repository listing page could not be retrieved."""

    def __init__(
        self,
        url: str,
        status_code: Optional[int] = None,
        original_error: Exception = None
    ):
        self.url = url
        self.status_code = status_code
        if status_code is not None:
            message = f"Failed to fetch listing {url} (HTTP {status_code})"
        else:
            message = f"Failed to fetch listing {url}"
        super().__init__(message, original_error)


class DownloadError(UpdaterError):
    """A build artifact could not be downloaded."""

    def __init__(
        self,
        url: str,
        status_code: Optional[int] = None,
        original_error: Exception = None
    ):
        self.url = url
        self.status_code = status_code
        if status_code is not None:
            message = f"Failed to download {url} (HTTP {status_code})"
        else:
            message = f"Failed to download {url}"
        super().__init__(message, original_error)


class InstallPreconditionError(ConfigurationError):
    """Install cannot start: target or temporary path is unusable."""

    def __init__(
        self,
        path: Union[str, Path, None],
        reason: str,
        original_error: Exception = None
    ):
        self.path = path
        self.reason = reason
        if path:
            message = f"{reason}: '{path}'"
        else:
            message = reason
        super().__init__(message, original_error)


class InstallError(UpdaterError):
    """Moving the downloaded build over the target failed."""

    def __init__(
        self,
        source: Union[str, Path],
        target: Union[str, Path],
        original_error: Exception = None
    ):
        self.source = source
        self.target = target
        message = f"Cannot move temporary file '{source}' to '{target}'"
        super().__init__(message, original_error)
