"""HTTP client for artifact repositories.

Fetches listing pages and streams build artifacts from a plain HTTP
repository (Nexus raw repository, nginx/Apache autoindex, ...).
"""

import logging
from typing import BinaryIO, Callable, NamedTuple, Optional

import requests

from selfupdate import __version__
from selfupdate.updater.exceptions import DownloadError, ListingFetchError

logger = logging.getLogger("selfupdate.repository_client")


# Request timeout in seconds
REQUEST_TIMEOUT = 30

DEFAULT_USER_AGENT = f"selfupdate/{__version__}"

CHUNK_SIZE = 8192


class ListingPage(NamedTuple):
    """Body of a listing page and the URL it was finally served from."""
    content: bytes
    url: str


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def _content_length(headers) -> int:
    """Declared body size, 0 when missing or malformed."""
    try:
        return max(int(headers.get("content-length") or 0), 0)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring invalid content-length: {headers.get('content-length')!r}")
        return 0


class RepositoryClient:
    """Client for reading listings and artifacts over HTTP."""

    def __init__(
        self,
        timeout: int = REQUEST_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT
    ):
        """
        Initialize repository client.

        Args:
            timeout: Request timeout in seconds
            user_agent: User-Agent header sent with every request
        """
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({
            "User-Agent": user_agent,
        })

    def fetch_listing(self, url: str) -> ListingPage:
        """
        Fetch a listing page along with the URL it was served from.

        Redirects are followed, so the returned URL is the one relative
        links on the page must be resolved against.

        Args:
            url: Full URL of the listing

        Returns:
            ListingPage with the raw body and the final URL

        Raises:
            ListingFetchError: On transport failure or non-2xx status
        """
        try:
            logger.debug(f"Fetching listing: {url}")
            response = self._session.get(url, timeout=self._timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Listing request failed: {e}")
            raise ListingFetchError(url, original_error=e)

        if not _is_success(response.status_code):
            logger.error(f"Listing request returned HTTP {response.status_code}")
            raise ListingFetchError(url, status_code=response.status_code)

        final_url = response.url or url
        if final_url != url:
            logger.debug(f"Listing redirected to {final_url}")
        return ListingPage(content=response.content, url=final_url)

    def fetch(self, url: str) -> bytes:
        """
        Fetch a listing page.

        Args:
            url: Full URL of the listing

        Returns:
            Raw response body

        Raises:
            ListingFetchError: On transport failure or non-2xx status
        """
        return self.fetch_listing(url).content

    def download_to(
        self,
        url: str,
        destination: BinaryIO,
        callback: Optional[Callable[[int, int], None]] = None
    ) -> int:
        """
        Stream an artifact into an open binary file.

        Args:
            url: Artifact URL
            destination: Writable binary file object
            callback: Optional progress callback(bytes_downloaded, total_bytes),
                total_bytes is 0 when the server sends no usable content-length

        Returns:
            Number of bytes written

        Raises:
            DownloadError: On transport failure, non-2xx status or write error
        """
        try:
            logger.info(f"Downloading: {url}")
            response = self._session.get(url, stream=True, timeout=self._timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Download request failed: {e}")
            raise DownloadError(url, original_error=e)

        try:
            if not _is_success(response.status_code):
                logger.error(f"Download returned HTTP {response.status_code}")
                raise DownloadError(url, status_code=response.status_code)

            total_size = _content_length(response.headers)
            downloaded = 0

            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    destination.write(chunk)
                    downloaded += len(chunk)
                    if callback:
                        callback(downloaded, total_size)

            destination.flush()
            logger.info(f"Downloaded {downloaded} bytes from {url}")
            return downloaded

        except requests.exceptions.RequestException as e:
            logger.error(f"Download interrupted: {e}")
            raise DownloadError(url, original_error=e)
        except OSError as e:
            logger.error(f"Cannot write download: {e}")
            raise DownloadError(url, original_error=e)
        finally:
            response.close()

    def close(self) -> None:
        """Close the HTTP session."""
        self._session.close()

    def __enter__(self) -> "RepositoryClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
