"""Updater module for repository listings.

This module handles build discovery and installation:
- BuildRecord models: BuildRecord, FieldKind
- FilenameTokenizer: Filename to BuildRecord parsing
- Listing parser: Anchor extraction from listing pages
- Matchers and ordering strategies: Eligibility and ranking
- RepositoryClient: HTTP access to listings and artifacts
- BuildSelector: Latest build discovery
- Updater: Download and atomic install
"""

from .build import BuildRecord, FieldKind, DEFAULT_FIELDS, parse_version
from .exceptions import (
    UpdaterError,
    ConfigurationError,
    ListingFetchError,
    DownloadError,
    InstallPreconditionError,
    InstallError,
)
from .tokenizer import FilenameTokenizer, tokenize
from .listing import ListingEntry, parse_listing, iter_listing
from .matcher import Matcher, name_os_arch_matcher
from .ordering import LessThan, SortCriteria, by_semver, sort_builds, latest
from .repository_client import ListingPage, RepositoryClient
from .selector import BuildSelector
from .installer import Updater, DownloadProgress, ProgressCallback

__all__ = [
    # Build models
    "BuildRecord",
    "FieldKind",
    "DEFAULT_FIELDS",
    "parse_version",
    # Exceptions
    "UpdaterError",
    "ConfigurationError",
    "ListingFetchError",
    "DownloadError",
    "InstallPreconditionError",
    "InstallError",
    # Tokenizer and listing
    "FilenameTokenizer",
    "tokenize",
    "ListingEntry",
    "parse_listing",
    "iter_listing",
    # Matching and ordering
    "Matcher",
    "name_os_arch_matcher",
    "LessThan",
    "SortCriteria",
    "by_semver",
    "sort_builds",
    "latest",
    # Discovery and install
    "ListingPage",
    "RepositoryClient",
    "BuildSelector",
    "Updater",
    "DownloadProgress",
    "ProgressCallback",
]
