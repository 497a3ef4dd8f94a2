"""Updater settings for selfupdate.

Provides the UpdaterSettings dataclass, filled with defaults for every
option the caller leaves out, and JSON loading.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple, Union

from selfupdate.config.paths import get_default_tmp_pattern
from selfupdate.updater.build import DEFAULT_FIELDS, FieldKind
from selfupdate.updater.exceptions import ConfigurationError
from selfupdate.updater.matcher import Matcher, name_os_arch_matcher
from selfupdate.updater.ordering import LessThan, SortCriteria
from selfupdate.updater.repository_client import DEFAULT_USER_AGENT, REQUEST_TIMEOUT


@dataclass
class UpdaterSettings:
    """Configuration for discovering and installing builds."""

    # Base name of binary artifacts
    binary_name: str = ""
    # URL of the listing page where builds are published
    repository: str = ""
    # Local path to update (default: running executable)
    target_path: Optional[str] = None

    # Filename layout
    fields: Tuple[FieldKind, ...] = DEFAULT_FIELDS
    field_separator: str = "-"

    # Ranking and eligibility
    sort_criteria: Union[SortCriteria, LessThan] = SortCriteria.SEMVER
    matcher: Optional[Matcher] = None

    # printf-style staging path, %s is the artifact filename
    tmp_pattern: str = field(default_factory=get_default_tmp_pattern)

    # Transport
    timeout: int = REQUEST_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT

    _default_matcher: bool = field(default=False, init=False, repr=False)

    def __post_init__(self):
        self.fields = tuple(self.fields) or DEFAULT_FIELDS
        if not self.field_separator:
            self.field_separator = "-"
        if not self.tmp_pattern:
            self.tmp_pattern = get_default_tmp_pattern()
        if self.matcher is None:
            self.matcher = name_os_arch_matcher(self.binary_name)
            self._default_matcher = True

    @property
    def less_than(self) -> LessThan:
        """Comparison function for the configured sort criteria."""
        if isinstance(self.sort_criteria, SortCriteria):
            return self.sort_criteria.less_than
        return self.sort_criteria

    def validate(self) -> None:
        """
        Check that discovery can run with these settings.

        Raises:
            ConfigurationError: If the repository is missing, or the binary
                name is missing while the default matcher is in use
        """
        if not self.repository:
            raise ConfigurationError("No repository URL configured")
        if self._default_matcher and not self.binary_name:
            raise ConfigurationError("No binary name configured")

    def to_dict(self) -> dict:
        """Convert settings to dictionary. Callables are left out."""
        data = {
            "binary_name": self.binary_name,
            "repository": self.repository,
            "target_path": self.target_path,
            "fields": [kind.value for kind in self.fields],
            "field_separator": self.field_separator,
            "tmp_pattern": self.tmp_pattern,
            "timeout": self.timeout,
            "user_agent": self.user_agent,
        }
        if isinstance(self.sort_criteria, SortCriteria):
            data["sort_criteria"] = self.sort_criteria.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "UpdaterSettings":
        """
        Create settings from dictionary, ignoring unknown keys.

        Raises:
            ConfigurationError: If a field name or sort criteria is unknown
        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values() if f.init}
        filtered = {
            k: v for k, v in data.items()
            if k in valid_fields and k != "matcher"
        }

        try:
            if "fields" in filtered:
                filtered["fields"] = tuple(
                    kind if isinstance(kind, FieldKind) else FieldKind(str(kind).lower())
                    for kind in filtered["fields"]
                )
            if isinstance(filtered.get("sort_criteria"), str):
                filtered["sort_criteria"] = SortCriteria(filtered["sort_criteria"].lower())
        except (TypeError, ValueError) as e:
            raise ConfigurationError("Invalid settings value", e)

        return cls(**filtered)


def load_settings(path: Union[str, Path]) -> UpdaterSettings:
    """
    Load settings from a JSON file.

    Args:
        path: Path to the settings file

    Returns:
        UpdaterSettings with defaults applied for missing keys

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Settings file not found: {path}", e)
    except (json.JSONDecodeError, OSError) as e:
        raise ConfigurationError(f"Cannot read settings file: {path}", e)

    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file must contain a JSON object: {path}")

    return UpdaterSettings.from_dict(data)
