"""Filename tokenizer for repository artifacts.

Splits artifact filenames such as ``app-1.2.0-linux-amd64.exe`` into
BuildRecord fields according to a configurable field order and separator.
"""

import logging
from typing import Dict, Optional, Sequence, Tuple

from selfupdate.updater.build import (
    DEFAULT_FIELDS,
    BuildRecord,
    FieldKind,
    parse_version,
)

logger = logging.getLogger("selfupdate.tokenizer")


# Platform suffix stripped before splitting, never counted as a field
EXECUTABLE_SUFFIX = ".exe"


class FilenameTokenizer:
    """Turns listing filenames into BuildRecord objects."""

    def __init__(
        self,
        fields: Sequence[FieldKind] = DEFAULT_FIELDS,
        separator: str = "-"
    ):
        """
        Initialize the tokenizer.

        Args:
            fields: Ordered field kinds describing the filename structure
            separator: String separating fields in the filename

        Raises:
            ValueError: If fields is empty or separator is empty
        """
        if not fields:
            raise ValueError("At least one filename field is required")
        if not separator:
            raise ValueError("Field separator must not be empty")
        self._fields: Tuple[FieldKind, ...] = tuple(fields)
        self._separator = separator

    @property
    def fields(self) -> Tuple[FieldKind, ...]:
        """Field kinds in filename order."""
        return self._fields

    @property
    def separator(self) -> str:
        """Field separator."""
        return self._separator

    def split(self, raw_filename: str) -> Optional[Dict[FieldKind, str]]:
        """
        Split a filename into a field kind to token mapping.

        Args:
            raw_filename: Filename as shown in the listing

        Returns:
            Mapping of field kind to token, or None if the token count
            does not match the configured fields
        """
        stem = raw_filename
        if stem.endswith(EXECUTABLE_SUFFIX):
            stem = stem[:-len(EXECUTABLE_SUFFIX)]

        tokens = stem.split(self._separator)
        if len(tokens) != len(self._fields):
            return None

        # Later duplicates overwrite earlier ones
        mapping: Dict[FieldKind, str] = {}
        for kind, token in zip(self._fields, tokens):
            mapping[kind] = token
        return mapping

    def tokenize(self, raw_filename: str) -> Optional[BuildRecord]:
        """
        Build a record from a listing filename.

        Args:
            raw_filename: Filename as shown in the listing

        Returns:
            BuildRecord, or None if the filename does not fit the field layout.
            An unparseable version token yields a record without a version.
        """
        if not raw_filename:
            return None

        tokens = self.split(raw_filename)
        if tokens is None:
            logger.debug(f"Skipping '{raw_filename}': does not match field layout")
            return None

        version = None
        if FieldKind.VERSION in tokens:
            version = parse_version(tokens[FieldKind.VERSION])
            if version is None:
                logger.debug(
                    f"'{raw_filename}' has no valid version "
                    f"({tokens[FieldKind.VERSION]!r})"
                )

        return BuildRecord(
            name=tokens.get(FieldKind.NAME, ""),
            raw_filename=raw_filename,
            version=version,
            os=tokens.get(FieldKind.OS, ""),
            arch=tokens.get(FieldKind.ARCH, ""),
        )

    def join(self, record: BuildRecord) -> str:
        """
        Rebuild the filename stem of a record (without platform suffix).

        Args:
            record: Record to format

        Returns:
            Fields joined by the separator, in configured order
        """
        values = {
            FieldKind.NAME: record.name,
            FieldKind.VERSION: str(record.version) if record.version is not None else "",
            FieldKind.OS: record.os,
            FieldKind.ARCH: record.arch,
        }
        return self._separator.join(values[kind] for kind in self._fields)


def tokenize(
    raw_filename: str,
    fields: Sequence[FieldKind] = DEFAULT_FIELDS,
    separator: str = "-"
) -> Optional[BuildRecord]:
    """Tokenize a single filename with a one-off tokenizer."""
    return FilenameTokenizer(fields, separator).tokenize(raw_filename)
