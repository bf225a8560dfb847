"""
Resource bundle scanning.

This module reads ``.properties`` resource bundles in the line format of
``java.util.Properties`` and selects the keys that I18N helper classes are
generated for.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from ..config.schema import GenerationSettings
from ..utils.core.exceptions import BundleError

logger = logging.getLogger(__name__)

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
_ESCAPE_RE = re.compile(r"\\(u[0-9a-fA-F]{4}|.)", re.DOTALL)
_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_SIMPLE_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


@dataclass(frozen=True)
class Bundle:
    """A parsed resource bundle restricted to the filtered keys."""

    path: Path
    relative_path: PurePosixPath
    package_parts: tuple[str, ...]
    class_name: str
    entries: dict[str, str]

    @property
    def package(self) -> str:
        """Package name, empty for bundles in the root directory."""
        return ".".join(self.package_parts)

    @property
    def qualified_name(self) -> str:
        """Fully qualified name of the bundle (and its helper class)."""
        return f"{self.package}.{self.class_name}" if self.package else self.class_name


def _logical_lines(text: str) -> Iterator[str]:
    pending: str | None = None
    for natural_line in _LINE_BREAK_RE.split(text):
        line = natural_line.lstrip(_WHITESPACE)
        if pending is None and (not line or line[0] in "#!"):
            continue

        trailing = len(line) - len(line.rstrip("\\"))
        continued = trailing % 2 == 1
        if continued:
            line = line[:-1]

        pending = line if pending is None else pending + line
        if not continued:
            yield pending
            pending = None

    if pending is not None:
        yield pending


def _unescape(text: str) -> str:
    def replace(match: re.Match[str]) -> str:
        token = match.group(1)
        if len(token) == 5:
            return chr(int(token[1:], 16))
        if token == "u":
            raise ValueError(f"Malformed \\uxxxx encoding in '{text}'")
        return _SIMPLE_ESCAPES.get(token, token)

    return _ESCAPE_RE.sub(replace, text)


def _split_entry(line: str) -> tuple[str, str]:
    index = 0
    while index < len(line):
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            break
        index += 1

    key = line[: min(index, len(line))]
    rest = line[index:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def parse_properties(text: str) -> dict[str, str]:
    """
    Parse properties file content.

    Args:
        text: Content in java.util.Properties line format

    Returns:
        Key/value mapping in order of first appearance

    Raises:
        ValueError: If an escape sequence is malformed
    """
    properties: dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_entry(line)
        properties[_unescape(key)] = _unescape(value)
    return properties


def read_properties(path: Path) -> dict[str, str]:
    """
    Read a properties file.

    The file is decoded as UTF-8, falling back to ISO-8859-1 if it is not
    valid UTF-8.

    Raises:
        BundleError: If the file cannot be read or parsed
    """
    try:
        data = path.read_bytes()
    except OSError as e:
        raise BundleError(f"Failed to read bundle {path}: {e}", context=path) from e

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug(f"{path} is not valid UTF-8, reading as ISO-8859-1")
        text = data.decode("iso-8859-1")

    try:
        return parse_properties(text.removeprefix("\ufeff"))
    except ValueError as e:
        raise BundleError(f"Failed to parse bundle {path}: {e}", context=path) from e


def load_bundle(path: Path, root: Path, key_filter: re.Pattern[str]) -> Bundle:
    """
    Load a bundle and keep the keys fully matching the key filter.

    Args:
        path: Path of the bundle file
        root: Root directory the bundle's package is derived from
        key_filter: Compiled key filter

    Returns:
        The parsed bundle
    """
    relative_path = PurePosixPath(path.relative_to(root).as_posix())
    properties = read_properties(path)
    entries = {
        key: value for key, value in properties.items() if key_filter.fullmatch(key)
    }

    logger.debug(
        f"Bundle {relative_path}: {len(entries)} of {len(properties)} key(s) selected"
    )

    return Bundle(
        path=path,
        relative_path=relative_path,
        package_parts=relative_path.parent.parts,
        class_name=relative_path.stem,
        entries=entries,
    )


def find_bundle_files(settings: GenerationSettings) -> list[Path]:
    """Get the bundle files selected by the settings."""
    return settings.bundles.files(settings.project_dir)


def scan_bundles(settings: GenerationSettings) -> list[Bundle]:
    """
    Load all bundles selected by the settings.

    Raises:
        ConfigurationError: If the key filter is invalid
        BundleError: If a bundle cannot be read
    """
    key_filter = settings.compiled_key_filter()
    root = settings.resolved_bundles_root()
    return [load_bundle(path, root, key_filter) for path in find_bundle_files(settings)]
