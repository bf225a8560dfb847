"""Tests for resource bundle parsing and scanning."""

from __future__ import annotations

import re
from pathlib import Path, PurePosixPath

import pytest

from src.bundlegen.config.schema import GenerationSettings
from src.bundlegen.i18n.bundles import (
    load_bundle,
    parse_properties,
    read_properties,
    scan_bundles,
)
from src.bundlegen.utils.core.exceptions import BundleError, ConfigurationError
from tests.utils.test_helpers import write_bundle


class TestParseProperties:
    """Test the properties line format."""

    def test_comments_and_blank_lines(self) -> None:
        """Test that comment and blank lines are skipped."""
        text = "# comment\n! another comment\n\n   \n  # indented comment\nkey=value\n"

        assert parse_properties(text) == {"key": "value"}

    @pytest.mark.parametrize(
        ("line", "key", "value"),
        [
            ("key=value", "key", "value"),
            ("key:value", "key", "value"),
            ("key value", "key", "value"),
            ("key = value", "key", "value"),
            ("key\t:\tvalue", "key", "value"),
            ("key==value", "key", "=value"),
            ("key = = value", "key", "= value"),
            ("   key=value  ", "key", "value  "),
            ("key\\=part=value", "key=part", "value"),
            ("key\\ with\\ spaces=value", "key with spaces", "value"),
            ("lonely", "lonely", ""),
            ("empty=", "empty", ""),
        ],
    )
    def test_key_value_separation(self, line: str, key: str, value: str) -> None:
        """Test the separators between key and value."""
        assert parse_properties(line) == {key: value}

    def test_line_continuation(self) -> None:
        """Test that continued lines are joined without leading whitespace."""
        text = "key = first \\\n      second \\\n\tthird\nnext=1\n"

        assert parse_properties(text) == {"key": "first second third", "next": "1"}

    def test_continued_line_is_not_a_comment(self) -> None:
        """Test that a continuation starting with # belongs to the value."""
        assert parse_properties("key=a\\\n#b\n") == {"key": "a#b"}

    def test_even_backslashes_do_not_continue(self) -> None:
        """Test that an escaped backslash at the line end is kept."""
        assert parse_properties("path=C:\\\\\nnext=1\n") == {"path": "C:\\", "next": "1"}

    def test_escapes(self) -> None:
        """Test the supported escape sequences."""
        text = "key=tab\\tnewline\\nreturn\\rfeed\\fe\\u00e9\\u20AC\\q\n"

        assert parse_properties(text) == {"key": "tab\tnewline\nreturn\rfeed\fe\u00e9\u20acq"}

    def test_malformed_unicode_escape(self) -> None:
        """Test that an incomplete unicode escape is rejected."""
        with pytest.raises(ValueError, match="Malformed"):
            _ = parse_properties("key=\\u00z\n")

    def test_line_endings(self) -> None:
        """Test Windows and classic Mac line endings."""
        assert parse_properties("a=1\r\nb=2\rc=3") == {"a": "1", "b": "2", "c": "3"}

    def test_duplicates_keep_last_value_and_first_position(self) -> None:
        """Test that later duplicates replace earlier values."""
        result = parse_properties("a=1\nb=2\na=3\n")

        assert result == {"a": "3", "b": "2"}
        assert list(result) == ["a", "b"]


class TestReadProperties:
    """Test reading bundle files."""

    def test_utf8(self, tmp_path: Path) -> None:
        """Test reading a UTF-8 bundle with byte order mark."""
        bundle = tmp_path / "MainI18N.properties"
        _ = bundle.write_bytes("\ufeffI18N_A=caf\u00e9\n".encode("utf-8"))

        assert read_properties(bundle) == {"I18N_A": "caf\u00e9"}

    def test_latin1_fallback(self, tmp_path: Path) -> None:
        """Test that invalid UTF-8 is read as ISO-8859-1."""
        bundle = tmp_path / "MainI18N.properties"
        _ = bundle.write_bytes("I18N_A=caf\u00e9\n".encode("iso-8859-1"))

        assert read_properties(bundle) == {"I18N_A": "caf\u00e9"}

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that unreadable bundles raise BundleError."""
        with pytest.raises(BundleError, match="Failed to read bundle"):
            _ = read_properties(tmp_path / "missing.properties")

    def test_malformed_file(self, tmp_path: Path) -> None:
        """Test that parse errors are reported as BundleError."""
        bundle = write_bundle(tmp_path, "BadI18N.properties", "I18N_A=\\uZZZZ\n")

        with pytest.raises(BundleError, match="Failed to parse bundle"):
            _ = read_properties(bundle)


class TestLoadBundle:
    """Test loading bundles with the key filter."""

    def test_load_bundle(self, project_dir: Path) -> None:
        """Test package and class derivation and key filtering."""
        root = project_dir / "src" / "main" / "resources"
        bundle_path = root / "de" / "example" / "MainI18N.properties"

        bundle = load_bundle(bundle_path, root, re.compile("^I18N_.*"))

        assert bundle.path == bundle_path
        assert bundle.relative_path == PurePosixPath("de/example/MainI18N.properties")
        assert bundle.package == "de.example"
        assert bundle.class_name == "MainI18N"
        assert bundle.qualified_name == "de.example.MainI18N"
        assert bundle.entries == {
            "I18N_HELLO": "Hello {0}!",
            "I18N_MULTI": "first line continued",
            "I18N_ESCAPED": "Tab\tand \u00e9",
        }

    def test_default_package(self, tmp_path: Path) -> None:
        """Test a bundle located directly in the root."""
        bundle_path = write_bundle(tmp_path, "RootI18N.properties", "I18N_A=a\nB=b\n")

        bundle = load_bundle(bundle_path, tmp_path, re.compile("I18N_.*"))

        assert bundle.package == ""
        assert bundle.qualified_name == "RootI18N"
        assert bundle.entries == {"I18N_A": "a"}


class TestScanBundles:
    """Test scanning all configured bundles."""

    def test_scan_default_selection(self, settings: GenerationSettings) -> None:
        """Test that the default selection finds the I18N bundles only."""
        bundles = scan_bundles(settings)

        assert [bundle.qualified_name for bundle in bundles] == [
            "de.example.MainI18N",
            "de.example.TestI18N",
        ]

    def test_scan_with_exclude(self, settings: GenerationSettings) -> None:
        """Test that excluded bundles are not scanned."""
        _ = settings.configure_bundles(lambda bundles: bundles.exclude("**/Test*.properties"))

        assert [bundle.class_name for bundle in scan_bundles(settings)] == ["MainI18N"]

    def test_scan_invalid_filter(self, settings: GenerationSettings) -> None:
        """Test that an invalid filter fails the scan."""
        settings.key_filter = "(["

        with pytest.raises(ConfigurationError):
            _ = scan_bundles(settings)
