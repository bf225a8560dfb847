"""
Command-line argument parsing for bundlegen.

This module parses the options of the ``bundlegen`` command. Options that
correspond to generation settings are collected as overrides that are merged
into the settings loaded from the configuration file.
"""

import argparse
from pathlib import Path
from typing import NamedTuple

from ..core.version import get_version


class ParsedArgs(NamedTuple):
    """Type-safe container for command-line arguments."""

    project_dir: Path
    config_file: Path | None
    overrides: dict[str, object]
    dry_run: bool
    check: bool
    fail_fast: bool
    init_config: bool
    verbose: bool


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for bundlegen.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="bundlegen",
        description="Generate I18N helper classes from resource bundles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bundlegen --enable
    Generate helper classes with the default settings

  bundlegen --project-dir ~/src/app --config-file ~/src/app/bundlegen.yml
    Use a project directory and configuration file

  bundlegen --exclude "**/Test*.properties"
    Skip test bundles

  bundlegen --check
    Exit with status 1 if generated files are out of date
""",
    )

    _ = parser.add_argument(
        "--project-dir",
        type=Path,
        default=Path("."),
        help="Project directory relative paths are resolved against (default: %(default)s)",
        metavar="PATH",
    )
    _ = parser.add_argument(
        "--config-file",
        type=Path,
        default=None,
        help="Configuration file (default: bundlegen.yml in the project directory, if present)",
        metavar="PATH",
    )
    _ = parser.add_argument(
        "--enable",
        action="store_true",
        help="Enable generation regardless of the configuration file",
    )
    _ = parser.add_argument(
        "--key-filter",
        default=None,
        help="Regular expression identifying the bundle keys to process",
        metavar="REGEX",
    )
    _ = parser.add_argument(
        "--gen-dir",
        type=Path,
        default=None,
        help="Target folder for the generated helper classes",
        metavar="PATH",
    )
    _ = parser.add_argument(
        "--bundles-root",
        type=Path,
        default=None,
        help="Root directory of the resource bundles",
        metavar="PATH",
    )
    _ = parser.add_argument(
        "--include",
        action="append",
        default=[],
        help="Additional bundle include pattern (can be used multiple times)",
        metavar="GLOB",
    )
    _ = parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        help="Bundle exclude pattern (can be used multiple times)",
        metavar="GLOB",
    )
    _ = parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be done without writing files",
    )
    _ = parser.add_argument(
        "--check",
        action="store_true",
        help="Check mode: fail if generated files are missing or out of date",
    )
    _ = parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop on the first failing bundle",
    )
    _ = parser.add_argument(
        "--init-config",
        action="store_true",
        help="Write a sample configuration file and exit",
    )
    _ = parser.add_argument(
        "--verbose", action="store_true", help="Enable verbose logging"
    )
    _ = parser.add_argument(
        "--version", action="version", version=f"%(prog)s {get_version()}"
    )

    return parser


def collect_overrides(parsed: argparse.Namespace) -> dict[str, object]:
    """
    Collect the settings overrides given on the command line.

    Args:
        parsed: Namespace returned by the argument parser

    Returns:
        Overrides in configuration file spelling
    """
    overrides: dict[str, object] = {}

    if getattr(parsed, "enable", False):
        overrides["enabled"] = True

    key_filter: str | None = getattr(parsed, "key_filter", None)
    if key_filter is not None:
        overrides["keyFilter"] = key_filter

    gen_dir: Path | None = getattr(parsed, "gen_dir", None)
    if gen_dir is not None:
        overrides["genDir"] = gen_dir

    bundles: dict[str, object] = {}
    bundles_root: Path | None = getattr(parsed, "bundles_root", None)
    if bundles_root is not None:
        bundles["root"] = bundles_root
    includes: list[str] = getattr(parsed, "include", [])
    if includes:
        bundles["include"] = list(includes)
    excludes: list[str] = getattr(parsed, "exclude", [])
    if excludes:
        bundles["exclude"] = list(excludes)
    if bundles:
        overrides["bundles"] = bundles

    return overrides


def parse_arguments(args: list[str] | None = None) -> ParsedArgs:
    """
    Parse command-line arguments.

    Args:
        args: List of arguments to parse (defaults to sys.argv[1:])

    Returns:
        ParsedArgs with the settings overrides collected

    Raises:
        SystemExit: If argument parsing fails or --help is requested
    """
    parser = create_argument_parser()
    parsed = parser.parse_args(args)

    project_dir: Path = getattr(parsed, "project_dir")
    config_file: Path | None = getattr(parsed, "config_file")

    return ParsedArgs(
        project_dir=project_dir.expanduser(),
        config_file=config_file.expanduser() if config_file is not None else None,
        overrides=collect_overrides(parsed),
        dry_run=getattr(parsed, "dry_run"),
        check=getattr(parsed, "check"),
        fail_fast=getattr(parsed, "fail_fast"),
        init_config=getattr(parsed, "init_config"),
        verbose=getattr(parsed, "verbose"),
    )
