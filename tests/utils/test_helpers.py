"""
Test helper utilities for bundlegen tests.

This module provides helpers for creating resource bundles and temporary
configuration files.
"""

from __future__ import annotations

import tempfile
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

import yaml

__all__ = [
    "write_bundle",
    "create_temp_config_file",
]


def write_bundle(root: Path, relative_path: str, content: str) -> Path:
    """
    Write a resource bundle below a root directory.

    Args:
        root: Bundle root directory
        relative_path: Posix path of the bundle relative to root
        content: Properties content

    Returns:
        Path of the written bundle
    """
    bundle_path = root / relative_path
    bundle_path.parent.mkdir(parents=True, exist_ok=True)
    _ = bundle_path.write_text(content, encoding="utf-8")
    return bundle_path


@contextmanager
def create_temp_config_file(
    config_data: dict[str, object] | None = None,
    directory: Path | None = None,
) -> Generator[Path, None, None]:
    """
    Create a temporary YAML configuration file.

    Args:
        config_data: Data to dump into the file (None writes an empty file)
        directory: Directory to create the file in (defaults to a temp dir)

    Yields:
        Path of the configuration file
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        target_dir = directory if directory is not None else Path(temp_dir)
        config_path = target_dir / "bundlegen.yml"
        content = "" if config_data is None else yaml.safe_dump(config_data, sort_keys=False)
        _ = config_path.write_text(content, encoding="utf-8")
        try:
            yield config_path
        finally:
            config_path.unlink(missing_ok=True)
