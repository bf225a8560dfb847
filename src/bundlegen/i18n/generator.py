"""
I18N helper class generation task.

This module runs the generation for all bundles selected by the settings,
writing a helper class per bundle and leaving outputs with unchanged content
untouched.
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import override

from ..config.schema import GenerationSettings
from ..utils.core.exceptions import BundleGenError, GenerationError
from .bundles import find_bundle_files, load_bundle
from .java_codegen import helper_class_path, render_helper_class

logger = logging.getLogger(__name__)


class GenerationResult:
    """Result of a generation run."""

    def __init__(self) -> None:
        self.generated_files: list[Path] = []
        self.unchanged_files: list[Path] = []
        self.outdated_files: list[Path] = []
        self.failed_files: list[tuple[Path, Exception]] = []
        self.total_files: int = 0
        self.enabled: bool = True

    @property
    def success_count(self) -> int:
        """Number of written (or, in dry-run mode, writable) files."""
        return len(self.generated_files)

    @property
    def unchanged_count(self) -> int:
        """Number of outputs that were already up to date."""
        return len(self.unchanged_files)

    @property
    def failure_count(self) -> int:
        """Number of bundles that failed."""
        return len(self.failed_files)

    @property
    def ok(self) -> bool:
        """Whether no bundle failed."""
        return not self.failed_files

    @override
    def __str__(self) -> str:
        return (
            f"Generation Results: "
            f"{self.success_count} generated, "
            f"{self.unchanged_count} unchanged, "
            f"{self.failure_count} failed "
            f"(of {self.total_files} bundle(s))"
        )


def _digest(content: bytes) -> str:
    return hashlib.sha256(content).hexdigest()


def is_up_to_date(output_file: Path, content: str) -> bool:
    """
    Check whether an output file already holds the given content.

    Args:
        output_file: Path of the generated file
        content: Freshly rendered content

    Returns:
        True if the file exists with identical content
    """
    if not output_file.is_file():
        return False

    try:
        existing = output_file.read_bytes()
    except OSError as e:
        logger.warning(f"Error reading {output_file}: {e}")
        return False

    return _digest(existing) == _digest(content.encode("utf-8"))


def write_helper_class(output_file: Path, content: str) -> None:
    """
    Write a generated helper class.

    Raises:
        GenerationError: If the file cannot be written
    """
    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        _ = output_file.write_text(content, encoding="utf-8", newline="\n")
    except OSError as e:
        raise GenerationError(
            f"Failed to write {output_file}: {e}", context=output_file
        ) from e


def generate_i18n(
    settings: GenerationSettings,
    dry_run: bool = False,
    check: bool = False,
    fail_fast: bool = False,
) -> GenerationResult:
    """
    Generate the I18N helper classes for all selected bundles.

    Args:
        settings: Generation settings
        dry_run: Render and compare, but do not write files
        check: Report outdated outputs in ``outdated_files`` without writing
        fail_fast: Stop on the first failing bundle

    Returns:
        GenerationResult with details of the run

    Raises:
        ConfigurationError: If the key filter is not a valid regular expression
    """
    result = GenerationResult()

    if not settings.enabled:
        logger.info("I18N helper class generation is disabled")
        result.enabled = False
        return result

    key_filter = settings.compiled_key_filter()
    root = settings.resolved_bundles_root()
    gen_dir = settings.resolved_gen_dir()

    bundle_files = find_bundle_files(settings)
    result.total_files = len(bundle_files)

    if not bundle_files:
        logger.warning(f"No resource bundles found in: {root}")
        return result

    logger.info(f"Found {len(bundle_files)} resource bundle(s) to process")

    for bundle_file in bundle_files:
        try:
            bundle = load_bundle(bundle_file, root, key_filter)
            content = render_helper_class(bundle)
            output_file = helper_class_path(bundle, gen_dir)

            if is_up_to_date(output_file, content):
                logger.debug(f"Skipping {output_file} (up to date)")
                result.unchanged_files.append(output_file)
                continue

            if check:
                logger.info(f"Outdated: {output_file}")
                result.outdated_files.append(output_file)
                continue

            if dry_run:
                logger.info(f"DRY RUN: Would generate {output_file}")
            else:
                write_helper_class(output_file, content)
                logger.info(f"Generated {bundle_file.name} -> {output_file}")
            result.generated_files.append(output_file)
        except BundleGenError as e:
            logger.error(f"Failed to process {bundle_file}: {e}")
            result.failed_files.append((bundle_file, e))
            if fail_fast:
                logger.error(f"Stopping generation due to error in {bundle_file}")
                break

    logger.info(str(result))

    if result.failed_files:
        logger.error("Failed bundles:")
        for bundle_file, error in result.failed_files:
            logger.error(f"  {bundle_file}: {error}")

    return result
