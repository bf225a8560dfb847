"""
Global test configuration fixtures for bundlegen tests.

This module provides a sample project layout with resource bundles and
generation settings anchored at it.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from src.bundlegen.config.schema import GenerationSettings
from tests.utils.test_helpers import write_bundle

MAIN_BUNDLE = """\
# Main bundle
I18N_HELLO = Hello {0}!
I18N_MULTI = first line \\
    continued
NOT_SELECTED = ignored
I18N_ESCAPED = Tab\\tand \\u00e9
"""

TEST_BUNDLE = """\
I18N_TEST_ONLY=Only used by tests
"""


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """
    Create a project with resource bundles below src/main/resources.

    Layout:
        de/example/MainI18N.properties     selected by default
        de/example/MainI18N_de.properties  locale variant, not selected
        de/example/TestI18N.properties     selected by default
        de/example/Other.properties        not selected
    """
    resources = tmp_path / "src" / "main" / "resources"
    _ = write_bundle(resources, "de/example/MainI18N.properties", MAIN_BUNDLE)
    _ = write_bundle(resources, "de/example/MainI18N_de.properties", "I18N_HELLO=Hallo {0}!\n")
    _ = write_bundle(resources, "de/example/TestI18N.properties", TEST_BUNDLE)
    _ = write_bundle(resources, "de/example/Other.properties", "I18N_OTHER=Other\n")
    return tmp_path


@pytest.fixture
def settings(project_dir: Path) -> GenerationSettings:
    """Enabled default settings for the sample project."""
    project_settings = GenerationSettings.for_project(project_dir)
    project_settings.enabled = True
    return project_settings


@pytest.fixture
def gen_dir(project_dir: Path) -> Path:
    """Default output directory of the sample project."""
    return project_dir / "src" / "main" / "java"
