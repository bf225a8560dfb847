"""Configuration schema for bundlegen using Pydantic models."""

import logging
import re
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path, PurePath
from typing import Annotated, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field

from ..utils.core.exceptions import ConfigurationError


logger = logging.getLogger(__name__)

DEFAULT_KEY_FILTER = "^I18N_.*"
DEFAULT_GEN_DIR = Path("src/main/java")
DEFAULT_BUNDLES_ROOT = Path("src/main/resources")
DEFAULT_BUNDLES_INCLUDE = "**/*I18N.properties"


@lru_cache(maxsize=256)
def compile_glob(pattern: str) -> re.Pattern[str]:
    """
    Translate an Ant style glob into a regular expression.

    The expression is matched against a relative path in "/"-prefixed posix
    form, e.g. "/de/example/MainI18N.properties".

    Args:
        pattern: Glob pattern ("**" spans directories, "*" and "?" do not)

    Returns:
        Compiled regular expression for fullmatch use
    """
    normalized = pattern.replace("\\", "/")
    if normalized.endswith("/"):
        normalized += "**"

    regex = ""
    for part in normalized.split("/"):
        if not part:
            continue
        if part == "**":
            regex += "(?:/[^/]+)*"
        else:
            regex += "/" + _translate_segment(part)
    return re.compile(regex)


def _translate_segment(segment: str) -> str:
    translated: list[str] = []
    for char in segment:
        match char:
            case "*":
                translated.append("[^/]*")
            case "?":
                translated.append("[^/]")
            case _:
                translated.append(re.escape(char))
    return "".join(translated)


class FileSelector(BaseModel):
    """
    A set of files below a root directory, selected by glob patterns.

    A relative path is selected if it matches at least one include pattern
    (or no include pattern is defined) and none of the exclude patterns.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(populate_by_name=True)

    root: Path = Field(
        ...,
        description="Root directory of the selection",
    )
    includes: list[str] = Field(
        default_factory=list,
        alias="include",
        description="Glob patterns of files to include",
    )
    excludes: list[str] = Field(
        default_factory=list,
        alias="exclude",
        description="Glob patterns of files to exclude",
    )

    def include(self, *patterns: str) -> Self:
        """Add include patterns to the selection."""
        self.includes.extend(patterns)
        return self

    def exclude(self, *patterns: str) -> Self:
        """Add exclude patterns to the selection."""
        self.excludes.extend(patterns)
        return self

    def matches(self, path: str | PurePath) -> bool:
        """
        Check whether a path is part of the selection.

        Args:
            path: Path relative to the root, or an absolute path below the root

        Returns:
            True if the path is selected
        """
        relative = self._relative_posix(path)
        if relative is None:
            return False

        if self.includes and not any(
            compile_glob(pattern).fullmatch(relative) for pattern in self.includes
        ):
            return False

        return not any(
            compile_glob(pattern).fullmatch(relative) for pattern in self.excludes
        )

    def _relative_posix(self, path: str | PurePath) -> str | None:
        if isinstance(path, str):
            path = PurePath(path.replace("\\", "/"))

        if path.is_absolute():
            try:
                path = path.relative_to(self.root)
            except ValueError:
                return None

        if ".." in path.parts:
            return None

        return "/" + path.as_posix()

    def resolved_root(self, base_dir: Path | None = None) -> Path:
        """Get the root directory, resolved against base_dir if relative."""
        root = Path(self.root)
        if base_dir is None or root.is_absolute():
            return root
        return base_dir / root

    def files(self, base_dir: Path | None = None) -> list[Path]:
        """
        Collect all selected files.

        Args:
            base_dir: Directory a relative root is resolved against

        Returns:
            Sorted list of selected file paths
        """
        root = self.resolved_root(base_dir)
        if not root.is_dir():
            logger.warning(f"Bundle root directory does not exist: {root}")
            return []

        selected: list[Path] = []
        for path in root.rglob("*"):
            if path.is_file() and self.matches(path.relative_to(root)):
                selected.append(path)
        return sorted(selected)


def default_bundles(project_dir: Path | None = None) -> FileSelector:
    """Create the default bundle selection, optionally anchored at project_dir."""
    root = DEFAULT_BUNDLES_ROOT if project_dir is None else project_dir / DEFAULT_BUNDLES_ROOT
    return FileSelector(root=root).include(DEFAULT_BUNDLES_INCLUDE)


class GenerationSettings(BaseModel):
    """
    Settings of the I18N helper class generation.

    Attribute assignment stores values verbatim. The key filter may be kept as
    a plain string, it is compiled when the generation task runs.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    project_dir: Path = Field(
        default=Path("."),
        description="Directory relative paths are resolved against",
    )
    enabled: bool = Field(
        default=False,
        description="Whether the generation of I18N helper classes is enabled",
    )
    key_filter: Annotated[
        str | re.Pattern[str], Field(union_mode="left_to_right")
    ] = Field(
        default_factory=lambda: re.compile(DEFAULT_KEY_FILTER),
        alias="keyFilter",
        description="Regular expression identifying the bundle keys to process",
    )
    gen_dir: Path = Field(
        default=DEFAULT_GEN_DIR,
        alias="genDir",
        description="Target folder for the generated I18N helper classes",
    )
    bundles: FileSelector = Field(
        default_factory=default_bundles,
        description="Resource bundles to process",
    )

    @classmethod
    def for_project(cls, project_dir: Path) -> Self:
        """Create default settings anchored at a project directory."""
        return cls(
            project_dir=project_dir,
            gen_dir=project_dir / DEFAULT_GEN_DIR,
            bundles=default_bundles(project_dir),
        )

    def configure_bundles(self, configure: Callable[[FileSelector], object]) -> Self:
        """
        Run a configuration action on the live bundle selection.

        Args:
            configure: Callable receiving the FileSelector to adjust

        Returns:
            The settings object
        """
        _ = configure(self.bundles)
        return self

    def compiled_key_filter(self) -> re.Pattern[str]:
        """
        Get the key filter as a compiled regular expression.

        Raises:
            ConfigurationError: If the filter is not a valid regular expression
        """
        match self.key_filter:
            case re.Pattern():
                return self.key_filter
            case str():
                try:
                    return re.compile(self.key_filter)
                except re.error as e:
                    raise ConfigurationError(
                        f"Invalid key filter '{self.key_filter}': {e}",
                        context=self.key_filter,
                    ) from e
            case _:
                raise ConfigurationError(
                    f"Key filter must be a string or pattern, got {type(self.key_filter).__name__}"
                )

    def accepts_key(self, key: str) -> bool:
        """Check whether the whole key matches the key filter."""
        return self.compiled_key_filter().fullmatch(key) is not None

    def resolved_gen_dir(self) -> Path:
        """Get the output directory resolved against the project directory."""
        return self.project_dir / self.gen_dir

    def resolved_bundles_root(self) -> Path:
        """Get the bundle root resolved against the project directory."""
        return self.bundles.resolved_root(self.project_dir)
