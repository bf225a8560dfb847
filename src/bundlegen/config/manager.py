"""Configuration manager for bundlegen.

This module provides functionality for loading generation settings from YAML
files, merging overrides into existing settings and writing a documented
sample configuration.
"""

import logging
from collections.abc import Mapping
from pathlib import Path

import yaml

from ..utils.core.exceptions import ConfigurationError
from .schema import FileSelector, GenerationSettings


logger = logging.getLogger(__name__)

CONFIG_BLOCK = "generateI18N"

DEFAULT_CONFIG_FILE = Path("bundlegen.yml")


class ConfigManager:
    """
    Configuration manager for handling YAML config files.

    The generation settings live in the ``generateI18N`` block of the YAML
    document. Values found in the file are applied on top of the project
    defaults through :meth:`apply_overrides`.
    """

    @staticmethod
    def load_config(config_path: Path, project_dir: Path | None = None) -> GenerationSettings:
        """
        Load generation settings from a YAML file.

        Args:
            config_path: Path to the YAML configuration file
            project_dir: Project directory the defaults are anchored at
                (defaults to the directory containing the config file)

        Returns:
            GenerationSettings: Settings with the file's values applied

        Raises:
            FileNotFoundError: If the config file doesn't exist
            yaml.YAMLError: If the YAML syntax is invalid
            ValueError: If the document or the settings block is not a mapping
            ConfigurationError: If the settings block contains unknown options
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as f:
                raw_config_data: object = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML syntax in {config_path}: {e}") from e

        if raw_config_data is None:
            config_data: dict[str, object] = {}
        elif isinstance(raw_config_data, dict):
            config_data = raw_config_data
        else:
            raise ValueError(
                f"Configuration file must contain a YAML dictionary, got {type(raw_config_data).__name__}"
            )

        block = config_data.get(CONFIG_BLOCK)
        if block is None:
            logger.debug(f"No '{CONFIG_BLOCK}' block in {config_path}, using defaults")
            block = {}
        elif not isinstance(block, dict):
            raise ValueError(
                f"'{CONFIG_BLOCK}' must be a YAML dictionary, got {type(block).__name__}"
            )

        if project_dir is None:
            project_dir = config_path.parent

        settings = ConfigManager.get_default_config(project_dir)
        return ConfigManager.apply_overrides(settings, block)

    @staticmethod
    def apply_overrides(
        settings: GenerationSettings, overrides: Mapping[str, object]
    ) -> GenerationSettings:
        """
        Merge override values into existing settings.

        Values are stored verbatim. Include and exclude patterns given for
        ``bundles`` are appended to the existing selection.

        Args:
            settings: Settings to update in place
            overrides: Option names (config or attribute spelling) and values

        Returns:
            GenerationSettings: The updated settings object

        Raises:
            ConfigurationError: If an option is unknown or has the wrong shape
        """
        for key, value in overrides.items():
            match key:
                case "enabled":
                    if not isinstance(value, bool):
                        raise ConfigurationError(
                            f"'enabled' must be true or false, got {value!r}"
                        )
                    settings.enabled = value

                case "keyFilter" | "key_filter":
                    settings.key_filter = value  # pyright: ignore[reportAttributeAccessIssue]

                case "genDir" | "gen_dir":
                    settings.gen_dir = value if isinstance(value, Path) else Path(str(value))

                case "bundles":
                    ConfigManager._apply_bundle_overrides(settings.bundles, value)

                case _:
                    raise ConfigurationError(f"Unknown generation option: {key}")

        return settings

    @staticmethod
    def _apply_bundle_overrides(bundles: FileSelector, value: object) -> None:
        if not isinstance(value, Mapping):
            raise ConfigurationError(
                f"'bundles' must be a mapping, got {type(value).__name__}"
            )

        for key, item in value.items():  # pyright: ignore[reportUnknownVariableType]
            match key:
                case "root":
                    bundles.root = Path(str(item))  # pyright: ignore[reportUnknownArgumentType]
                case "include" | "includes":
                    _ = bundles.include(*ConfigManager._pattern_list(item))
                case "exclude" | "excludes":
                    _ = bundles.exclude(*ConfigManager._pattern_list(item))
                case _:
                    raise ConfigurationError(f"Unknown bundles option: {key}")

    @staticmethod
    def _pattern_list(value: object) -> list[str]:
        match value:
            case str():
                return [value]
            case list() | tuple():
                return [str(pattern) for pattern in value]  # pyright: ignore[reportUnknownVariableType]
            case None:
                return []
            case _:
                raise ConfigurationError(
                    f"Patterns must be a string or list, got {type(value).__name__}"
                )

    @staticmethod
    def get_default_config(project_dir: Path) -> GenerationSettings:
        """
        Get generation settings with default values.

        Args:
            project_dir: Project directory the default paths are anchored at

        Returns:
            GenerationSettings: Settings with default values
        """
        return GenerationSettings.for_project(project_dir)

    @staticmethod
    def validate_config(settings: GenerationSettings) -> bool:
        """
        Validate generation settings by re-creating them from their values.

        Args:
            settings: Settings object to validate

        Returns:
            bool: True if the settings are valid

        Raises:
            ValidationError: If a value has the wrong type
            ConfigurationError: If the key filter does not compile
        """
        _ = GenerationSettings.model_validate(settings.model_dump(by_alias=False))
        _ = settings.compiled_key_filter()
        return True

    @staticmethod
    def save_config(settings: GenerationSettings, config_path: Path) -> None:
        """
        Save generation settings to a YAML file.

        Args:
            settings: Settings to save
            config_path: Path where to save the configuration

        Raises:
            OSError: If file operations fail
        """
        key_filter = settings.key_filter
        block: dict[str, object] = {
            "enabled": settings.enabled,
            "keyFilter": key_filter if isinstance(key_filter, str) else key_filter.pattern,
            "genDir": str(settings.gen_dir),
            "bundles": {
                "root": str(settings.bundles.root),
                "include": list(settings.bundles.includes),
                "exclude": list(settings.bundles.excludes),
            },
        }
        content = yaml.dump(
            {CONFIG_BLOCK: block},
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
            indent=2,
        )
        config_path.parent.mkdir(parents=True, exist_ok=True)
        _ = config_path.write_text(content, encoding="utf-8")

    @staticmethod
    def create_sample_config(sample_path: Path) -> None:
        """
        Create a sample configuration file with all options and documentation.

        Args:
            sample_path: Path where to create the sample configuration file
        """
        sample_path.parent.mkdir(parents=True, exist_ok=True)
        _ = sample_path.write_text(ConfigManager._generate_sample_content(), encoding="utf-8")

    @staticmethod
    def _generate_sample_content() -> str:
        return """# bundlegen configuration file
# Relative paths are resolved against the project directory.

generateI18N:
  # Enable the generation of I18N helper classes (default: false)
  enabled: true
  # Regular expression identifying the bundle keys to process.
  # The whole key must match.
  keyFilter: "^I18N_.*"
  # Target folder for the generated I18N helper classes
  genDir: src/main/java
  # Resource bundles to process
  bundles:
    root: src/main/resources
    include:
      - "**/*I18N.properties"
    exclude: []
"""
