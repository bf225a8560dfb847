"""
Main entry point for bundlegen.

This module sets up logging, loads the generation settings from the
configuration file, merges the command line overrides and runs the I18N
helper class generation.
"""

import logging
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from .config.manager import DEFAULT_CONFIG_FILE, ConfigManager
from .config.schema import GenerationSettings
from .i18n.generator import generate_i18n
from .utils.cli.args import ParsedArgs, parse_arguments
from .utils.core.exceptions import BundleGenError


logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """
    Set up logging configuration.

    Args:
        verbose: Enable verbose logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )


def resolve_config_file(args: ParsedArgs) -> Path | None:
    """
    Get the configuration file to load.

    An explicitly given file must exist. Without one, ``bundlegen.yml`` in the
    project directory is used if present.
    """
    if args.config_file is not None:
        return args.config_file

    default_file = args.project_dir / DEFAULT_CONFIG_FILE
    return default_file if default_file.is_file() else None


def load_settings(args: ParsedArgs) -> GenerationSettings:
    """
    Load the generation settings and apply the command line overrides.

    Raises:
        FileNotFoundError: If an explicitly given config file doesn't exist
        yaml.YAMLError: If the YAML syntax is invalid
        ValueError: If the configuration file has the wrong structure
        ConfigurationError: If an option is unknown
    """
    config_file = resolve_config_file(args)
    if config_file is None:
        logger.debug("No configuration file found, using defaults")
        settings = ConfigManager.get_default_config(args.project_dir)
    else:
        logger.info(f"Loading configuration from {config_file}")
        settings = ConfigManager.load_config(config_file, args.project_dir)

    return ConfigManager.apply_overrides(settings, args.overrides)


def run(args: ParsedArgs) -> int:
    """
    Run bundlegen with parsed arguments.

    Returns:
        Exit code (0 for success, 1 for error or outdated files in check mode)
    """
    if args.init_config:
        sample_path = args.config_file or args.project_dir / DEFAULT_CONFIG_FILE
        if sample_path.exists():
            logger.error(f"Configuration file already exists: {sample_path}")
            return 1
        ConfigManager.create_sample_config(sample_path)
        logger.info(f"Created sample configuration: {sample_path}")
        return 0

    if not args.project_dir.is_dir():
        logger.error(f"Project directory does not exist: {args.project_dir}")
        return 1

    try:
        settings = load_settings(args)

        result = generate_i18n(
            settings,
            dry_run=args.dry_run,
            check=args.check,
            fail_fast=args.fail_fast,
        )
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        return 1
    except (BundleGenError, ValidationError, yaml.YAMLError, OSError, ValueError) as e:
        logger.error(f"Error during generation: {e}")
        if args.verbose:
            logger.exception("Full traceback:")
        return 1

    if not result.ok:
        return 1

    if args.check and result.outdated_files:
        logger.info(
            f"{len(result.outdated_files)} generated file(s) need update, run without --check"
        )
        return 1

    return 0


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the command line.

    Args:
        argv: Arguments to parse (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    args = parse_arguments(argv)
    setup_logging(args.verbose)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
