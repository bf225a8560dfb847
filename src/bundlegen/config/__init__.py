"""Configuration handling for bundlegen."""

from .manager import ConfigManager
from .schema import FileSelector, GenerationSettings

__all__ = ["ConfigManager", "FileSelector", "GenerationSettings"]
