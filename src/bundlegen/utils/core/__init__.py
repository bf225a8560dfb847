"""Core utilities shared across bundlegen."""

from .strings import is_empty, not_empty, safe

__all__ = ["is_empty", "not_empty", "safe"]
