"""
Null-safe string helpers.

A text value is considered empty if it is either ``None`` or of length 0.
"""

from __future__ import annotations


def is_empty(text: str | None) -> bool:
    """
    Check whether a text value is empty.

    Args:
        text: The text value to check (may be None)

    Returns:
        True if the text is None or has zero length
    """
    return text is None or len(text) == 0


def not_empty(text: str | None) -> bool:
    """Check whether a text value is set and has at least one character."""
    return text is not None and len(text) > 0


def safe(text: str | None) -> str:
    """
    Make sure a text value is not None.

    Args:
        text: The text value to check (may be None)

    Returns:
        The submitted text or "" if None was submitted
    """
    return text if text is not None else ""


__all__ = ["is_empty", "not_empty", "safe"]
