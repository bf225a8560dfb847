"""Tests for the null-safe string helpers."""

from __future__ import annotations

import pytest

from src.bundlegen.utils.core.strings import is_empty, not_empty, safe


class TestIsEmpty:
    """Test cases for is_empty and not_empty."""

    @pytest.mark.parametrize("text", [None, ""])
    def test_empty_values(self, text: str | None) -> None:
        """Test that None and the zero-length string are empty."""
        assert is_empty(text) is True
        assert not_empty(text) is False

    @pytest.mark.parametrize("text", [" ", "a", "I18N_EXAMPLE", "\n", "\x00"])
    def test_non_empty_values(self, text: str) -> None:
        """Test that any string with at least one character is not empty."""
        assert is_empty(text) is False
        assert not_empty(text) is True

    @pytest.mark.parametrize("text", [None, "", "x", "  "])
    def test_not_empty_negates_is_empty(self, text: str | None) -> None:
        """Test that not_empty is always the negation of is_empty."""
        assert not_empty(text) == (not is_empty(text))


class TestSafe:
    """Test cases for safe."""

    def test_none_becomes_empty_string(self) -> None:
        """Test that None is replaced by the empty string."""
        assert safe(None) == ""

    @pytest.mark.parametrize("text", ["", "value", "  padded  "])
    def test_present_values_are_returned_unchanged(self, text: str) -> None:
        """Test that present values are returned as they are."""
        assert safe(text) is text
