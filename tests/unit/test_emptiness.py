"""
Unit tests for the emptiness predicate.
"""

import pytest

from lesson_planner.planning.emptiness import is_empty


class TestIsEmpty:
    """Test cases for is_empty."""

    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n", [], ()])
    def test_empty_values(self, value):
        """Test None, blank text and empty sequences are empty."""
        assert is_empty(value)

    @pytest.mark.parametrize("value", ["x", " العلوم ", ["السبورة"], [""], 0, False, {}, 1.5])
    def test_present_values(self, value):
        """Test text, non-empty lists, falsy scalars and mappings are present."""
        assert not is_empty(value)

    def test_list_of_blank_strings_is_present(self):
        """Test a list is judged by length, not by its items."""
        assert not is_empty(["", "  "])
