"""
Emptiness predicate for lesson plan field values.
"""

from typing import Any


def is_empty(value: Any) -> bool:
    """
    Decide whether a field value counts as unset.

    A value is empty if it is None, text made only of whitespace
    (including ""), or a list/tuple with no elements. Everything else,
    mappings and falsy scalars included, is present.

    Examples:
        >>> is_empty("   ")
        True
        >>> is_empty(["السبورة"])
        False
        >>> is_empty({})
        False
    """
    if value is None:
        return True

    if isinstance(value, str):
        return value.strip() == ""

    if isinstance(value, (list, tuple)):
        return len(value) == 0

    return False
