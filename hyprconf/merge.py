"""Structural merge of parsed config documents."""

from typing import Any


def merge_values(base: Any, incoming: Any) -> Any:
    """
    Merge ``incoming`` into ``base`` and return the combined value.

    Tables (dicts) merge key by key, recursing into keys present on both
    sides. Anything else (scalars, arrays, or a table paired with a
    non-table) is replaced by ``incoming``. When both sides are tables,
    ``base`` is updated in place and returned.

    Args:
        base: The value loaded first (the including document).
        incoming: The value loaded later (an included document).

    Returns:
        The merged value.

    Example:
        >>> merge_values({"a": {"x": 1}}, {"a": {"y": 2}})
        {'a': {'x': 1, 'y': 2}}
        >>> merge_values({"a": 1}, {"a": 2})
        {'a': 2}
    """
    if not isinstance(base, dict) or not isinstance(incoming, dict):
        return incoming

    for key, value in incoming.items():
        if key in base:
            base[key] = merge_values(base[key], value)
        else:
            base[key] = value

    return base
