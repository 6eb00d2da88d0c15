"""Validation functions for data models."""

from typing import Any, List, Optional


def to_str(value: Any) -> str:
    """Convert value to string and strip whitespace."""
    if value is None:
        return ""
    return str(value).strip()


def to_list(value: Any) -> List[Any]:
    """Convert value to list if it's not already a list."""
    if value is None:
        return []
    if isinstance(value, tuple):
        return list(value)
    if not isinstance(value, list):
        return [value]
    return value


def normalize(value: Any) -> Optional[Any]:
    """Normalize strings.

    - Strip white spaces, tabs and new lines.
    - Replace tabs, new lines and multiple white spaces with one white space.
    """
    if value is None:
        return None
    if isinstance(value, tuple):
        return tuple([normalize(v) for v in value])
    if isinstance(value, list):
        return [normalize(v) for v in value]
    if isinstance(value, str):
        return " ".join(value.split())

    return value
