"""
Utility functions for ytmusic-pager.

    - ensure_not_empty: Argument guard for required strings
    - dig: Safe lookup through nested InnerTube JSON
"""

from typing import Any


def ensure_not_empty(value: str | None, name: str) -> str:
    """
    Ensure a string argument is neither None nor blank.

    Args:
        value: The argument value.
        name: The argument name, used in the error message.

    Returns:
        The value unchanged.

    Raises:
        ValueError: If value is None, empty or whitespace only.
    """
    if value is None or not value.strip():
        raise ValueError(f"'{name}' must be a non-empty string")
    return value


def dig(data: Any, *path: str | int) -> Any:
    """
    Follow a path of dict keys / list indices, returning None on any miss.

    Example:
        dig(response, "contents", "tabs", 0, "tabRenderer")
    """
    current = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or not -len(current) <= key < len(current):
                return None
        elif not isinstance(current, dict) or key not in current:
            return None
        current = current[key]
    return current
