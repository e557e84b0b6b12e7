"""Logic for deep merging configuration dictionaries."""

from typing import Any


def deep_merge(base: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    - Objects are merged recursively.
    - Scalars and arrays in 'update' replace those in 'base'.
    - A null in 'update', such as an empty YAML section (``remote:``),
      keeps the 'base' value.
    """
    result = base.copy()
    for key, value in update.items():
        if value is None and key in result:
            continue
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result
