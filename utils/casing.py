"""
Key-casing helpers for the canonical API schema.

The API speaks snake_case only. Clients that still send camelCase keys are
normalized once, at the parser boundary, so serializers and services never
need dual-field fallbacks.
"""

import re
from typing import Any


_FIRST_CAP = re.compile(r"(.)([A-Z][a-z]+)")
_ALL_CAP = re.compile(r"([a-z0-9])([A-Z])")


def to_snake_case(name: str) -> str:
    """
    Convert a single key to snake_case.

    Examples:
        >>> to_snake_case("tradeOnly")
        'trade_only'
        >>> to_snake_case("imageURL")
        'image_url'
        >>> to_snake_case("already_snake")
        'already_snake'
    """
    if not name or "_" in name and name.lower() == name:
        return name
    partial = _FIRST_CAP.sub(r"\1_\2", name)
    return _ALL_CAP.sub(r"\1_\2", partial).lower()


def snake_case_keys(data: Any) -> Any:
    """Recursively rename dict keys to snake_case; lists are walked, scalars returned as-is."""
    if isinstance(data, dict):
        return {
            (to_snake_case(key) if isinstance(key, str) else key): snake_case_keys(value)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [snake_case_keys(item) for item in data]
    return data
