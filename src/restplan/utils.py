"""Utility functions for restplan.

Shared helpers for reading comma-separated and dotted parameter values.
"""

from typing import Any, List, MutableMapping, Optional

from .constants import LIST_SEPARATOR, PATH_SEPARATOR
from .types import ParamValue


def split_list(value: Optional[ParamValue], separator: str = LIST_SEPARATOR) -> List[str]:
    """Split a comma-separated parameter into stripped, non-empty tokens.

    A repeated parameter (list value) is split element-wise and flattened,
    so `?fields=a,b&fields=c` and `?fields=a,b,c` read the same.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        tokens: List[str] = []
        for item in value:
            tokens.extend(split_list(item, separator))
        return tokens
    return [token.strip() for token in str(value).split(separator) if token.strip()]


def split_path(path: str) -> List[str]:
    """Split a dotted path (`owner.company.name`) into its hops."""
    return [hop for hop in path.split(PATH_SEPARATOR) if hop]


def has_value(value: Any) -> bool:
    """Whether a parameter carries something other than None or an empty string."""
    return value is not None and value != ""


def pop_param(query: MutableMapping[str, Any], key: str) -> Any:
    """Remove `key` from the caller's map and return its value (None if absent)."""
    return query.pop(key, None)


def last_value(value: Optional[ParamValue]) -> Any:
    """Collapse a repeated parameter to its last non-empty value.

    Scalars pass through; an empty list gives None.
    """
    if isinstance(value, (list, tuple)):
        present = [item for item in value if has_value(item)]
        return present[-1] if present else None
    return value
