"""Pagination extraction.

`limit` and `offset` are copied into the plan verbatim. No default is
applied and no range validation happens here; both are left to the
execution layer.
"""

from typing import Any, Dict, Mapping

from .constants import ReservedParam
from .utils import has_value


def extract_offset(query: Mapping[str, Any]) -> Dict[str, Any]:
    value = query.get(ReservedParam.OFFSET)
    return {"offset": value} if has_value(value) else {}


def extract_limit(query: Mapping[str, Any]) -> Dict[str, Any]:
    value = query.get(ReservedParam.LIMIT)
    return {"limit": value} if has_value(value) else {}


def extract_pagination(query: Mapping[str, Any]) -> Dict[str, Any]:
    """Return the `offset`/`limit` plan entries present in `query`."""
    bounds = extract_offset(query)
    bounds.update(extract_limit(query))
    return bounds
