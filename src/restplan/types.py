"""Type aliases for restplan package.

This module provides reusable type definitions shared by the translators.
"""

from typing import List, MutableMapping, Union

# A single query-parameter value as received at the HTTP boundary
ParamValue = Union[str, List[str]]

# The caller-owned query-parameter map (consumed keys are removed in place)
QueryParams = MutableMapping[str, ParamValue]
