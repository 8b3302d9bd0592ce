"""Sort resolution.

`sort` holds comma-separated tokens, each optionally prefixed with `+`
(ascending, the default) or `-` (descending). A dotted token such as
`owner.company.name` walks associations hop by hop from the root model;
the last segment is always the field. Keys come out in input order.
"""

from typing import List, Optional

from .constants import PATH_SEPARATOR, SORT_PREFIX_MAP, ReservedParam, SortDirection
from .exceptions import SortPathError
from .schema import AssociationDescriptor, ModelSchema, SortKey
from .types import ParamValue, QueryParams
from .utils import pop_param, split_list, split_path


def parse_sort_token(token: str) -> tuple:
    """Split a token into `(direction, path)`.

    Surrounding whitespace is stripped first; a URL-decoded `+` arrives as
    a space and reads as the default ascending order.
    """
    token = token.strip()
    direction = SORT_PREFIX_MAP.get(token[:1])
    if direction is not None:
        token = token[1:].strip()
    return direction or SortDirection.ASC, token


def resolve_sort_key(token: str, model: ModelSchema) -> Optional[SortKey]:
    """Resolve one sort token against `model`'s association graph.

    Returns None for a token with no field (e.g. a bare `-`).

    Raises:
        SortPathError: If an intermediate hop is not a declared association
    """
    direction, path = parse_sort_token(token)
    hops = split_path(path)
    if not hops:
        return None
    *association_names, field = hops

    associations: List[AssociationDescriptor] = []
    current = model
    for name in association_names:
        association = current.association(name)
        if association is None:
            raise SortPathError(
                f"Cannot sort through '{name}': no such association on {current.name}",
                token=token,
                hop=name,
                model=current.name,
                path=PATH_SEPARATOR.join(hops),
            )
        associations.append(association)
        current = association.model
    return SortKey(associations=associations, field=field, direction=direction)


def resolve_sort(value: Optional[ParamValue], model: ModelSchema) -> List[SortKey]:
    """Resolve every token of a `sort` value, keeping input order."""
    keys: List[SortKey] = []
    for token in split_list(value):
        key = resolve_sort_key(token, model)
        if key is not None:
            keys.append(key)
    return keys


def consume_sort(query: QueryParams, model: ModelSchema) -> List[SortKey]:
    """Remove `sort` from `query` and resolve it. Absent `sort` yields no keys."""
    return resolve_sort(pop_param(query, ReservedParam.SORT), model)
