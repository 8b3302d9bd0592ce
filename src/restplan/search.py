"""Free-text term search.

`term` fans out into a case-insensitive `%term%` match against each target
field, ORed together and ANDed with the predicate tree:

    where = AND(OR(f1 ILIKE %term%, f2 ILIKE %term%, ...), predicate)

Targets are the `searchFields` list when given, otherwise every queryable
field. A repeated `term` uses its last non-empty value. `term` and
`searchFields` are removed from the caller's map.
"""

from typing import Iterable, List, Optional

from .constants import ReservedParam
from .querydsl import Q
from .types import QueryParams
from .utils import has_value, last_value, pop_param, split_list


def search_targets(
    search_fields: Optional[List[str]],
    queryable_fields: Iterable[str],
    restrict: bool = False,
) -> List[str]:
    """Pick the fields a term is matched against.

    An explicit list is trusted as given unless `restrict` is set, in which
    case it is intersected with the queryable fields (keeping its order).
    """
    queryable = list(queryable_fields)
    if not search_fields:
        return queryable
    if restrict:
        allowed = set(queryable)
        return [field for field in search_fields if field in allowed]
    return list(search_fields)


def term_matches(term: str, fields: Iterable[str], case_sensitive: bool = False) -> Q:
    """OR group with one `%term%` match per field."""
    lookup = "like" if case_sensitive else "ilike"
    pattern = f"%{term}%"
    return Q.any(Q(**{f"{field}__{lookup}": pattern}) for field in fields)


def merge_term_search(
    query: QueryParams,
    predicate: Q,
    queryable_fields: Iterable[str],
    restrict: bool = False,
    case_sensitive: bool = False,
) -> Q:
    """Consume `term`/`searchFields` and return the final predicate.

    Without a term, or when no target field remains, `predicate` is returned
    unmodified.
    """
    term = last_value(pop_param(query, ReservedParam.TERM))
    search_fields = split_list(pop_param(query, ReservedParam.SEARCH_FIELDS))
    if not has_value(term):
        return predicate

    targets = search_targets(search_fields, queryable_fields, restrict=restrict)
    if not targets:
        return predicate
    return term_matches(str(term), targets, case_sensitive) & predicate
