"""Predicate building from query parameters.

Every parameter that is not reserved is read with a small key grammar:

- `<field>=value`      equality, when `<field>` is queryable
- `not-<field>=value`  `field NOT IN (value, ...)`
- `max-<field>=value`  `field >= value`
- `min-<field>=value`  `field <= value`
- `or-<field>=value`   `field = value`, ORed with every other `or-` key

`max`/`min` name the bound the caller is willing to accept, which is why
`max` yields a lower bound and `min` an upper bound. Existing clients rely
on this mapping.

Keys naming a field outside the queryable list, and unknown operators,
contribute nothing. Values `"null"`, `"true"` and `"false"` (any case) are
coerced to `None`, `True` and `False`; list values are coerced element-wise.
"""

from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, NamedTuple, Optional

from .constants import LITERAL_TOKENS, OPERATOR_SEPARATOR, RESERVED_PARAMS
from .querydsl import Q

__all__ = (
    "Operator",
    "ParamKey",
    "PredicateBuilder",
    "build_predicate",
    "coerce_literal",
    "coerce_value",
    "parse_param_key",
)


class Operator(str, Enum):
    EQ = "eq"
    NOT = "not"
    MAX = "max"
    MIN = "min"
    OR = "or"


# Operators accepted as a `<op>-` key prefix
PREFIX_OPERATORS = frozenset({Operator.NOT, Operator.MAX, Operator.MIN, Operator.OR})

# Q lookup applied for each operator
_LOOKUPS = {
    Operator.EQ: "eq",
    Operator.NOT: "nin",
    Operator.MAX: "gte",
    Operator.MIN: "lte",
    Operator.OR: "eq",
}


class ParamKey(NamedTuple):
    operator: Operator
    field: str


def parse_param_key(key: str, queryable_fields: Iterable[str]) -> Optional[ParamKey]:
    """Tokenize a parameter key into an operator and a queryable field.

    Returns None for reserved keys, unknown operators and fields outside
    `queryable_fields`. An exact field match wins over prefix parsing, so
    a queryable field may itself contain `-`.
    """
    if key in RESERVED_PARAMS:
        return None
    queryable = queryable_fields if isinstance(queryable_fields, (set, frozenset)) else set(queryable_fields)
    if key in queryable:
        return ParamKey(Operator.EQ, key)
    prefix, sep, field = key.partition(OPERATOR_SEPARATOR)
    if not sep or not field:
        return None
    try:
        operator = Operator(prefix)
    except ValueError:
        return None
    if operator not in PREFIX_OPERATORS or field not in queryable:
        return None
    return ParamKey(operator, field)


def coerce_literal(value: Any) -> Any:
    """Coerce `"null"`/`"true"`/`"false"` (case-insensitive); return anything else unchanged."""
    if isinstance(value, str):
        lowered = value.lower()
        if lowered in LITERAL_TOKENS:
            return LITERAL_TOKENS[lowered]
    return value


def coerce_value(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [coerce_literal(item) for item in value]
    return coerce_literal(value)


class PredicateBuilder:
    """Accumulates parameters into a single predicate tree.

    Scalar comparisons land in one leaf (several operators on one field
    merge into one operator dict). List values other than `not` become
    `$or` groups, and all `or-` keys share a single `$or` group.
    """

    def __init__(self, queryable_fields: Iterable[str]) -> None:
        self.queryable_fields = frozenset(queryable_fields)
        self.ignored: List[str] = []
        self._filters: Dict[str, Any] = {}
        self._groups: List[Q] = []
        self._or_group: List[Q] = []

    def add(self, key: str, value: Any) -> bool:
        """Apply one parameter. Returns False when the key contributes nothing."""
        parsed = parse_param_key(key, self.queryable_fields)
        if parsed is None:
            if key not in RESERVED_PARAMS:
                self.ignored.append(key)
            return False
        value = coerce_value(value)
        if isinstance(value, list) and not value:
            return False

        operator, field = parsed
        lookup = f"{field}__{_LOOKUPS[operator]}"
        if operator is Operator.NOT:
            self._filters[lookup] = value if isinstance(value, list) else [value]
        elif operator is Operator.OR:
            values = value if isinstance(value, list) else [value]
            self._or_group.extend(Q(**{lookup: item}) for item in values)
        elif isinstance(value, list):
            self._groups.append(Q.any(Q(**{lookup: item}) for item in value))
        else:
            self._filters[lookup] = value
        return True

    def build(self) -> Q:
        leaf = Q(**self._filters)
        groups = list(self._groups)
        if self._or_group:
            groups.append(Q.any(self._or_group))
        if not groups:
            return leaf
        return Q.all([leaf] + groups)


def build_predicate(
    query: Mapping[str, Any],
    queryable_fields: Iterable[str],
    ignored: Optional[List[str]] = None,
) -> Q:
    """Build the predicate tree for every non-reserved parameter in `query`.

    Keys that name no queryable field are appended to `ignored` when a list
    is passed.
    """
    builder = PredicateBuilder(queryable_fields)
    for key, value in query.items():
        builder.add(key, value)
    if ignored is not None:
        ignored.extend(builder.ignored)
    return builder.build()
