"""Predicate tree nodes.

This module defines the `Q` class the predicate builder and term-search
merger assemble into a query plan's `where`. A `Q` node is either a leaf
holding `field__lookup=value` filters or a boolean combination of child
nodes. It renders to a universal dict and, through the compilers, to
backend-specific forms.

Typical usage:

- Build filters: `Q(age__gte=18, status__nin=["banned"])`
- Combine: `Q(a=1) & Q(b=2)`, `Q.any([Q(a=1), Q(b=2)])`
- Render: `q.to_dict()`, `q.to_where("sql")`, `q.to_where("sequelize")`
"""

from __future__ import annotations

from copy import deepcopy
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Literal, Optional

if TYPE_CHECKING:
    from .compilers.base import BaseWhere

BackendType = Literal["generic", "sql", "sequelize"]


class Q:
    """Composable boolean predicate node.

    - Use `&` to combine with logical AND.
    - Use `|` to combine with logical OR.
    - Use `~` to negate a node.

    Filter keys follow the `field__lookup` convention where lookup is one
    of: `eq`, `ne`, `gt`, `gte`, `lt`, `lte`, `in`, `nin`, `like`, `ilike`.
    A key without a known lookup is an equality on the whole key.
    """

    _OP_MAP = {
        "eq": "$eq",
        "ne": "$ne",
        "gt": "$gt",
        "gte": "$gte",
        "lt": "$lt",
        "lte": "$lte",
        "in": "$in",
        "nin": "$nin",
        "like": "$like",
        "ilike": "$ilike",
    }

    AND = "$and"
    OR = "$or"

    def __init__(self, negate: bool = False, **filters: Any):
        """Initialize a `Q` node.

        - negate: whether this node is negated.
        - filters: leaf-level filters using `field__lookup=value` pairs.
        """
        self.filters: Dict[str, Any] = filters
        self.children: List["Q"] = []
        self.connector = self.AND
        self.negate = negate

    @classmethod
    def combine(cls, connector: str, nodes: Iterable["Q"]) -> "Q":
        """Return an n-ary `connector` node over the non-empty `nodes`.

        Empty nodes are dropped; with nothing left an empty leaf is returned.
        A single remaining node is still wrapped so the connector is visible.
        """
        children = [n for n in nodes if not n.is_empty()]
        node = cls()
        if children:
            node.connector = connector
            node.children = children
        return node

    @classmethod
    def all(cls, nodes: Iterable["Q"]) -> "Q":
        return cls.combine(cls.AND, nodes)

    @classmethod
    def any(cls, nodes: Iterable["Q"]) -> "Q":
        return cls.combine(cls.OR, nodes)

    def is_empty(self) -> bool:
        """True for a node with neither filters nor children."""
        return not self.filters and not self.children

    def __and__(self, other: "Q") -> "Q":
        node = Q()
        node.connector = self.AND
        node.children = [self, other]
        return node

    def __or__(self, other: "Q") -> "Q":
        node = Q()
        node.connector = self.OR
        node.children = [self, other]
        return node

    def __invert__(self) -> "Q":
        """Return a negated copy of this node (logical NOT)."""
        q = deepcopy(self)
        q.negate = not self.negate
        return q

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Q):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None  # mutable

    def __str__(self) -> str:
        return str(self.to_dict())

    def __repr__(self) -> str:
        return f"<Q: {self.to_dict()}>"

    # -------------------
    # Universal dict representation
    # -------------------
    def _leaf_to_dict(self) -> Dict[str, Dict[str, Any]]:
        """Convert leaf filters to `{field: {op: value}}`.

        Filters on the same field merge into one operator dict.
        """
        result: Dict[str, Dict[str, Any]] = {}
        for key, value in self.filters.items():
            field, op = key, "$eq"
            if "__" in key:
                # Split from the right so field names may contain "__"
                head, lookup = key.rsplit("__", 1)
                if lookup in self._OP_MAP:
                    field, op = head, self._OP_MAP[lookup]
            result.setdefault(field, {})
            result[field][op] = value
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Return the universal dict representation of this node.

        - Leaves become `{field: {op: value}}` mappings.
        - Boolean combinations use `{"$and": [...]}`, `{"$or": [...]}`.
        - Negation wraps with `{"$not": node}`.
        """
        if self.children:
            node = {self.connector: [child.to_dict() for child in self.children]}
        else:
            node = self._leaf_to_dict()
        if self.negate:
            return {"$not": node}
        return node

    # -------------------
    # Backend-specific rendering
    # -------------------

    def _get_where_compiler(self, backend: BackendType) -> Optional[BaseWhere]:
        """Return the backend-specific where compiler, if any."""
        if backend == "sql":
            from .compilers.sql import sql_where

            return sql_where
        elif backend == "sequelize":
            from .compilers.sequelize import sequelize_where

            return sequelize_where
        else:
            return None

    def to_where(self, backend: BackendType = "generic") -> Any:
        """Compile to a backend-native "where" representation.

        - `sql` returns a WHERE clause string.
        - `sequelize` returns a dict using Sequelize operator names.
        - `generic` returns the universal dict.
        """
        node = self.to_dict()
        where_compiler = self._get_where_compiler(backend)
        if where_compiler:
            return where_compiler.to_where(node)
        return node

    def to_expr(self, backend: BackendType = "generic") -> str:
        """Compile to a string expression for logging and debugging."""
        node = self.to_dict()
        where_compiler = self._get_where_compiler(backend)
        if where_compiler:
            return where_compiler.to_expr(node)
        return str(node)
