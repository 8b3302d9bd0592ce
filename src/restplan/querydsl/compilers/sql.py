"""SQL where compiler.

Transforms universal Q node dicts into SQL WHERE clause text. Values are
inlined as literals, so the output is meant for logging, debugging and
tests rather than direct execution.

Supports:
- Comparison: =, !=, >, <, >=, <=
- Null checks: IS NULL / IS NOT NULL for `$eq` / `$ne` against None
- Range: IN, NOT IN
- String: LIKE, ILIKE
- Logical: AND, OR, NOT (compound children are parenthesized)
"""

from typing import Any, Dict, List, Union

from restplan.exceptions import CompilerError

from .base import BaseWhere
from .utils import format_value_sql, is_compound, normalize_where_input, quote_identifier

__all__ = (
    "SqlWhereCompiler",
    "sql_where",
)


class SqlWhereCompiler(BaseWhere):
    """Compile universal query nodes into SQL WHERE clauses.

    An empty predicate compiles to an empty string (no WHERE clause).
    """

    backend = "sql"

    _OP_MAP = {
        "$eq": "=",
        "$ne": "!=",
        "$gt": ">",
        "$gte": ">=",
        "$lt": "<",
        "$lte": "<=",
        "$in": "IN",
        "$nin": "NOT IN",
        "$like": "LIKE",
        "$ilike": "ILIKE",
    }

    def to_where(self, where: Union[Dict[str, Any], Any]) -> str:
        """Convert Q object or universal dict to SQL WHERE clause.

        Args:
            where: Q object or universal dict format

        Returns:
            SQL WHERE clause string
        """
        node = normalize_where_input(where)
        return self._node_to_expr(node)

    def to_expr(self, node: Dict[str, Any]) -> str:
        return self._node_to_expr(node)

    def _wrap(self, node: Dict[str, Any]) -> str:
        expr = self._node_to_expr(node)
        if expr and is_compound(node):
            return f"({expr})"
        return expr

    def _join(self, nodes: List[Dict[str, Any]], keyword: str) -> str:
        parts = [self._wrap(n) for n in nodes]
        return f" {keyword} ".join(p for p in parts if p)

    def _node_to_expr(self, node: Dict[str, Any]) -> str:
        """Recursively transform node into SQL WHERE clause."""
        if "$and" in node:
            return self._join(node["$and"], "AND")
        if "$or" in node:
            return self._join(node["$or"], "OR")
        if "$not" in node:
            inner = self._node_to_expr(node["$not"])
            return f"NOT ({inner})" if inner else ""
        parts: List[str] = []
        for field, expr in node.items():
            ident = quote_identifier(field)
            if not isinstance(expr, dict):
                expr = {"$eq": expr}
            for op, val in expr.items():
                parts.append(self._condition(field, ident, op, val))
        return " AND ".join(parts)

    def _condition(self, field: str, ident: str, op: str, val: Any) -> str:
        if op not in self._OP_MAP:
            raise CompilerError(
                f"Operator {op} is not supported. Supported: {', '.join(sorted(self._OP_MAP.keys()))}",
                field=field,
                operator=op,
                backend=self.backend,
            )
        if val is None and op == "$eq":
            return f"{ident} IS NULL"
        if val is None and op == "$ne":
            return f"{ident} IS NOT NULL"
        if op in ("$in", "$nin"):
            values = list(val) if isinstance(val, (list, tuple, set)) else [val]
            return self._membership(ident, op, values)
        return f"{ident} {self._OP_MAP[op]} {format_value_sql(val)}"

    def _membership(self, ident: str, op: str, values: List[Any]) -> str:
        """Render IN / NOT IN, with NULL members split out.

        `x NOT IN (NULL)` is never true in SQL, so a None member becomes
        `IS NULL` (ORed for `$in`) or `IS NOT NULL` (ANDed for `$nin`).
        """
        has_null = any(v is None for v in values)
        values = [v for v in values if v is not None]
        parts: List[str] = []
        if values:
            parts.append(f"{ident} {self._OP_MAP[op]} {format_value_sql(values)}")
        if op == "$in":
            if has_null:
                parts.append(f"{ident} IS NULL")
            if not parts:
                # IN () is not valid SQL
                return "1 = 0"
            return parts[0] if len(parts) == 1 else "(" + " OR ".join(parts) + ")"
        if has_null:
            parts.append(f"{ident} IS NOT NULL")
        if not parts:
            return "1 = 1"
        return parts[0] if len(parts) == 1 else "(" + " AND ".join(parts) + ")"


sql_where = SqlWhereCompiler()
