"""Sequelize-style where compiler.

Renders universal Q node dicts with the operator names Sequelize option
objects use (`$notIn`, `$iLike`, ...). Plain equality collapses to a bare
value, as in `{"status": "active"}`.
"""

from typing import Any, Dict, Union

from restplan.exceptions import CompilerError

from .base import BaseWhere
from .utils import normalize_where_input

__all__ = (
    "SequelizeWhereCompiler",
    "sequelize_where",
)


class SequelizeWhereCompiler(BaseWhere):
    """Compile universal query nodes into Sequelize-style where dicts."""

    backend = "sequelize"

    _OP_MAP = {
        "$eq": "$eq",
        "$ne": "$ne",
        "$gt": "$gt",
        "$gte": "$gte",
        "$lt": "$lt",
        "$lte": "$lte",
        "$in": "$in",
        "$nin": "$notIn",
        "$like": "$like",
        "$ilike": "$iLike",
    }

    def to_where(self, where: Union[Dict[str, Any], Any]) -> Dict[str, Any]:
        """Convert Q object or universal dict to a Sequelize-style where dict.

        Raises:
            CompilerError: If unsupported operators are used
        """
        node = normalize_where_input(where)
        return self._node_to_dict(node)

    def to_expr(self, node: Dict[str, Any]) -> str:
        return str(self._node_to_dict(node))

    def _node_to_dict(self, node: Dict[str, Any]) -> Dict[str, Any]:
        if "$and" in node:
            return {"$and": [self._node_to_dict(n) for n in node["$and"]]}
        if "$or" in node:
            return {"$or": [self._node_to_dict(n) for n in node["$or"]]}
        if "$not" in node:
            return {"$not": self._node_to_dict(node["$not"])}

        compiled: Dict[str, Any] = {}
        for field, expr in node.items():
            if not isinstance(expr, dict):
                compiled[field] = expr
                continue
            if set(expr) == {"$eq"}:
                compiled[field] = expr["$eq"]
                continue
            ops: Dict[str, Any] = {}
            for op, val in expr.items():
                if op not in self._OP_MAP:
                    raise CompilerError(
                        f"Operator {op} is not supported. Supported: {', '.join(sorted(self._OP_MAP.keys()))}",
                        field=field,
                        operator=op,
                        backend=self.backend,
                    )
                ops[self._OP_MAP[op]] = val
            compiled[field] = ops
        return compiled


sequelize_where = SequelizeWhereCompiler()
