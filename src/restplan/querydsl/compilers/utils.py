"""Compiler utility functions.

Provides helpers for quoting identifiers, formatting SQL values, and
normalizing predicate input.
"""

from typing import Any, Dict, List, Tuple, Union


def normalize_where_input(where: Any) -> Dict[str, Any]:
    """Normalize Q object or dict to universal dict format.

    Args:
        where: Q object (with .to_dict() method) or dict

    Returns:
        Universal dict format ready for compilation

    Raises:
        TypeError: If input is neither Q object nor dict
    """
    if hasattr(where, "to_dict") and callable(where.to_dict):
        return where.to_dict()
    elif isinstance(where, dict):
        return where
    else:
        raise TypeError(f"where parameter must be a Q object or dict, got {type(where).__name__}")


def is_compound(node: Dict[str, Any]) -> bool:
    """Whether a node renders to more than one condition."""
    for connector in ("$and", "$or"):
        if connector in node:
            children = [child for child in node[connector] if child]
            return len(children) > 1 or (len(children) == 1 and is_compound(children[0]))
    if "$not" in node:
        return False
    return sum(len(expr) if isinstance(expr, dict) else 1 for expr in node.values()) > 1


def quote_identifier(name: str) -> str:
    """Quote SQL identifier with double quotes.

    Handles dotted field paths by quoting each segment separately.
    """
    if "." in name:
        return ".".join(quote_identifier(p) for p in name.split("."))
    return '"' + name.replace('"', '""') + '"'


def format_value_sql(v: Union[None, bool, str, int, float, List[Any], Tuple[Any, ...]]) -> str:
    """Format Python value for SQL literal embedding.

    Intended for logging and debugging; execution layers bind parameters.
    """
    if v is None:
        return "NULL"
    if isinstance(v, bool):
        return "TRUE" if v else "FALSE"
    if isinstance(v, str):
        return "'" + v.replace("'", "''") + "'"
    if isinstance(v, (list, tuple)):
        inner = ", ".join(format_value_sql(x) for x in v)
        return f"({inner})"
    return str(v)
