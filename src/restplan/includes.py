"""Include ("embed") graph building.

`embed` holds comma-separated dotted paths, e.g. `owner,comments.author`.
Each path is built into a fresh chain of `IncludeNode`s by walking the
association graph, then merged into the forest through an alias index per
sibling level. Two paths sharing a prefix therefore share the prefix nodes:
`a.b,a.c` gives one `a` node with children `b` and `c`.

Broken paths never abort the translation. A hop naming no association, or
a hop below a model that declares none, is reported as a warning and the
part of the path built so far is kept.
"""

from typing import Iterable, List, Optional

from .constants import PATH_SEPARATOR
from .diagnostics import Diagnostics
from .schema import IncludeNode, ModelSchema
from .types import ParamValue
from .utils import split_list, split_path

ASSOCIATION_NOT_FOUND = "association_not_found"
NO_NESTED_ASSOCIATIONS = "no_nested_associations"


def merge_forest(forest: List[IncludeNode], nodes: Iterable[IncludeNode]) -> List[IncludeNode]:
    """Merge `nodes` into `forest`, returning a new list.

    A node whose alias is already present is merged into the existing node
    (children merged recursively, position kept); others are appended.
    """
    merged = list(forest)
    index = {node.alias: position for position, node in enumerate(merged)}
    for node in nodes:
        position = index.get(node.alias)
        if position is None:
            index[node.alias] = len(merged)
            merged.append(node)
        else:
            merged[position] = merged[position].merge(node)
    return merged


def build_include_path(
    hops: List[str],
    model: ModelSchema,
    diagnostics: Diagnostics,
    path: Optional[str] = None,
) -> Optional[IncludeNode]:
    """Build the chain of nodes for one embed path, starting at `model`.

    Returns None when the first hop is not an association of `model`.
    """
    if not hops:
        return None
    path = path or PATH_SEPARATOR.join(hops)
    name, rest = hops[0], hops[1:]

    association = model.association(name)
    if association is None:
        diagnostics.warning(
            ASSOCIATION_NOT_FOUND,
            "Association does not exist",
            path=path,
            hop=name,
            model=model.name,
        )
        return None

    node = IncludeNode(model=association.model, alias=association.alias)
    if not rest:
        return node
    if not association.model.has_associations:
        diagnostics.warning(
            NO_NESTED_ASSOCIATIONS,
            "Sub-association requested but the model declares no associations",
            path=path,
            hop=rest[0],
            model=association.model.name,
        )
        return node

    child = build_include_path(rest, association.model, diagnostics, path)
    if child is None:
        return node
    return node.model_copy(update={"include": (child,)})


def build_include_tree(
    embed: Optional[ParamValue],
    model: ModelSchema,
    diagnostics: Optional[Diagnostics] = None,
) -> List[IncludeNode]:
    """Return the include forest for an `embed` value (empty when absent)."""
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    forest: List[IncludeNode] = []
    for path in split_list(embed):
        node = build_include_path(split_path(path), model, diagnostics, path)
        if node is not None:
            forest = merge_forest(forest, [node])
    return forest
