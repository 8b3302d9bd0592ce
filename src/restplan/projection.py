"""Projection resolution.

Decides which fields a listing returns. The default projection is every
field not flagged `exclude`, minus the last such field: the last declared
field is reserved for internal version metadata. An explicit `fields`
parameter replaces the default entirely.
"""

from typing import Any, List, Mapping, Optional

from .constants import ReservedParam
from .exceptions import MissingModelError
from .schema import ModelSchema
from .utils import split_list


def get_queryable_fields(model: Optional[ModelSchema]) -> List[str]:
    """Return the names of the fields eligible for predicates and term search.

    An explicit `model.queryable_fields` list wins over the per-field flags.

    Raises:
        MissingModelError: If no model is given
    """
    if model is None:
        raise MissingModelError("requires `model` parameter")
    return model.get_queryable_fields()


def default_attributes(model: ModelSchema) -> List[str]:
    attributes = [name for name, meta in model.fields.items() if not meta.exclude]
    if attributes:
        # omit the internal version field
        attributes.pop()
    return attributes


def requested_attributes(query: Mapping[str, Any]) -> Optional[List[str]]:
    """Field list from the `fields` parameter, or None when not given."""
    if ReservedParam.FIELDS not in query:
        return None
    fields = split_list(query[ReservedParam.FIELDS])
    return fields or None


def resolve_attributes(query: Mapping[str, Any], model: ModelSchema) -> List[str]:
    """Return the projection for `model`, honoring an explicit `fields` parameter."""
    requested = requested_attributes(query)
    if requested is not None:
        return requested
    return default_attributes(model)
