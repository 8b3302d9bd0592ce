"""Pydantic schemas for schema metadata, query plans and diagnostics."""

from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .constants import SortDirection
from .querydsl import Q

# ---------------------------------------------------------------------------
# Schema metadata (supplied by the model registry, read-only during translation)
# ---------------------------------------------------------------------------


class FieldMetadata(BaseModel):
    queryable: bool = Field(False, description="Eligible for predicate and term-search participation.")
    exclude: bool = Field(False, description="Omitted from the default projection.")

    model_config = ConfigDict(frozen=True)


class AssociationDescriptor(BaseModel):
    """A declared relationship: the related model plus the alias used for joins."""

    model: "ModelSchema" = Field(..., exclude=True, repr=False, description="Related model.")
    alias: str = Field(..., description="Join alias (`as`).")

    model_config = ConfigDict(frozen=True)


class ModelSchema(BaseModel):
    """Field and association metadata for one entity type.

    Field order is significant: the default projection drops the last
    non-excluded field. Associations may form cycles (`User.posts` ->
    `Post.author` -> `User`), so schemas compare and hash by identity.
    """

    name: str = Field(..., description="Entity name.")
    fields: Dict[str, FieldMetadata] = Field(default_factory=dict, description="Per-field flags in declaration order.")
    associations: Dict[str, AssociationDescriptor] = Field(default_factory=dict, description="Associations by name.")
    queryable_fields: Optional[List[str]] = Field(
        None, description="Explicit queryable list; overrides the per-field `queryable` flags when set."
    )

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __repr__(self) -> str:
        return f"ModelSchema(name={self.name!r})"

    def associate(self, name: str, target: "ModelSchema", alias: Optional[str] = None) -> "ModelSchema":
        """Declare association `name` to `target`, aliased `alias` (defaults to `name`).

        Returns self so declarations can be chained.
        """
        self.associations[name] = AssociationDescriptor(model=target, alias=alias or name)
        return self

    def association(self, name: str) -> Optional[AssociationDescriptor]:
        return self.associations.get(name)

    @property
    def has_associations(self) -> bool:
        return bool(self.associations)

    def get_queryable_fields(self) -> List[str]:
        if self.queryable_fields is not None:
            return list(self.queryable_fields)
        return [name for name, meta in self.fields.items() if meta.queryable]


# ---------------------------------------------------------------------------
# Query plan
# ---------------------------------------------------------------------------


class SortKey(BaseModel):
    associations: List[AssociationDescriptor] = Field(default_factory=list, description="Hops walked before the field.")
    field: str = Field(..., description="Sorted field on the last model reached.")
    direction: Literal["ASC", "DESC"] = Field(SortDirection.ASC, description="Sort direction.")

    model_config = ConfigDict(frozen=True)

    @property
    def path(self) -> List[str]:
        return [assoc.alias for assoc in self.associations] + [self.field]

    def to_list(self) -> List[str]:
        """Render as `[alias..., field, direction]`."""
        return self.path + [self.direction]


class IncludeNode(BaseModel):
    """One related-entity inclusion with its nested inclusions.

    Nodes are immutable; `merge` returns a new node combining the children
    of two nodes that share an alias.
    """

    model: ModelSchema = Field(..., exclude=True, repr=False, description="Included model.")
    alias: str = Field(..., description="Join alias (`as`).")
    include: Tuple["IncludeNode", ...] = Field(default_factory=tuple, description="Nested inclusions.")

    model_config = ConfigDict(frozen=True)

    def child(self, alias: str) -> Optional["IncludeNode"]:
        for node in self.include:
            if node.alias == alias:
                return node
        return None

    def merge(self, other: "IncludeNode") -> "IncludeNode":
        from .includes import merge_forest

        return self.model_copy(update={"include": tuple(merge_forest(list(self.include), other.include))})

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"model": self.model.name, "as": self.alias}
        if self.include:
            data["include"] = [node.to_dict() for node in self.include]
        return data


class QueryPlan(BaseModel):
    """The structured output handed to the execution layer."""

    offset: Optional[Any] = None
    limit: Optional[Any] = None
    attributes: List[str] = Field(default_factory=list)
    order: List[SortKey] = Field(default_factory=list)
    where: Q = Field(default_factory=Q)
    include: List[IncludeNode] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def to_dict(self, attributes_format: Literal["string", "list"] = "string") -> Dict[str, Any]:
        """Render the plan as plain data.

        `offset` and `limit` appear only when set; `attributes` is a
        space-joined string or a list depending on `attributes_format`.
        """
        data: Dict[str, Any] = {}
        if self.offset is not None:
            data["offset"] = self.offset
        if self.limit is not None:
            data["limit"] = self.limit
        data["attributes"] = " ".join(self.attributes) if attributes_format == "string" else list(self.attributes)
        data["order"] = [key.to_list() for key in self.order]
        data["where"] = self.where.to_dict()
        data["include"] = [node.to_dict() for node in self.include]
        return data


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------


class Diagnostic(BaseModel):
    level: Literal["warning", "error"] = Field(..., description="Severity.")
    code: str = Field(..., description="Stable machine-readable event code.")
    message: str = Field(..., description="Human-readable message.")
    context: Dict[str, Any] = Field(default_factory=dict, description="Event details (path, hop, model, ...).")

    model_config = ConfigDict(frozen=True)


class TranslationResult(BaseModel):
    plan: QueryPlan
    diagnostics: List[Diagnostic] = Field(default_factory=list)

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.level == "warning"]

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.level == "error"]


AssociationDescriptor.model_rebuild()
ModelSchema.model_rebuild()
SortKey.model_rebuild()
IncludeNode.model_rebuild()
QueryPlan.model_rebuild()
TranslationResult.model_rebuild()
