"""
This __init__.py file makes restplan a Python package and exposes the
translator, the schema metadata classes and the query plan types.
"""

from .engine import QueryTranslator, create_query_plan, translate
from .exceptions import MissingModelError, RestPlanError, SortPathError, TranslationError
from .querydsl import Q
from .schema import (
    AssociationDescriptor,
    Diagnostic,
    FieldMetadata,
    IncludeNode,
    ModelSchema,
    QueryPlan,
    SortKey,
    TranslationResult,
)

__version__ = "0.1.0"

__all__ = [
    "QueryTranslator",
    "translate",
    "create_query_plan",
    "Q",
    "ModelSchema",
    "FieldMetadata",
    "AssociationDescriptor",
    "QueryPlan",
    "SortKey",
    "IncludeNode",
    "Diagnostic",
    "TranslationResult",
    "RestPlanError",
    "TranslationError",
    "MissingModelError",
    "SortPathError",
]
