"""
Main engine for translating query parameters into query plans.

This module provides the `QueryTranslator`, which runs the sub-translators
in a fixed order over one caller-supplied parameter map:

    offset -> limit -> projection -> sort -> predicate -> term search -> includes

Translation is synchronous and keeps no state between calls; a single
translator can serve concurrent requests as long as the model schemas it
reads are not mutated meanwhile.
"""

from typing import Any, Dict, List, Literal, MutableMapping, Optional

from restplan.settings import settings

from .constants import ReservedParam
from .diagnostics import Diagnostics
from .exceptions import InvalidConfigError, MissingModelError, SortPathError
from .includes import build_include_tree
from .logger import Logger
from .pagination import extract_limit, extract_offset
from .predicate import build_predicate
from .projection import get_queryable_fields, resolve_attributes
from .schema import ModelSchema, QueryPlan, TranslationResult
from .search import merge_term_search
from .sorting import consume_sort

SORT_PATH_UNRESOLVED = "sort_path_unresolved"

_ATTRIBUTE_FORMATS = ("string", "list")


class QueryTranslator:
    """Orchestrates the sub-translators into a single `QueryPlan`.

    Warnings (broken embed paths) are collected as `Diagnostic` events and
    returned with the plan; with `log_diagnostics` on they are also sent to
    the logging sink. Hard errors (`MissingModelError`, `SortPathError`)
    abort the translation and propagate to the caller.

    Attributes:
        log: Logging sink receiving diagnostics (`warning`/`error` methods)
        attributes_format: How `QueryPlan.to_dict` renders the projection
        restrict_search_fields: Intersect `searchFields` with the queryable list
        case_sensitive_search: Use LIKE instead of ILIKE for term search
        log_diagnostics: Forward diagnostics to `log` as they are recorded
    """

    def __init__(
        self,
        log: Optional[Any] = None,
        *,
        attributes_format: Optional[Literal["string", "list"]] = None,
        restrict_search_fields: Optional[bool] = None,
        case_sensitive_search: Optional[bool] = None,
        log_diagnostics: Optional[bool] = None,
    ) -> None:
        """Initialize the translator; unset options fall back to settings.

        Raises:
            InvalidConfigError: If `attributes_format` is not "string" or "list"
        """
        self.logger = Logger(self.__class__.__name__)
        self.log = log if log is not None else self.logger
        self.attributes_format = attributes_format or settings.ATTRIBUTES_FORMAT
        if self.attributes_format not in _ATTRIBUTE_FORMATS:
            raise InvalidConfigError(
                "Invalid attributes format",
                config_key="ATTRIBUTES_FORMAT",
                value=self.attributes_format,
                expected=_ATTRIBUTE_FORMATS,
            )
        self.restrict_search_fields = (
            settings.RESTRICT_SEARCH_FIELDS if restrict_search_fields is None else restrict_search_fields
        )
        self.case_sensitive_search = (
            settings.SEARCH_CASE_SENSITIVE if case_sensitive_search is None else case_sensitive_search
        )
        self.log_diagnostics = settings.LOG_DIAGNOSTICS if log_diagnostics is None else log_diagnostics

    def translate(
        self, model: Optional[ModelSchema], query: Optional[MutableMapping[str, Any]]
    ) -> TranslationResult:
        """Translate `query` into a plan for `model`.

        `sort`, `term` and `searchFields` are removed from `query`; every
        other key is left in place.

        Args:
            model: Schema metadata of the listed entity
            query: Caller-owned query-parameter map (None reads as empty)

        Returns:
            TranslationResult holding the plan and the diagnostics raised

        Raises:
            MissingModelError: If `model` is None
            SortPathError: If a sort token walks through an undeclared association
        """
        if model is None:
            raise MissingModelError("requires `model` parameter")
        if query is None:
            query = {}

        diagnostics = Diagnostics(self.log if self.log_diagnostics else None)
        queryable_fields = get_queryable_fields(model)

        plan: Dict[str, Any] = {}
        plan.update(extract_offset(query))
        plan.update(extract_limit(query))
        plan["attributes"] = resolve_attributes(query, model)

        try:
            plan["order"] = consume_sort(query, model)
        except SortPathError as e:
            diagnostics.error(SORT_PATH_UNRESOLVED, e.message, **e.details)
            raise

        ignored: List[str] = []
        predicate = build_predicate(query, queryable_fields, ignored)
        if ignored:
            self.logger.debug("Ignored query keys for %s: %s", model.name, ignored)

        plan["where"] = merge_term_search(
            query,
            predicate,
            queryable_fields,
            restrict=self.restrict_search_fields,
            case_sensitive=self.case_sensitive_search,
        )
        plan["include"] = build_include_tree(query.get(ReservedParam.EMBED), model, diagnostics)

        result = TranslationResult(plan=QueryPlan(**plan), diagnostics=list(diagnostics))
        self.logger.message(
            "Translated query for %s: order=%d include=%d diagnostics=%d",
            model.name,
            len(result.plan.order),
            len(result.plan.include),
            len(result.diagnostics),
        )
        return result

    def create_query_plan(
        self, model: Optional[ModelSchema], query: Optional[MutableMapping[str, Any]]
    ) -> QueryPlan:
        """Translate and return only the plan."""
        return self.translate(model, query).plan

    def to_dict(self, plan: QueryPlan) -> Dict[str, Any]:
        """Render `plan` with this translator's attributes format."""
        return plan.to_dict(attributes_format=self.attributes_format)


def translate(
    model: Optional[ModelSchema], query: Optional[MutableMapping[str, Any]], log: Optional[Any] = None
) -> TranslationResult:
    """Translate with a default-configured `QueryTranslator`."""
    return QueryTranslator(log).translate(model, query)


def create_query_plan(
    model: Optional[ModelSchema], query: Optional[MutableMapping[str, Any]], log: Optional[Any] = None
) -> QueryPlan:
    """Translate with a default-configured `QueryTranslator` and return the plan."""
    return QueryTranslator(log).create_query_plan(model, query)
