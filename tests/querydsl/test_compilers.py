"""Tests for the SQL and Sequelize-style where compilers."""

import pytest

from restplan import create_query_plan
from restplan.exceptions import CompilerError
from restplan.querydsl.compilers import sequelize_where, sql_where
from restplan.querydsl.compilers.utils import format_value_sql, is_compound, quote_identifier
from restplan.querydsl.q import Q


class TestSqlWhere:
    def test_comparisons(self):
        q = Q(age__gte=18, age__lte=30, name__ne="x")
        assert sql_where.to_where(q) == "\"age\" >= 18 AND \"age\" <= 30 AND \"name\" != 'x'"

    def test_null_and_booleans(self):
        assert sql_where.to_where(Q(deleted=None)) == '"deleted" IS NULL'
        assert sql_where.to_where(Q(deleted__ne=None)) == '"deleted" IS NOT NULL'
        assert sql_where.to_where(Q(active=True)) == '"active" = TRUE'

    def test_membership(self):
        assert sql_where.to_where(Q(status__nin=["a", "b"])) == "\"status\" NOT IN ('a', 'b')"
        assert sql_where.to_where(Q(status__in="a")) == "\"status\" IN ('a')"
        assert sql_where.to_where(Q(status__in=[])) == "1 = 0"

    def test_membership_with_null(self):
        assert sql_where.to_where(Q(status__nin=[None])) == '"status" IS NOT NULL'
        assert sql_where.to_where(Q(status__in=[None])) == '"status" IS NULL'
        assert sql_where.to_where(Q(status__nin=["a", None])) == (
            "(\"status\" NOT IN ('a') AND \"status\" IS NOT NULL)"
        )
        assert sql_where.to_where(Q(status__in=["a", None])) == (
            "(\"status\" IN ('a') OR \"status\" IS NULL)"
        )

    def test_not_null_param_renders_is_not_null(self, user_model):
        plan = create_query_plan(user_model, {"not-status": "null"})
        assert plan.where.to_where("sql") == '"status" IS NOT NULL'

    def test_term_search_shape_is_parenthesized(self):
        q = Q.any([Q(title__ilike="%boat%"), Q(body__ilike="%boat%")]) & Q(published=True)
        assert sql_where.to_where(q) == (
            "(\"title\" ILIKE '%boat%' OR \"body\" ILIKE '%boat%') AND \"published\" = TRUE"
        )

    def test_empty_children_are_skipped(self):
        q = Q.any([Q(title__like="%a%")]) & Q()
        assert sql_where.to_where(q) == "\"title\" LIKE '%a%'"

    def test_empty_predicate(self):
        assert sql_where.to_where(Q()) == ""

    def test_negation(self):
        assert sql_where.to_where(~Q(a=1, b=2)) == 'NOT ("a" = 1 AND "b" = 2)'

    def test_unsupported_operator(self):
        with pytest.raises(CompilerError) as exc_info:
            sql_where.to_where({"name": {"$regex": "^a"}})
        assert exc_info.value.details["backend"] == "sql"


class TestSequelizeWhere:
    def test_equality_collapses_to_value(self):
        assert sequelize_where.to_where(Q(status="active")) == {"status": "active"}

    def test_operator_names(self):
        q = Q(status__nin=["x"], title__ilike="%a%", age__gte=3)
        assert sequelize_where.to_where(q) == {
            "status": {"$notIn": ["x"]},
            "title": {"$iLike": "%a%"},
            "age": {"$gte": 3},
        }

    def test_combinators(self):
        q = Q.any([Q(a=1), Q(b=2)]) & ~Q(c=3)
        assert sequelize_where.to_where(q) == {"$and": [{"$or": [{"a": 1}, {"b": 2}]}, {"$not": {"c": 3}}]}

    def test_unsupported_operator(self):
        with pytest.raises(CompilerError):
            sequelize_where.to_where({"name": {"$regex": "^a"}})

    def test_to_expr(self):
        assert sequelize_where.to_expr({"a": {"$eq": 1}}) == "{'a': 1}"


class TestCompilerUtils:
    def test_quote_identifier(self):
        assert quote_identifier("name") == '"name"'
        assert quote_identifier("owner.email") == '"owner"."email"'

    def test_quote_identifier_escapes_quotes(self):
        assert quote_identifier('a"b') == '"a""b"'
        assert quote_identifier('owner.e"mail') == '"owner"."e""mail"'

    def test_injected_search_field_stays_one_identifier(self, user_model):
        plan = create_query_plan(user_model, {"term": "x", "searchFields": 'title" OR 1=1 --'})
        assert plan.where.to_where("sql") == "\"title\"\" OR 1=1 --\" ILIKE '%x%'"

    def test_format_value_sql(self):
        assert format_value_sql("it's") == "'it''s'"
        assert format_value_sql(False) == "FALSE"
        assert format_value_sql([1, None]) == "(1, NULL)"

    def test_is_compound(self):
        assert is_compound({"$or": [{"a": {"$eq": 1}}, {"b": {"$eq": 2}}]})
        assert not is_compound({"$or": [{"a": {"$eq": 1}}]})
        assert is_compound({"a": {"$gte": 1, "$lte": 2}})
        assert not is_compound({"a": {"$eq": 1}})
        assert not is_compound({"$not": {"a": {"$eq": 1}}})
        assert is_compound({"$and": [{"$or": [{"a": {"$eq": 1}}, {"b": {"$eq": 2}}]}, {}]})


class TestQBackends:
    def test_to_where_generic(self):
        assert Q(a=1).to_where() == {"a": {"$eq": 1}}

    def test_to_expr_per_backend(self):
        q = Q(a=1)
        assert q.to_expr("sql") == '"a" = 1'
        assert q.to_expr() == "{'a': {'$eq': 1}}"

    def test_unknown_backend(self):
        assert Q(a=1)._get_where_compiler("unknown") is None
