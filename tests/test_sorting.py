"""Tests for sort token parsing and association-path resolution."""

import pytest

from restplan.exceptions import SortPathError, TranslationError
from restplan.sorting import consume_sort, parse_sort_token, resolve_sort, resolve_sort_key


class TestParseSortToken:
    def test_prefixes(self):
        assert parse_sort_token("-name") == ("DESC", "name")
        assert parse_sort_token("+name") == ("ASC", "name")

    def test_default_is_ascending_and_keeps_first_char(self):
        assert parse_sort_token("name") == ("ASC", "name")

    def test_decoded_plus_reads_as_ascending(self):
        assert parse_sort_token(" name") == ("ASC", "name")


class TestResolveSort:
    def test_direction_and_nesting(self, post_model):
        keys = resolve_sort("-title,+owner.email", post_model)
        assert [key.to_list() for key in keys] == [["title", "DESC"], ["Owner", "email", "ASC"]]

    def test_nested_key_carries_associations(self, post_model, user_model):
        key = resolve_sort_key("owner.company.name", post_model)
        assert [assoc.alias for assoc in key.associations] == ["Owner", "company"]
        assert key.associations[0].model is user_model
        assert key.field == "name"
        assert key.path == ["Owner", "company", "name"]

    def test_order_mirrors_input(self, user_model):
        keys = resolve_sort("age,-name,age", user_model)
        assert [key.to_list() for key in keys] == [["age", "ASC"], ["name", "DESC"], ["age", "ASC"]]

    def test_last_segment_is_always_a_field(self, post_model):
        """`owner` names an association, but as the last segment it is read as a field."""
        assert resolve_sort_key("owner", post_model).to_list() == ["owner", "ASC"]

    def test_empty_tokens_skipped(self, user_model):
        assert [key.field for key in resolve_sort("name,,-", user_model)] == ["name"]

    def test_unresolvable_hop_raises(self, post_model):
        with pytest.raises(SortPathError) as exc_info:
            resolve_sort("title,-writer.email", post_model)
        assert exc_info.value.details["hop"] == "writer"
        assert exc_info.value.details["model"] == "Post"
        assert isinstance(exc_info.value, TranslationError)

    def test_hop_through_model_without_associations_raises(self, post_model):
        with pytest.raises(SortPathError) as exc_info:
            resolve_sort("tags.owner.name", post_model)
        assert exc_info.value.details["hop"] == "owner"
        assert exc_info.value.details["model"] == "Tag"


class TestConsumeSort:
    def test_removes_sort_from_query(self, user_model):
        query = {"sort": "-name", "name": "bob"}
        keys = consume_sort(query, user_model)
        assert "sort" not in query
        assert query == {"name": "bob"}
        assert keys[0].direction == "DESC"

    def test_absent_sort(self, user_model):
        assert consume_sort({}, user_model) == []

    def test_sort_consumed_even_when_resolution_fails(self, post_model):
        query = {"sort": "nope.field"}
        with pytest.raises(SortPathError):
            consume_sort(query, post_model)
        assert "sort" not in query
