"""Tests for the exception hierarchy."""

from restplan.exceptions import (
    CompilerError,
    ConfigurationError,
    InvalidConfigError,
    MissingModelError,
    RestPlanError,
    SortPathError,
    TranslationError,
)


class TestRestPlanError:
    def test_message_only(self):
        err = RestPlanError("boom")
        assert str(err) == "boom"
        assert err.details == {}

    def test_message_with_details(self):
        err = SortPathError("Cannot sort", hop="owner", token="-owner.email")
        assert str(err) == "Cannot sort (hop='owner', token='-owner.email')"

    def test_details_only(self):
        assert str(RestPlanError(field="x")) == "field='x'"

    def test_repr(self):
        assert repr(MissingModelError("m")) == "MissingModelError(message='m', details={})"

    def test_hierarchy(self):
        assert issubclass(MissingModelError, TranslationError)
        assert issubclass(SortPathError, TranslationError)
        assert issubclass(InvalidConfigError, ConfigurationError)
        for cls in (TranslationError, ConfigurationError, CompilerError):
            assert issubclass(cls, RestPlanError)
