"""Custom exceptions for restplan.

Translation is mostly tolerant: unknown keys are dropped and broken embed
paths become warnings. The exceptions below cover the cases that must abort
a translation, plus configuration and compiler failures.
"""

from typing import Any, Dict


class RestPlanError(Exception):
    """Base exception for all restplan errors.

    Attributes:
        message: Error message
        details: Additional error context as key-value pairs
    """

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        self.message = message
        self.details: Dict[str, Any] = kwargs
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if not self.details:
            return self.message

        details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
        if self.message:
            return f"{self.message} ({details_str})"
        return details_str

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# Translation exceptions
class TranslationError(RestPlanError):
    """Raised when a query-parameter map cannot be turned into a query plan.

    Callers typically map this to a client error response.
    """


class MissingModelError(TranslationError):
    """Raised when the translation entry point is called without a model schema.

    Example:
        >>> raise MissingModelError("requires `model` parameter")
    """


class SortPathError(TranslationError):
    """Raised when a dotted sort token walks through an undeclared association.

    Example:
        >>> raise SortPathError("Cannot resolve sort path", token="-owner.email", hop="owner")
    """


# Configuration exceptions
class ConfigurationError(RestPlanError):
    """Raised when configuration is invalid or missing."""


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid.

    Example:
        >>> raise InvalidConfigError("Invalid config value", config_key="ATTRIBUTES_FORMAT", value="csv")
    """


# Compiler exceptions
class CompilerError(RestPlanError):
    """Raised when a predicate tree uses an operator a compiler cannot render.

    Example:
        >>> raise CompilerError("Operator not supported", field="age", operator="$regex", backend="sql")
    """
