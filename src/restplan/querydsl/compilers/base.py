"""Base compiler interface.

Defines the abstract contract all backend-specific where compilers must follow.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

__all__ = ("BaseWhere",)


class BaseWhere(ABC):
    """Abstract base class for where clause compilers.

    Subclasses implement `to_where` and `to_expr` to render a universal
    predicate dict for a particular execution layer.
    """

    backend: str = "generic"

    @abstractmethod
    def to_where(self, node: Dict[str, Any]) -> Any:
        """
        Convert a Q node or universal dict into the backend-native representation.
        - str for SQL
        - dict for Sequelize-style option objects
        """
        raise NotImplementedError

    @abstractmethod
    def to_expr(self, node: Dict[str, Any]) -> str:
        """Convert a universal node into a string expression for logging."""
        raise NotImplementedError
