"""Query DSL module.

Exports the `Q` class used as the predicate tree of a query plan. Rendered
representations (SQL text, Sequelize-style dicts) are handled by the
`compilers` subpackage.
"""

from .q import Q

__all__ = ("Q",)
