"""
Reserved query parameters and operator vocabulary for restplan.
"""


class ReservedParam:
    LIMIT = "limit"
    OFFSET = "offset"
    FIELDS = "fields"
    SORT = "sort"
    TERM = "term"
    SEARCH_FIELDS = "searchFields"
    EMBED = "embed"


RESERVED_PARAMS = frozenset(
    {
        ReservedParam.LIMIT,
        ReservedParam.OFFSET,
        ReservedParam.FIELDS,
        ReservedParam.SORT,
        ReservedParam.TERM,
        ReservedParam.SEARCH_FIELDS,
        ReservedParam.EMBED,
    }
)

# Keys removed from the caller's map once translated
CONSUMED_PARAMS = (ReservedParam.SORT, ReservedParam.TERM, ReservedParam.SEARCH_FIELDS)


class SortDirection:
    ASC = "ASC"
    DESC = "DESC"


SORT_PREFIX_MAP = {
    "+": SortDirection.ASC,
    "-": SortDirection.DESC,
}

LIST_SEPARATOR = ","
PATH_SEPARATOR = "."
OPERATOR_SEPARATOR = "-"

# Literal tokens coerced before comparison (matched case-insensitively)
LITERAL_TOKENS = {
    "null": None,
    "true": True,
    "false": False,
}
