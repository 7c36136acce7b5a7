"""Permissive parsing of pagination query strings."""

import re
from collections.abc import Mapping

from smart_recipe.domain.pagination import (
    DEFAULT_LIMIT,
    DEFAULT_SORT_OPTION,
    PaginationQuery,
)

_DECIMAL = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def pagination_query(raw: Mapping[str, object]) -> PaginationQuery:
    """Normalize raw query parameters, defaulting anything malformed."""
    page = _to_positive_int(raw.get("page")) or 1
    limit = _to_positive_int(raw.get("limit")) or DEFAULT_LIMIT
    sort_option = raw.get("sortOption")
    query = raw.get("query")
    return PaginationQuery(
        page=page,
        limit=limit,
        skip=(page - 1) * limit,
        sort_option=sort_option if isinstance(sort_option, str) else DEFAULT_SORT_OPTION,
        query=query if isinstance(query, str) else None,
    )


def _to_positive_int(value: object) -> int | None:
    """Coerce integral numbers and numeric strings; None for anything else."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not _DECIMAL.fullmatch(text):
            return None
        number = float(text)
    else:
        return None
    if not number.is_integer() or number < 1:
        return None
    return int(number)
