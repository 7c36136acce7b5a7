"""Domain model for paginated recipe queries."""

from dataclasses import dataclass

DEFAULT_LIMIT = 12
DEFAULT_SORT_OPTION = "popular"
SORT_OPTIONS = ("popular", "recent")


@dataclass(frozen=True)
class PaginationQuery:
    """Normalized pagination, sort and search descriptor."""

    page: int = 1
    limit: int = DEFAULT_LIMIT
    skip: int = 0
    sort_option: str = DEFAULT_SORT_OPTION
    query: str | None = None

    def to_params(self) -> dict[str, object]:
        """Return query-string parameters that reproduce this descriptor."""
        params: dict[str, object] = {
            "page": self.page,
            "limit": self.limit,
            "sortOption": self.sort_option,
        }
        if self.query is not None:
            params["query"] = self.query
        return params
