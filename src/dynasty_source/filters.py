"""Search filters and their translation into the site's query string."""

from dataclasses import dataclass, field
from enum import IntEnum

from .errors import UnsupportedFilter

SORT_FILTER_ID = "Sort"
TAG_FILTER_ID = "Tag"


class SortingOption(IntEnum):
    """Sort choices in the order the host's filter UI lists them."""

    ALPHABETICAL = 0
    BEST_MATCH = 1
    DATE_ADDED = 2
    RELEASE_DATE = 3

    @classmethod
    def default(cls) -> "SortingOption":
        return cls.RELEASE_DATE

    @classmethod
    def from_index(cls, index: int) -> "SortingOption":
        try:
            return cls(index)
        except ValueError:
            raise UnsupportedFilter(f"sort index {index}") from None

    @property
    def query_value(self) -> str | None:
        """Value of the `sort` parameter, None when the parameter is left out."""
        return _SORT_QUERY_VALUES[self]


_SORT_QUERY_VALUES = {
    SortingOption.ALPHABETICAL: "name",
    SortingOption.BEST_MATCH: None,
    SortingOption.DATE_ADDED: "created_at",
    SortingOption.RELEASE_DATE: "released_on",
}


@dataclass
class SortFilter:
    id: str
    index: int
    ascending: bool = False


@dataclass
class MultiSelectFilter:
    id: str
    included: list[str] = field(default_factory=list)
    excluded: list[str] = field(default_factory=list)


@dataclass
class TextFilter:
    id: str
    value: str


FilterValue = SortFilter | MultiSelectFilter | TextFilter


class QueryParameters:
    """Ordered query parameters; pushing a None value leaves the key out."""

    def __init__(self):
        self._items: list[tuple[str, str]] = []

    def push(self, key: str, value: str | None):
        if value is not None:
            self._items.append((key, value))

    def items(self) -> list[tuple[str, str]]:
        return list(self._items)

    def get_all(self, key: str) -> list[str]:
        return [v for k, v in self._items if k == key]

    def __contains__(self, key: str) -> bool:
        return any(k == key for k, _ in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"QueryParameters({self._items!r})"


def build_search_params(
    query: str | None,
    page: int,
    filters: list[FilterValue],
    classes: list[str] | None = None,
) -> QueryParameters:
    """
    Translate a search request into the site's query parameters.

    Order: page, q, classes[], with[], without[], sort.

    Raises:
        UnsupportedFilter: A filter has an unknown id or kind, or a sort index is out of range.
    """
    sorting = SortingOption.default()
    included_tags: list[str] = []
    excluded_tags: list[str] = []

    for filter_value in filters:
        if isinstance(filter_value, SortFilter) and filter_value.id == SORT_FILTER_ID:
            sorting = SortingOption.from_index(filter_value.index)
        elif isinstance(filter_value, MultiSelectFilter) and filter_value.id == TAG_FILTER_ID:
            included_tags.extend(filter_value.included)
            excluded_tags.extend(filter_value.excluded)
        else:
            raise UnsupportedFilter(filter_value)

    params = QueryParameters()
    params.push("page", str(page))
    params.push("q", query or None)
    for class_name in classes if classes is not None else ["Series"]:
        params.push("classes[]", class_name)
    for tag in included_tags:
        params.push("with[]", tag)
    for tag in excluded_tags:
        params.push("without[]", tag)
    params.push("sort", sorting.query_value)
    return params
